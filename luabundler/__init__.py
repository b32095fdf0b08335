VERSION = '1.0.0'

from .bundler import LuaBundler, Module, BuildContext  # noqa: E402
from .exceptions import BundlerException, ModuleNotFoundException, CircularImportException, \
    ModuleReadException  # noqa: E402

__all__ = ['VERSION', 'LuaBundler', 'Module', 'BuildContext', 'BundlerException', 'ModuleNotFoundException',
           'CircularImportException', 'ModuleReadException']
