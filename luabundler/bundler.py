import os
import tempfile
from dataclasses import dataclass, field
from os.path import join, dirname, abspath, normpath, exists
from typing import Dict, List, Optional, Set, Tuple

from .color_print import info, warning, success
from .diagnostics import type_declaration_warnings
from .emitter import BundleEmitter
from .exceptions import CircularImportException, ModuleReadException
from .parser import ScriptTransformer, TransformResult
from .resolver import ModuleResolver, DEFAULT_EXTENSIONS


@dataclass(frozen=True)
class Module:
    name: str
    source: str
    code: str
    dependencies: Tuple[str, ...] = ()


@dataclass
class BuildContext:
    """Traversal state of a single build."""
    modules: Dict[str, Module] = field(default_factory=dict)
    visited: Set[str] = field(default_factory=set)
    stack: List[str] = field(default_factory=list)


class LuaBundler:
    def __init__(self, base_dir, entry_file, output_file=None,
                 extensions=DEFAULT_EXTENSIONS,
                 warn_on_types=True,
                 # header metadata
                 module_version='', author='', description='', project_website=None,
                 additional_headers: Optional[Dict[str, str]] = None,
                 # generated shim
                 loader_name='import', bridge_name='game_require', bridge_identity=2, restore_identity=7,
                 ):
        self.base_dir = abspath(base_dir)
        self.entry_file = entry_file
        self.entry_path = normpath(join(self.base_dir, entry_file))
        self.output_file = output_file
        self.warn_on_types = warn_on_types

        self.resolver = ModuleResolver(self.base_dir, extensions=extensions)
        self.transformer = ScriptTransformer(self.resolver, loader_name=loader_name)
        self.emitter = BundleEmitter(module_version=module_version, author=author, description=description,
                                     project_website=project_website, additional_headers=additional_headers,
                                     loader_name=loader_name, bridge_name=bridge_name,
                                     bridge_identity=bridge_identity, restore_identity=restore_identity)

        # results of the last build
        self.modules: Dict[str, Module] = {}
        self.entry: Optional[TransformResult] = None
        self.warnings: List[str] = []

    def bundle(self, generation_time=None) -> str:
        """Builds the module table from the entry file and returns the bundle text."""
        info(f"Started bundling {self.entry_file} from {self.base_dir}...")
        context = BuildContext()
        self.warnings = []

        entry_source = self.read_module(self.entry_path)
        self.check_types(entry_source, self.entry_file)
        entry = self.transformer.transform(entry_source, self.entry_path)

        context.stack.append(self.entry_path)
        for dependency in entry.dependencies:
            self.load_module(context, dependency, self.entry_path)
        context.stack.pop()

        self.modules = context.modules
        self.entry = entry
        success(f"Successfully bundled {len(self.modules)} modules.")
        return self.emitter.emit(self.modules, entry.code, generation_time=generation_time)

    def bundle_files(self, generation_time=None) -> str:
        """Bundles and writes the result to `output_file`. Nothing is written when bundling fails."""
        bundled = self.bundle(generation_time=generation_time)

        output_dir = dirname(abspath(self.output_file))
        os.makedirs(output_dir, exist_ok=True)
        # temp file beside the target, renamed over it once fully written
        temp_path = None
        try:
            with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=output_dir, prefix=".luabundler-",
                                             suffix=".tmp", delete=False) as f:
                temp_path = f.name
                f.write(bundled)
            os.replace(temp_path, self.output_file)
        except OSError:
            if temp_path and exists(temp_path):
                os.remove(temp_path)
            raise

        success(f"Bundled Lua code written to {self.output_file}")
        return bundled

    def load_module(self, context: BuildContext, module_name, referencing_path):
        module_path = self.resolver.absolute_path(module_name)

        if module_path in context.stack:
            chain = context.stack[context.stack.index(module_path):] + [module_path]
            raise CircularImportException(module_name, self.resolver.canonical_path(referencing_path),
                                          [self.resolver.canonical_path(path) for path in chain])
        if module_path in context.visited:
            return

        context.stack.append(module_path)

        source = self.read_module(module_path)
        self.check_types(source, module_name)
        result = self.transformer.transform(source, module_path)

        # inserted before its dependencies: table order is discovery order
        context.modules[module_name] = Module(name=module_name, source=source, code=result.code,
                                              dependencies=tuple(result.dependencies))

        for dependency in result.dependencies:
            self.load_module(context, dependency, module_path)

        context.stack.pop()
        context.visited.add(module_path)

    @staticmethod
    def read_module(path) -> str:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ModuleReadException(path, e) from e

    def check_types(self, source, display_name):
        if not self.warn_on_types:
            return
        for message in type_declaration_warnings(source, display_name):
            self.warnings.append(message)
            warning(message)
