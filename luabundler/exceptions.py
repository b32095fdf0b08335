class BundlerException(Exception):
    """Base class of every fatal bundling error."""


class ModuleNotFoundException(BundlerException):

    def __init__(self, required_path, referencing_path, candidates=None):
        self.required_path = required_path
        self.referencing_path = referencing_path
        self.candidates = list(candidates or [])
        message = f"Cannot find module {required_path!r} (at {referencing_path})"
        if self.candidates:
            message += f"; tried: {', '.join(self.candidates)}"
        super(ModuleNotFoundException, self).__init__(message)


class CircularImportException(BundlerException):

    def __init__(self, module_name, referencing_path, chain):
        self.module_name = module_name
        self.referencing_path = referencing_path
        self.chain = list(chain)
        super(CircularImportException, self).__init__(
            f"Circular import detected: {module_name!r} (at {referencing_path}); "
            f"chain: {' -> '.join(self.chain)}")


class ModuleReadException(BundlerException):

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super(ModuleReadException, self).__init__(f"Could not read file at {path}: {reason}")
