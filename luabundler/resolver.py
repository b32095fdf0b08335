import os
from os.path import join, dirname, abspath, isfile, relpath, splitext, normpath

from .exceptions import ModuleNotFoundException

DEFAULT_EXTENSIONS = ('.lua', '.luau')


def to_canonical(base_dir, path):
    """Returns `path` relative to `base_dir` with forward-slash separators."""
    return relpath(abspath(path), abspath(base_dir)).replace(os.sep, '/')


class ModuleResolver:
    def __init__(self, base_dir, extensions=DEFAULT_EXTENSIONS):
        self.base_dir = abspath(base_dir)
        self.extensions = tuple(extensions)

    def absolute_path(self, canonical_path):
        return normpath(join(self.base_dir, canonical_path))

    def canonical_path(self, path):
        return to_canonical(self.base_dir, path)

    def resolve(self, current_module_path, required_path):
        """Resolves a `require` literal relative to the module that contains it.

        Literals without an extension are probed with each configured extension in order; literals with an
        extension must name an existing file exactly. Returns the canonical path of the module.
        """
        current_dir = dirname(abspath(current_module_path))
        absolute = normpath(join(current_dir, required_path))

        _, extension = splitext(absolute)
        if extension:
            candidates = [absolute]
        else:
            candidates = [absolute + ext for ext in self.extensions]

        for candidate in candidates:
            if isfile(candidate):
                return self.canonical_path(candidate)

        raise ModuleNotFoundException(required_path, self.canonical_path(current_module_path),
                                      candidates=[self.canonical_path(c) for c in candidates])


def resolve_module_path(base_dir, current_module_path, required_path, extensions=DEFAULT_EXTENSIONS):
    return ModuleResolver(base_dir, extensions=extensions).resolve(current_module_path, required_path)
