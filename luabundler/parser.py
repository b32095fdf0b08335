import re
from dataclasses import dataclass, field
from typing import List, Optional

from .resolver import ModuleResolver

# Textual match only: nested parentheses, parentheses inside strings and calls inside comments are not understood.
REQUIRE_PATTERN = re.compile(r'\brequire\s*\(\s*([^)]*)\)')
QUOTED_PATTERN = re.compile(r'''^["']([^"']+)["']$''')


def lua_string(value: str) -> str:
    """Quotes `value` as a double-quoted Lua string literal."""
    escaped = value.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n').replace('\r', '\\r')
    return f'"{escaped}"'


@dataclass
class RequireSite:
    argument: str
    start: int
    end: int
    resolved_path: Optional[str] = None

    @property
    def is_literal(self):
        return self.resolved_path is not None


@dataclass
class TransformResult:
    code: str
    dependencies: List[str] = field(default_factory=list)
    sites: List[RequireSite] = field(default_factory=list)


class ScriptTransformer:
    def __init__(self, resolver: ModuleResolver, loader_name='import'):
        self.resolver = resolver
        self.loader_name = loader_name

    def transform(self, source: str, current_module_path: str) -> TransformResult:
        """Rewrites every `require(...)` call of a module into a call to the bundle loader.

        String literal arguments are resolved to canonical paths and reported as dependencies, in the order they
        occur. Any other argument is forwarded to the loader untouched and is not a dependency.
        """
        result = TransformResult(code=source)

        def _replace(match):
            argument = match.group(1)
            site = RequireSite(argument=argument, start=match.start(), end=match.end())
            result.sites.append(site)

            quoted = QUOTED_PATTERN.match(argument.strip())
            if quoted:
                site.resolved_path = self.resolver.resolve(current_module_path, quoted.group(1))
                result.dependencies.append(site.resolved_path)
                return f"{self.loader_name}({lua_string(site.resolved_path)})"
            return f"{self.loader_name}({argument})"

        result.code = REQUIRE_PATTERN.sub(_replace, source)
        return result
