import re
from dataclasses import dataclass
from typing import Iterator, List

TYPE_PATTERN = re.compile(r'(?:^|\s)(export\s+)?type\s+([a-zA-Z0-9_]+)\s*=', re.MULTILINE)


@dataclass(frozen=True)
class TypeDeclaration:
    name: str
    exported: bool
    line: int


def find_type_declarations(source: str) -> Iterator[TypeDeclaration]:
    """Finds Luau `type X = ...` and `export type X = ...` declarations.

    Type declarations are better kept in a dedicated types module; these are advisory findings only.
    """
    for match in TYPE_PATTERN.finditer(source):
        line = source.count('\n', 0, match.start(2)) + 1
        yield TypeDeclaration(name=match.group(2), exported=bool(match.group(1)), line=line)


def type_declaration_warnings(source: str, display_name: str) -> List[str]:
    warnings = []
    for declaration in find_type_declarations(source):
        kind = "exported type" if declaration.exported else "type"
        warnings.append(f"Found {kind} {declaration.name!r} in module: {display_name}")
    return warnings
