"""A tiny declaration tree for the parts of a ``.d.ts`` file we generate.

Every node renders itself at a given indentation level; values inside
interfaces are typed nodes, so class references print as bare identifiers
and keys print as escaped string literals.
"""

import json
from dataclasses import dataclass, field
from typing import List, Union

INDENT = "  "


def string_literal(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


@dataclass
class Identifier:
    name: str

    def render(self) -> str:
        return self.name


@dataclass
class ImportTypeRef:
    module: str
    name: str

    def render(self) -> str:
        return f"import({string_literal(self.module)}).{self.name}"


@dataclass
class Intersection:
    parts: List["TypeExpr"]

    def render(self) -> str:
        return " & ".join(p.render() for p in self.parts)


TypeExpr = Union[Identifier, ImportTypeRef, Intersection]


@dataclass
class ImportDecl:
    name: str
    module: str
    default: bool = False

    def render(self, level: int = 0) -> List[str]:
        binding = self.name if self.default else f"{{ {self.name} }}"
        return [f"{INDENT * level}import {binding} from {string_literal(self.module)};"]


@dataclass
class RawStatement:
    text: str

    def render(self, level: int = 0) -> List[str]:
        return [INDENT * level + line if line else line for line in self.text.splitlines()]


@dataclass
class PropertyEntry:
    key: str
    value: TypeExpr

    def render(self, level: int = 0) -> List[str]:
        return [f"{INDENT * level}{string_literal(self.key)}: {self.value.render()};"]


@dataclass
class InterfaceDecl:
    name: str
    members: List[PropertyEntry] = field(default_factory=list)

    def render(self, level: int = 0) -> List[str]:
        pad = INDENT * level
        if not self.members:
            return [f"{pad}interface {self.name} {{}}"]
        lines = [f"{pad}interface {self.name} {{"]
        for member in self.members:
            lines.extend(member.render(level + 1))
        lines.append(f"{pad}}}")
        return lines


@dataclass
class Block:
    """``declare global { ... }`` or ``namespace X { ... }``."""

    header: str
    body: list = field(default_factory=list)

    def render(self, level: int = 0) -> List[str]:
        pad = INDENT * level
        lines = [f"{pad}{self.header} {{"]
        for stmt in self.body:
            lines.extend(stmt.render(level + 1))
        lines.append(f"{pad}}}")
        return lines


@dataclass
class DeclarationFile:
    # groups are separated by a blank line
    groups: List[list] = field(default_factory=list)

    def render(self) -> str:
        chunks = []
        for group in self.groups:
            if not group:
                continue
            lines = []
            for stmt in group:
                lines.extend(stmt.render(0))
            chunks.append("\n".join(lines))
        return "\n\n".join(chunks) + "\n"
