"""Light-weight scanning of generated C# source.

Not a parser: generated code has a regular shape, and these helpers only
need to find method declarations and their bodies.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from behaviorgraph.domain.model.generated_code import GeneratedMethod

if TYPE_CHECKING:
    from behaviorgraph.domain.model.generated_code import GeneratedClass

_METHOD_DECLARATION = re.compile(
    r"^[ \t]*"
    r"(?P<declaration>"
    r"(?:(?:public|private|protected|internal|static|override|virtual|abstract|sealed)\s+)*"
    r"(?!(?:if|for|foreach|while|switch|return|new|else|using|catch|lock)\b)"
    r"[A-Za-z_][\w<>\[\],.]*\s+"
    r"(?P<name>[A-Za-z_]\w*)\s*\([^;{}\n]*\))"
    r"[ \t]*$",
    re.MULTILINE,
)
_STRING_LITERAL = re.compile(r'"(?:\\.|[^"\\])*"')
_LINE_COMMENT = re.compile(r"//[^\n]*")


def strip_literals(source: str) -> str:
    """Remove string literals and line comments, keeping line structure."""
    return _LINE_COMMENT.sub("", _STRING_LITERAL.sub('""', source))


def line_of(source: str, offset: int) -> int:
    """1-based line number of a character offset."""
    return source.count("\n", 0, offset) + 1


def declaration_line(source: str, declaration: str) -> int | None:
    """1-based line of the first occurrence of declaration, None if absent."""
    offset = source.find(declaration)
    return line_of(source, offset) if offset >= 0 else None


def declared_methods(generated: GeneratedClass) -> tuple[GeneratedMethod, ...]:
    """Methods of a generated class.

    Uses the methods recorded at generation time when present, otherwise
    scans the source for declarations and brace-matched bodies.
    """
    if generated.methods:
        return generated.methods

    source = generated.source_code
    methods: list[GeneratedMethod] = []
    for match in _METHOD_DECLARATION.finditer(source):
        open_at = source.find("{", match.end())
        body = _block_after(source, open_at) if open_at >= 0 else ""
        methods.append(
            GeneratedMethod(
                name=match.group("name"),
                declaration=match.group("declaration").strip(),
                body=body,
            )
        )
    return tuple(methods)


def _block_after(source: str, open_at: int) -> str:
    """Text between the brace at open_at and its matching close brace."""
    depth = 0
    for index in range(open_at, len(source)):
        char = source[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return source[open_at + 1 : index]
    return source[open_at + 1 :]
