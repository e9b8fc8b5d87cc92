"""Workspace name normalization.

Anchor converts the workspace name to snake case before writing the program
name, so the snake-case form must be a legal Rust identifier.  The directory
keeps the user's spelling when it is already canonical and uses kebab case
otherwise.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from .errors import InvalidIdentifierError

# Strict and reserved keywords from the Rust reference.
RUST_KEYWORDS: frozenset[str] = frozenset({
    "as", "break", "const", "continue", "crate", "dyn", "else", "enum",
    "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop",
    "match", "mod", "move", "mut", "pub", "ref", "return", "self", "Self",
    "static", "struct", "super", "trait", "true", "type", "unsafe", "use",
    "where", "while",
    "abstract", "become", "box", "do", "final", "macro", "override", "priv",
    "typeof", "unsized", "virtual", "yield",
})

# Reserved by newer Rust editions but still accepted by the syn identifier
# parser Anchor uses; keep in sync with https://github.com/dtolnay/syn/pull/1098
EXTRA_RESERVED_WORDS: frozenset[str] = frozenset({"async", "await", "try", "gen"})

_WORD_SEPARATORS = re.compile(r"[-_\s]+")
_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class ProjectName(BaseModel):
    """A validated workspace name in its identifier and directory forms."""

    model_config = ConfigDict(frozen=True)

    raw: str
    identifier_form: str
    directory_form: str

    @property
    def pascal_form(self) -> str:
        """``my_app`` -> ``MyApp``; the type name of the generated IDL."""
        return "".join(word.capitalize() for word in self.identifier_form.split("_") if word)


def split_words(raw: str) -> list[str]:
    """Split *raw* on ``-``/``_``/whitespace and camel-case boundaries."""
    words: list[str] = []
    for chunk in _WORD_SEPARATORS.split(raw.strip()):
        if chunk:
            words.extend(part for part in _CASE_BOUNDARY.split(chunk) if part)
    return [word.lower() for word in words]


def to_snake_case(raw: str) -> str:
    return "_".join(split_words(raw))


def to_kebab_case(raw: str) -> str:
    return "-".join(split_words(raw))


def validate_identifier(identifier: str) -> None:
    """Raise :class:`InvalidIdentifierError` unless *identifier* is usable."""
    if not identifier:
        raise InvalidIdentifierError(identifier, "name is empty")
    if identifier[0].isdigit():
        raise InvalidIdentifierError(identifier, "starts with a digit")
    if identifier == "_" or not identifier.isidentifier():
        raise InvalidIdentifierError(identifier, "contains disallowed characters")
    if identifier in RUST_KEYWORDS or identifier in EXTRA_RESERVED_WORDS:
        raise InvalidIdentifierError(identifier, "is a reserved word")


def normalize(raw: str) -> ProjectName:
    """Normalize a free-form workspace name.

    Examples::

        normalize("my-app")  -> identifier_form="my_app", directory_form="my-app"
        normalize("my_app")  -> identifier_form="my_app", directory_form="my_app"
        normalize("MyApp")   -> identifier_form="my_app", directory_form="my-app"

    Raises:
        InvalidIdentifierError: if the snake-case form is not a legal Rust
            identifier or is a reserved word.
    """
    identifier = to_snake_case(raw)
    validate_identifier(identifier)

    directory = identifier if raw == identifier else to_kebab_case(raw)
    return ProjectName(raw=raw, identifier_form=identifier, directory_form=directory)
