"""Pydantic models for the workspace scaffolder.

Defines the template selectors, the render parameters resolved by the
workspace initializer, and the in-memory file set handed to the materializer.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ProgramTemplate(str, Enum):
    """On-chain program skeleton. The first member is the default."""
    BASIC = "basic"
    COUNTER = "counter"
    MINT_TOKEN = "mint-token"
    SINGLE = "single"
    MULTIPLE = "multiple"


class TestTemplate(str, Enum):
    """Test harness generated next to the program."""
    __test__ = False

    MOCHA = "mocha"
    JEST = "jest"
    RUST = "rust"


class Language(str, Enum):
    """Client-side language for tests, migrations and package config."""
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"

    @property
    def extension(self) -> str:
        return "ts" if self is Language.TYPESCRIPT else "js"


class OverwritePolicy(str, Enum):
    """What the materializer does when an entry's path already exists."""
    CREATE_IF_ABSENT = "create-if-absent"
    ALWAYS_OVERWRITE = "always-overwrite"


# ---------------------------------------------------------------------------
# Render inputs and outputs
# ---------------------------------------------------------------------------

class RenderParams(BaseModel):
    """Values that cannot be derived from the name and template choice alone."""
    model_config = ConfigDict(frozen=True)

    anchor_version: str = Field(..., description="Anchor framework version, e.g. '0.30.0'")
    license: str = Field(..., description="License written into package.json")
    program_id: str = Field(..., description="Base58 program id")
    wallet: str = Field(..., description="Wallet keypair path written into Anchor.toml")
    language: Language = Field(default=Language.TYPESCRIPT)


class FileEntry(BaseModel):
    """A fully rendered file (or directory, if the name has no dot)."""
    model_config = ConfigDict(frozen=True)

    relative_path: PurePosixPath
    content: str = ""
    overwrite_policy: OverwritePolicy = OverwritePolicy.CREATE_IF_ABSENT

    @property
    def is_directory(self) -> bool:
        return "." not in self.relative_path.name


class FileSet(BaseModel):
    """Everything one render produces, in write order."""
    model_config = ConfigDict(frozen=True)

    entries: tuple[FileEntry, ...] = ()
    pre_commands: tuple[tuple[str, ...], ...] = Field(
        default=(),
        description="Generator commands to run in the workspace root before overwriting",
    )

    def paths(self) -> list[PurePosixPath]:
        return [entry.relative_path for entry in self.entries]

    def get(self, relative_path: str) -> FileEntry:
        """Return the entry for *relative_path* or raise ``KeyError``."""
        wanted = PurePosixPath(relative_path)
        for entry in self.entries:
            if entry.relative_path == wanted:
                return entry
        raise KeyError(relative_path)
