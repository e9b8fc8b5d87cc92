"""df-sol configuration.

Typed configuration for a scaffolding run.  All settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_ANCHOR_VERSION = "0.30.0"


class HomePath(BaseModel):
    """A path that defaults to a location under the user's home directory.

    ``override`` wins when set; otherwise the path is ``~/<default_subpath>``.
    """

    default_subpath: str = Field(..., description="Path relative to the home directory")
    override: Optional[str] = Field(default=None, description="Explicit path, if any")

    def display(self) -> str:
        """Return the path as written into generated config files."""
        if self.override:
            return self.override
        return f"~/{self.default_subpath}"

    def resolve(self, home: Path | None = None) -> Path:
        """Return the absolute path, expanding ``~`` against *home*."""
        home_dir = home if home is not None else Path.home()
        if self.override:
            override = Path(self.override)
            if self.override.startswith("~"):
                return home_dir / Path(*override.parts[1:])
            return override
        return home_dir / self.default_subpath


def default_wallet() -> HomePath:
    return HomePath(default_subpath=".config/solana/id.json")


class Config(BaseModel):
    """Global df-sol configuration.

    Instances are created once by the CLI entry point (usually via
    :meth:`from_env`, then patched with command-line overrides) and passed to
    the workspace initializer.
    """

    output_dir: Path = Field(default=Path("."))
    anchor_version: str = Field(default=DEFAULT_ANCHOR_VERSION)
    probe_anchor_version: bool = Field(
        default=False,
        description="Ask the installed anchor CLI for its version instead of using anchor_version",
    )
    license: Optional[str] = Field(
        default=None, description="License for package.json; None asks npm"
    )
    wallet: HomePath = Field(default_factory=default_wallet)
    install_timeout: Optional[float] = Field(
        default=None, description="Seconds before an installer is killed; None waits forever"
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            DFSOL_OUTPUT_DIR, DFSOL_ANCHOR_VERSION, DFSOL_PROBE_ANCHOR_VERSION,
            DFSOL_LICENSE, DFSOL_WALLET, DFSOL_INSTALL_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("DFSOL_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["DFSOL_OUTPUT_DIR"])
        if os.environ.get("DFSOL_ANCHOR_VERSION"):
            kwargs["anchor_version"] = os.environ["DFSOL_ANCHOR_VERSION"]
        if os.environ.get("DFSOL_PROBE_ANCHOR_VERSION"):
            kwargs["probe_anchor_version"] = os.environ[
                "DFSOL_PROBE_ANCHOR_VERSION"
            ].strip().lower() in ("1", "true", "yes", "on")
        if os.environ.get("DFSOL_LICENSE"):
            kwargs["license"] = os.environ["DFSOL_LICENSE"]
        if os.environ.get("DFSOL_WALLET"):
            wallet = default_wallet()
            wallet.override = os.environ["DFSOL_WALLET"]
            kwargs["wallet"] = wallet
        if os.environ.get("DFSOL_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = float(os.environ["DFSOL_INSTALL_TIMEOUT"])

        return cls(**kwargs)
