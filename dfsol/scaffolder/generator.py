"""Workspace initializer.

Sequences a scaffold: validate the name, create the workspace directory,
resolve the program id, render and write the template catalog, then hand off
to the installer and git.  Each step short-circuits on the first fatal error.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from pydantic import BaseModel, Field

from ..config import Config
from ..errors import MaterializeError, WorkspaceExistsError
from ..keypair import get_or_create_program_id
from ..naming import ProjectName, normalize
from ..toolchain import (
    AnchorVersionProvider,
    LicenseProvider,
    NpmLicenseProvider,
    StaticLicenseProvider,
    StaticVersionProvider,
    VersionProvider,
    init_git,
    install_node_modules,
    run_pre_commands,
)
from ..utils import print_success, print_summary_table, print_warning
from .catalog import TemplateCatalog
from .materializer import materialize
from .models import Language, ProgramTemplate, RenderParams, TestTemplate


class InitOptions(BaseModel):
    """Choices made on the command line for one ``init`` run."""

    name: str = Field(..., description="Workspace name as typed by the user")
    language: Language = Field(default=Language.TYPESCRIPT)
    program_template: ProgramTemplate = Field(default=ProgramTemplate.BASIC)
    test_template: TestTemplate = Field(default=TestTemplate.MOCHA)
    no_install: bool = Field(default=False)
    no_git: bool = Field(default=False)
    force: bool = Field(default=False)


def default_license_provider(config: Config) -> LicenseProvider:
    if config.license:
        return StaticLicenseProvider(config.license)
    return NpmLicenseProvider()


def default_version_provider(config: Config) -> VersionProvider:
    if config.probe_anchor_version:
        return AnchorVersionProvider()
    return StaticVersionProvider(config.anchor_version)


class WorkspaceInitializer:
    """Creates an Anchor workspace from a name and template choices.

    License and framework version lookups are injected so tests can run
    without npm or the anchor CLI installed.
    """

    def __init__(
        self,
        config: Config,
        license_provider: LicenseProvider | None = None,
        version_provider: VersionProvider | None = None,
        catalog: TemplateCatalog | None = None,
    ) -> None:
        self.config = config
        self.license_provider = license_provider or default_license_provider(config)
        self.version_provider = version_provider or default_version_provider(config)
        self.catalog = catalog or TemplateCatalog()

    # -- Public API --------------------------------------------------------

    async def init(self, options: InitOptions) -> Path:
        """Scaffold a workspace and return its root directory.

        Raises:
            InvalidIdentifierError: the name is not a usable Rust identifier.
            WorkspaceExistsError: the directory exists and ``force`` is off.
            KeypairError: a cached program keypair is corrupt.
            ExternalToolError: the license or version lookup failed.
            MaterializeError: a file could not be written.
        """
        project = normalize(options.name)
        root = self.config.output_dir / project.directory_form

        await self._create_root(root, options.force)
        if options.force:
            await self._remove_program_dir(root, project)

        program_id = await asyncio.to_thread(
            get_or_create_program_id, root, project.identifier_form
        )

        params = RenderParams(
            anchor_version=await self.version_provider.get_version(),
            license=await self.license_provider.get_license(),
            program_id=program_id,
            wallet=self.config.wallet.display(),
            language=options.language,
        )
        file_set = self.catalog.render(
            project, options.program_template, options.test_template, params
        )

        await run_pre_commands(root, [list(cmd) for cmd in file_set.pre_commands])
        await materialize(root, file_set)

        if not options.no_install:
            await install_node_modules(root, timeout=self.config.install_timeout)
        if not options.no_git:
            await init_git(root)

        if not self.config.wallet.resolve().exists():
            print_warning(
                f"Wallet {self.config.wallet.display()} not found; "
                "create one with `solana-keygen new` before deploying"
            )

        print_summary_table(
            {
                "Workspace": str(root),
                "Program template": options.program_template.value,
                "Test template": options.test_template.value,
                "Language": options.language.value,
                "Program id": program_id,
                "Wallet": self.config.wallet.display(),
            },
            title="df-sol",
        )
        print_success(f"{project.directory_form} initialized")
        return root

    # -- Directory handling ------------------------------------------------

    async def _create_root(self, root: Path, force: bool) -> None:
        try:
            await asyncio.to_thread(root.mkdir, parents=True, exist_ok=force)
        except FileExistsError as exc:
            if force:
                # --force reuses a directory, never a regular file.
                raise MaterializeError(root, exc) from exc
            raise WorkspaceExistsError(root) from exc
        except OSError as exc:
            raise MaterializeError(root, exc) from exc

    async def _remove_program_dir(self, root: Path, project: ProjectName) -> None:
        """Drop the generated program so it is rebuilt from the template."""
        program_dir = root / "programs" / project.directory_form
        if program_dir.is_dir():
            try:
                await asyncio.to_thread(shutil.rmtree, program_dir)
            except OSError as exc:
                raise MaterializeError(program_dir, exc) from exc
