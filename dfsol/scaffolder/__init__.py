"""df-sol scaffolder -- generates Anchor workspace structures.

Takes a workspace name and template choices and renders a ready-to-build
Anchor workspace: workspace and program manifests, a program skeleton, a
test harness and the JavaScript/TypeScript package config.

Quick usage::

    from dfsol.config import Config
    from dfsol.scaffolder import InitOptions, WorkspaceInitializer

    initializer = WorkspaceInitializer(Config(output_dir=Path("/tmp")))
    root = await initializer.init(InitOptions(name="my-app", no_install=True))
"""

from dfsol.scaffolder.catalog import TemplateCatalog
from dfsol.scaffolder.generator import InitOptions, WorkspaceInitializer
from dfsol.scaffolder.materializer import create_files, materialize, override_or_create_files
from dfsol.scaffolder.models import (
    FileEntry,
    FileSet,
    Language,
    OverwritePolicy,
    ProgramTemplate,
    RenderParams,
    TestTemplate,
)
from dfsol.scaffolder.templates import TemplateRenderer

__all__ = [
    "FileEntry",
    "FileSet",
    "InitOptions",
    "Language",
    "OverwritePolicy",
    "ProgramTemplate",
    "RenderParams",
    "TemplateCatalog",
    "TemplateRenderer",
    "TestTemplate",
    "WorkspaceInitializer",
    "create_files",
    "materialize",
    "override_or_create_files",
]
