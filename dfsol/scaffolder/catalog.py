"""Template catalog: template choices -> rendered file set.

Each ``ProgramTemplate`` and ``TestTemplate`` maps to a pure renderer
function.  Renderers only substitute values into Jinja2 templates; every
environment-dependent value (program id, license, framework version, wallet
path) arrives through :class:`RenderParams`, so identical inputs always
produce byte-identical output.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Callable

from ..naming import ProjectName
from .models import (
    FileEntry,
    FileSet,
    Language,
    OverwritePolicy,
    ProgramTemplate,
    RenderParams,
    TestTemplate,
)
from .templates import TemplateRenderer

CREATE = OverwritePolicy.CREATE_IF_ABSENT
OVERWRITE = OverwritePolicy.ALWAYS_OVERWRITE

WEB3_VERSION = "^1.92.3"

# Renderer signature shared by program and test renderers.
Renderer = Callable[[TemplateRenderer, dict[str, Any]], list[FileEntry]]


def _entry(
    path: PurePosixPath | str, content: str = "", policy: OverwritePolicy = CREATE
) -> FileEntry:
    return FileEntry(relative_path=PurePosixPath(path), content=content, overwrite_policy=policy)


# ---------------------------------------------------------------------------
# Program renderers
# ---------------------------------------------------------------------------


def _program_dir(ctx: dict[str, Any]) -> PurePosixPath:
    return PurePosixPath("programs") / ctx["name"].directory_form


def _single_file_program(template_name: str) -> Renderer:
    def render(renderer: TemplateRenderer, ctx: dict[str, Any]) -> list[FileEntry]:
        return [
            _entry(
                _program_dir(ctx) / "src" / "lib.rs",
                renderer.render(f"programs/{template_name}/lib.rs.j2", ctx),
            )
        ]

    render.__name__ = f"render_{template_name}_program"
    return render


def _render_multiple_program(renderer: TemplateRenderer, ctx: dict[str, Any]) -> list[FileEntry]:
    """One source file per template under ``programs/multiple/``."""
    src = _program_dir(ctx) / "src"
    prefix = "programs/multiple/"
    return [
        _entry(src / template[len(prefix):].removesuffix(".j2"), renderer.render(template, ctx))
        for template in renderer.list_templates(prefix)
    ]


PROGRAM_RENDERERS: dict[ProgramTemplate, Renderer] = {
    ProgramTemplate.BASIC: _single_file_program("basic"),
    ProgramTemplate.COUNTER: _single_file_program("counter"),
    ProgramTemplate.MINT_TOKEN: _single_file_program("mint_token"),
    ProgramTemplate.SINGLE: _single_file_program("single"),
    ProgramTemplate.MULTIPLE: _render_multiple_program,
}


# ---------------------------------------------------------------------------
# Test renderers
# ---------------------------------------------------------------------------

_TEST_BODIES: dict[ProgramTemplate, str] = {
    ProgramTemplate.BASIC: "tests/basic.j2",
    ProgramTemplate.COUNTER: "tests/counter.j2",
    ProgramTemplate.MINT_TOKEN: "tests/mint_token.j2",
    ProgramTemplate.SINGLE: "tests/basic.j2",
    ProgramTemplate.MULTIPLE: "tests/basic.j2",
}


def _render_mocha_tests(renderer: TemplateRenderer, ctx: dict[str, Any]) -> list[FileEntry]:
    path = f"tests/{ctx['name'].directory_form}.{ctx['language'].extension}"
    body = renderer.render(_TEST_BODIES[ctx["program_kind"]], ctx)
    return [_entry(path, body, OVERWRITE)]


def _render_jest_tests(renderer: TemplateRenderer, ctx: dict[str, Any]) -> list[FileEntry]:
    path = f"tests/{ctx['name'].directory_form}.test.{ctx['language'].extension}"
    body = renderer.render(_TEST_BODIES[ctx["program_kind"]], ctx)
    return [_entry(path, body, OVERWRITE)]


def _render_rust_tests(renderer: TemplateRenderer, ctx: dict[str, Any]) -> list[FileEntry]:
    return [
        _entry("tests/Cargo.toml", renderer.render("tests/rust/Cargo.toml.j2", ctx), OVERWRITE),
        _entry("tests/src/lib.rs", renderer.render("tests/rust/lib.rs.j2", ctx), OVERWRITE),
        _entry(
            "tests/src/test_initialize.rs",
            renderer.render("tests/rust/test_initialize.rs.j2", ctx),
            OVERWRITE,
        ),
    ]


TEST_RENDERERS: dict[TestTemplate, Renderer] = {
    TestTemplate.MOCHA: _render_mocha_tests,
    TestTemplate.JEST: _render_jest_tests,
    TestTemplate.RUST: _render_rust_tests,
}

# Generator commands a test template needs before its files are written.
TEST_PRE_COMMANDS: dict[TestTemplate, tuple[tuple[str, ...], ...]] = {
    TestTemplate.MOCHA: (),
    TestTemplate.JEST: (),
    TestTemplate.RUST: (("cargo", "new", "--lib", "--vcs", "none", "tests"),),
}

def _check_exhaustive(mapping: dict[Any, Any], selector: type[Enum]) -> None:
    missing = set(selector) - set(mapping)
    if missing:
        raise RuntimeError(f"unhandled {selector.__name__}: {sorted(m.value for m in missing)}")


_check_exhaustive(PROGRAM_RENDERERS, ProgramTemplate)
_check_exhaustive(TEST_RENDERERS, TestTemplate)
_check_exhaustive(TEST_PRE_COMMANDS, TestTemplate)


# ---------------------------------------------------------------------------
# Workspace-level settings derived from the selectors
# ---------------------------------------------------------------------------


def anchor_test_script(test_template: TestTemplate, language: Language) -> str:
    """Return the ``[scripts] test`` command written into ``Anchor.toml``."""
    typescript = language is Language.TYPESCRIPT
    if test_template is TestTemplate.MOCHA:
        if typescript:
            return "yarn run ts-mocha -p ./tsconfig.json -t 1000000 tests/**/*.ts"
        return "yarn run mocha -t 1000000 tests/"
    if test_template is TestTemplate.JEST:
        return "yarn run jest --preset ts-jest" if typescript else "yarn run jest"
    return "cargo test"


def _dependencies(program_template: ProgramTemplate, anchor_version: str) -> list[tuple[str, str]]:
    deps = [("@coral-xyz/anchor", f"^{anchor_version}")]
    if program_template in (ProgramTemplate.COUNTER, ProgramTemplate.MINT_TOKEN):
        deps.append(("@solana/web3.js", WEB3_VERSION))
    return deps


def _dev_dependencies(test_template: TestTemplate, language: Language) -> list[tuple[str, str]]:
    typescript = language is Language.TYPESCRIPT
    deps: list[tuple[str, str]] = []
    if test_template is TestTemplate.MOCHA:
        deps += [("chai", "^4.3.4"), ("mocha", "^9.0.3")]
        if typescript:
            deps += [
                ("ts-mocha", "^10.0.0"),
                ("@types/bn.js", "^5.1.0"),
                ("@types/chai", "^4.3.0"),
                ("@types/mocha", "^9.0.0"),
            ]
    elif test_template is TestTemplate.JEST:
        deps += [("jest", "^29.0.3")]
        if typescript:
            deps += [
                ("ts-jest", "^29.0.2"),
                ("@types/bn.js", "^5.1.0"),
                ("@types/jest", "^29.0.3"),
            ]
    if typescript:
        deps.append(("typescript", "^4.3.5"))
    deps.append(("prettier", "^2.6.2"))
    return deps


def _ts_types(test_template: TestTemplate) -> str:
    types = {
        TestTemplate.MOCHA: ["mocha", "chai"],
        TestTemplate.JEST: ["jest"],
        TestTemplate.RUST: [],
    }[test_template]
    return json.dumps(types)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


class TemplateCatalog:
    """Renders the complete file set for one template combination."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def build_context(
        self,
        project: ProjectName,
        program_template: ProgramTemplate,
        test_template: TestTemplate,
        params: RenderParams,
    ) -> dict[str, Any]:
        """Build the Jinja2 template context."""
        mint_token = program_template is ProgramTemplate.MINT_TOKEN
        return {
            "name": project,
            "program_template": program_template.value,
            "program_kind": program_template,
            "test_template": test_template.value,
            "rust_tests": test_template is TestTemplate.RUST,
            "language": params.language,
            "typescript": params.language is Language.TYPESCRIPT,
            "jest": test_template is TestTemplate.JEST,
            "program_id": params.program_id,
            "anchor_version": params.anchor_version,
            "license": params.license,
            "wallet": params.wallet,
            "devnet": mint_token,
            "cluster": "devnet" if mint_token else "Localnet",
            "test_script": anchor_test_script(test_template, params.language),
            "dependencies": _dependencies(program_template, params.anchor_version),
            "dev_dependencies": _dev_dependencies(test_template, params.language),
            "ts_types": _ts_types(test_template),
        }

    def render(
        self,
        project: ProjectName,
        program_template: ProgramTemplate,
        test_template: TestTemplate,
        params: RenderParams,
    ) -> FileSet:
        """Render every workspace, program and test file for the selection."""
        ctx = self.build_context(project, program_template, test_template, params)
        r = self.renderer
        program_dir = _program_dir(ctx)
        ext = params.language.extension

        entries: list[FileEntry] = [
            _entry("Anchor.toml", r.render("workspace/Anchor.toml.j2", ctx), OVERWRITE),
            _entry(".gitignore", r.render("workspace/gitignore.j2", ctx), OVERWRITE),
            _entry(".prettierignore", r.render("workspace/prettierignore.j2", ctx), OVERWRITE),
            _entry("README.md", r.render("workspace/README.md.j2", ctx)),
            _entry("devbox.json", r.render("workspace/devbox.json.j2", ctx)),
            _entry("app"),
            _entry("migrations"),
            _entry(f"migrations/deploy.{ext}", r.render("migrations/deploy.j2", ctx), OVERWRITE),
            _entry("package.json", r.render("workspace/package.json.j2", ctx), OVERWRITE),
        ]
        if params.language is Language.TYPESCRIPT:
            entries.append(
                _entry("tsconfig.json", r.render("workspace/tsconfig.json.j2", ctx), OVERWRITE)
            )

        entries += [
            _entry("Cargo.toml", r.render("workspace/Cargo.toml.j2", ctx)),
            _entry(program_dir / "Cargo.toml", r.render("programs/Cargo.toml.j2", ctx)),
            _entry(program_dir / "Xargo.toml", r.render("programs/Xargo.toml.j2", ctx)),
        ]
        entries += PROGRAM_RENDERERS[program_template](r, ctx)

        entries += TEST_RENDERERS[test_template](r, ctx)

        return FileSet(entries=tuple(entries), pre_commands=TEST_PRE_COMMANDS[test_template])
