from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

from elphadeal.core.errors import ElphadealError, wrap_error
from elphadeal.core.logging import get_logger, log_event
from elphadeal.core.paths import (
    APP_NAME,
    COMPONENT_FILENAME,
    ENTRY_FILENAME,
    MANIFEST_FILENAME,
)
from elphadeal.domain.manifest import ProjectManifest
from elphadeal.resources.templates import (
    COMPONENT_SOURCE,
    DEFAULT_ENTRY_SOURCE,
    render_templated_entry,
)
from elphadeal.services.package_shim import PackageShim

logger = get_logger(__name__)

ShimFactory = Callable[[Path], PackageShim]


@dataclass(frozen=True)
class TemplateSet:
    manifest: ProjectManifest
    files: Mapping[str, str] = field(default_factory=dict)
    is_templated: bool = False


@dataclass(frozen=True)
class ScaffoldResult:
    project_dir: Path
    template_set: TemplateSet


def project_manifest(directory: Path) -> ProjectManifest:
    return ProjectManifest.for_directory(
        directory,
        description=f"{APP_NAME} script project",
        scripts={"start": f"elphadeal {ENTRY_FILENAME}"},
    )


def build_template_set(manifest: ProjectManifest, template: str | None = None) -> TemplateSet:
    if template:
        files = {ENTRY_FILENAME: render_templated_entry(template)}
        return TemplateSet(manifest=manifest, files=files, is_templated=True)
    files = {
        ENTRY_FILENAME: DEFAULT_ENTRY_SOURCE,
        COMPONENT_FILENAME: COMPONENT_SOURCE,
    }
    return TemplateSet(manifest=manifest, files=files, is_templated=False)


class ProjectScaffolder:
    """Create script projects in (or below) a working directory."""

    def __init__(self, cwd: Path, shim_factory: ShimFactory) -> None:
        self._cwd = cwd
        self._shim_factory = shim_factory

    def init(self) -> Path:
        """Write a manifest into the working directory itself."""
        manifest_path = self._cwd / MANIFEST_FILENAME
        if manifest_path.exists():
            raise ElphadealError(
                code="manifest_exists",
                message=f"{MANIFEST_FILENAME} already exists.",
            )
        try:
            project_manifest(self._cwd).write(manifest_path)
        except OSError as exc:
            raise wrap_error(
                exc,
                code="manifest_write_failed",
                message=f"Unable to write {MANIFEST_FILENAME}.",
            ) from exc
        log_event(logger, "manifest.created", path=manifest_path)
        return manifest_path

    def create(self, name: str, template: str | None = None) -> ScaffoldResult:
        """Scaffold ``name``, optionally seeded with the ``template`` package.

        Nothing is rolled back: a failure after the directory exists leaves
        whatever was written so far.
        """
        project_dir = self._cwd / name
        if project_dir.exists():
            log_event(logger, "scaffold.conflict", path=project_dir)
            raise ElphadealError(
                code="scaffold_conflict",
                message=f"Directory {name} already exists.",
            )

        manifest = project_manifest(project_dir)
        try:
            project_dir.mkdir(parents=True)
            manifest.write(project_dir / MANIFEST_FILENAME)
        except OSError as exc:
            raise wrap_error(
                exc, code="scaffold_failed", message=f"Unable to create {name}."
            ) from exc

        if template and not self._shim_factory(project_dir).install(template):
            raise ElphadealError(
                code="template_install_failed",
                message=f"Template {template} could not be installed.",
                detail=str(project_dir),
            )

        template_set = build_template_set(manifest, template)
        try:
            for relative_path, content in template_set.files.items():
                (project_dir / relative_path).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise wrap_error(
                exc, code="scaffold_failed", message=f"Unable to populate {name}."
            ) from exc

        log_event(
            logger,
            "scaffold.created",
            path=project_dir,
            template=template,
            files=sorted(template_set.files),
        )
        return ScaffoldResult(project_dir=project_dir, template_set=template_set)
