from __future__ import annotations

import json
from pathlib import Path

import pytest

from elphadeal.core.errors import ElphadealError
from elphadeal.services.package_shim import PackageShim
from elphadeal.services.scaffolder import ProjectScaffolder, build_template_set, project_manifest
from tests.conftest import FakePopen, snapshot


def _scaffolder(cwd: Path) -> ProjectScaffolder:
    return ProjectScaffolder(cwd, lambda directory: PackageShim(directory))


def test_default_project_has_entry_and_component(workdir: Path, fake_npm: type[FakePopen]) -> None:
    result = _scaffolder(workdir).create("my-app")

    project = workdir / "my-app"
    assert result.project_dir == project
    assert sorted(p.name for p in project.iterdir()) == ["app.js", "index.js", "package.json"]
    assert "require('./app.js')" in (project / "index.js").read_text(encoding="utf-8")
    assert not result.template_set.is_templated
    assert fake_npm.calls == []


def test_templated_project_installs_template_into_new_directory(
    workdir: Path, fake_npm: type[FakePopen]
) -> None:
    result = _scaffolder(workdir).create("demo", template="lodash")

    project = workdir / "demo"
    assert sorted(p.name for p in project.iterdir()) == ["index.js", "package.json"]
    assert "lodash" in (project / "index.js").read_text(encoding="utf-8")
    assert result.template_set.is_templated
    assert fake_npm.calls == [(["/usr/bin/npm", "install", "lodash"], project)]


def test_manifest_is_named_after_directory(workdir: Path, fake_npm: type[FakePopen]) -> None:
    _scaffolder(workdir).create("named-app")

    manifest = json.loads((workdir / "named-app" / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "named-app"
    assert manifest["main"] == "index.js"
    assert manifest["dependencies"] == {}
    assert manifest["scripts"] == {"start": "elphadeal index.js"}


def test_existing_directory_is_a_conflict_without_writes(workdir: Path) -> None:
    (workdir / "taken").mkdir()
    (workdir / "taken" / "keep.txt").write_text("x", encoding="utf-8")
    before = snapshot(workdir)

    with pytest.raises(ElphadealError) as excinfo:
        _scaffolder(workdir).create("taken", template="lodash")

    assert excinfo.value.code == "scaffold_conflict"
    assert snapshot(workdir) == before


def test_template_install_failure_leaves_partial_project(
    workdir: Path, fake_npm: type[FakePopen]
) -> None:
    fake_npm.returncode = 1

    with pytest.raises(ElphadealError) as excinfo:
        _scaffolder(workdir).create("partial", template="missing-pkg")

    assert excinfo.value.code == "template_install_failed"
    project = workdir / "partial"
    assert sorted(p.name for p in project.iterdir()) == ["package.json"]


def test_init_writes_manifest_in_place(workdir: Path) -> None:
    path = _scaffolder(workdir).init()

    assert path == workdir / "package.json"
    assert json.loads(path.read_text(encoding="utf-8"))["name"] == workdir.name


def test_init_refuses_existing_manifest(workdir: Path) -> None:
    (workdir / "package.json").write_text("{}", encoding="utf-8")
    before = snapshot(workdir)

    with pytest.raises(ElphadealError) as excinfo:
        _scaffolder(workdir).init()

    assert excinfo.value.code == "manifest_exists"
    assert snapshot(workdir) == before


def test_template_set_shapes(tmp_path: Path) -> None:
    manifest = project_manifest(tmp_path / "x")

    plain = build_template_set(manifest)
    templated = build_template_set(manifest, "@scope/widgets")

    assert set(plain.files) == {"index.js", "app.js"}
    assert set(templated.files) == {"index.js"}
    assert '"@scope/widgets"' in templated.files["index.js"]
