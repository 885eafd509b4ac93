from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from elphadeal.core.paths import ENTRY_FILENAME


class ProjectManifest(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    version: str = "1.0.0"
    description: str = ""
    main: str = ENTRY_FILENAME
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def for_directory(cls, directory: Path, **fields: object) -> "ProjectManifest":
        """Build a manifest named after ``directory``'s base name."""
        name = directory.resolve().name
        return cls(name=name, **fields)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(), indent=2) + "\n"

    def write(self, path: Path) -> None:
        path.write_text(self.to_json(), encoding="utf-8")
