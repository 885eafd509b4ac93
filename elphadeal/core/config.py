from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from elphadeal.core.paths import DEFAULT_MODULE_PATH


class RuntimeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ELPHADEAL_", case_sensitive=False)

    module_path: Path | None = None
    npm_executable: str = "npm"
    log_level: str = "info"
    log_format: str = "json"
    log_dir: Path | None = None

    def resolved_module_path(self) -> Path:
        if self.module_path is not None:
            return self.module_path.expanduser()
        return DEFAULT_MODULE_PATH


@lru_cache
def get_runtime_config() -> RuntimeConfig:
    return RuntimeConfig()
