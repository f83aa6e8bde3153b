"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments  (Settings(search={"max_distance": 0.2}))
  2. Environment variables  (PROMPTLIB__SEARCH__MAX_DISTANCE=0.4)
  3. promptlib.yaml         (searched in cwd, then the platform config dir)
  4. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_APP_NAME = "promptlib"
_DEFAULT_DATA_DIR = platformdirs.user_data_dir(_APP_NAME)
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "prompts.db")
_DEFAULT_DATASET_NAME = "prompt_data.json"
_BUNDLED_DATASET = Path(__file__).parent / "data" / _DEFAULT_DATASET_NAME


def _find_config_file() -> str | None:
    """Return the path of the first promptlib.yaml found, or None."""
    candidates = [
        Path("promptlib.yaml"),
        Path(platformdirs.user_config_dir(_APP_NAME)) / "promptlib.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class DatasetSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str | None = None
    url: str | None = None


class SearchSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Upper bound on normalised distance (0 = exact, 1 = unrelated)
    max_distance: float = Field(default=0.3, ge=0.0, le=1.0)
    suggestion_limit: int = Field(default=5, ge=1)
    related_limit: int = Field(default=4, ge=1)


class StoreSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    db_path: str = _DEFAULT_DB_PATH


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: PROMPTLIB__STORE__DB_PATH=/tmp/p.db
        env_prefix="PROMPTLIB__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    data_dir: str = _DEFAULT_DATA_DIR
    dataset: DatasetSettings = DatasetSettings()
    search: SearchSettings = SearchSettings()
    store: StoreSettings = StoreSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )


def resolve_dataset_path(settings: Settings) -> Path:
    """Pick the dataset file to load.

    An explicit ``dataset.path`` wins; otherwise a ``prompt_data.json`` in the
    data dir; otherwise the sample dataset shipped with the package.
    """
    if settings.dataset.path:
        return Path(settings.dataset.path).expanduser()
    candidate = Path(settings.data_dir).expanduser() / _DEFAULT_DATASET_NAME
    if candidate.exists():
        return candidate
    return _BUNDLED_DATASET
