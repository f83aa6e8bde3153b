"""Unit tests for configuration defaults, validation and dataset resolution."""

from __future__ import annotations

from pathlib import Path

import platformdirs
import pytest
from pydantic import ValidationError

from promptlib.config import (
    _BUNDLED_DATASET,
    _DEFAULT_DATA_DIR,
    _DEFAULT_DB_PATH,
    SearchSettings,
    Settings,
    StoreSettings,
    resolve_dataset_path,
)


class TestPlatformDefaults:
    def test_default_data_dir_matches_platformdirs(self) -> None:
        assert platformdirs.user_data_dir("promptlib") == _DEFAULT_DATA_DIR

    def test_default_db_path_under_data_dir(self) -> None:
        assert _DEFAULT_DB_PATH.startswith(_DEFAULT_DATA_DIR)
        assert _DEFAULT_DB_PATH.endswith("prompts.db")

    def test_store_settings_uses_platform_default(self) -> None:
        assert StoreSettings().db_path == _DEFAULT_DB_PATH

    def test_search_defaults(self) -> None:
        search = SearchSettings()
        assert search.max_distance == 0.3
        assert search.suggestion_limit == 5
        assert search.related_limit == 4


class TestEnvironment:
    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROMPTLIB__SEARCH__MAX_DISTANCE", "0.45")
        assert Settings().search.max_distance == 0.45

    def test_init_args_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROMPTLIB__LOGGING__LEVEL", "DEBUG")
        assert Settings(logging={"level": "ERROR"}).logging.level == "ERROR"


class TestConfigValidation:
    def test_wrong_type_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(search={"suggestion_limit": "many"})  # type: ignore[arg-type]

    def test_distance_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            SearchSettings(max_distance=1.2)

    def test_unknown_top_level_field_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(completely_unknown_field="oops")  # type: ignore[call-arg]

    def test_unknown_nested_field_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            StoreSettings(db_paht="/intended/path/prompts.db")  # type: ignore[call-arg]


class TestResolveDatasetPath:
    def test_explicit_path_wins(self, tmp_path: Path) -> None:
        settings = Settings(dataset={"path": str(tmp_path / "mine.json")})
        assert resolve_dataset_path(settings) == tmp_path / "mine.json"

    def test_data_dir_file(self, tmp_path: Path) -> None:
        (tmp_path / "prompt_data.json").write_text("{}", encoding="utf-8")
        settings = Settings(data_dir=str(tmp_path))
        assert resolve_dataset_path(settings) == tmp_path / "prompt_data.json"

    def test_bundled_fallback(self, tmp_path: Path) -> None:
        settings = Settings(data_dir=str(tmp_path))
        path = resolve_dataset_path(settings)
        assert path == _BUNDLED_DATASET
        assert path.exists()
