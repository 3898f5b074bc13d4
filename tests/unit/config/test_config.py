# pyright: reportAny=false
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from gtdcore.config import (
    Config,
    LogFormat,
    LogLevel,
    ReviewConfig,
    safe_load_config,
)
from gtdcore.exceptions import ConfigLoadError, ConfigValidationError


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config.from_dict({})

        assert config.logging.level is LogLevel.WARNING
        assert config.logging.format is LogFormat.JSON
        assert config.review == ReviewConfig()
        assert config.review.interval_days == 7
        assert config.review.missing_review_days == 14

    def test_is_frozen(self) -> None:
        config = Config.from_dict({})

        with pytest.raises(ValueError, match="frozen"):
            config.review.window_days = 3  # pyright: ignore[reportAttributeAccessIssue]

    def test_unknown_keys_are_ignored(self) -> None:
        config = Config.from_dict({"review": {"window_days": 10, "colour": "blue"}})

        assert config.review.window_days == 10


class TestConfigValidation:
    def test_reports_dotted_key(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            Config.from_dict({"review": {"window_days": 0}})

        error = exc_info.value
        assert error.key == "review.window_days"
        assert error.value == 0

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            Config.from_dict({"logging": {"level": "chatty"}})

        assert exc_info.value.key == "logging.level"


class TestConfigFromFile:
    def test_loads_valid_toml_file(self, fs: FakeFilesystem) -> None:
        path = Path("/test/gtdcore.toml")
        fs.create_file(
            path,
            contents="""
[logging]
level = "debug"
format = "text"

[review]
inbox_backlog_threshold = 20
""",
        )

        config = Config.from_file(path)

        assert config.logging.level is LogLevel.DEBUG
        assert config.logging.format is LogFormat.TEXT
        assert config.review.inbox_backlog_threshold == 20
        assert config.review.window_days == 7

    def test_raises_config_load_error_for_invalid_toml(
        self, fs: FakeFilesystem
    ) -> None:
        path = Path("/test/invalid.toml")
        fs.create_file(path, contents="[review\nwindow_days = 3\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            Config.from_file(path)

        assert exc_info.value.path == path
        assert exc_info.value.line is not None

    def test_raises_file_not_found(self, fs: FakeFilesystem) -> None:
        with pytest.raises(FileNotFoundError):
            Config.from_file(Path("/test/missing.toml"))


class TestConfigLoad:
    def test_environment_overrides_file(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = Path("/test/gtdcore.toml")
        fs.create_file(path, contents="[review]\nwindow_days = 10\n")
        monkeypatch.setenv("GTDCORE_REVIEW__WINDOW_DAYS", "14")

        config = Config.load(config_path=path)

        assert config.review.window_days == 14

    def test_missing_file_falls_back_to_defaults(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GTDCORE_REVIEW__WINDOW_DAYS", raising=False)

        config = Config.load(config_path=Path("/nowhere.toml"), include_env=False)

        assert config == Config.from_dict({})


class TestSafeLoadConfig:
    def test_returns_error_and_defaults_on_bad_file(
        self,
        fs: FakeFilesystem,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.delenv("GTDCORE_STRICT_CONFIG", raising=False)
        path = Path("/test/bad.toml")
        fs.create_file(path, contents="[review]\nwindow_days = -1\n")

        config, error = safe_load_config(config_path=path)

        assert config == Config.from_dict({})
        assert error is not None
        assert "review.window_days" in error
        assert "Warning" in capsys.readouterr().err

    def test_strict_mode_exits(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GTDCORE_STRICT_CONFIG", "1")
        path = Path("/test/bad.toml")
        fs.create_file(path, contents="[review\n")

        with pytest.raises(SystemExit) as exc_info:
            safe_load_config(config_path=path)

        assert exc_info.value.code == 1

    def test_explicit_missing_path_exits(self, fs: FakeFilesystem) -> None:
        with pytest.raises(SystemExit):
            safe_load_config(config_path=Path("/test/absent.toml"))
