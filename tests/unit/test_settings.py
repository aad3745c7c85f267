"""Unit tests for engine settings loading."""

import pytest
from pydantic import ValidationError

from motionblocks.config.settings import EngineSettings, load_settings
from motionblocks.utils.logging import log


@pytest.fixture(autouse=True)
def restore_log_level():
    yield
    log.set_level("INFO")


class TestLoadSettings:
    """Test load_settings layering."""

    def test_defaults(self):
        """No environment and no overrides gives the declared defaults."""
        settings = load_settings(environ={})
        assert settings.fps == 30
        assert settings.log_level == "INFO"
        assert settings.flip_window == 0.25

    def test_environment(self):
        """MOTIONBLOCKS_* variables override defaults."""
        settings = load_settings(environ={"MOTIONBLOCKS_FPS": "60", "MOTIONBLOCKS_LOG_LEVEL": "debug",
                                          "OTHER_FPS": "12"})
        assert settings.fps == 60
        assert settings.log_level == "DEBUG"
        assert log.get_logger().level == 10

    def test_overrides_win(self):
        """Explicit overrides beat the environment."""
        settings = load_settings({"fps": 24}, environ={"MOTIONBLOCKS_FPS": "60"})
        assert settings.fps == 24

    @pytest.mark.parametrize("environ,overrides", [
        ({"MOTIONBLOCKS_FPS": "0"}, None),
        ({}, {"log_level": "LOUD"}),
        ({}, {"flip_window": 1.5}),
    ])
    def test_invalid(self, environ, overrides):
        """Invalid values raise at load time."""
        with pytest.raises(ValidationError):
            load_settings(overrides, environ=environ)


class TestEngineSettings:
    """Test derived settings."""

    def test_aspect(self):
        """Aspect is width / height."""
        assert EngineSettings(width=1000, height=500).aspect == 2.0

    def test_frame_dt(self):
        """Frame time is 1 / fps."""
        assert EngineSettings(fps=60).frame_dt == pytest.approx(1 / 60)

    def test_assignment_validated(self):
        """Assignments are validated too."""
        settings = EngineSettings()
        with pytest.raises(ValidationError):
            settings.fps = -1
