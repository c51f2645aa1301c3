from __future__ import annotations

import pytest

from editbox_engine.config import Alignment, EditBoxConfig, normalize_password_char
from editbox_engine.runtime.telemetry import (
    PRESETS,
    SpanHandle,
    TelemetrySettings,
    configure,
)


def test_config_normalizes_fields() -> None:
    config = EditBoxConfig(password_char="\0", alignment="right")

    assert config.password_char == ""
    assert config.alignment is Alignment.RIGHT
    assert config.width is None


@pytest.mark.parametrize(
    "kwargs",
    [{"max_chars": -1}, {"width": -5}, {"double_click_ms": -1}, {"password_char": "**"}],
)
def test_config_rejects_invalid_values(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        EditBoxConfig(**kwargs)


def test_normalize_password_char() -> None:
    assert normalize_password_char(None) == ""
    assert normalize_password_char("•") == "•"


def test_telemetry_settings_from_env() -> None:
    settings = TelemetrySettings.from_env(
        {
            "EDITBOX_ENGINE_LOG_LEVEL": "debug",
            "EDITBOX_ENGINE_NO_COLOR": "1",
            "EDITBOX_ENGINE_LOG_JSON": "yes",
            "EDITBOX_ENGINE_LOG_FILE": "/tmp/editbox.log",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.colored is False
    assert settings.json is True
    assert settings.console is True
    assert settings.log_file == "/tmp/editbox.log"
    assert settings.buffered is False


def test_telemetry_settings_defaults() -> None:
    settings = TelemetrySettings.from_env({})

    assert settings == TelemetrySettings()
    with pytest.raises(ValueError):
        TelemetrySettings(buffer_size=0)


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        configure(settings=TelemetrySettings(), preset="quiet")
    with pytest.raises(ValueError):
        configure(preset="verbose")
    assert set(PRESETS) == {"development", "production", "quiet"}


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, list[tuple[str, str]]]] = []

    def debug_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.records.append((message, pairs))


def test_span_handle_note_carries_span_metadata() -> None:
    log = RecordingLogger()
    handle = SpanHandle(
        logger=log, span_name="edit::paste_fit", component_name="edit_session"
    )
    handle.add_metadata("requested", 8)

    handle.note("fitted", kept=3)

    message, pairs = log.records[0]
    assert message == "span::fitted"
    assert dict(pairs) == {
        "span": "edit::paste_fit",
        "requested": "8",
        "component": "edit_session",
        "kept": "3",
    }
