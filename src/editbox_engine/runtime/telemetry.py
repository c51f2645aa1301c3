"""Telemetry services for the edit box engine, built on telelog.

The rest of the engine only touches four entry points:

``configure(...)`` -- adopt explicit settings, a named preset, or the environment
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EDITBOX_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "editbox_engine")

_TRUTHY = {"1", "true", "yes", "on"}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_SETTINGS: Optional["TelemetrySettings"] = None


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(slots=True)
class TelemetrySettings:
    """Plain description of how telelog should be configured."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    def __post_init__(self) -> None:
        self.level = self.level.upper()
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        env = os.environ if environ is None else environ
        return cls(
            level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO"),
            console=not _flag(env, "DISABLE_CONSOLE", False),
            colored=not _flag(env, "NO_COLOR", False),
            json=_flag(env, "LOG_JSON", False),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE", ""),
            buffered=_flag(env, "LOG_BUFFERED", False),
            buffer_size=int(env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE", "2048")),
        )

    def build(self) -> Any:
        """Translate the settings into a ``telelog.Config``."""

        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # Commit spans rely on profiling output.
        config.with_profiling(True)
        return config


PRESETS: Dict[str, TelemetrySettings] = {
    "development": TelemetrySettings(level="DEBUG", console=True, colored=True),
    "production": TelemetrySettings(
        level="INFO", console=False, log_file="editbox_engine.log", buffered=True
    ),
    "quiet": TelemetrySettings(level="ERROR", console=False),
}


def configure(
    *,
    settings: Optional[TelemetrySettings] = None,
    preset: Optional[str] = None,
) -> TelemetrySettings:
    """Adopt new telemetry settings and drop cached loggers.

    Parameters
    ----------
    settings:
        Explicit settings to adopt.
    preset:
        Name of an entry in ``PRESETS``. ``settings`` and ``preset`` are
        mutually exclusive; with neither, settings are read from the
        environment.
    """

    global _ACTIVE_SETTINGS
    if settings is not None and preset is not None:
        raise ValueError("Provide either `settings` or `preset`, not both.")

    if preset is not None:
        try:
            chosen = replace(PRESETS[preset.lower()])
        except KeyError as exc:
            raise ValueError(f"Unknown preset '{preset}'.") from exc
        log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if log_file and chosen.log_file:
            chosen.log_file = log_file
    elif settings is not None:
        chosen = settings
    else:
        chosen = TelemetrySettings.from_env()

    _ACTIVE_SETTINGS = chosen
    _LOGGER_CACHE.clear()
    return chosen


def active_settings() -> TelemetrySettings:
    if _ACTIVE_SETTINGS is None:
        return configure()
    return _ACTIVE_SETTINGS


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, active_settings().build())
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    """Find the logger method for ``level``, preferring the ``*_with`` variant."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching metadata mid-flight."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def note(self, message: str, **extra: Any) -> None:
        _emit(self.logger, "debug", f"span::{message}", self._payload(extra))

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block of work.

    ``component=True`` tracks the block as a component named ``name``; a
    string names the component explicitly. ``metadata`` is pushed as
    transient logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None

    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata=dict(context),
    )
    try:
        with ExitStack() as stack:
            if component_name:
                stack.enter_context(log.track_component(component_name))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetrySettings",
    "active_settings",
    "configure",
    "get_logger",
    "logger",
    "record_event",
    "span",
]
