"""telelog wiring for the modal engine.

Everything else in the package goes through three calls:

``get_logger(name)``
    cached ``telelog.Logger`` bound to the active configuration
``record_event(name, ...)``
    one structured ``event::<name>`` line with key/value data
``span(name, ...)``
    profiles a block, optionally tracked as a component, with metadata pushed
    as logger context while it runs

``configure`` swaps the configuration at runtime, either to an explicit
``telelog.Config``, to a named preset, or back to the environment defaults
(``MODAL_ENGINE_LOG_LEVEL``, ``..._LOG_FILE``, ``..._LOG_JSON``,
``..._DISABLE_CONSOLE``, ``..._NO_COLOR``).
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MODAL_ENGINE_"
ROOT_LOGGER = "modal_engine"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_value(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env_value(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Logging switches read from ``MODAL_ENGINE_*`` variables."""

    level: str = "WARNING"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        return cls(
            level=(env_value("LOG_LEVEL") or "WARNING").upper(),
            console=not env_flag("DISABLE_CONSOLE", False),
            color=not env_flag("NO_COLOR", False),
            json=env_flag("LOG_JSON", False),
            log_file=env_value("LOG_FILE") or "",
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        config.with_profiling(True)
        return config


# preset name -> ``Config.with_<option>`` calls, applied in order
PRESETS: Mapping[str, Tuple[Tuple[str, Any], ...]] = {
    "development": (
        ("min_level", "DEBUG"),
        ("console_output", True),
        ("colored_output", True),
        ("json_format", False),
    ),
    "quiet": (
        ("min_level", "WARNING"),
        ("console_output", False),
    ),
    "production": (
        ("min_level", "INFO"),
        ("console_output", False),
        ("file_output", None),
        ("buffering", True),
    ),
}


def _preset_config(preset: str) -> Any:
    options = PRESETS.get(preset.lower())
    if options is None:
        raise ValueError(f"Unknown preset '{preset}'.")
    config = tl.Config()
    for option, value in options:
        if option == "file_output" and value is None:
            value = env_value("LOG_FILE") or "modal_engine.log"
        getattr(config, f"with_{option}")(value)
    config.with_profiling(True)
    return config


class _State:
    config: Optional[Any] = None
    loggers: Dict[str, Any] = {}


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a new configuration and drop every cached logger.

    With neither argument the environment defaults are re-read.
    """

    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = _preset_config(preset)
    elif config is None:
        config = TelemetrySettings.from_env().build()
    _State.config = config
    _State.loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or env_value("LOGGER") or ROOT_LOGGER
    cached = _State.loggers.get(logger_name)
    if cached is None:
        if _State.config is None:
            configure()
        cached = tl.Logger.with_config(logger_name, _State.config)
        _State.loggers[logger_name] = cached
    return cached


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(log: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    """Log ``message`` at ``level``, preferring telelog's ``<level>_with`` form."""

    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; extra metadata is attached to failure reports."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def _logger_context(log: Any, values: Mapping[str, str]) -> Iterator[None]:
    pushed: List[str] = []
    try:
        for key, value in values.items():
            log.add_context(key, value)
            pushed.append(key)
        yield
    finally:
        for key in pushed:
            log.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component=True`` also tracks it as a component called ``name``; a string
    uses that string as the component name instead.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    values = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(log, name, component_name, dict(values))

    with ExitStack() as stack:
        stack.enter_context(_logger_context(log, values))
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "ENV_PREFIX",
    "PRESETS",
    "SpanHandle",
    "TelemetrySettings",
    "configure",
    "env_flag",
    "env_value",
    "get_logger",
    "record_event",
    "span",
]
