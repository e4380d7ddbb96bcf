"""
Logging capability consumed by the claim mapper.

The mapper reports recoverable defects through a ``ClaimLogger`` injected at
construction time rather than a process-wide logger, so library users can
silence it, print it, route it into structlog or record it in tests.
"""

import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, TextIO, runtime_checkable

import structlog

from claim_mapper.config.settings import LoggerBackend, get_settings


@runtime_checkable
class ClaimLogger(Protocol):
    """Leveled, context-carrying diagnostic messages."""

    def info(self, message: str, context: Mapping[str, Any] | None = None) -> None: ...

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> None: ...

    def error(self, message: str, context: Mapping[str, Any] | None = None) -> None: ...


class NoopLogger:
    """Discards every message. Safe default for production library use."""

    def info(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        pass

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        pass

    def error(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        pass


class ConsoleLogger:
    """
    Prints ``[LEVEL] message | context=...`` lines for diagnostics.

    Output goes through ``structlog.PrintLogger``, which serializes writes
    per stream, so one instance can be shared between threads.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._printer = structlog.PrintLogger(stream or sys.stdout)

    def _emit(self, level: str, message: str, context: Mapping[str, Any] | None) -> None:
        if context:
            self._printer.msg(f"[{level}] {message} | context={dict(context)}")
        else:
            self._printer.msg(f"[{level}] {message}")

    def info(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit("INFO", message, context)

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit("WARN", message, context)

    def error(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit("ERROR", message, context)


class StructlogLogger:
    """
    Forwards messages to a structlog logger.

    Warnings then pass through whatever ``configure_logging`` set up,
    including PHI masking and JSON rendering.
    """

    def __init__(self, logger: Any = None, name: str = "claim_mapper.mapping") -> None:
        self._logger = logger if logger is not None else structlog.get_logger(name)

    def info(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._logger.info(message, context=dict(context or {}))

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._logger.warning(message, context=dict(context or {}))

    def error(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._logger.error(message, context=dict(context or {}))


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One recorded message."""

    level: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)


class RecordingLogger:
    """Collects every message in memory; used to assert on warnings."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[LogEntry] = []

    def _record(self, level: str, message: str, context: Mapping[str, Any] | None) -> None:
        with self._lock:
            self._entries.append(LogEntry(level, message, dict(context or {})))

    def info(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._record("info", message, context)

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._record("warn", message, context)

    def error(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._record("error", message, context)

    @property
    def entries(self) -> list[LogEntry]:
        with self._lock:
            return list(self._entries)

    @property
    def warnings(self) -> list[LogEntry]:
        return [entry for entry in self.entries if entry.level == "warn"]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def get_default_logger(backend: LoggerBackend | None = None) -> ClaimLogger:
    """
    Build the logging capability named by the mapping settings.

    Args:
        backend: Overrides ``MappingSettings.logger_backend``.

    Returns:
        A ClaimLogger implementation.
    """
    backend = backend or get_settings().mapping.logger_backend
    if backend == LoggerBackend.CONSOLE:
        return ConsoleLogger()
    if backend == LoggerBackend.STRUCTLOG:
        return StructlogLogger()
    return NoopLogger()
