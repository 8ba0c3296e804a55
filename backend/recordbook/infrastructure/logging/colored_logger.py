"""Colored store logger — ANSI-colored console logging for record store events.

Provides a StoreLogger with color-coded output per store stage, making it
easy to follow loads, mutations and persistence in the terminal.

Color scheme:
    🟢 Green   — Load / Persist
    🔵 Blue    — Add / Update
    🟡 Yellow  — Delete / Archive
    🔴 Red     — Errors
    ⚪ Gray    — Details
"""

import logging
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    GRAY = "\033[90m"


class StoreStage:
    """Predefined store stages with colors and icons."""

    LOAD = ("LOAD", _Colors.GREEN, "📂")
    PERSIST = ("PERSIST", _Colors.GREEN, "💾")
    ADD = ("ADD", _Colors.BLUE, "➕")
    UPDATE = ("UPDATE", _Colors.BLUE, "✏️")
    DELETE = ("DELETE", _Colors.YELLOW, "🗑️")
    ARCHIVE = ("ARCHIVE", _Colors.YELLOW, "📦")
    ERROR = ("ERROR", _Colors.RED, "❌")


def _format_details(kwargs: dict[str, Any], color: str) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {color}({details}){_Colors.RESET}"


class StoreLogger:
    """Color-coded logger for record store events.

    Usage:
        log = StoreLogger("RecordStore")
        log.step(StoreStage.ADD, "Added record", record_id=record.id)
        log.failure(StoreStage.PERSIST, "Write failed", error=exc)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log a completed store step at INFO."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _format_details(kwargs, _Colors.GRAY))

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed) at DEBUG."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.debug(formatted + _format_details(kwargs, _Colors.DIM))

    def failure(
        self, stage: tuple[str, str, str], message: str, error: Exception | None = None
    ) -> None:
        """Log a failed store step in red at WARNING.

        Store failures never abort the in-memory operation, so they are
        warnings rather than errors.
        """
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted)
