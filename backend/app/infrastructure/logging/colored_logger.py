"""Colored RPC logger — ANSI-colored console logging for remote repository calls.

Provides an RpcLogger with color-coded output per call category,
making it easy to visually trace storage traffic in the terminal.

Color scheme:
    🔵 Blue    — Reads
    🟢 Green   — Writes
    🟣 Magenta — Audit log appends
    🔴 Red     — Errors
    ⚪ Gray    — Timing / Stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Call Categories ──────────────────────────────────────────────────

class RpcStage:
    """Predefined call categories with colors and icons."""

    READ = ("READ", _Colors.BLUE, "📖")
    WRITE = ("WRITE", _Colors.GREEN, "💾")
    AUDIT = ("AUDIT", _Colors.MAGENTA, "📝")
    ERROR = ("ERROR", _Colors.RED, "❌")

    @classmethod
    def for_action(cls, action: str) -> tuple[str, str, str]:
        """Pick the category for an RPC action name."""
        if action == "addAuditLog":
            return cls.AUDIT
        if action.startswith("get"):
            return cls.READ
        return cls.WRITE


# ── RpcLogger ────────────────────────────────────────────────────────

class RpcLogger:
    """Color-coded logger for remote repository calls.

    Usage:
        log = RpcLogger("RemoteRepository")
        with log.timed_step(RpcStage.WRITE, "saveBill", record_id="b1"):
            await client.call("saveBill", payload)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of a call with its category color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.debug(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of a call."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a failed call in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed * 1000:.0f}ms", **kwargs)
