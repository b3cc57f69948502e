"""Colored stage logger: ANSI-colored console logging for publication attempts.

Provides a StageLogger with color-coded output per publication stage,
making it easy to follow one article from credential resolution to the
final status change in the terminal.

Color scheme:
    🔵 Blue   : Credential resolution
    🟡 Yellow : Connection verification
    🟣 Magenta: Remote post creation
    🟢 Green  : Persisting the new status
    🟠 Cyan   : Scheduling
    🔴 Red    : Errors
"""

import logging
import time
from contextlib import contextmanager
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
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


class PublicationStage:
    """Predefined publication stages with colors and icons."""

    RESOLVE = ("RESOLVE", _Colors.BLUE, "🔑")
    VERIFY = ("VERIFY", _Colors.YELLOW, "🔌")
    CREATE = ("CREATE", _Colors.MAGENTA, "📝")
    PERSIST = ("PERSIST", _Colors.GREEN, "💾")
    SCHEDULE = ("SCHEDULE", _Colors.CYAN, "⏰")
    RUNNER = ("RUNNER", _Colors.WHITE, "⚙️")


class StageLogger:
    """Color-coded logger for multi-step publication work.

    Usage:
        log = StageLogger("PublicationService")
        log.step_start(PublicationStage.VERIFY, "Checking https://blog.example.com")
        log.step_complete(PublicationStage.VERIFY, "Authenticated as admin")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {_Colors.GRAY}({details}){_Colors.RESET}"

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}{self._details(kwargs)}"
        )

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}{self._details(kwargs)}"
        )

    def step_error(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log a failed step in red. Expected failures, so warning level."""
        label, _, _ = stage
        self._logger.warning(
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}{self._details(kwargs)}"
        )

    def separator(self, title: str = "") -> None:
        if title:
            self._logger.info(
                f"{_Colors.GRAY}{'─' * 10} {title} {'─' * max(0, 50 - len(title))}{_Colors.RESET}"
            )
        else:
            self._logger.info(f"{_Colors.GRAY}{'─' * 60}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Usage:
            with log.timed_step(PublicationStage.CREATE, "Creating post"):
                result = await client.create_post(...)
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(
                stage, f"{message}, failed after {elapsed:.2f}s",
                error=f"{type(e).__name__}: {e}",
            )
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} ({elapsed:.2f}s)")
