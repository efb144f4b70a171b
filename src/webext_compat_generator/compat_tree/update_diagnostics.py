"""Diagnostics collected while updating the compat tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field


@dataclass
class UpdateDiagnostics:
    """Ordered, de-duplicated log lines emitted once all updates are done."""

    _messages: dict[tuple[int, str], None] = field(default_factory=dict)

    def info(self, message: str) -> None:
        self._messages.setdefault((logging.INFO, message), None)

    def warning(self, message: str) -> None:
        self._messages.setdefault((logging.WARNING, message), None)

    @property
    def messages(self) -> tuple[str, ...]:
        """Return collected messages in first-seen order."""
        return tuple(message for _, message in self._messages)

    def emit(self, logger: logging.Logger) -> None:
        """Log every collected message at its recorded level."""
        for level, message in self._messages:
            logger.log(level, message)
