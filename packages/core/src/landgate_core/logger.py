"""Logger interface injected into PRChecker.

The checker never touches a global logger directly. Callers pass in whatever
sink suits them: the CLI renders to a rich console, library users can route
diagnostics into stdlib logging, tests record the messages.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod


class CheckLogger(ABC):
    """Sink for checker diagnostics. Return values are ignored."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Report a finding that does not block landing."""

    @abstractmethod
    def warn(self, message: str) -> None:
        """Report a finding that blocks landing."""


class StdLogger(CheckLogger):
    """Forwards diagnostics to a stdlib ``logging.Logger``."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("landgate_core.checker")

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warn(self, message: str) -> None:
        self._logger.warning(message)
