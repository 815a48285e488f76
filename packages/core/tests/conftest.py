import pytest

from landgate_core.logger import CheckLogger


class RecordingLogger(CheckLogger):
    """Keeps every (level, message) pair in order."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warn(self, message: str) -> None:
        self.messages.append(("warn", message))

    @property
    def infos(self) -> list[str]:
        return [m for level, m in self.messages if level == "info"]

    @property
    def warnings(self) -> list[str]:
        return [m for level, m in self.messages if level == "warn"]


@pytest.fixture
def logger():
    return RecordingLogger()
