"""Detect Jenkins CI runs linked from a PR discussion thread.

Each event in the thread (PR description, comments, reviews) may carry one or
more links to ci.nodejs.org. Links are classified by job name, and only the
newest run per CI type is kept.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Protocol

from landgate_core.utils.dates import to_utc

logger = logging.getLogger(__name__)

CI_DOMAIN = "ci.nodejs.org"
_CI_LINK_RE = re.compile(r"https://ci\.nodejs\.org\S+")


class CIType(str, Enum):
    FULL = "FULL"
    CITGM = "CITGM"
    LIBUV = "LIBUV"
    NOINTL = "NOINTL"
    V8 = "V8"
    BENCHMARK = "BENCHMARK"
    LINTER = "LINTER"


@dataclass(frozen=True)
class CIInfo:
    name: str
    pattern: re.Pattern


# Checked in order; the first matching job name wins.
CI_TYPES: dict[CIType, CIInfo] = {
    CIType.CITGM: CIInfo("CITGM", re.compile(r"citgm")),
    CIType.FULL: CIInfo("Full", re.compile(r"node-test-pull-request/|node-test-commit/")),
    CIType.BENCHMARK: CIInfo("Benchmark", re.compile(r"benchmark")),
    CIType.LIBUV: CIInfo("libuv", re.compile(r"libuv")),
    CIType.NOINTL: CIInfo("No Intl", re.compile(r"nointl")),
    CIType.V8: CIInfo("V8", re.compile(r"node-test-commit-v8")),
    CIType.LINTER: CIInfo("Linter", re.compile(r"node-test-linter")),
}

FULL = CIType.FULL


class ThreadEvent(Protocol):
    published_at: datetime
    body_text: str


@dataclass(frozen=True)
class CIRun:
    date: datetime
    link: str


def classify_link(link: str) -> CIType | None:
    for ci_type, info in CI_TYPES.items():
        if info.pattern.search(link):
            return ci_type
    return None


def parse_text(text: str) -> list[tuple[CIType, str]]:
    """Return (type, link) for every recognised CI link in text, in order."""
    runs = []
    for link in _CI_LINK_RE.findall(text):
        ci_type = classify_link(link)
        if ci_type is None:
            logger.debug("Ignoring unrecognised CI link %s", link)
            continue
        runs.append((ci_type, link))
    return runs


class CIParser:
    def __init__(self, thread: Iterable[ThreadEvent]):
        self.thread = list(thread)

    def parse(self) -> dict[CIType, CIRun]:
        result: dict[CIType, CIRun] = {}
        for event in self.thread:
            body = event.body_text or ""
            if CI_DOMAIN not in body:
                continue
            published_at = to_utc(event.published_at)
            for ci_type, link in parse_text(body):
                current = result.get(ci_type)
                # Within one event the last link of a type wins; across events the newer event does.
                if current is None or current.date <= published_at:
                    result[ci_type] = CIRun(date=published_at, link=link)
        return result
