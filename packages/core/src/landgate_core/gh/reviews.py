"""Reduce raw review events to one effective verdict per collaborator."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from landgate_core.models import (
    Collaborator,
    Comment,
    Review,
    Reviewers,
    ReviewerVerdict,
    ReviewSource,
    ReviewState,
    ReviewVerdict,
)
from landgate_core.utils.dates import to_utc

logger = logging.getLogger(__name__)

LGTM_RE = re.compile(r"(\W|^)lgtm(\W|$)", re.IGNORECASE)

# States that settle a reviewer's verdict. COMMENTED and PENDING reviews leave it unchanged.
_VERDICT_STATES = {ReviewState.APPROVED, ReviewState.CHANGES_REQUESTED, ReviewState.DISMISSED}


@dataclass(frozen=True)
class _Event:
    login: str
    verdict: ReviewVerdict


class ReviewAnalyzer:
    def __init__(
        self,
        reviews: Iterable[Review],
        comments: Iterable[Comment],
        collaborators: dict[str, Collaborator],
    ):
        self.reviews = list(reviews)
        self.comments = list(comments)
        self.collaborators = collaborators

    def _collaborator(self, login: str | None) -> Collaborator | None:
        if not login:
            return None
        return self.collaborators.get(login.lower())

    def _review_events(self) -> list[_Event]:
        events = []
        for r in self.reviews:
            if r.state not in _VERDICT_STATES:
                continue
            if self._collaborator(r.author_login) is None:
                continue
            verdict = ReviewVerdict(state=r.state, source=ReviewSource.REVIEW, ref=r.url, date=r.published_at)
            events.append(_Event(r.author_login.lower(), verdict))
        return events

    def _comment_events(self) -> list[_Event]:
        events = []
        for c in self.comments:
            if not LGTM_RE.search(c.body_text or ""):
                continue
            if self._collaborator(c.author_login) is None:
                continue
            verdict = ReviewVerdict(
                state=ReviewState.APPROVED, source=ReviewSource.COMMENT, ref=c.url, date=c.published_at
            )
            events.append(_Event(c.author_login.lower(), verdict))
        return events

    def map_verdicts(self) -> dict[str, ReviewVerdict]:
        """Fold all events, oldest first, into login -> latest verdict."""
        events = self._review_events() + self._comment_events()
        # sorted() is stable, so a review and a comment with the same timestamp keep that order.
        events = sorted(events, key=lambda e: to_utc(e.verdict.date))

        table: dict[str, ReviewVerdict] = {}
        for event in events:
            table[event.login] = event.verdict
        return table

    def get_reviewers(self) -> Reviewers:
        approved = []
        rejected = []
        for login, verdict in self.map_verdicts().items():
            reviewer = self.collaborators[login]
            if verdict.state is ReviewState.APPROVED:
                approved.append(ReviewerVerdict(reviewer, verdict))
            elif verdict.state is ReviewState.CHANGES_REQUESTED:
                rejected.append(ReviewerVerdict(reviewer, verdict))
            else:
                logger.debug("Review by %s was dismissed; ignoring.", login)
        return Reviewers(approved=tuple(approved), rejected=tuple(rejected))
