"""Landability checks for a pull request.

A PR may land when every criterion passes:
  - reviews:  no outstanding rejections, at least one approval, and two TSC
              approvals for semver-major changes
  - wait:     48h since opening (72h when evaluated on a weekend, UTC)
  - CI:       at least one full CI run linked from the thread
  - author:   for first-time contributors only, every commit is attributable
              to the committer, a collaborator or the PR author

All criteria are evaluated and logged even after one has failed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from landgate_core.gh.user_status import is_new_author
from landgate_core.logger import CheckLogger
from landgate_core.models import Comment, Commit, PRData, ReviewerVerdict, ReviewSource
from landgate_core.utils.ci import CI_TYPES, FULL, CIParser
from landgate_core.utils.dates import to_utc

HOUR = timedelta(hours=1)

WEEKDAY_WAIT = 48
WEEKEND_WAIT = 72
SEMVER_MAJOR_TSC_APPROVALS = 2

SEMVER_MAJOR = "semver-major"

_SATURDAY = 5
_SUNDAY = 6


@dataclass(frozen=True)
class WaitTime:
    is_weekend: bool
    time_left: int


def _format_date(value: datetime) -> str:
    return to_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def get_tsc_hint(people: Iterable[ReviewerVerdict]) -> str:
    """Return ", N from TSC (a, b)" or "" when none of the people are TSC members."""
    tsc = [p.reviewer.login for p in people if p.reviewer.is_tsc()]
    if not tsc:
        return ""
    return f", {len(tsc)} from TSC ({', '.join(tsc)})"


class PRChecker:
    def __init__(self, logger: CheckLogger, data: PRData, config: Optional[dict] = None):
        config = config or {}
        self.logger = logger
        self.pr = data.pr
        self.reviewers = data.reviewers
        self.comments = data.comments
        self.reviews = data.reviews
        self.commits = data.commits
        self.collaborator_emails = {c.email for c in data.collaborators.values()}
        self.weekday_wait = config.get("weekday_wait_hours", WEEKDAY_WAIT)
        self.weekend_wait = config.get("weekend_wait_hours", WEEKEND_WAIT)
        self.semver_major_tsc_approvals = config.get("semver_major_tsc_approvals", SEMVER_MAJOR_TSC_APPROVALS)

    def check_all(self, now: datetime) -> bool:
        status = [
            self.check_reviews(),
            self.check_pr_wait(now),
            self.check_ci(),
        ]
        if self.author_is_new():
            status.append(self.check_author())
        return all(status)

    # ------------------------------------------------------------------ #
    # Reviews                                                              #
    # ------------------------------------------------------------------ #

    def check_reviews(self) -> bool:
        logger = self.logger
        rejected = self.reviewers.rejected
        approved = self.reviewers.approved
        status = True

        if not rejected:
            logger.info("Rejections: 0")
        else:
            status = False
            logger.warn(f"Rejections: {len(rejected)}{get_tsc_hint(rejected)}")
            for p in rejected:
                logger.warn(f"{p.reviewer.display_name} rejected in {p.review.ref}")

        if not approved:
            status = False
            logger.warn("Approvals: 0")
        else:
            logger.info(f"Approvals: {len(approved)}{get_tsc_hint(approved)}")
            for p in approved:
                if p.review.source is ReviewSource.COMMENT:
                    logger.info(f"{p.reviewer.display_name} approved via LGTM in comments")

            if self.pr.is_labeled(SEMVER_MAJOR):
                tsc_approvals = sum(1 for p in approved if p.reviewer.is_tsc())
                if tsc_approvals < self.semver_major_tsc_approvals:
                    status = False
                    logger.warn(f"semver-major requires at least {self.semver_major_tsc_approvals} TSC approvals")

        return status

    # ------------------------------------------------------------------ #
    # Wait time                                                            #
    # ------------------------------------------------------------------ #

    def get_wait(self, now: datetime) -> WaitTime:
        now = to_utc(now)
        # The weekend rule looks at the evaluation day, not the day the PR was opened.
        is_weekend = now.weekday() in (_SATURDAY, _SUNDAY)
        wait = self.weekend_wait if is_weekend else self.weekday_wait
        elapsed = math.ceil((now - to_utc(self.pr.created_at)) / HOUR)
        return WaitTime(is_weekend=is_weekend, time_left=wait - elapsed)

    def check_pr_wait(self, now: datetime) -> bool:
        wait = self.get_wait(now)
        if wait.time_left > 0:
            date_str = to_utc(self.pr.created_at).strftime("%a %b %d %Y")
            kind = "weekend" if wait.is_weekend else "weekday"
            self.logger.info(f"This PR was created on {date_str} ({kind} in UTC)")
            self.logger.warn(f"{wait.time_left} hours left to land")
            return False
        return True

    # ------------------------------------------------------------------ #
    # CI                                                                   #
    # ------------------------------------------------------------------ #

    def thread(self) -> list:
        """The PR description as a pseudo-comment, followed by comments and reviews."""
        pr_node = Comment(
            author_login=self.pr.author.login,
            published_at=self.pr.created_at,
            body_text=self.pr.body_text,
            url=self.pr.url,
        )
        return [pr_node, *self.comments, *self.reviews]

    def check_ci(self) -> bool:
        logger = self.logger
        ci_map = CIParser(self.thread()).parse()
        if not ci_map:
            logger.warn("No CI runs detected")
            return False

        status = True
        if FULL not in ci_map:
            status = False
            logger.warn("No full CI runs detected")

        for ci_type, ci in ci_map.items():
            name = CI_TYPES[ci_type].name
            logger.info(f"Last {name} CI on {_format_date(ci.date)}: {ci.link}")

        return status

    # ------------------------------------------------------------------ #
    # Commit authors                                                       #
    # ------------------------------------------------------------------ #

    def author_is_new(self) -> bool:
        return is_new_author(self.pr.author_association)

    def is_odd_author(self, commit: Commit) -> bool:
        # GitHub sets this when the author email is registered on the pushing account.
        if commit.authored_by_committer:
            return False
        if commit.author.email in self.collaborator_emails:
            return False
        if commit.author.email == self.pr.author.email:
            return False
        return True

    def filter_odd_commits(self) -> list[Commit]:
        return [c for c in self.commits if self.is_odd_author(c)]

    def check_author(self) -> bool:
        odd_commits = self.filter_odd_commits()
        if not odd_commits:
            return True

        self.logger.warn(f"PR is opened by @{self.pr.author.login}")
        for c in odd_commits:
            self.logger.warn(
                f"Author {c.author.email} of commit {c.short_hash} does not match committer or PR author"
            )
        return False


def evaluate(data: PRData, now: datetime, logger: CheckLogger, config: Optional[dict] = None) -> bool:
    """Return True when the PR can land; findings go to ``logger``."""
    return PRChecker(logger, data, config).check_all(now)
