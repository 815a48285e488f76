"""Snapshot data models for a single landability evaluation.

Everything here is frozen: the fetch layer builds one PRData per run and both
the checker and the metadata generator only read from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

TSC = "TSC"
COLLABORATOR = "COLLABORATOR"


class ReviewState(str, Enum):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"


class ReviewSource(str, Enum):
    """Where an effective verdict came from."""

    REVIEW = "review"  # formal GitHub review action
    COMMENT = "comment"  # "LGTM" left in a regular comment


@dataclass(frozen=True)
class Author:
    login: str
    email: str = ""


@dataclass(frozen=True)
class PullRequest:
    number: int
    url: str
    created_at: datetime
    author: Author
    author_association: str
    title: str = ""
    body_text: str = ""
    body_html: str = ""
    labels: tuple[str, ...] = ()

    def is_labeled(self, name: str) -> bool:
        return name in self.labels


@dataclass(frozen=True)
class CommitAuthor:
    name: str
    email: str


@dataclass(frozen=True)
class Commit:
    oid: str
    author: CommitAuthor
    # Set by GitHub when the author email belongs to the account that pushed it.
    authored_by_committer: bool = False

    @property
    def short_hash(self) -> str:
        return self.oid[:7]


@dataclass(frozen=True)
class Comment:
    """One event in the PR discussion thread."""

    author_login: str
    published_at: datetime
    body_text: str = ""
    url: str = ""


@dataclass(frozen=True)
class Review:
    """A raw review event as GitHub reports it, before classification."""

    author_login: str
    state: ReviewState
    published_at: datetime
    body_text: str = ""
    url: str = ""


@dataclass(frozen=True)
class Collaborator:
    login: str
    name: str
    email: str
    type: str = COLLABORATOR

    def is_tsc(self) -> bool:
        return self.type == TSC

    @property
    def display_name(self) -> str:
        return f"{self.name} (@{self.login})"

    @property
    def contact(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True)
class ReviewVerdict:
    state: ReviewState
    source: ReviewSource
    ref: str
    date: datetime


@dataclass(frozen=True)
class ReviewerVerdict:
    reviewer: Collaborator
    review: ReviewVerdict


@dataclass(frozen=True)
class Reviewers:
    """Effective verdicts, at most one per reviewer."""

    approved: tuple[ReviewerVerdict, ...] = ()
    rejected: tuple[ReviewerVerdict, ...] = ()


@dataclass(frozen=True)
class PRData:
    """Aggregate handed to PRChecker and MetadataGenerator."""

    owner: str
    repo: str
    pr: PullRequest
    reviewers: Reviewers = field(default_factory=Reviewers)
    comments: tuple[Comment, ...] = ()
    reviews: tuple[Review, ...] = ()
    commits: tuple[Commit, ...] = ()
    collaborators: dict[str, Collaborator] = field(default_factory=dict)

    @property
    def repo_identity(self) -> str:
        return f"{self.owner}/{self.repo}"
