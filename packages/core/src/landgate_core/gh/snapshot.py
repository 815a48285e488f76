"""Build PRData from an already-fetched PR snapshot.

The snapshot is a JSON document shaped like the GitHub GraphQL API response
for a pull request:

    {
      "pr": {"number": 1, "url": "...", "createdAt": "2018-01-10T12:00:00Z",
             "author": {"login": "...", "email": "..."}, "authorAssociation": "...",
             "bodyText": "...", "bodyHTML": "...", "labels": {"nodes": [{"name": "..."}]}},
      "comments": [{"author": {"login": "..."}, "publishedAt": "...", "bodyText": "...", "url": "..."}],
      "reviews":  [{"author": {"login": "..."}, "state": "APPROVED", "publishedAt": "...", ...}],
      "commits":  [{"commit": {"oid": "...", "authoredByCommitter": false,
                               "author": {"name": "...", "email": "..."}}}]
    }

Validation happens here, before anything reaches the checker: a malformed
snapshot raises SnapshotError instead of producing a half-built PRData.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from landgate_core.gh.reviews import ReviewAnalyzer
from landgate_core.models import (
    Author,
    Collaborator,
    Comment,
    Commit,
    CommitAuthor,
    PRData,
    PullRequest,
    Review,
    ReviewState,
)

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """The PR snapshot is missing data or contains values that cannot be parsed."""


def _require(node: dict, key: str, where: str):
    if not isinstance(node, dict) or node.get(key) is None:
        raise SnapshotError(f"Missing '{key}' in {where}.")
    return node[key]


def _parse_date(value, where: str) -> datetime:
    if not isinstance(value, str):
        raise SnapshotError(f"Expected an ISO-8601 timestamp in {where}, got {value!r}.")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise SnapshotError(f"Invalid timestamp {value!r} in {where}.") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _login(node: dict) -> str:
    # Deleted accounts come back as a null author.
    author = node.get("author") or {}
    return author.get("login") or ""


def _labels(node) -> tuple[str, ...]:
    if node is None:
        return ()
    if isinstance(node, dict):
        node = node.get("nodes") or []
    return tuple(item["name"] if isinstance(item, dict) else str(item) for item in node)


def parse_pull_request(node: dict) -> PullRequest:
    author = _require(node, "author", "pr")
    return PullRequest(
        number=int(_require(node, "number", "pr")),
        url=_require(node, "url", "pr"),
        title=node.get("title") or "",
        created_at=_parse_date(_require(node, "createdAt", "pr"), "pr.createdAt"),
        author=Author(login=_require(author, "login", "pr.author"), email=author.get("email") or ""),
        author_association=_require(node, "authorAssociation", "pr"),
        body_text=node.get("bodyText") or "",
        body_html=node.get("bodyHTML") or "",
        labels=_labels(node.get("labels")),
    )


def parse_comment(node: dict, index: int) -> Comment:
    where = f"comments[{index}]"
    return Comment(
        author_login=_login(node),
        published_at=_parse_date(_require(node, "publishedAt", where), f"{where}.publishedAt"),
        body_text=node.get("bodyText") or "",
        url=node.get("url") or "",
    )


def parse_review(node: dict, index: int) -> Review:
    where = f"reviews[{index}]"
    state = _require(node, "state", where)
    try:
        state = ReviewState(state)
    except ValueError as e:
        raise SnapshotError(f"Unknown review state {state!r} in {where}.") from e
    return Review(
        author_login=_login(node),
        state=state,
        published_at=_parse_date(_require(node, "publishedAt", where), f"{where}.publishedAt"),
        body_text=node.get("bodyText") or "",
        url=node.get("url") or "",
    )


def parse_commit(node: dict, index: int) -> Commit:
    where = f"commits[{index}]"
    # GraphQL wraps each commit in a PullRequestCommit node.
    commit = node.get("commit", node) if isinstance(node, dict) else node
    author = _require(commit, "author", where)
    return Commit(
        oid=_require(commit, "oid", where),
        author=CommitAuthor(name=author.get("name") or "", email=_require(author, "email", f"{where}.author")),
        authored_by_committer=bool(commit.get("authoredByCommitter", False)),
    )


def parse_snapshot(payload: dict) -> tuple[PullRequest, tuple[Comment, ...], tuple[Review, ...], tuple[Commit, ...]]:
    if not isinstance(payload, dict):
        raise SnapshotError("Snapshot must be a JSON object.")
    pr = parse_pull_request(_require(payload, "pr", "snapshot"))
    comments = tuple(parse_comment(c, i) for i, c in enumerate(payload.get("comments") or []))
    reviews = tuple(parse_review(r, i) for i, r in enumerate(payload.get("reviews") or []))
    commits = tuple(parse_commit(c, i) for i, c in enumerate(payload.get("commits") or []))
    return pr, comments, reviews, commits


def load_snapshot(path: str) -> dict:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")
    try:
        return json.loads(p.read_text())
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e


def build_pr_data(payload: dict, collaborators: dict[str, Collaborator], owner: str, repo: str) -> PRData:
    """Validate the snapshot, classify reviews and assemble the PRData aggregate."""
    pr, comments, reviews, commits = parse_snapshot(payload)
    reviewers = ReviewAnalyzer(reviews, comments, collaborators).get_reviewers()
    logger.debug(
        "PR #%d: %d comment(s), %d review(s), %d commit(s).", pr.number, len(comments), len(reviews), len(commits)
    )
    return PRData(
        owner=owner,
        repo=repo,
        pr=pr,
        reviewers=reviewers,
        comments=comments,
        reviews=reviews,
        commits=commits,
        collaborators=collaborators,
    )
