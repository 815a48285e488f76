"""Commit trailer metadata for a landed PR."""

from __future__ import annotations

import os
from typing import Iterable

from landgate_core.models import PRData, ReviewerVerdict
from landgate_core.utils.links import LinkParser

# Delimits the part of a commit message template that is cut off before the metadata.
SCISSORS = (
    "-------------------------------- >8 --------------------------------",
    "-------------------------------- 8< --------------------------------",
)


def render_metadata(
    pr_url: str,
    fixes: Iterable[str],
    refs: Iterable[str],
    approved: Iterable[ReviewerVerdict],
) -> str:
    """Render trailer lines in the fixed order PR-URL, Fixes, Refs, Reviewed-By."""
    meta = [f"PR-URL: {pr_url}"]
    meta += [f"Fixes: {fix}" for fix in fixes]
    meta += [f"Refs: {ref}" for ref in refs]
    meta += [f"Reviewed-By: {p.reviewer.contact}" for p in approved]
    return os.linesep.join(meta)


class MetadataGenerator:
    def __init__(self, data: PRData):
        self.repo = data.repo_identity
        self.pr = data.pr
        self.reviewers = data.reviewers

    def get_metadata(self) -> str:
        parser = LinkParser(self.repo, self.pr.body_html)
        return render_metadata(
            self.pr.url,
            parser.get_fixes(),
            parser.get_refs(),
            self.reviewers.approved,
        )


def render(data: PRData) -> str:
    return MetadataGenerator(data).get_metadata()
