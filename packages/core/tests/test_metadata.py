"""Tests for commit metadata generation."""

import os
from datetime import datetime, timezone

from landgate_core.metadata import SCISSORS, MetadataGenerator, render, render_metadata
from landgate_core.models import (
    Author,
    Collaborator,
    PRData,
    PullRequest,
    Reviewers,
    ReviewerVerdict,
    ReviewSource,
    ReviewState,
    ReviewVerdict,
)

CREATED = datetime(2018, 1, 10, 12, 0, tzinfo=timezone.utc)


def approval(login, name, email):
    review = ReviewVerdict(ReviewState.APPROVED, ReviewSource.REVIEW, ref="", date=CREATED)
    return ReviewerVerdict(Collaborator(login=login, name=name, email=email), review)


def make_data(body_html="", approved=()):
    pr = PullRequest(
        number=1,
        url="https://github.com/nodejs/node/pull/1",
        created_at=CREATED,
        author=Author(login="author"),
        author_association="MEMBER",
        body_html=body_html,
    )
    return PRData(owner="nodejs", repo="node", pr=pr, reviewers=Reviewers(approved=tuple(approved)))


class TestRenderMetadata:
    def test_lines_in_fixed_order(self):
        result = render_metadata(
            "https://example/pr/1",
            fixes=["#10"],
            refs=["#20"],
            approved=[approval("a", "A", "a@x.com")],
        )
        expected = ["PR-URL: https://example/pr/1", "Fixes: #10", "Refs: #20", "Reviewed-By: A <a@x.com>"]
        assert result == os.linesep.join(expected)

    def test_only_pr_url_when_nothing_else(self):
        assert render_metadata("https://example/pr/1", [], [], []) == "PR-URL: https://example/pr/1"

    def test_reviewers_keep_their_order(self):
        approved = [approval("b", "B", "b@x.com"), approval("a", "A", "a@x.com")]
        lines = render_metadata("u", [], [], approved).split(os.linesep)
        assert lines[1:] == ["Reviewed-By: B <b@x.com>", "Reviewed-By: A <a@x.com>"]

    def test_multiple_fixes_before_refs(self):
        lines = render_metadata("u", ["f1", "f2"], ["r1"], []).split(os.linesep)
        assert lines == ["PR-URL: u", "Fixes: f1", "Fixes: f2", "Refs: r1"]


class TestMetadataGenerator:
    def test_parses_links_from_body(self):
        html = (
            '<p>Fixes: <a href="https://github.com/nodejs/node/issues/10">#10</a><br>\n'
            'Refs: <a href="https://github.com/nodejs/node/pull/20">#20</a></p>'
        )
        data = make_data(body_html=html, approved=[approval("addaleax", "Anna Henningsen", "anna@addaleax.net")])
        lines = MetadataGenerator(data).get_metadata().split(os.linesep)
        assert lines == [
            "PR-URL: https://github.com/nodejs/node/pull/1",
            "Fixes: https://github.com/nodejs/node/issues/10",
            "Refs: https://github.com/nodejs/node/pull/20",
            "Reviewed-By: Anna Henningsen <anna@addaleax.net>",
        ]

    def test_render_matches_generator(self):
        data = make_data(body_html="<p>Fixes: #3</p>")
        assert render(data) == MetadataGenerator(data).get_metadata()

    def test_render_is_idempotent(self):
        data = make_data(body_html="<p>Fixes: #3</p>", approved=[approval("a", "A", "a@x.com")])
        assert render(data) == render(data)

    def test_scissors_not_in_output(self):
        data = make_data(body_html="<p>Fixes: #3</p>")
        output = render(data)
        assert SCISSORS[0] not in output
        assert SCISSORS[1] not in output


def test_scissors_pair():
    assert len(SCISSORS) == 2
    assert ">8" in SCISSORS[0]
    assert "8<" in SCISSORS[1]
