"""Tests for reducing review events to effective verdicts."""

from datetime import datetime, timedelta, timezone

from landgate_core.gh.reviews import ReviewAnalyzer
from landgate_core.models import TSC, Collaborator, Comment, Review, ReviewSource, ReviewState

T0 = datetime(2018, 1, 10, 12, 0, tzinfo=timezone.utc)

COLLABORATORS = {
    "alice": Collaborator(login="Alice", name="Alice A", email="alice@example.com", type=TSC),
    "bob": Collaborator(login="bob", name="Bob B", email="bob@example.com"),
}


def review(login, state, hours=0):
    return Review(
        author_login=login,
        state=state,
        published_at=T0 + timedelta(hours=hours),
        url=f"https://github.com/nodejs/node/pull/1#pullrequestreview-{login}-{hours}",
    )


def comment(login, body, hours=0):
    return Comment(
        author_login=login,
        published_at=T0 + timedelta(hours=hours),
        body_text=body,
        url=f"https://github.com/nodejs/node/pull/1#issuecomment-{login}-{hours}",
    )


def analyze(reviews=(), comments=()):
    return ReviewAnalyzer(reviews, comments, COLLABORATORS).get_reviewers()


class TestReviewAnalyzer:
    def test_formal_approval(self):
        result = analyze(reviews=[review("bob", ReviewState.APPROVED)])
        assert [p.reviewer.login for p in result.approved] == ["bob"]
        assert result.approved[0].review.source is ReviewSource.REVIEW
        assert result.rejected == ()

    def test_change_request(self):
        result = analyze(reviews=[review("bob", ReviewState.CHANGES_REQUESTED)])
        assert [p.reviewer.login for p in result.rejected] == ["bob"]
        assert result.rejected[0].review.ref.endswith("bob-0")

    def test_non_collaborators_ignored(self):
        result = analyze(
            reviews=[review("mallory", ReviewState.CHANGES_REQUESTED)],
            comments=[comment("mallory", "LGTM")],
        )
        assert result.approved == ()
        assert result.rejected == ()

    def test_login_match_is_case_insensitive(self):
        result = analyze(reviews=[review("ALICE", ReviewState.APPROVED)])
        assert result.approved[0].reviewer.is_tsc()

    def test_lgtm_comment_counts_as_approval(self):
        result = analyze(comments=[comment("bob", "Code LGTM!")])
        assert result.approved[0].review.source is ReviewSource.COMMENT
        assert result.approved[0].review.ref.endswith("issuecomment-bob-0")

    def test_lgtm_must_be_a_word(self):
        assert analyze(comments=[comment("bob", "lgtmish")]).approved == ()

    def test_later_rejection_supersedes_approval(self):
        result = analyze(
            reviews=[review("bob", ReviewState.APPROVED, 1), review("bob", ReviewState.CHANGES_REQUESTED, 2)]
        )
        assert result.approved == ()
        assert len(result.rejected) == 1

    def test_later_approval_supersedes_rejection(self):
        result = analyze(
            reviews=[review("bob", ReviewState.APPROVED, 3), review("bob", ReviewState.CHANGES_REQUESTED, 2)]
        )
        assert len(result.approved) == 1
        assert result.rejected == ()

    def test_later_lgtm_comment_supersedes_rejection(self):
        result = analyze(
            reviews=[review("bob", ReviewState.CHANGES_REQUESTED, 1)],
            comments=[comment("bob", "LGTM now", 2)],
        )
        assert [p.review.source for p in result.approved] == [ReviewSource.COMMENT]
        assert result.rejected == ()

    def test_commented_review_does_not_change_verdict(self):
        result = analyze(reviews=[review("bob", ReviewState.APPROVED, 1), review("bob", ReviewState.COMMENTED, 2)])
        assert len(result.approved) == 1

    def test_dismissed_review_leaves_no_verdict(self):
        result = analyze(
            reviews=[review("bob", ReviewState.CHANGES_REQUESTED, 1), review("bob", ReviewState.DISMISSED, 2)]
        )
        assert result.approved == ()
        assert result.rejected == ()

    def test_one_verdict_per_reviewer(self):
        result = analyze(
            reviews=[review("bob", ReviewState.APPROVED, 1), review("alice", ReviewState.APPROVED, 2)],
            comments=[comment("bob", "LGTM", 3)],
        )
        assert [p.reviewer.login for p in result.approved] == ["bob", "Alice"]

    def test_naive_and_aware_dates_ordered_as_utc(self):
        rejection = Review(
            author_login="bob",
            state=ReviewState.CHANGES_REQUESTED,
            published_at=datetime(2018, 1, 10, 11, 0),
            url="https://github.com/nodejs/node/pull/1#pullrequestreview-naive",
        )
        result = analyze(reviews=[rejection], comments=[comment("bob", "LGTM", 1)])
        assert [p.review.source for p in result.approved] == [ReviewSource.COMMENT]
        assert result.rejected == ()
