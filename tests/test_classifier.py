"""
Unit tests for pull request classification and ordering
"""

import pytest
from better_pr.classifier import (
    APPROVALS_NEEDED,
    DEFICIENT,
    PARTIAL,
    SATISFIED,
    approval_style,
    classify,
    classify_pr,
    count_approvals,
    has_changes_requested,
    rank_pull_requests,
)
from better_pr.models import Bucket, Counts, Participant, PullRequest, User


ME = 'U1'
OTHER = 'U2'


def participant(user_id, role='REVIEWER', approved=False, state=None):
    return Participant(user=User(user_id), role=role, approved=approved, state=state)


def make_pr(title='Add feature', author=OTHER, participants=None, pr_id=1):
    return PullRequest(
        id=pr_id,
        title=title,
        author=User(author) if author else None,
        participants=participants or [],
        url=f'https://bitbucket.org/ws/repo/pull-requests/{pr_id}'
    )


class TestClassify:
    """Test cases for the bucket rule."""

    @pytest.mark.parametrize('title', ['[WIP] draft', '[wip] draft', 'Draft [Wip]', 'x[wIp]y'])
    def test_wip_title_any_case(self, title):
        """Test that a [wip] title wins over author and participation."""
        pr = make_pr(title=title, author=ME, participants=[participant(ME, approved=True)])
        assert classify(pr, ME) is Bucket.WIP
        assert classify(pr, ME).rank == 50

    def test_wip_without_brackets_is_not_wip(self):
        """Test that only the bracketed marker counts."""
        pr = make_pr(title='WIP: almost done', author=OTHER)
        assert classify(pr, ME) is Bucket.NOT_REVIEWER

    def test_author(self):
        """Test that own pull requests go to the author bucket."""
        pr = make_pr(title='Fix bug', author=ME)
        assert classify(pr, ME) is Bucket.AUTHOR
        assert classify(pr, ME).rank == 40

    def test_author_with_changes_requested_stays_author(self):
        """Test that requested changes never move an own pull request to review buckets."""
        pr = make_pr(author=ME, participants=[participant(OTHER, state='changes_requested')])
        assert classify(pr, ME) is Bucket.AUTHOR

    def test_not_reviewer(self):
        """Test that a pull request without the user is not theirs to review."""
        pr = make_pr(participants=[participant('U3', approved=True)])
        assert classify(pr, ME) is Bucket.NOT_REVIEWER
        assert classify(pr, ME).rank == 30

    def test_reviewer_approved(self):
        """Test that an approval by the user lands in the approved bucket."""
        pr = make_pr(participants=[participant(ME, approved=True)])
        assert classify(pr, ME) is Bucket.REVIEWER_APPROVED
        assert classify(pr, ME).rank == 20

    def test_reviewer_unapproved(self):
        """Test that a pending review lands in the needs review bucket."""
        pr = make_pr(participants=[participant(ME, approved=False)])
        assert classify(pr, ME) is Bucket.REVIEWER_UNAPPROVED
        assert classify(pr, ME).rank == 10

    def test_non_reviewer_participant_counts_as_participation(self):
        """Test that any participant record of the user is used, whatever the role."""
        pr = make_pr(participants=[participant(ME, role='PARTICIPANT')])
        assert classify(pr, ME) is Bucket.REVIEWER_UNAPPROVED

    def test_missing_author(self):
        """Test that a pull request without author is classified by participation."""
        pr = make_pr(author=None)
        assert classify(pr, ME) is Bucket.NOT_REVIEWER

    def test_participant_without_user_is_ignored(self):
        """Test that participant records without a user never match."""
        pr = make_pr(participants=[Participant(user=None, role='REVIEWER', approved=True)])
        assert classify(pr, ME) is Bucket.NOT_REVIEWER


class TestAnnotations:
    """Test cases for approval count and changes requested marker."""

    def test_count_only_reviewer_approvals(self):
        """Test that approvals of non-reviewers are not counted."""
        pr = make_pr(participants=[
            participant('U3', approved=True),
            participant('U4', role='PARTICIPANT', approved=True),
            participant('U5', approved=False),
            participant('U6', approved=True),
        ])
        assert count_approvals(pr) == 2

    def test_count_is_independent_of_bucket(self):
        """Test that an own pull request can still show full approvals."""
        pr = make_pr(author=ME, participants=[participant('U3', approved=True), participant('U4', approved=True)])
        item = classify_pr(pr, ME)
        assert item.bucket is Bucket.AUTHOR
        assert item.approved_count == 2
        assert item.approval_style == SATISFIED

    @pytest.mark.parametrize('count,expected', [
        (0, DEFICIENT),
        (1, PARTIAL),
        (2, SATISFIED),
        (3, SATISFIED),
    ])
    def test_approval_style(self, count, expected):
        """Test the approval count thresholds."""
        assert approval_style(count) == expected

    def test_approvals_needed_is_two(self):
        assert APPROVALS_NEEDED == 2

    def test_changes_requested_by_any_participant(self):
        """Test that the marker is set by any role."""
        pr = make_pr(participants=[participant('U3', role='PARTICIPANT', state='changes_requested')])
        assert has_changes_requested(pr) is True

    def test_no_changes_requested(self):
        pr = make_pr(participants=[participant('U3', approved=True, state='approved')])
        assert has_changes_requested(pr) is False

    def test_changes_requested_does_not_change_bucket(self):
        """Test that the marker is decoration only."""
        plain = make_pr(participants=[participant(ME, approved=True)])
        marked = make_pr(participants=[
            participant(ME, approved=True),
            participant('U3', state='changes_requested'),
        ])
        assert classify(plain, ME) is classify(marked, ME)


class TestClassifyPR:
    """Test cases for the documented examples."""

    def test_own_pull_request(self):
        pr = make_pr(title='Fix bug', author=ME)
        item = classify_pr(pr, ME)

        assert item.bucket is Bucket.AUTHOR
        assert item.approved_count == 0
        assert item.approval_style == DEFICIENT
        assert item.changes_requested is False

    def test_wip_pull_request(self):
        pr = make_pr(title='[WIP] draft', author=OTHER, participants=[participant(ME)])
        assert classify_pr(pr, ME).bucket is Bucket.WIP

    def test_review_with_changes_requested(self):
        pr = make_pr(participants=[participant(ME, approved=False, state='changes_requested')])
        item = classify_pr(pr, ME)

        assert item.bucket is Bucket.REVIEWER_UNAPPROVED
        assert item.changes_requested is True
        assert item.approved_count == 0

    @pytest.mark.parametrize('title', [None, ''])
    def test_untitled_pull_request_is_skipped(self, title):
        assert classify_pr(make_pr(title=title), ME) is None


class TestRankPullRequests:
    """Test cases for ordering and counting."""

    @pytest.fixture
    def prs(self):
        return [
            make_pr(title='[WIP] later', pr_id=1),
            make_pr(title='Mine', author=ME, pr_id=2),
            make_pr(title='Review me', participants=[participant(ME)], pr_id=3),
            make_pr(title='Somebody else', pr_id=4),
            make_pr(title='Done', participants=[participant(ME, approved=True)], pr_id=5),
            make_pr(title='Review me too', participants=[participant(ME)], pr_id=6),
            make_pr(title='Also somebody else', pr_id=7),
        ]

    def test_sorted_by_rank(self, prs):
        """Test that ranks are non-decreasing."""
        ranked = rank_pull_requests(prs, ME)
        ranks = [item.rank for item in ranked]
        assert ranks == sorted(ranks)
        assert [item.bucket for item in ranked] == [
            Bucket.REVIEWER_UNAPPROVED,
            Bucket.REVIEWER_UNAPPROVED,
            Bucket.REVIEWER_APPROVED,
            Bucket.NOT_REVIEWER,
            Bucket.NOT_REVIEWER,
            Bucket.AUTHOR,
            Bucket.WIP,
        ]

    def test_stable_within_bucket(self, prs):
        """Test that equal buckets keep the fetch order."""
        ranked = rank_pull_requests(prs, ME)
        assert [item.pr.id for item in ranked] == [3, 6, 5, 4, 7, 2, 1]

    def test_counts_per_bucket(self, prs):
        counts = Counts()
        rank_pull_requests(prs, ME, counts)

        assert counts[Bucket.REVIEWER_UNAPPROVED] == 2
        assert counts[Bucket.REVIEWER_APPROVED] == 1
        assert counts[Bucket.NOT_REVIEWER] == 2
        assert counts[Bucket.AUTHOR] == 1
        assert counts[Bucket.WIP] == 1
        assert counts.total == len(prs)

    def test_counts_accumulate_across_repositories(self, prs):
        counts = Counts()
        rank_pull_requests(prs, ME, counts)
        rank_pull_requests(prs[:2], ME, counts)

        assert counts[Bucket.WIP] == 2
        assert counts[Bucket.AUTHOR] == 2
        assert counts.total == len(prs) + 2

    def test_untitled_excluded_from_display_and_counts(self):
        counts = Counts()
        ranked = rank_pull_requests([make_pr(title=None), make_pr(title=''), make_pr(title='Kept')], ME, counts)

        assert [item.pr.title for item in ranked] == ['Kept']
        assert counts.total == 1

    def test_changes_requested_not_counted(self):
        """Test that decorated pull requests are counted by their bucket only."""
        counts = Counts()
        pr = make_pr(participants=[participant(ME, state='changes_requested')])
        rank_pull_requests([pr], ME, counts)

        assert counts[Bucket.REVIEWER_UNAPPROVED] == 1
        assert counts.total == 1

    def test_empty(self):
        assert rank_pull_requests([], ME) == []


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
