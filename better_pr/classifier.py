"""Pull request classification and ordering.

Every open pull request lands in exactly one bucket, decided in this order:

1. a ``[wip]`` title (any case) is work in progress;
2. a pull request authored by the current user is theirs;
3. otherwise the current user's participant record decides between
   not-a-reviewer, approved and still-to-review.

Within a repository the classified pull requests are shown by ascending
bucket rank, keeping fetch order among equals.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .models import Bucket, Counts, PullRequest


WIP_MARKER = '[wip]'
APPROVALS_NEEDED = 2

# Approval count styles
DEFICIENT = 'deficient'
PARTIAL = 'partial'
SATISFIED = 'satisfied'


@dataclass
class ClassifiedPR:
    """A pull request together with its bucket and display annotations."""
    pr: PullRequest
    bucket: Bucket
    approved_count: int
    changes_requested: bool

    @property
    def rank(self) -> int:
        return self.bucket.rank

    @property
    def approval_style(self) -> str:
        return approval_style(self.approved_count)


def is_wip(pr: PullRequest) -> bool:
    return bool(pr.title) and WIP_MARKER in pr.title.lower()


def classify(pr: PullRequest, user_id: str) -> Bucket:
    """Place a pull request in its bucket for the given user."""
    if is_wip(pr):
        return Bucket.WIP
    if pr.author_id is not None and pr.author_id == user_id:
        return Bucket.AUTHOR

    participation = pr.participant_for(user_id)
    if participation is None:
        return Bucket.NOT_REVIEWER
    if participation.approved:
        return Bucket.REVIEWER_APPROVED
    return Bucket.REVIEWER_UNAPPROVED


def count_approvals(pr: PullRequest) -> int:
    """Number of reviewers who approved. Non-reviewer approvals do not count."""
    return sum(1 for p in pr.participants if p.is_reviewer and p.approved)


def has_changes_requested(pr: PullRequest) -> bool:
    return any(p.requested_changes for p in pr.participants)


def approval_style(approved_count: int, approvals_needed: int = APPROVALS_NEEDED) -> str:
    if approved_count <= 0:
        return DEFICIENT
    if approved_count >= approvals_needed:
        return SATISFIED
    return PARTIAL


def classify_pr(pr: PullRequest, user_id: str) -> Optional[ClassifiedPR]:
    """Classify a single pull request, or return None when it has no title."""
    if not pr.title:
        return None
    return ClassifiedPR(
        pr=pr,
        bucket=classify(pr, user_id),
        approved_count=count_approvals(pr),
        changes_requested=has_changes_requested(pr)
    )


def rank_pull_requests(prs: Iterable[PullRequest], user_id: str,
                       counts: Optional[Counts] = None) -> List[ClassifiedPR]:
    """Classify pull requests and order them by bucket rank.

    Args:
        prs: Pull requests in the order they were fetched
        user_id: Id of the authenticated user
        counts: Run totals to increment once per classified pull request

    Returns:
        Classified pull requests sorted by rank; untitled ones are left out
    """
    classified = []
    for pr in prs:
        item = classify_pr(pr, user_id)
        if item is None:
            continue
        classified.append(item)
        if counts is not None:
            counts.increment(item.bucket)

    # sorted() is stable, equal ranks keep fetch order
    return sorted(classified, key=lambda item: item.rank)
