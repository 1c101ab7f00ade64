"""Fetching pull request details for a repository."""

import logging
from typing import Dict, List
from concurrent.futures import ThreadPoolExecutor

from .api_client import BitbucketAPIClient
from .models import PullRequest, Repository, Workspace


def fetch_pull_requests(client: BitbucketAPIClient, workspace: Workspace, repository: Repository,
                        summaries: List[Dict], max_workers: int = 10) -> List[PullRequest]:
    """Fetch the details of listed pull requests.

    Detail requests are issued in parallel and joined as one batch. Results
    keep the order of the listing. A single failing request fails the whole
    batch and its exception propagates to the caller.

    Args:
        client: Authenticated API client
        workspace: Workspace owning the repository
        repository: Repository the pull requests belong to
        summaries: Pull request summaries as returned by the listing
        max_workers: Upper bound for parallel detail requests

    Returns:
        Pull requests in listing order
    """
    if not summaries:
        return []

    pr_ids = [summary.get('id') for summary in summaries]
    logging.info(f"Fetching details of {len(pr_ids)} open PRs of {repository.name}")

    with ThreadPoolExecutor(max_workers=min(max_workers, len(pr_ids))) as executor:
        futures = [
            executor.submit(client.get_pull_request, workspace, repository, pr_id)
            for pr_id in pr_ids
        ]
        # Each future owns the slot of its pull request in the listing
        return [future.result() for future in futures]
