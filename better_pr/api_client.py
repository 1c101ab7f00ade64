"""Bitbucket Cloud API client for making requests and handling pagination."""

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import DEFAULT_API_URL
from .models import PullRequest, Repository, User, Workspace


def _segment(value: str) -> str:
    """Quote a path segment; Bitbucket uuids come wrapped in braces."""
    return quote(value, safe='')


class BitbucketAPIClient:
    """Handles Bitbucket REST API 2.0 requests with basic auth and pagination."""

    def __init__(self, username: str, password: str, base_url: str = DEFAULT_API_URL,
                 pagelen: int = 50, retries: int = 0):
        """Initialize the Bitbucket API client.

        Args:
            username: Bitbucket username
            password: Bitbucket app password
            base_url: API root URL
            pagelen: Page size for paginated endpoints
            retries: Retries on 5xx responses (0 disables retrying)
        """
        self.base_url = base_url.rstrip('/')
        self.pagelen = pagelen
        self.session = requests.Session()
        self.session.auth = (username, password)
        self.session.headers.update({'Accept': 'application/json'})

        # Detail fetches of one repository run in parallel and share this pool
        adapter = HTTPAdapter(
            pool_connections=20,
            pool_maxsize=20,
            max_retries=Retry(
                total=retries,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504],
                raise_on_status=False
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        logging.info(f"Initialized Bitbucket API client for '{username}'")

    def _url(self, *segments: str) -> str:
        return '/'.join([self.base_url] + [_segment(s) for s in segments])

    def get_json(self, url: str, params: Dict = None) -> Dict:
        """Make a single GET request and decode the JSON body.

        Raises:
            requests.exceptions.RequestException: On network errors and non-2xx responses
        """
        logging.debug(f"GET {url} {params or ''}")
        response = self.session.get(url, params=params)
        response.raise_for_status()
        return response.json()

    def get_paginated(self, url: str, params: Dict = None) -> List[Dict]:
        """Fetch all pages of a paginated Bitbucket endpoint.

        Bitbucket returns the items of a page under 'values' and the absolute
        URL of the following page under 'next'.

        Args:
            url: The API endpoint URL
            params: Query parameters for the first page

        Returns:
            List of all items from all pages
        """
        results = []
        params = dict(params or {})
        params.setdefault('pagelen', self.pagelen)

        next_url: Optional[str] = url
        page = 1
        while next_url:
            logging.debug(f"Fetching page {page} from {url}")
            data = self.get_json(next_url, params)
            results.extend(data.get('values') or [])
            next_url = data.get('next')
            # The next link already carries the query string
            params = None
            page += 1

        logging.debug(f"Fetched {len(results)} total items from {url}")
        return results

    def get_current_user(self) -> User:
        data = self.get_json(self._url('user'))
        user = User.from_api(data)
        if user is None:
            raise ValueError("Bitbucket did not return an account id for the current user")
        return user

    def list_workspaces(self) -> List[Workspace]:
        return [Workspace.from_api(w) for w in self.get_paginated(self._url('workspaces'))]

    def list_repositories(self, workspace: Workspace) -> List[Repository]:
        values = self.get_paginated(self._url('repositories', workspace.uuid))
        return [Repository.from_api(r) for r in values]

    def list_open_pull_requests(self, workspace: Workspace, repository: Repository) -> List[Dict]:
        """List summaries of the open pull requests of a repository."""
        url = self._url('repositories', workspace.uuid, repository.uuid, 'pullrequests')
        return self.get_paginated(url, {'state': 'OPEN'})

    def get_pull_request(self, workspace: Workspace, repository: Repository, pr_id: int) -> PullRequest:
        """Fetch a pull request with its participants."""
        url = self._url('repositories', workspace.uuid, repository.uuid, 'pullrequests', str(pr_id))
        return PullRequest.from_api(self.get_json(url))
