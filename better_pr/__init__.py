"""BetterPR - triage open Bitbucket pull requests from the terminal."""

__version__ = '1.0.0'
__author__ = 'BetterPR contributors'

from .models import Bucket, Counts, Participant, PullRequest, Repository, User, Workspace
from .classifier import ClassifiedPR, classify, rank_pull_requests
from .api_client import BitbucketAPIClient
from .cache import CacheManager
from .config import Settings
from .prompts import Prompter, PromptAborted
from .app import run

__all__ = [
    '__version__',
    'Bucket',
    'Counts',
    'Participant',
    'PullRequest',
    'Repository',
    'User',
    'Workspace',
    'ClassifiedPR',
    'classify',
    'rank_pull_requests',
    'BitbucketAPIClient',
    'CacheManager',
    'Settings',
    'Prompter',
    'PromptAborted',
    'run',
]
