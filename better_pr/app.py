"""A single interactive BetterPR run."""

import logging
from typing import Callable, List, Optional, Tuple

from . import __author__, __version__
from . import terminal
from .api_client import BitbucketAPIClient
from .cache import CacheManager
from .classifier import rank_pull_requests
from .config import Settings
from .fetcher import fetch_pull_requests
from .models import Counts, Repository, Workspace
from .prompts import Prompter, PromptAborted
from .version import newer_version_available


def resolve_credentials(cache: CacheManager, prompter: Prompter) -> Tuple[str, str]:
    """Use the stored credentials or ask for new ones."""
    if cache.has_credentials and prompter.confirm("Use stored credentials?"):
        stored = cache.get_credentials()
        if stored is not None:
            username, password = stored
            terminal.success_message("Using Bitbucket username:", username)
            terminal.success_message("Using stored password! 🎉")
            return username, password
        print("Stored password is unreadable, please enter it again.")

    username = prompter.text("Enter your Bitbucket username>", "Must provide a username")
    password = prompter.secret("Enter your Bitbucket APP password>", "Must provide an app password")
    cache.set_credentials(username, password)
    return username, password


def resolve_workspace(cache: CacheManager, prompter: Prompter, client: BitbucketAPIClient) -> Workspace:
    """Use the stored workspace or let the user pick one."""
    print()
    stored = cache.get_workspace()
    if stored is not None and prompter.confirm("Use stored workspace?"):
        terminal.success_message("Using stored workspace:", stored.name)
        return stored

    workspaces = client.list_workspaces()
    workspace = prompter.select("Pick a workspace>", [(w.name, w) for w in workspaces])
    cache.set_workspace(workspace)
    return workspace


def resolve_repositories(cache: CacheManager, prompter: Prompter, client: BitbucketAPIClient,
                         workspace: Workspace) -> List[Repository]:
    """Use the stored repositories or let the user pick some."""
    print()
    stored = cache.get_repositories()
    if stored and prompter.confirm("Use stored repositories?"):
        terminal.success_message("Using stored repositories:", ', '.join(r.name for r in stored))
        return stored

    available = client.list_repositories(workspace)
    repositories = prompter.multiselect("Pick repositories>", [(r.name, r) for r in available])
    if not repositories:
        raise PromptAborted("Pick repositories>")
    cache.set_repositories(repositories)
    return repositories


def report_repository(client: BitbucketAPIClient, workspace: Workspace, repository: Repository,
                      user_id: str, counts: Counts, max_workers: int = 10):
    """Print the open pull requests of a repository, most urgent first."""
    terminal.print_repository_header(repository.name)

    summaries = client.list_open_pull_requests(workspace, repository)
    if not summaries:
        terminal.print_no_open_prs()
        return

    terminal.print_loading(len(summaries))
    prs = fetch_pull_requests(client, workspace, repository, summaries, max_workers)
    ranked = rank_pull_requests(prs, user_id, counts)
    logging.info(f"{repository.name}: {len(ranked)} of {len(prs)} PRs classified")
    terminal.print_pull_requests(ranked)


def run(settings: Settings, prompter: Optional[Prompter] = None,
        client_factory: Callable[..., BitbucketAPIClient] = BitbucketAPIClient) -> int:
    """Run the interactive flow once.

    Failures while talking to Bitbucket are reported as a single error line
    and reset the cache, so the next run asks for everything again.

    Returns:
        Process exit code, 0 on every path that reaches the goodbye
    """
    prompter = prompter or Prompter()
    cache = CacheManager(__version__, settings.cache_file)
    counts = Counts()

    terminal.print_banner(__version__, __author__)
    if settings.check_updates:
        latest = newer_version_available(__version__, settings.pypi_url)
        if latest:
            terminal.print_update_notice(__version__, latest)

    print()
    try:
        username, password = resolve_credentials(cache, prompter)
        client = client_factory(
            username,
            password,
            base_url=settings.api_url,
            pagelen=settings.pagelen,
            retries=settings.http_retries
        )
        user = client.get_current_user()
        logging.info(f"Authenticated as {user.display_name or username}")

        workspace = resolve_workspace(cache, prompter, client)
        repositories = resolve_repositories(cache, prompter, client, workspace)

        for repository in repositories:
            report_repository(client, workspace, repository, user.id, counts, settings.max_workers)

        terminal.print_totals(counts)
    except PromptAborted as e:
        logging.info(f"Prompt aborted: {e}")
    except Exception as e:
        logging.debug("Run failed", exc_info=True)
        terminal.error_message(str(e) or e.__class__.__name__)
        cache.reset()
    finally:
        terminal.say_goodbye()

    return 0
