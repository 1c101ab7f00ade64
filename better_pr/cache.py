"""Local cache of credentials and selections."""

import os
import json
import logging
from typing import Dict, List, Optional, Tuple

from .crypto import decrypt_password, encrypt_password
from .models import Repository, Workspace


DEFAULT_CACHE_FILE = os.path.join(os.path.expanduser('~'), '.betterpr_cache.json')


def _is_str_pair(value, *keys: str) -> bool:
    return isinstance(value, dict) and all(isinstance(value.get(k), str) for k in keys)


def _sanitize(raw: Dict) -> Dict:
    """Keep only well formed entries of a loaded cache."""
    cache = {}
    if isinstance(raw.get('version'), str):
        cache['version'] = raw['version']
    if isinstance(raw.get('username'), str) and raw['username']:
        cache['username'] = raw['username']
    if _is_str_pair(raw.get('password'), 'iv', 'content'):
        cache['password'] = raw['password']
    if _is_str_pair(raw.get('workspace'), 'uuid', 'name'):
        cache['workspace'] = raw['workspace']
    repositories = raw.get('repositories')
    if isinstance(repositories, list) and all(_is_str_pair(r, 'uuid', 'name') for r in repositories):
        cache['repositories'] = repositories
    return cache


class CacheManager:
    """Manages the flat JSON cache file.

    The file holds a version stamp, the username, the obfuscated app password
    and the last workspace and repository selections.
    """

    def __init__(self, version: str, cache_file: str = DEFAULT_CACHE_FILE):
        """Initialize the cache manager.

        Args:
            version: Version of the running program, used as cache stamp
            cache_file: Path to the cache file
        """
        self.version = version
        self.cache_file = cache_file
        self.cache = self._load_cache()

    def _load_cache(self) -> Dict:
        """Load cache from file, creating it when missing."""
        if not os.path.exists(self.cache_file):
            logging.info(f"No cache found at {self.cache_file}, creating one")
            cache = {'version': self.version}
            self._write(cache)
            return cache

        try:
            with open(self.cache_file, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logging.warning(f"Failed to load cache, starting empty: {e}")
            return {'version': self.version}

        if not isinstance(raw, dict):
            logging.warning(f"Ignoring cache with unexpected content in {self.cache_file}")
            return {'version': self.version}

        cache = _sanitize(raw)
        if cache.get('version') != self.version:
            logging.info(f"Cache version {cache.get('version')} differs from {self.version}, "
                         "dropping stored workspace and repositories")
            cache.pop('workspace', None)
            cache.pop('repositories', None)
            cache['version'] = self.version
            self._write(cache)

        logging.info(f"Loaded cache from {self.cache_file}")
        return cache

    def _write(self, cache: Dict):
        try:
            with open(self.cache_file, 'w', encoding='utf-8') as f:
                json.dump(cache, f, indent=2)
        except OSError as e:
            logging.warning(f"Failed to save cache: {e}")

    def save_cache(self):
        """Save cache to file."""
        self._write(self.cache)
        logging.debug(f"Saved cache to {self.cache_file}")

    def reset(self):
        """Forget everything but the version stamp and save."""
        logging.info("Resetting cache")
        self.cache = {'version': self.version}
        self.save_cache()

    @property
    def has_credentials(self) -> bool:
        return 'username' in self.cache and 'password' in self.cache

    def get_credentials(self) -> Optional[Tuple[str, str]]:
        """Return the stored username and decrypted password, if usable."""
        if not self.has_credentials:
            return None
        try:
            password = decrypt_password(self.cache['password'])
        except ValueError as e:
            logging.warning(f"Stored password could not be decrypted: {e}")
            return None
        return self.cache['username'], password

    def set_credentials(self, username: str, password: str):
        """Store new credentials. Selections made with other credentials are dropped."""
        self.cache['username'] = username
        self.cache['password'] = encrypt_password(password)
        self.cache.pop('workspace', None)
        self.cache.pop('repositories', None)
        self.save_cache()

    def get_workspace(self) -> Optional[Workspace]:
        data = self.cache.get('workspace')
        return Workspace(uuid=data['uuid'], name=data['name']) if data else None

    def set_workspace(self, workspace: Workspace):
        """Store the selected workspace. Repositories of another workspace are dropped."""
        self.cache['workspace'] = workspace.to_dict()
        self.cache.pop('repositories', None)
        self.save_cache()

    def get_repositories(self) -> Optional[List[Repository]]:
        data = self.cache.get('repositories')
        if data is None:
            return None
        return [Repository(uuid=r['uuid'], name=r['name']) for r in data]

    def set_repositories(self, repositories: List[Repository]):
        self.cache['repositories'] = [r.to_dict() for r in repositories]
        self.save_cache()
