"""Version comparison and the check for newer releases."""

import logging
from typing import Optional

import requests


def _parts(version: str):
    parts = []
    for part in version.strip().split('.'):
        try:
            parts.append(int(part))
        except ValueError:
            parts.append(0)
    return parts


def compare_versions(version1: str, version2: str) -> int:
    """Compare dotted numeric versions.

    Returns:
        1 if version1 is newer, -1 if version2 is newer, 0 if equal
    """
    v1 = _parts(version1)
    v2 = _parts(version2)
    length = max(len(v1), len(v2))
    v1 += [0] * (length - len(v1))
    v2 += [0] * (length - len(v2))

    for item1, item2 in zip(v1, v2):
        if item1 > item2:
            return 1
        if item1 < item2:
            return -1
    return 0


def fetch_latest_version(url: str, session: Optional[requests.Session] = None,
                         timeout: float = 5) -> str:
    """Read the latest published version from the PyPI JSON API."""
    http = session or requests
    response = http.get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()['info']['version']


def newer_version_available(current: str, url: str,
                            session: Optional[requests.Session] = None) -> Optional[str]:
    """Return the latest version if it is newer than the running one.

    The check is best effort: network or payload problems are logged and
    reported as "no update".
    """
    try:
        latest = fetch_latest_version(url, session)
    except (requests.exceptions.RequestException, KeyError, TypeError, ValueError) as e:
        logging.warning(f"Could not check for updates: {e}")
        return None

    if compare_versions(latest, current) > 0:
        logging.info(f"Newer version available: {latest}")
        return latest
    return None
