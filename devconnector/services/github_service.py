# github_service.py
import logging
from typing import Any
from urllib.parse import quote

import requests

from devconnector.config import settings
from devconnector.errors import GithubProfileNotFound


logger = logging.getLogger(__name__)


def _build_headers() -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": settings.app_name,
    }
    if settings.github_token:
        headers["Authorization"] = f"token {settings.github_token}"
    return headers


def list_recent_repos(username: str, *, limit: int = 5) -> list[dict[str, Any]]:
    """Fetch a user's most recently created public repositories from GitHub."""
    url = f"{settings.github_api_url.rstrip('/')}/users/{quote(username.strip(), safe='')}/repos"
    params = {"per_page": limit, "sort": "created", "direction": "desc"}
    try:
        response = requests.get(
            url,
            params=params,
            headers=_build_headers(),
            timeout=settings.github_timeout_seconds,
        )
    except requests.RequestException:
        logger.exception("github.repos request failed username=%s", username)
        raise

    if response.status_code != 200:
        logger.info("github.repos username=%s status=%s", username, response.status_code)
        raise GithubProfileNotFound()
    return response.json()
