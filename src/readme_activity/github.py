"""
GitHub REST calls used by a run: the user's public events and the
repository Actions variable that holds the stored event window.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from .errors import GitHubAPIError

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubClient:
    def __init__(
        self,
        token: str | None,
        *,
        base_url: str = API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": "readme-activity",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout, connect=5.0),
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"{method} {path} failed: {exc}") from exc
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            detail = response.json().get("message", "")
        except (ValueError, AttributeError):
            detail = response.text
        request = response.request
        raise GitHubAPIError(
            f"GitHub API error {response.status_code} for {request.method} {request.url.path}: {detail}",
            status_code=response.status_code,
        )

    def fetch_user_events(self, username: str, per_page: int = 100) -> List[Dict[str, Any]]:
        response = self._request("GET", f"/users/{username}/events", params={"per_page": per_page})
        self._raise_for_status(response)
        data = response.json()
        if not isinstance(data, list):
            raise GitHubAPIError("Unexpected events payload", status_code=response.status_code)
        return data

    def read_variable(self, owner: str, repo: str, name: str) -> str | None:
        """Return the variable's value, or None when it does not exist yet."""
        response = self._request("GET", f"/repos/{owner}/{repo}/actions/variables/{name}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return response.json().get("value")

    def write_variable(self, owner: str, repo: str, name: str, value: str) -> None:
        body = {"name": name, "value": value}
        response = self._request("PATCH", f"/repos/{owner}/{repo}/actions/variables/{name}", json=body)
        if response.status_code == 404:
            logger.info("Variable %s not found on %s/%s, creating it", name, owner, repo)
            response = self._request("POST", f"/repos/{owner}/{repo}/actions/variables", json=body)
        self._raise_for_status(response)
