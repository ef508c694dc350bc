from __future__ import annotations

from typing import Callable, Iterator, Optional

import requests

from shared.constants import DEFAULT_API_URL, PAGE_SIZE
from shared.errors import GitHubApiError, GitHubTransportError


class GitHubClient:
    def __init__(
        self,
        token_provider: Callable[[], str],
        api_base: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._token_provider = token_provider
        self._api_base = api_base.rstrip("/")
        self._session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self._api_base}{path}"
        headers = dict(kwargs.pop("headers", {}))
        headers.update(
            {
                "Authorization": f"token {self._token_provider()}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        try:
            response = self._session.request(method, url, headers=headers, timeout=20, **kwargs)
        except requests.RequestException as exc:
            raise GitHubTransportError(str(exc)) from exc

        if response.status_code >= 400:
            raise GitHubApiError(_error_message(response), response.status_code, url)
        return response

    def iter_pull_commit_pages(
        self, owner: str, repo: str, pull_number: int, per_page: int = PAGE_SIZE,
    ) -> Iterator[list[dict]]:
        """Yield pages of pull request commits in API order.

        Stops after the first page holding fewer than ``per_page`` items, so a
        full last page costs one extra (empty) request.
        """
        page = 1
        batch_size = per_page
        while batch_size == per_page:
            response = self._request(
                "GET",
                f"/repos/{owner}/{repo}/pulls/{pull_number}/commits",
                params={"per_page": per_page, "page": page},
            )
            batch = response.json()
            batch_size = len(batch)
            if batch:
                yield batch
            page += 1

    def list_pull_commits(
        self, owner: str, repo: str, pull_number: int,
    ) -> list[dict]:
        """List every commit on a pull request."""
        commits: list[dict] = []
        for batch in self.iter_pull_commit_pages(owner, repo, pull_number):
            commits.extend(batch)
        return commits

    def create_issue_comment(
        self, owner: str, repo: str, issue_number: int, body: str,
    ) -> dict:
        """Post a comment on an issue or pull request."""
        response = self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return response.json()


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return getattr(response, "reason", None) or f"HTTP {response.status_code}"
