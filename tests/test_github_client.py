from __future__ import annotations

from typing import Any

import pytest
import requests

from shared.errors import GitHubApiError, GitHubTransportError
from shared.github_client import GitHubClient


class FakeResponse:
    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, total_commits: int = 1):
        self.calls = []
        self.total_commits = total_commits

    def request(self, method: str, url: str, headers=None, timeout=None, **kwargs):
        self.calls.append((method, url, kwargs))
        if url.endswith("/pulls/1/commits"):
            params = kwargs.get("params", {})
            per_page = params.get("per_page", 100)
            start = (params.get("page", 1) - 1) * per_page
            stop = min(start + per_page, self.total_commits)
            return FakeResponse(
                200,
                [{"sha": f"c{i}", "commit": {"message": f"fix: change {i}"}} for i in range(start, stop)],
            )
        if "/issues/" in url and url.endswith("/comments") and method == "POST":
            return FakeResponse(201, {"id": 42, "body": kwargs.get("json", {}).get("body", "")})
        return FakeResponse(404, {"message": "Not Found"})


def _page_requests(session: FakeSession) -> list[int]:
    return [kwargs["params"]["page"] for method, _, kwargs in session.calls if method == "GET"]


def test_list_pull_commits_single_page() -> None:
    session = FakeSession(total_commits=1)
    client = GitHubClient(token_provider=lambda: "tok", session=session)
    commits = client.list_pull_commits("o", "r", 1)
    assert len(commits) == 1
    assert commits[0]["sha"] == "c0"
    assert _page_requests(session) == [1]


def test_list_pull_commits_empty_makes_one_request() -> None:
    session = FakeSession(total_commits=0)
    client = GitHubClient(token_provider=lambda: "tok", session=session)
    assert client.list_pull_commits("o", "r", 1) == []
    assert _page_requests(session) == [1]


def test_list_pull_commits_spans_pages_in_order() -> None:
    session = FakeSession(total_commits=250)
    client = GitHubClient(token_provider=lambda: "tok", session=session)
    commits = client.list_pull_commits("o", "r", 1)
    assert [c["sha"] for c in commits] == [f"c{i}" for i in range(250)]
    assert _page_requests(session) == [1, 2, 3]


def test_full_last_page_triggers_one_more_request() -> None:
    session = FakeSession(total_commits=200)
    client = GitHubClient(token_provider=lambda: "tok", session=session)
    commits = client.list_pull_commits("o", "r", 1)
    assert len(commits) == 200
    assert _page_requests(session) == [1, 2, 3]


def test_iter_pull_commit_pages_is_lazy() -> None:
    session = FakeSession(total_commits=150)
    client = GitHubClient(token_provider=lambda: "tok", session=session)
    pages = client.iter_pull_commit_pages("o", "r", 1)
    assert session.calls == []
    first = next(pages)
    assert len(first) == 100
    assert len(session.calls) == 1
    assert [len(p) for p in pages] == [50]


def test_request_sends_auth_headers() -> None:
    seen = {}

    class HeaderSession(FakeSession):
        def request(self, method, url, headers=None, timeout=None, **kwargs):
            seen.update(headers or {})
            seen["timeout"] = timeout
            return super().request(method, url, headers=headers, timeout=timeout, **kwargs)

    client = GitHubClient(token_provider=lambda: "tok", session=HeaderSession())
    client.list_pull_commits("o", "r", 1)
    assert seen["Authorization"] == "token tok"
    assert seen["Accept"] == "application/vnd.github+json"
    assert seen["timeout"] == 20


def test_api_base_is_honoured() -> None:
    session = FakeSession()
    client = GitHubClient(token_provider=lambda: "tok", api_base="https://ghe.example.com/api/v3/", session=session)
    client.list_pull_commits("o", "r", 1)
    assert session.calls[0][1] == "https://ghe.example.com/api/v3/repos/o/r/pulls/1/commits"


def test_create_issue_comment() -> None:
    session = FakeSession()
    client = GitHubClient(token_provider=lambda: "tok", session=session)
    comment = client.create_issue_comment("o", "r", 1, "nice work!")
    assert comment["id"] == 42
    assert comment["body"] == "nice work!"
    assert session.calls[0][1].endswith("/repos/o/r/issues/1/comments")


def test_http_error_raises_api_error() -> None:
    client = GitHubClient(token_provider=lambda: "tok", session=FakeSession())
    with pytest.raises(GitHubApiError) as excinfo:
        client.list_pull_commits("o", "r", 999)
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "Not Found"


def test_transport_error_is_wrapped() -> None:
    class BrokenSession:
        def request(self, *args, **kwargs):
            raise requests.ConnectionError("connection reset")

    client = GitHubClient(token_provider=lambda: "tok", session=BrokenSession())
    with pytest.raises(GitHubTransportError, match="connection reset"):
        client.create_issue_comment("o", "r", 1, "body")
