"""Error types raised by the action and the exit codes they map to."""

from __future__ import annotations

from typing import Optional


class ActionError(Exception):
    exit_code = 1
    prefix = "Action failed"

    def report_message(self) -> str:
        return f"{self.prefix}: {self}"


class ConfigError(ActionError, ValueError):
    exit_code = 2
    prefix = "Invalid configuration"


class EventPayloadError(ActionError, ValueError):
    prefix = "Malformed event payload"


class GitHubError(ActionError):
    prefix = "GitHub request failed"


class GitHubTransportError(GitHubError):
    pass


class CommitDataError(GitHubError, ValueError):
    prefix = "Malformed commit data from GitHub"


class GitHubApiError(GitHubError):
    def __init__(self, message: str, status_code: int, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url

    def report_message(self) -> str:
        return f"GitHub API error ({self.status_code}): {self}"
