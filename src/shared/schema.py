from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, computed_field, field_validator

from shared.errors import CommitDataError, EventPayloadError


class Commit(BaseModel):
    model_config = ConfigDict(frozen=True)

    sha: str
    message: str
    """First line of the commit message."""

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "Commit":
        """Build from one item of the pull request commits listing."""
        if not isinstance(item, dict):
            raise CommitDataError(f"expected a commit object, got {type(item).__name__}")
        sha = str(item.get("sha") or "")
        commit = item.get("commit")
        full_message = commit.get("message") if isinstance(commit, dict) else None
        if not isinstance(full_message, str):
            raise CommitDataError(f"commit {sha or '?'} has no message")
        return cls(sha=sha, message=full_message.split("\n")[0])


class PullRequestContext(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    owner: str
    repo: str
    pull_number: int

    @field_validator("owner", "repo")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("cannot be empty")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class ValidationResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    invalid_messages: list[str] = []

    @computed_field
    @property
    def invalid_count(self) -> int:
        return len(self.invalid_messages)

    @computed_field
    @property
    def valid(self) -> bool:
        return not self.invalid_messages


def parse_pull_request_context(owner: str, repo: str, pull_request: dict[str, Any]) -> PullRequestContext:
    number = pull_request.get("number")
    # bool is an int subclass; a JSON true is not a pull request number
    if isinstance(number, bool) or not isinstance(number, int):
        raise EventPayloadError(f"pull_request.number must be an integer, got {number!r}")
    try:
        return PullRequestContext(owner=owner, repo=repo, pull_number=number)
    except ValidationError as exc:
        raise EventPayloadError(f"invalid pull request context: {exc}") from exc
