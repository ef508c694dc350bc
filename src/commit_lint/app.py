"""Commit message lint action.

Triggered by a ``pull_request`` workflow event. Inputs:

    github_token   (required) token used for the GitHub REST API
    pattern        regular expression searched in each commit's first line
    error_message  text placed at the top of the failure comment
    fail_on_error  "true" fails the step when any commit is invalid

Outputs ``valid`` and ``invalid_count``. When a commit does not match, a
comment listing the offending messages is posted on the pull request.
"""

from __future__ import annotations

from typing import Callable, Optional

from commit_lint.config import ActionConfig, load_config
from commit_lint.validator import validate_commits
from shared.actions import load_event_payload, repository_from_env, set_failed, set_output
from shared.constants import COMMENT_HEADING
from shared.errors import ActionError
from shared.github_client import GitHubClient
from shared.logging import get_logger
from shared.schema import Commit, PullRequestContext, ValidationResult, parse_pull_request_context

logger = get_logger("commit_lint")

ClientFactory = Callable[[ActionConfig], GitHubClient]


def _default_client(config: ActionConfig) -> GitHubClient:
    return GitHubClient(token_provider=lambda: config.github_token, api_base=config.api_url)


def load_pull_request_context() -> Optional[PullRequestContext]:
    payload = load_event_payload()
    pull_request = payload.get("pull_request")
    if pull_request is None:
        logger.info("Not a pull request event, skipping")
        return None

    owner, repo = repository_from_env(payload)
    return parse_pull_request_context(owner, repo, pull_request)


def fetch_commits(gh: GitHubClient, ctx: PullRequestContext) -> list[Commit]:
    items = gh.list_pull_commits(ctx.owner, ctx.repo, ctx.pull_number)
    return [Commit.from_api(item) for item in items]


def build_comment(error_message: str, invalid_messages: list[str]) -> str:
    bullets = "\n".join(f"- `{message}`" for message in invalid_messages)
    return f"{error_message}\n\n{COMMENT_HEADING}\n\n{bullets}"


def post_comment(gh: GitHubClient, ctx: PullRequestContext, body: str) -> bool:
    try:
        gh.create_issue_comment(ctx.owner, ctx.repo, ctx.pull_number, body)
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"Failed to post comment: {exc}")
        return False
    return True


def report(
    gh: GitHubClient,
    ctx: PullRequestContext,
    config: ActionConfig,
    result: ValidationResult,
) -> int:
    set_output("valid", str(result.valid).lower())
    set_output("invalid_count", str(result.invalid_count))

    if result.valid:
        logger.info("✅ All commit messages are valid!")
        return 0

    post_comment(gh, ctx, build_comment(config.error_message, result.invalid_messages))

    summary = f"Found {result.invalid_count} invalid commit message(s)"
    if config.fail_on_error:
        return set_failed(summary)
    logger.warning(summary)
    return 0


def run(client_factory: ClientFactory = _default_client) -> int:
    config = load_config()

    ctx = load_pull_request_context()
    if ctx is None:
        return 0

    local_logger = logger.bind(repo=ctx.full_name, pr_number=ctx.pull_number)
    gh = client_factory(config)

    local_logger.info(f"Validating commits in PR #{ctx.pull_number}...")
    commits = fetch_commits(gh, ctx)

    result, verdicts = validate_commits(commits, config.compiled_pattern)
    for commit, ok in verdicts:
        if ok:
            local_logger.info(f"✓ Valid: {commit.message}", extra={"sha": commit.sha})
        else:
            local_logger.error(f"Invalid commit message: {commit.message}", extra={"sha": commit.sha})

    return report(gh, ctx, config, result)


def main(client_factory: ClientFactory = _default_client) -> int:
    try:
        return run(client_factory)
    except ActionError as exc:
        set_failed(exc.report_message())
        return exc.exit_code
    except Exception as exc:  # noqa: BLE001
        set_failed(f"Action failed: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
