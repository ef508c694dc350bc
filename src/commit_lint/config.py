"""Typed action configuration, read once from the runner's inputs."""

from __future__ import annotations

import os
import re
from functools import cached_property

from pydantic import BaseModel, ConfigDict

from commit_lint.validator import compile_pattern
from shared.actions import get_input
from shared.constants import DEFAULT_API_URL, TRUE_LITERALS


def parse_bool_input(value: str) -> bool:
    """Return True only for a value in ``TRUE_LITERALS``; anything else is False."""
    return value in TRUE_LITERALS


class ActionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    github_token: str
    pattern: str = ""
    error_message: str = ""
    fail_on_error: bool = False
    api_url: str = DEFAULT_API_URL

    @cached_property
    def compiled_pattern(self) -> re.Pattern[str]:
        return compile_pattern(self.pattern)


def load_config() -> ActionConfig:
    config = ActionConfig(
        github_token=get_input("github_token", required=True),
        pattern=get_input("pattern"),
        error_message=get_input("error_message"),
        fail_on_error=parse_bool_input(get_input("fail_on_error")),
        api_url=os.getenv("GITHUB_API_URL") or DEFAULT_API_URL,
    )
    # Fail on a bad pattern before any request goes out.
    config.compiled_pattern
    return config
