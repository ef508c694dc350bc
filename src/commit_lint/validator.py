from __future__ import annotations

import re
from typing import Iterable, Union

from shared.errors import ConfigError
from shared.schema import Commit, ValidationResult

Pattern = Union[str, re.Pattern]


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` with ASCII-only ``\\w``, ``\\d`` and ``\\b`` classes."""
    try:
        return re.compile(pattern, re.ASCII)
    except re.error as exc:
        raise ConfigError(f"pattern {pattern!r} is not a valid regular expression: {exc}") from exc


def is_valid(message: str, pattern: Pattern) -> bool:
    """True when ``pattern`` matches anywhere in ``message``.

    No anchoring is added; patterns that must cover the whole line need their
    own ``^`` and ``$``.
    """
    regex = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)
    return regex.search(message) is not None


def validate_commits(
    commits: Iterable[Commit], pattern: Pattern,
) -> tuple[ValidationResult, list[tuple[Commit, bool]]]:
    """Check every commit, keeping API order and duplicate messages."""
    regex = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)
    verdicts = [(commit, is_valid(commit.message, regex)) for commit in commits]
    invalid = [commit.message for commit, ok in verdicts if not ok]
    return ValidationResult(invalid_messages=invalid), verdicts
