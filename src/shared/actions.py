"""Helpers for talking to the GitHub Actions runner.

Inputs arrive as ``INPUT_<NAME>`` environment variables, outputs are appended
to the file named by ``GITHUB_OUTPUT`` and the triggering event is a JSON file
named by ``GITHUB_EVENT_PATH``.
"""

from __future__ import annotations

import json
import os
import sys
import uuid
from pathlib import Path
from typing import Any, Optional

from shared.errors import ConfigError, EventPayloadError
from shared.logging import escape_data, escape_property, get_logger

logger = get_logger("actions")


def get_input(name: str, required: bool = False) -> str:
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    value = os.getenv(key, "").strip()
    if required and not value:
        raise ConfigError(f"Input required and not supplied: {name}")
    return value


def set_output(name: str, value: Any) -> None:
    text = str(value)
    output_path = os.getenv("GITHUB_OUTPUT", "")
    if not output_path:
        # Runners without file commands still honour the legacy stdout command.
        sys.stdout.write(f"::set-output name={escape_property(name)}::{escape_data(text)}\n")
        sys.stdout.flush()
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in text:
        raise ValueError(f"Unexpected input: name and value must not contain the delimiter {delimiter}")
    with open(output_path, "a", encoding="utf-8") as handle:
        handle.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")


def set_failed(message: str) -> int:
    logger.error(message)
    return 1


def load_event_payload() -> dict[str, Any]:
    event_path = os.getenv("GITHUB_EVENT_PATH", "")
    if not event_path or not Path(event_path).exists():
        return {}
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise EventPayloadError(f"{event_path} is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise EventPayloadError(f"{event_path} does not hold a JSON object")
    return payload


def repository_from_env(payload: Optional[dict[str, Any]] = None) -> tuple[str, str]:
    """Return ``(owner, repo)`` from ``GITHUB_REPOSITORY`` or the event payload."""
    full_name = os.getenv("GITHUB_REPOSITORY", "").strip()
    if full_name:
        owner, _, repo = full_name.partition("/")
        if owner and repo:
            return owner, repo

    repository = (payload or {}).get("repository") or {}
    owner = (repository.get("owner") or {}).get("login")
    repo = repository.get("name")
    if owner and repo:
        return str(owner), str(repo)

    raise EventPayloadError("repository requires a GITHUB_REPOSITORY environment variable like 'owner/repo'")
