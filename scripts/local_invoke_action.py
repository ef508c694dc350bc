#!/usr/bin/env python3
"""Run the commit lint action against a real pull request from a workstation.

Usage: GITHUB_TOKEN=... local_invoke_action.py owner/repo 42 ['^(feat|fix): .+']
"""
import json
import os
import sys
import tempfile

sys.path.append("src")
from commit_lint.app import main as action_main  # noqa: E402


def main() -> int:
    if len(sys.argv) < 3:
        print(__doc__.strip().splitlines()[-1])
        return 2

    repo_full_name, pr_number = sys.argv[1], int(sys.argv[2])
    pattern = sys.argv[3] if len(sys.argv) > 3 else r"^(feat|fix|chore|docs|refactor|test)(\(.+\))?: .+"

    with tempfile.TemporaryDirectory() as workdir:
        event_path = os.path.join(workdir, "event.json")
        with open(event_path, "w", encoding="utf-8") as handle:
            json.dump({"pull_request": {"number": pr_number}}, handle)

        os.environ.update(
            {
                "INPUT_GITHUB_TOKEN": os.getenv("GITHUB_TOKEN", ""),
                "INPUT_PATTERN": pattern,
                "INPUT_ERROR_MESSAGE": "Commit messages do not match the required pattern.",
                "INPUT_FAIL_ON_ERROR": "true",
                "GITHUB_EVENT_PATH": event_path,
                "GITHUB_REPOSITORY": repo_full_name,
            }
        )
        # Without GITHUB_OUTPUT the outputs are printed as set-output commands.
        os.environ.pop("GITHUB_OUTPUT", None)
        return action_main()


if __name__ == "__main__":
    raise SystemExit(main())
