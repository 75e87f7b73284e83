"""GitHub CLI-backed proposal platform.

Shells out to ``gh``. Authentication comes from the environment
(``GH_TOKEN`` / ``GITHUB_TOKEN``) as ``gh`` normally resolves it.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any, Callable, Sequence

from docaudit.errors import ProposalPlatformError
from docaudit.models.document import OpenProposal, ProposalRequest

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


class GhCliPlatform:
    """ProposalPlatform implementation using the ``gh`` command-line tool.

    ``runner`` defaults to ``subprocess.run`` and is injectable for tests.
    """

    def __init__(
        self,
        executable: str = "gh",
        runner: Runner = subprocess.run,
        timeout: float = 60.0,
    ) -> None:
        self._executable = executable
        self._runner = runner
        self._timeout = timeout

    def query_open_proposals(self) -> list[OpenProposal]:
        stdout = self._run(["pr", "list", "--state", "open", "--json", "number,files"])
        try:
            data = json.loads(stdout or "[]")
        except ValueError as exc:
            raise ProposalPlatformError(f"Unparseable gh pr list output: {exc}") from exc
        if not isinstance(data, list):
            raise ProposalPlatformError("gh pr list did not return a JSON array")
        return [_to_open_proposal(item) for item in data if isinstance(item, dict)]

    def create_proposal(self, request: ProposalRequest) -> str:
        args = [
            "pr", "create",
            "--base", request.base_branch,
            "--head", request.head_branch,
            "--title", request.title,
            "--body", request.body,
            "--assignee", request.assignee,
        ]
        for label in request.labels:
            args.extend(["--label", label])
        url = self._run(args).strip()
        logger.info("Opened proposal %s assigned to %s", url, request.assignee)
        return url

    def _run(self, args: Sequence[str]) -> str:
        cmd = [self._executable, *args]
        try:
            result = self._runner(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise ProposalPlatformError(f"{self._executable} not found on PATH") from exc
        except subprocess.TimeoutExpired as exc:
            raise ProposalPlatformError(f"Timed out running {' '.join(cmd[:3])}") from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise ProposalPlatformError(
                f"{' '.join(cmd[:3])} exited {exc.returncode}: {stderr}"
            ) from exc
        except (OSError, subprocess.SubprocessError) as exc:
            raise ProposalPlatformError(f"Cannot run {' '.join(cmd[:3])}: {exc}") from exc
        return result.stdout


def _to_open_proposal(item: dict[str, Any]) -> OpenProposal:
    number = item.get("number")
    if not isinstance(number, int) or isinstance(number, bool):
        raise ProposalPlatformError(
            f"gh pr list returned a bad proposal number: {number!r}"
        )
    files = []
    for entry in item.get("files") or []:
        if isinstance(entry, dict) and entry.get("path"):
            files.append(str(entry["path"]))
    return OpenProposal(number=number, files=files)
