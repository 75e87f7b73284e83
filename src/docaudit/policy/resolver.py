"""Policy resolver — loads auditor_policy.json and the runtime environment
and exposes every setting the auditor needs as a typed value.

No silent defaults for policy keys: if a value is missing from the policy
file, loading fails loud. Environment values (reviewer pool, base branch,
date override) are optional and have documented defaults.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

from docaudit.errors import PolicyError
from docaudit.metadata.codec import parse_date
from docaudit.models.document import MetadataFormat
from docaudit.review.roster import AssigneePool

POLICY_FILENAME = "auditor_policy.json"

ENV_TEAM_MEMBERS = "TEAM_MEMBERS"
ENV_BASE_BRANCH = "BASE_BRANCH"
ENV_TODAY = "DOCAUDIT_TODAY"


class PolicyResolver:
    """Loads and resolves auditor policy.

    Usage:
        resolver = PolicyResolver.from_config_dir(Path("config"))
        window = resolver.freshness_window()
        docs_dir = resolver.documents_directory()
    """

    def __init__(self, policy: dict[str, Any]) -> None:
        self._policy = policy
        self._validate_version()

    @classmethod
    def from_config_dir(cls, config_dir: Path) -> PolicyResolver:
        """Load from the canonical config directory."""
        return cls(_load_json(config_dir / POLICY_FILENAME))

    def _validate_version(self) -> None:
        if "version" not in self._policy:
            raise PolicyError(f"{POLICY_FILENAME} missing version")

    def _get(self, section: str, key: str) -> Any:
        try:
            return self._policy[section][key]
        except (KeyError, TypeError) as exc:
            raise PolicyError(f"{POLICY_FILENAME} missing {section}.{key}") from exc

    # ------------------------------------------------------------------
    # Documents and state
    # ------------------------------------------------------------------

    def documents_directory(self) -> str:
        return str(self._get("documents", "directory"))

    def documents_extension(self) -> str:
        return str(self._get("documents", "extension"))

    def state_path(self) -> str:
        return str(self._get("state", "path"))

    # ------------------------------------------------------------------
    # Freshness and metadata
    # ------------------------------------------------------------------

    def freshness_window(self) -> timedelta:
        days = self._get("freshness", "window_days")
        if not isinstance(days, int) or isinstance(days, bool) or days < 0:
            raise PolicyError(f"freshness.window_days must be a non-negative int, got {days!r}")
        return timedelta(days=days)

    def target_format(self) -> MetadataFormat:
        raw = self._get("metadata", "target_format")
        try:
            return MetadataFormat(raw)
        except ValueError as exc:
            raise PolicyError(f"Unknown metadata.target_format: {raw!r}") from exc

    def reviewed_key(self) -> str:
        return str(self._get("metadata", "reviewed_key"))

    # ------------------------------------------------------------------
    # Proposals
    # ------------------------------------------------------------------

    def base_branch(self) -> str:
        return str(self._get("proposals", "base_branch"))

    def proposal_labels(self) -> list[str]:
        return [str(label) for label in self._get("proposals", "labels")]

    def title_template(self) -> str:
        return str(self._get("proposals", "title_template"))

    def branch_prefix(self) -> str:
        return str(self._get("proposals", "branch_prefix"))


@dataclass(frozen=True)
class AuditorConfig:
    """Everything one run needs, resolved up front and passed explicitly.

    ``today`` overrides the current date; it exists for tests and manual
    replays and is None in normal operation.
    """
    repo_root: Path
    docs_dir: Path
    state_path: Path
    assignees: AssigneePool
    extension: str = ".md"
    freshness_window: timedelta = timedelta(days=30)
    target_format: MetadataFormat = MetadataFormat.BLOCK
    reviewed_key: str = "reviewed_at"
    base_branch: str = "main"
    labels: tuple[str, ...] = field(default_factory=tuple)
    title_template: str = "Docs review: {file_path}"
    branch_prefix: str = "docs-review/"
    today: Optional[date] = None

    def current_date(self) -> date:
        if self.today is not None:
            return self.today
        return datetime.now(timezone.utc).date()

    @classmethod
    def from_policy(
        cls,
        resolver: PolicyResolver,
        repo_root: Path,
        env: Optional[Mapping[str, str]] = None,
        today: Optional[date] = None,
    ) -> AuditorConfig:
        """Combine policy with environment values.

        ``today`` takes precedence over ``DOCAUDIT_TODAY``.
        """
        env = os.environ if env is None else env

        if today is None and env.get(ENV_TODAY):
            today = parse_date(env[ENV_TODAY])
            if today is None:
                raise PolicyError(f"{ENV_TODAY} is not a yyyy-mm-dd date: {env[ENV_TODAY]!r}")

        return cls(
            repo_root=repo_root,
            docs_dir=repo_root / resolver.documents_directory(),
            state_path=repo_root / resolver.state_path(),
            assignees=AssigneePool.from_csv(env.get(ENV_TEAM_MEMBERS, "")),
            extension=resolver.documents_extension(),
            freshness_window=resolver.freshness_window(),
            target_format=resolver.target_format(),
            reviewed_key=resolver.reviewed_key(),
            base_branch=env.get(ENV_BASE_BRANCH) or resolver.base_branch(),
            labels=tuple(resolver.proposal_labels()),
            title_template=resolver.title_template(),
            branch_prefix=resolver.branch_prefix(),
            today=today,
        )


def _load_json(path: Path) -> dict[str, Any]:
    """Load a JSON file or raise with clear path."""
    if not path.exists():
        raise PolicyError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except ValueError as exc:
            raise PolicyError(f"Invalid JSON in {path}: {exc}") from exc
