#!/usr/bin/env python3
"""Command-line entry points for the documentation-freshness auditor.

Usage:
  docaudit rotate [--today yyyy-mm-dd] [--no-duplicate-check]
  docaudit verify [--base-branch main]
  docaudit propose --file-path docs/x.md --assignee alice [--head-branch b]

``rotate`` is meant for a scheduled workflow, ``verify`` for a
pull-request check, and ``propose`` for the step that opens the proposal
after the rewritten document has been pushed to a branch.
"""

from __future__ import annotations

import argparse
import logging
import os
import random
from pathlib import Path
from typing import Optional, Sequence

from docaudit.errors import DocAuditError
from docaudit.metadata.codec import format_date, parse_date
from docaudit.models.document import ReviewDecision
from docaudit.outputs import StepOutputWriter
from docaudit.persistence.document_store import FileDocumentStore
from docaudit.persistence.state_store import CursorStateStore
from docaudit.policy.resolver import ENV_BASE_BRANCH, AuditorConfig, PolicyResolver
from docaudit.proposals.gh_cli import GhCliPlatform
from docaudit.service import RotationService
from docaudit.verify.checker import ReviewDateVerifier
from docaudit.verify.diff import GitDiffSource

logger = logging.getLogger(__name__)


def _date_arg(value: str):
    parsed = parse_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"not a yyyy-mm-dd date: {value!r}")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docaudit",
        description="Rotate through docs, flag stale reviews, verify review dates.",
    )
    parser.add_argument(
        "--repo-root",
        default=".",
        help="Repository root path (defaults to current directory).",
    )
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory holding auditor_policy.json (defaults to <repo-root>/config).",
    )
    parser.add_argument(
        "--today",
        type=_date_arg,
        default=None,
        help="Override today's date (yyyy-mm-dd). For tests and replays.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    rotate = sub.add_parser("rotate", help="Check the next documents and mark one for review.")
    rotate.add_argument(
        "--no-duplicate-check",
        action="store_true",
        help="Do not query the platform for open proposals.",
    )
    rotate.add_argument("--seed", default=None, help="Seed for assignee selection.")

    verify = sub.add_parser("verify", help="Check modified docs have reviewed_at set to today.")
    verify.add_argument(
        "--base-branch",
        default=None,
        help=f"Branch to diff against (defaults to ${ENV_BASE_BRANCH} or policy).",
    )
    verify.add_argument(
        "paths",
        nargs="*",
        help="Check these paths instead of the git diff.",
    )

    propose = sub.add_parser("propose", help="Open the review proposal for a decision.")
    propose.add_argument("--file-path", required=True)
    propose.add_argument("--assignee", required=True)
    propose.add_argument("--head-branch", default=None)

    return parser


def _load_config(args: argparse.Namespace) -> AuditorConfig:
    repo_root = Path(args.repo_root).resolve()
    config_dir = Path(args.config_dir) if args.config_dir else repo_root / "config"
    resolver = PolicyResolver.from_config_dir(config_dir)
    return AuditorConfig.from_policy(resolver, repo_root, today=args.today)


def _build_service(
    config: AuditorConfig,
    with_platform: bool = True,
    seed: Optional[str] = None,
) -> RotationService:
    rng = random.Random()
    if seed is not None:
        rng.seed(seed)
    return RotationService(
        config,
        documents=FileDocumentStore(config.docs_dir, config.repo_root, config.extension),
        state_store=CursorStateStore(config.state_path),
        platform=GhCliPlatform() if with_platform else None,
        rng=rng,
    )


def cmd_rotate(args: argparse.Namespace) -> int:
    config = _load_config(args)
    service = _build_service(
        config,
        with_platform=not args.no_duplicate_check,
        seed=args.seed,
    )
    decision = service.run()
    StepOutputWriter.from_env().write_decision(decision)
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    config = _load_config(args)
    today = config.current_date()
    base_branch = args.base_branch or os.environ.get(ENV_BASE_BRANCH) or config.base_branch

    print(f"Today's date: {format_date(today)}")
    if args.paths:
        modified = list(args.paths)
    else:
        print(f"Base branch: {base_branch}")
        docs_prefix = config.docs_dir.relative_to(config.repo_root).as_posix()
        source = GitDiffSource(
            base_branch,
            repo_root=config.repo_root,
            docs_prefix=docs_prefix,
            extension=config.extension,
        )
        modified = source.modified_documents()

    if not modified:
        print("No documents were modified.")
        return 0

    print(f"Checking {len(modified)} modified document(s)")
    verifier = ReviewDateVerifier(config.repo_root, config.reviewed_key)
    result = verifier.check_all(modified, today)

    for path in result.skipped:
        print(f"SKIP {path}: file was deleted")
    for problem in result.problems:
        print(f"FAIL {problem.path}: [{problem.kind.value}] {problem.detail}")

    if not result.ok:
        print("Review date check failed. Please update the reviewed_at dates.")
        return 1
    print("All modified documents have correct review dates.")
    return 0


def cmd_propose(args: argparse.Namespace) -> int:
    config = _load_config(args)
    service = _build_service(config)
    decision = ReviewDecision(
        needs_review=True,
        file_path=args.file_path,
        assignee=args.assignee,
    )
    result = service.open_proposal(decision, head_branch=args.head_branch)
    if not result.success:
        for error in result.errors:
            logger.error("%s", error)
        return 1
    StepOutputWriter.from_env().set("proposal_url", result.data["url"])
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "rotate": cmd_rotate,
        "verify": cmd_verify,
        "propose": cmd_propose,
    }
    try:
        return handlers[args.command](args)
    except DocAuditError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
