"""Main CLI entry point for diffguard."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DiffConfig
from .context import GitContext
from .errors import DiffExecutionFailedError, DiffGuardError, InvalidPathError, safe_render
from .logging_utils import configure_logging
from .serialize import DeterministicSerializer
from .settings import get_settings
from .vcs import GitRepository

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="diffguard",
        description="Line-level git diffs with validated paths and refs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  diffguard                                   # every file changed in HEAD^..HEAD
  diffguard --path src/app.py --base main --head feature/login
  diffguard --repo /path/to/repo --base v1.0 --head v2.0 --json out.json
        """,
    )

    parser.add_argument(
        "--repo",
        default=settings.repo_root,
        help="Path to the local repository (default: %(default)s)",
    )
    parser.add_argument(
        "--base",
        default=settings.base_ref,
        help="Base ref to diff from (default: %(default)s)",
    )
    parser.add_argument(
        "--head",
        default=settings.head_ref,
        help="Head ref to diff to (default: %(default)s)",
    )
    parser.add_argument(
        "--path",
        action="append",
        dest="paths",
        help="Repository-relative file to diff; repeatable. "
        "Defaults to every changed file.",
    )
    parser.add_argument(
        "--json",
        help="Output JSON to file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        type=str.lower,
        choices=["critical", "error", "warning", "info", "debug"],
        help="Logging level (default: $DIFFGUARD_LOG_LEVEL or info)",
    )

    return parser


def create_config(args: argparse.Namespace) -> DiffConfig:
    """Create configuration from command line arguments."""
    return DiffConfig(
        repo_root=args.repo,
        base_ref=args.base,
        head_ref=args.head,
        git_binary=get_settings().git_binary,
    )


def process_diff(config: DiffConfig, paths: Optional[List[str]] = None) -> Dict[str, Any]:
    """Diff the requested files (or every changed file) and return the payload.

    Explicitly requested paths fail the whole run on any error. When diffing
    every changed file, files that cannot be diffed are listed as skipped.
    """
    repo = GitRepository(config)
    git_version = repo.validate_git_version()

    entries = []
    skipped = []
    if paths:
        context = GitContext(provider=repo, base_ref=config.base_ref, head_ref=config.head_ref)
        for path in paths:
            entries.append((path, context.diff_for_file(path)))
    else:
        context = GitContext.from_repository(repo, config.base_ref, config.head_ref)
        for path in context.changed_files:
            try:
                entries.append((path, context.diff_for_file(path)))
            except (InvalidPathError, DiffExecutionFailedError) as e:
                logger.warning("Skipping file", extra={"code": e.code})
                skipped.append({"path": safe_render(path), "error": e.to_dict()})

    logger.info(
        "Diff processing finished",
        extra={"files": len(entries), "skipped": len(skipped)},
    )
    serializer = DeterministicSerializer(config)
    return serializer.serialize_output(entries, skipped, git_version)


def output_result(result: dict, output_path: Optional[str]) -> None:
    """Output result to stdout or file."""
    json_str = DeterministicSerializer(DiffConfig()).to_json_string(result)

    if output_path:
        Path(output_path).write_text(json_str, encoding="utf-8")
    else:
        print(json_str)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    serializer = DeterministicSerializer(DiffConfig())
    try:
        # An unknown level from the environment surfaces as INVALID_ARGUMENT
        configure_logging(args.log_level)
        config = create_config(args)
        payload = process_diff(config, args.paths)
        result = serializer.create_success_envelope(payload)
        output_result(result, args.json)
        return 0

    except DiffGuardError as e:
        result = serializer.create_error_envelope(e.code, e.message, e.details)
        output_result(result, args.json)
        return 1

    except ValueError as e:
        result = serializer.create_error_envelope("INVALID_ARGUMENT", str(e))
        output_result(result, args.json)
        return 1

    except Exception as e:
        logger.exception("Unexpected error")
        result = serializer.create_error_envelope(
            "INTERNAL_ERROR",
            f"Internal error: {str(e)}",
            {"type": type(e).__name__},
        )
        output_result(result, args.json)
        return 1


if __name__ == "__main__":
    sys.exit(main())
