# src/main.py — v1
"""CLI entry point: resolve, check, analyze-prompt, limits, cache commands.

Usage:
    aigate resolve <operation> <text> [options]
    aigate check <selection.json>
    aigate analyze-prompt <file> [--fix]
    aigate limits [identity]
    aigate cache stats|clear [--type TYPE]

Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from aigate.config.settings import ConfigurationError, Settings, load_settings
from aigate.core.models import OPERATIONS
from aigate.core.selection import ProjectSelection
from aigate.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="aigate",
        description=f"aigate v{__version__} - cached, rate-limited AI requests with offline fallback",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- resolve ---
    p_resolve = subparsers.add_parser(
        "resolve", help="Resolve one AI request through cache, limiter, AI and fallback",
    )
    p_resolve.add_argument("operation", choices=OPERATIONS)
    p_resolve.add_argument(
        "text", nargs="?", default="",
        help="Description, prompt or chat message (not used by suggestions)",
    )
    p_resolve.add_argument(
        "--selection", type=Path, default=None,
        help="JSON file with the current project selection",
    )
    p_resolve.add_argument("--category", default=None, help="Declared project type")
    p_resolve.add_argument("--identity", default=None, help="Caller identity")
    p_resolve.add_argument(
        "--no-fallback", action="store_true", help="Return errors instead of fallback results",
    )
    p_resolve.add_argument(
        "--no-cache", action="store_true", help="Bypass local and remote caches",
    )
    p_resolve.set_defaults(func=_cmd_resolve)

    # --- check ---
    p_check = subparsers.add_parser(
        "check", help="Score the design compatibility of a selection (offline)",
    )
    p_check.add_argument("selection", type=Path, help="JSON file with the project selection")
    p_check.set_defaults(func=_cmd_check)

    # --- analyze-prompt ---
    p_prompt = subparsers.add_parser(
        "analyze-prompt", help="Score a generation prompt (offline)",
    )
    p_prompt.add_argument("file", type=Path, help="Prompt text file")
    p_prompt.add_argument("--selection", type=Path, default=None)
    p_prompt.add_argument(
        "--fix", action="store_true", help="Print the prompt with auto-fixes applied",
    )
    p_prompt.set_defaults(func=_cmd_analyze_prompt)

    # --- limits ---
    p_limits = subparsers.add_parser("limits", help="Show rate limit status")
    p_limits.add_argument("identity", nargs="?", default=None)
    p_limits.set_defaults(func=_cmd_limits)

    # --- cache ---
    p_cache = subparsers.add_parser("cache", help="Inspect or clear caches")
    p_cache.add_argument("action", choices=("stats", "clear"))
    p_cache.add_argument(
        "--type", dest="cache_type", default="all",
        choices=("all",) + OPERATIONS,
        help="Remote cache namespace to clear (default: all)",
    )
    p_cache.set_defaults(func=_cmd_cache)

    return parser


async def _cmd_resolve(args: argparse.Namespace, settings: Settings) -> int:
    """Resolve one request and print the tagged result."""
    from aigate.api.facade import create_orchestrator
    from aigate.core.models import AIRequest

    selection = _load_selection(args.selection) if args.selection else None
    request = AIRequest(
        operation=args.operation,
        text=args.text,
        selection=selection,
        category=args.category,
        identity=args.identity,
        enable_fallback=False if args.no_fallback else None,
        enable_cache=False if args.no_cache else None,
    )
    orchestrator = await create_orchestrator(settings)
    try:
        result = await orchestrator.resolve(request)
    finally:
        await orchestrator.aclose()
    _print_json(result)
    return 0 if result.ok else 1


async def _cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    from aigate.fallback.compatibility import safe_check_compatibility

    _print_json(safe_check_compatibility(_load_selection(args.selection)))
    return 0


async def _cmd_analyze_prompt(args: argparse.Namespace, settings: Settings) -> int:
    from aigate.fallback.prompt_analyzer import apply_auto_fixes, safe_analyze_prompt

    file_path: Path = args.file
    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        return 1
    prompt = file_path.read_text(encoding="utf-8")
    selection = _load_selection(args.selection) if args.selection else None
    analysis = safe_analyze_prompt(prompt, selection)
    if args.fix:
        print(apply_auto_fixes(prompt, analysis.suggestions))
    else:
        _print_json(analysis)
    return 0


async def _cmd_limits(args: argparse.Namespace, settings: Settings) -> int:
    from aigate.api.facade import create_orchestrator

    orchestrator = await create_orchestrator(settings, warm_cache=False)
    try:
        status = await orchestrator.rate_limit_status(args.identity)
    finally:
        await orchestrator.aclose()
    _print_json(status)
    return 0


async def _cmd_cache(args: argparse.Namespace, settings: Settings) -> int:
    from aigate.api.facade import create_orchestrator

    orchestrator = await create_orchestrator(settings, warm_cache=False)
    local, remote = orchestrator.local_cache, orchestrator.remote_cache
    try:
        if args.action == "stats":
            remote_stats = await remote.stats() if remote is not None else None
            _print_json({
                "local": local.stats().model_dump() if local is not None else None,
                "remote": remote_stats.model_dump() if remote_stats is not None else None,
            })
        else:
            cleared = len(local) if local is not None else 0
            if local is not None:
                await local.clear()
            remote_cleared = await remote.clear(args.cache_type) if remote is not None else 0
            _print_json({"local": cleared, "remote": remote_cleared})
    finally:
        await orchestrator.aclose()
    return 0


def _load_selection(path: Path) -> ProjectSelection:
    return ProjectSelection.model_validate_json(path.read_text(encoding="utf-8"))


def _print_json(value: BaseModel | dict[str, Any]) -> None:
    data = value.model_dump(mode="json") if isinstance(value, BaseModel) else value
    print(json.dumps(data, indent=2, default=str))


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from aigate.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
