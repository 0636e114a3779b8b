from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from ai_tools import __version__
from ai_tools.clone.invoker import make_invoker
from ai_tools.clone.orchestrator import CloneOrchestrator
from ai_tools.config.loader import build_settings, load_tools_config
from ai_tools.config.models import (
    DEFAULT_CLONE_TIMEOUT_S,
    DEFAULT_CONFIG_FILE,
    DEFAULT_OUTPUT_DIR,
    ClonerSettings,
)
from ai_tools.errors import ClonerError
from ai_tools.github.auth import resolve_token
from ai_tools.github.client import AuthenticatedClient, GitHubRestClient
from ai_tools.report import Reporter

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def build_client(settings: ClonerSettings) -> AuthenticatedClient:
    """Builds the API session from whatever credential `gh` already has."""
    token = resolve_token()
    return GitHubRestClient(token=token, base_url=settings.api_url, timeout_s=settings.http_timeout_s)


def run_clone(settings: ClonerSettings, *, client: AuthenticatedClient, reporter: Reporter) -> int:
    """authenticate -> load config -> clone-or-skip -> report"""
    user = client.get_current_user()
    reporter.authenticated(user)

    config = load_tools_config(settings.config_file)

    orchestrator = CloneOrchestrator(
        client=client,
        invoker=make_invoker(settings.clone_method, timeout_s=settings.clone_timeout_s),
        output_dir=settings.output_dir,
        reporter=reporter,
    )
    orchestrator.run(config.tools)
    return 0


def cmd_clone(args: argparse.Namespace) -> int:
    settings = build_settings(
        config_file=args.config,
        output_dir=args.output,
        verbose=args.verbose,
        clone_method=args.method,
        clone_timeout_s=args.timeout,
    )
    _configure_logging(settings.verbose)
    reporter = Reporter(verbose=settings.verbose)

    try:
        client = build_client(settings)
        return run_clone(settings, client=client, reporter=reporter)
    except ClonerError as e:
        # Per-tool errors never get this far; anything here ends the run.
        logger.debug("fatal %s: %r", type(e).__name__, e.data)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_version(args: argparse.Namespace) -> int:
    print(f"ai-tools {__version__}")
    return 0


def _add_clone_flags(sp: argparse.ArgumentParser, *, with_defaults: bool) -> None:
    # The subcommand copy uses SUPPRESS so it does not clobber flags given before it.
    def d(value: object) -> object:
        return value if with_defaults else argparse.SUPPRESS

    sp.add_argument(
        "-c", "--config", default=d(DEFAULT_CONFIG_FILE),
        help=f"Configuration file containing tools to clone (default: {DEFAULT_CONFIG_FILE})",
    )
    sp.add_argument(
        "-o", "--output", default=d(DEFAULT_OUTPUT_DIR),
        help=f"Output directory for cloned repositories (default: {DEFAULT_OUTPUT_DIR})",
    )
    sp.add_argument("-v", "--verbose", action="store_true", default=d(False), help="Enable verbose output")
    sp.add_argument(
        "--method", choices=["git", "gh"], default=d("git"),
        help="Clone with plain git or with `gh repo clone` (default: git)",
    )
    sp.add_argument(
        "--timeout", type=float, default=d(DEFAULT_CLONE_TIMEOUT_S),
        help=f"Seconds before a single clone is abandoned (default: {DEFAULT_CLONE_TIMEOUT_S:g})",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ai-tools",
        description="Manage AI tools and utilities, including cloning MCP servers from GitHub.",
    )
    _add_clone_flags(p, with_defaults=True)
    # No subcommand means clone.
    p.set_defaults(func=cmd_clone)

    sub = p.add_subparsers(dest="cmd")

    sp_clone = sub.add_parser("clone", help="Clone MCP tools from GitHub repositories listed in the config file")
    _add_clone_flags(sp_clone, with_defaults=False)
    sp_clone.set_defaults(func=cmd_clone)

    sp_version = sub.add_parser("version", help="Print the version number of ai-tools")
    sp_version.set_defaults(func=cmd_version)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
