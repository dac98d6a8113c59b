"""prpicker entry point.

Lists your pull requests (current repository by default, all with
--all) in fzf with a bat preview of each body, and prints the title and
URL of the one you pick. Usage: prpicker [--all] [--no-color] [-v] [-c PATH].
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from prpicker.adapters import GitHubAdapter, GitPlatformError
from prpicker.chooser import ChooserError, FzfChooser
from prpicker.config import DEFAULT_CONFIG_PATH, load_config
from prpicker.logging import setup_logging
from prpicker.pipeline import BrowseOptions, PullRequestBrowser, report
from prpicker.preview import MaterializationError
from prpicker.utils import GitRemoteError, current_repository

FATAL_ERRORS = (GitPlatformError, GitRemoteError, MaterializationError, ChooserError, OSError)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="prpicker",
        description="Browse your GitHub pull requests with fzf and print the selected one",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="List PRs from all repositories (default: only current repository)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Do not colour the status and title columns",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress (login, number of PRs found) to stderr at INFO level",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to YAML config file",
    )
    return parser.parse_args(argv if argv is not None else sys.argv[1:])


def main(argv: list[str] | None = None) -> int:
    """Run one browse session; 0 on success or no selection, 1 on errors."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print(f"Error: invalid config {args.config}: {e}", file=sys.stderr)
        return 1
    setup_logging(config.logging, verbose=args.verbose)
    log = logging.getLogger("prpicker")

    try:
        repository = None if args.all else current_repository(log=log)
        browser = PullRequestBrowser(
            adapter=GitHubAdapter(config.github_token_resolved(), api_url=config.github.api_url),
            chooser=FzfChooser(
                command=config.chooser.command,
                preview_command=config.chooser.preview_command,
                preview_args=list(config.chooser.preview_args),
            ),
            options=BrowseOptions(
                repository=repository,
                color=config.chooser.color and not args.no_color,
                per_page=config.github.per_page,
                api_url=config.github.api_url,
            ),
        )
        result = browser.run()
    except KeyboardInterrupt:
        return 130
    except FATAL_ERRORS as e:
        log.debug("Fatal error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
