# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Command-line entry point.

Usage::

    git whatchanged --no-abbrev -M --format=raw > changelog.txt
    changesetkit show changelog.txt
    changesetkit show changelog.txt --json --author
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from changesetkit.changelog import read_changelog
from changesetkit.config import load_config
from changesetkit.errors import ChangeSetError
from changesetkit.logging import configure_logging, get_logger
from changesetkit.report import changesets_to_json, print_changeset_table

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='changesetkit',
        description='Parse saved git log output into structured change sets.',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Emit logs as JSON lines on stderr.')
    parser.add_argument('--redact-emails', action='store_true', help='Scrub email addresses from logs.')

    sub = parser.add_subparsers(dest='command', required=True)
    show = sub.add_parser('show', help='Print the change sets in a changelog file.')
    show.add_argument('changelog', type=Path, help='File holding the log output.')
    show.add_argument('--json', action='store_true', default=None, help='Print JSON instead of a table.')
    show.add_argument(
        '--author',
        action='store_true',
        default=None,
        help='Report commit authors rather than committers.',
    )
    show.add_argument(
        '--config',
        type=Path,
        default=Path.cwd(),
        help='changesetkit.toml, pyproject.toml, or a directory holding one.',
    )
    return parser


def _cmd_show(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    if args.author is not None:
        config = replace(config, author_or_committer=args.author)
    if args.json is not None:
        config = replace(config, json_output=args.json)

    changesets = read_changelog(args.changelog, author_or_committer=config.author_or_committer)
    if config.json_output:
        sys.stdout.write(changesets_to_json(changesets) + '\n')
    else:
        print_changeset_table(changesets)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = _build_parser().parse_args(argv)
    configure_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        json_log=args.json_log,
        redact_emails=args.redact_emails,
    )
    try:
        return _cmd_show(args)
    except ChangeSetError as exc:
        logger.error('changesetkit_failed', error=exc.message, hint=exc.hint)
        return 1


if __name__ == '__main__':
    sys.exit(main())
