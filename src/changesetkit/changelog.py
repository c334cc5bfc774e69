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

"""Split a whole changelog into commit blocks and parse each one.

A changelog is the saved output of a log command covering several
commits.  Each commit starts at a line beginning with ``commit ``;
anything before the first such line is not part of any commit and is
discarded.

Usage::

    from changesetkit.changelog import read_changelog

    for cs in read_changelog(Path('changelog.txt')):
        print(cs.commit_id, cs.title)
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from changesetkit.changeset import ChangeSet, parse_changeset
from changesetkit.errors import ChangeSetError
from changesetkit.logging import get_logger

logger = get_logger(__name__)

COMMIT_PREFIX = 'commit '

# Only CR, LF and CRLF end a line; other Unicode breaks belong to the text.
_LINE_BREAK_RE: re.Pattern[str] = re.compile(r'\r\n|\r|\n')


def split_commits(lines: Iterable[str]) -> list[list[str]]:
    """Group log lines into per-commit blocks.

    >>> split_commits(['noise', 'commit a', '    one', 'commit b'])
    [['commit a', '    one'], ['commit b']]
    """
    blocks: list[list[str]] = []
    current: list[str] | None = None
    for line in lines:
        if line.startswith(COMMIT_PREFIX):
            current = [line]
            blocks.append(current)
        elif current is not None:
            current.append(line)
    return blocks


def parse_changelog(text: str, *, author_or_committer: bool = False) -> list[ChangeSet]:
    """Parse every commit in *text*.

    Args:
        text: Full log output.
        author_or_committer: Passed through to each change set.

    Returns:
        Change sets in log order.
    """
    blocks = split_commits(_LINE_BREAK_RE.split(text))
    changesets = [parse_changeset(block, author_or_committer=author_or_committer) for block in blocks]
    logger.debug('changelog_parsed', commits=len(changesets))
    return changesets


def read_changelog(path: Path, *, author_or_committer: bool = False) -> list[ChangeSet]:
    """Read and parse a changelog file.

    Undecodable bytes are replaced rather than rejected, since commit
    messages are not guaranteed to be UTF-8.

    Raises:
        ChangeSetError: If *path* is not a readable file.
    """
    if not path.is_file():
        raise ChangeSetError(
            f'changelog not found: {path}',
            hint='save the output of the log command to a file first',
        )
    text = path.read_text(encoding='utf-8', errors='replace')
    logger.info('reading_changelog', path=str(path))
    return parse_changelog(text, author_or_committer=author_or_committer)


__all__ = [
    'parse_changelog',
    'read_changelog',
    'split_commits',
]
