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

r"""Parser for a single commit block of ``git whatchanged`` output.

The expected block is what ``git whatchanged --no-abbrev -M
--format=raw``-style commands print for one commit::

    commit 5d7a1e0c...
    tree 9b1f...
    parent 31c4...
    Author: Jane Doe <jane@example.com>
    Date: 1600000000 +0000

        Fix the frobnicator

     2 files changed, 10 insertions(+), 3 deletions(-)
    :100644 100644 aaaa... bbbb... M\tsrc/frob.py
    :100644 100644 cccc... dddd... R087\told.txt\tnew.txt

Every line is offered to an ordered table of :class:`LineRule` entries.
The first rule whose predicate accepts the line handles it; later rules
never see it.  The order matters: a message line mentioning "changed"
is claimed by the ``stats`` rule before the ``message`` rule can see it.

A line that a rule claims but cannot parse is dropped and logged at
debug level.  Nothing short of an empty block makes :meth:`parse` raise.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from changesetkit.changeset._types import ChangeSet, EditKind, FileChange, parse_hash
from changesetkit.errors import EmptyInputError
from changesetkit.logging import get_logger

logger = get_logger(__name__)

BRANCH_PREFIX = 'Changes in branch '
MESSAGE_INDENT = '    '

_BRANCH_RE: re.Pattern[str] = re.compile(r'Changes in branch ([-_a-zA-Z0-9/]*), .*')
_AUTHOR_RE: re.Pattern[str] = re.compile(r'Author: (?P<name>.*) <(?P<email>.*)>')
_DATE_RE: re.Pattern[str] = re.compile(r'Date: (?P<time>.*) (?P<tz>.*)')

_INSERTIONS_RE: re.Pattern[str] = re.compile(r'([0-9]+(?:\.[0-9]*)?) insertions?')
_DELETIONS_RE: re.Pattern[str] = re.compile(r'([0-9]+(?:\.[0-9]*)?) deletions?')
_FILES_CHANGED_RE: re.Pattern[str] = re.compile(r'([0-9]+(?:\.[0-9]*)?) files? changed')

# :<old mode> <new mode> <old blob> <new blob> <status>[score]\t<path>[\t<path>]
_FILE_RE: re.Pattern[str] = re.compile(
    r':[0-9]{6} [0-9]{6} '
    r'(?P<src>[0-9a-f]{40}) (?P<dst>[0-9a-f]{40}) '
    r'(?P<action>[ACDMRTUX]+)[0-9]*'
    r'\t(?P<path>.*)',
)
_PATH_PAIR_RE: re.Pattern[str] = re.compile(r'(?P<old>.*?)\t(?P<new>.*)')

# Status letters whose blob ids are meaningful.
_CONTENT_ACTIONS: frozenset[str] = frozenset('MADRC')


@dataclass
class _ChangeSetBuilder:
    """Mutable accumulator owned by a single :meth:`ChangeSetParser.parse` call."""

    author_or_committer: bool
    id: str | None = None
    parent_commit: str | None = None
    branch: str | None = None
    author: str | None = None
    author_email: str | None = None
    committer: str | None = None
    committer_email: str | None = None
    author_time: str | None = None
    author_tz: str | None = None
    committer_time: str | None = None
    committer_tz: str | None = None
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0
    message: list[str] = field(default_factory=list)
    file_changes: set[FileChange] = field(default_factory=set)

    def build(self) -> ChangeSet:
        return ChangeSet(
            id=self.id,
            parent_commit=self.parent_commit,
            branch=self.branch,
            author=self.author,
            author_email=self.author_email,
            committer=self.committer,
            committer_email=self.committer_email,
            author_time=self.author_time,
            author_tz=self.author_tz,
            committer_time=self.committer_time,
            committer_tz=self.committer_tz,
            message=''.join(self.message),
            files_changed=self.files_changed,
            insertions=self.insertions,
            deletions=self.deletions,
            file_changes=frozenset(self.file_changes),
            author_or_committer=self.author_or_committer,
        )


@dataclass(frozen=True)
class LineRule:
    """One entry of the line classification table.

    Attributes:
        name: Short identifier, returned by :func:`classify_line`.
        matches: Predicate deciding whether this rule claims a line.
        apply: Handler that folds the line into the builder.
    """

    name: str
    matches: Callable[[str], bool]
    apply: Callable[[_ChangeSetBuilder, str], None]


def _second_token(line: str) -> str | None:
    tokens = line.split()
    return tokens[1] if len(tokens) > 1 else None


def _apply_commit(b: _ChangeSetBuilder, line: str) -> None:
    b.id = _second_token(line)


def _apply_tree(b: _ChangeSetBuilder, line: str) -> None:
    pass


def _apply_parent(b: _ChangeSetBuilder, line: str) -> None:
    b.parent_commit = _second_token(line)


def _apply_branch(b: _ChangeSetBuilder, line: str) -> None:
    m = _BRANCH_RE.fullmatch(line)
    if m:
        b.branch = m.group(1).strip()
    else:
        logger.debug('changeset_branch_line_skipped', line=line)


def _apply_author(b: _ChangeSetBuilder, line: str) -> None:
    m = _AUTHOR_RE.fullmatch(line)
    if not m:
        logger.debug('changeset_author_line_skipped', line=line)
        return
    # This log format has no separate committer line.
    b.author = b.committer = m.group('name').strip()
    b.author_email = b.committer_email = m.group('email')


def _apply_date(b: _ChangeSetBuilder, line: str) -> None:
    m = _DATE_RE.fullmatch(line)
    if not m:
        logger.debug('changeset_date_line_skipped', line=line)
        return
    b.author_time = b.committer_time = m.group('time').strip()
    b.author_tz = b.committer_tz = m.group('tz')


def _stat(pattern: re.Pattern[str], line: str) -> int | None:
    m = pattern.search(line)
    if not m:
        return None
    try:
        return int(m.group(1))
    except ValueError:
        logger.debug('changeset_stat_not_integer', value=m.group(1), line=line)
        return None


def _apply_stats(b: _ChangeSetBuilder, line: str) -> None:
    insertions = _stat(_INSERTIONS_RE, line)
    if insertions is not None:
        b.insertions = insertions
    deletions = _stat(_DELETIONS_RE, line)
    if deletions is not None:
        b.deletions = deletions
    files_changed = _stat(_FILES_CHANGED_RE, line)
    if files_changed is not None:
        b.files_changed = files_changed


def _apply_message(b: _ChangeSetBuilder, line: str) -> None:
    b.message.append(line[len(MESSAGE_INDENT) :] + '\n')


def _apply_file(b: _ChangeSetBuilder, line: str) -> None:
    m = _FILE_RE.fullmatch(line)
    if not m or len(m.group('action')) != 1:
        logger.debug('changeset_file_line_skipped', line=line)
        return

    action = m.group('action')
    path = m.group('path')
    src = dst = None
    if action in _CONTENT_ACTIONS:
        src = parse_hash(m.group('src'))
        dst = parse_hash(m.group('dst'))

    if action in ('R', 'C'):
        pair = _PATH_PAIR_RE.fullmatch(path)
        if not pair:
            logger.debug('changeset_path_pair_skipped', action=action, path=path)
            return
        # A rename is a delete plus an add; a copy leaves its source alone.
        if action == 'R':
            b.file_changes.add(FileChange(src, dst, EditKind.DELETE, pair.group('old')))
        b.file_changes.add(FileChange(src, dst, EditKind.ADD, pair.group('new')))
    else:
        b.file_changes.add(FileChange(src, dst, EditKind.for_action(action), path))


RULES: tuple[LineRule, ...] = (
    LineRule('commit', lambda line: line.startswith('commit '), _apply_commit),
    LineRule('tree', lambda line: line.startswith('tree '), _apply_tree),
    LineRule('parent', lambda line: line.startswith('parent '), _apply_parent),
    LineRule('branch', lambda line: line.startswith(BRANCH_PREFIX), _apply_branch),
    LineRule('author', lambda line: line.startswith('Author'), _apply_author),
    LineRule('date', lambda line: line.startswith('Date'), _apply_date),
    LineRule('stats', lambda line: 'changed' in line, _apply_stats),
    LineRule('message', lambda line: line.startswith(MESSAGE_INDENT), _apply_message),
    LineRule('file', lambda line: line.startswith(':'), _apply_file),
)


def _rule_for(line: str) -> LineRule | None:
    for rule in RULES:
        if rule.matches(line):
            return rule
    return None


def classify_line(line: str) -> str | None:
    """Return the name of the rule that would handle *line*, if any.

    >>> classify_line('commit 5d7a1e0c')
    'commit'
    >>> classify_line('    3 files changed')
    'stats'
    >>> classify_line('random noise') is None
    True
    """
    line = line.rstrip('\r\n')
    if not line:
        return None
    rule = _rule_for(line)
    return rule.name if rule else None


class ChangeSetParser:
    """Turns the lines of one commit block into a :class:`ChangeSet`.

    The parser keeps no state between calls, so one instance can be
    shared freely across threads.

    Example::

        parser = ChangeSetParser()
        cs = parser.parse([
            'commit abc123',
            'Author: Jane Doe <jane@example.com>',
            'Date: 1600000000 +0000',
            '    Initial commit',
        ])
        assert cs.commit_id == 'abc123'
        assert cs.title == 'Initial commit'
    """

    def parse(self, lines: Sequence[str], *, author_or_committer: bool = False) -> ChangeSet:
        """Parse one commit block.

        Args:
            lines: The block's lines, in log order.  Trailing newlines
                are ignored.
            author_or_committer: Whether the resulting change set
                reports the author (``True``) or the committer.

        Returns:
            The parsed, immutable :class:`ChangeSet`.

        Raises:
            EmptyInputError: If *lines* is empty.
        """
        if not lines:
            raise EmptyInputError(
                'cannot parse a change set from zero lines',
                hint='split the log into per-commit blocks before parsing',
            )

        builder = _ChangeSetBuilder(author_or_committer=author_or_committer)
        for raw in lines:
            line = raw.rstrip('\r\n')
            if not line:
                continue
            rule = _rule_for(line)
            if rule is not None:
                rule.apply(builder, line)

        changeset = builder.build()
        logger.debug(
            'changeset_parsed',
            commit=changeset.id,
            files=len(changeset.file_changes),
        )
        return changeset


__all__ = [
    'RULES',
    'ChangeSetParser',
    'LineRule',
    'classify_line',
]
