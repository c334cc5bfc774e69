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

r"""Change set model and commit block parser.

Usage::

    from changesetkit.changeset import EditKind, parse_changeset

    cs = parse_changeset([
        'commit abc123',
        'Author: Jane Doe <jane@example.com>',
        'Date: 1600000000 +0000',
        '    Initial commit',
        ':000000 100644 ' + '0' * 40 + ' ' + 'a' * 40 + ' A\tREADME.md',
    ])
    assert cs.commit_id == 'abc123'
    assert cs.author_name == 'Jane Doe'
    assert cs.affected_paths == {'README.md'}

    (entry,) = cs.file_changes
    assert entry.edit_kind is EditKind.ADD
    assert entry.src is None
"""

from collections.abc import Sequence

from changesetkit.changeset._parser import RULES, ChangeSetParser, LineRule, classify_line
from changesetkit.changeset._types import (
    NULL_HASH,
    UNKNOWN_AUTHOR,
    ChangeSet,
    EditKind,
    FileChange,
    MessageAnnotator,
    UserResolver,
    parse_hash,
    parse_tz_offset,
)

# Module-level singleton for convenience.
_DEFAULT_PARSER = ChangeSetParser()


def parse_changeset(lines: Sequence[str], *, author_or_committer: bool = False) -> ChangeSet:
    """Parse one commit block with the default parser.

    Convenience wrapper around :meth:`ChangeSetParser.parse`.

    Args:
        lines: Lines of a single commit block.
        author_or_committer: Report the author (``True``) or the
            committer (``False``) from the accessors.

    Returns:
        The parsed :class:`ChangeSet`.
    """
    return _DEFAULT_PARSER.parse(lines, author_or_committer=author_or_committer)


__all__ = [
    'NULL_HASH',
    'RULES',
    'UNKNOWN_AUTHOR',
    'ChangeSet',
    'ChangeSetParser',
    'EditKind',
    'FileChange',
    'LineRule',
    'MessageAnnotator',
    'UserResolver',
    'classify_line',
    'parse_changeset',
    'parse_hash',
    'parse_tz_offset',
]
