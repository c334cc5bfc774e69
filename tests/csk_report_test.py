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

"""Tests for Rich and JSON rendering of change sets."""

from __future__ import annotations

import json

from changesetkit.changeset import parse_changeset
from changesetkit.report import (
    changeset_to_dict,
    changesets_to_json,
    format_changeset_table,
)

_OLD = 'a' * 40
_NEW = 'b' * 40

_BLOCK = [
    'commit 1234567890abcdef1234567890abcdef12345678',
    'Author: Ann Author <ann@example.com>',
    'Date: 1600000000 +0000',
    '    Rename the docs',
    ' 2 files changed, 4 insertions(+), 1 deletion(-)',
    f':100644 100644 {_OLD} {_NEW} R090\tdocs/old.md\tdocs/new.md',
    f':100644 100644 {_OLD} {_NEW} M\tsetup.py',
]


class TestChangesetToDict:
    """Tests for changeset_to_dict()."""

    def test_fields(self) -> None:
        """Header fields and stats are included."""
        d = changeset_to_dict(parse_changeset(_BLOCK))
        assert d['id'] == '1234567890abcdef1234567890abcdef12345678'
        assert d['author'] == 'Ann Author'
        assert d['email'] == 'ann@example.com'
        assert d['date'] == '2020-09-13 12:26:40 +0000'
        assert d['title'] == 'Rename the docs'
        assert (d['files_changed'], d['insertions'], d['deletions']) == (2, 4, 1)

    def test_files_sorted(self) -> None:
        """Files are listed by path, then kind."""
        d = changeset_to_dict(parse_changeset(_BLOCK))
        assert [(f['path'], f['edit_kind']) for f in d['files']] == [
            ('docs/new.md', 'add'),
            ('docs/old.md', 'delete'),
            ('setup.py', 'modify'),
        ]

    def test_absent_ids_are_null(self) -> None:
        """Absent content ids serialize as null."""
        d = changeset_to_dict(parse_changeset([f':000000 100644 {"0" * 40} {_NEW} A\tx']))
        assert d['files'][0]['src'] is None
        assert d['id'] is None


class TestChangesetsToJson:
    """Tests for changesets_to_json()."""

    def test_round_trips_through_json(self) -> None:
        """The output is a JSON array of objects."""
        data = json.loads(changesets_to_json([parse_changeset(_BLOCK)]))
        assert isinstance(data, list)
        assert data[0]['branch'] is None

    def test_empty(self) -> None:
        """No change sets gives an empty array."""
        assert json.loads(changesets_to_json([])) == []


class TestFormatTable:
    """Tests for format_changeset_table()."""

    def test_contains_summary(self) -> None:
        """The table shows the short id, author and title."""
        out = format_changeset_table([parse_changeset(_BLOCK)])
        assert '1234567890ab' in out
        assert 'Ann Author' in out
        assert 'Rename the docs' in out
        assert '1 change set(s).' in out

    def test_lists_files(self) -> None:
        """Each file is listed with its edit mark."""
        out = format_changeset_table([parse_changeset(_BLOCK)])
        assert 'A docs/new.md' in out
        assert 'D docs/old.md' in out
        assert 'M setup.py' in out

    def test_no_color_by_default(self) -> None:
        """Plain output has no ANSI escapes."""
        out = format_changeset_table([parse_changeset(_BLOCK)])
        assert '\x1b[' not in out
