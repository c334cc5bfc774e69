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

"""Render parsed change sets as a Rich table or as JSON.

Usage::

    from changesetkit.report import changesets_to_json, print_changeset_table

    print_changeset_table(changesets)
    print(changesets_to_json(changesets))
"""

from __future__ import annotations

import json
from io import StringIO
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from changesetkit.changeset import ChangeSet, EditKind

_KIND_MARK: dict[EditKind, tuple[str, str]] = {
    EditKind.ADD: ('A', 'green'),
    EditKind.DELETE: ('D', 'red'),
    EditKind.MODIFY: ('M', 'yellow'),
}


def changeset_to_dict(cs: ChangeSet) -> dict[str, Any]:
    """Return a JSON-friendly view of *cs*.

    File changes are sorted by path, then edit kind, so the output is
    stable across runs.
    """
    files = sorted(cs.file_changes, key=lambda fc: (fc.path, fc.edit_kind.value))
    return {
        'id': cs.id,
        'parent': cs.parent_commit,
        'branch': cs.branch,
        'author': cs.author_name,
        'email': cs.author_email_address,
        'date': cs.date,
        'title': cs.title,
        'message': cs.message,
        'files_changed': cs.files_changed,
        'insertions': cs.insertions,
        'deletions': cs.deletions,
        'files': [
            {
                'path': fc.path,
                'edit_kind': fc.edit_kind.value,
                'src': fc.src,
                'dst': fc.dst,
            }
            for fc in files
        ],
    }


def changesets_to_json(changesets: list[ChangeSet], *, indent: int = 2) -> str:
    """Serialize change sets to a JSON array."""
    return json.dumps([changeset_to_dict(cs) for cs in changesets], indent=indent)


def print_changeset_table(
    changesets: list[ChangeSet],
    console: Console | None = None,
) -> None:
    """Print one row per change set, followed by its file list.

    Args:
        changesets: Change sets to show, in display order.
        console: Rich :class:`Console` to print to.  When ``None``,
            a default ``Console()`` is created (auto-detects TTY).
    """
    if console is None:
        console = Console()

    table = Table(
        show_header=True,
        header_style='bold',
        show_edge=False,
        pad_edge=False,
        expand=True,
    )
    table.add_column('Commit', width=12, style='bold')
    table.add_column('Author', min_width=12)
    table.add_column('Date', min_width=19)
    table.add_column('Title', ratio=3)
    table.add_column('Files', justify='right')
    table.add_column('+/-', justify='right')

    for cs in changesets:
        stats = Text()
        stats.append(f'+{cs.insertions}', style='green')
        stats.append('/')
        stats.append(f'-{cs.deletions}', style='red')
        table.add_row(
            (cs.id or '?')[:12],
            Text(cs.author_name),
            cs.date,
            Text(cs.title),
            str(cs.files_changed or len(cs.affected_paths)),
            stats,
        )

    console.print(table)

    for cs in changesets:
        if not cs.file_changes:
            continue
        console.print(f'\n[bold]{(cs.id or "?")[:12]}[/] {escape(cs.title)}')
        for fc in sorted(cs.file_changes, key=lambda fc: (fc.path, fc.edit_kind.value)):
            mark, style = _KIND_MARK[fc.edit_kind]
            console.print(f'  [{style}]{mark}[/] {escape(fc.path)}', highlight=False)

    console.print(f'\n{len(changesets)} change set(s).')


def format_changeset_table(
    changesets: list[ChangeSet],
    *,
    color: bool = False,
) -> str:
    """Format change sets as a string.

    Thin wrapper around :func:`print_changeset_table` that captures the
    Rich output.  Useful for tests and non-interactive callers.
    """
    buf = StringIO()
    console = Console(file=buf, force_terminal=color, width=120)
    print_changeset_table(changesets, console=console)
    return buf.getvalue().rstrip('\n')


__all__ = [
    'changeset_to_dict',
    'changesets_to_json',
    'format_changeset_table',
    'print_changeset_table',
]
