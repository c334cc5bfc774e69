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

"""Pure types for parsed change sets.

This module has **zero** runtime dependencies beyond the standard library
and :mod:`changesetkit.errors`.  Everything here is a frozen dataclass,
enum, or protocol: no I/O, no logging, no side effects.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from changesetkit.errors import MissingDataError

# Content id git prints for "no such blob" (added or deleted file).
NULL_HASH = '0' * 40

UNKNOWN_AUTHOR = 'Unknown'

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class EditKind(Enum):
    """How a file was affected by a change set.

    Renames and copies are expanded into adds and deletes by the parser,
    so only three kinds remain.
    """

    ADD = 'add'
    DELETE = 'delete'
    MODIFY = 'modify'

    @classmethod
    def for_action(cls, action: str) -> EditKind:
        """Map a raw git status letter to an edit kind.

        >>> EditKind.for_action('A')
        <EditKind.ADD: 'add'>
        >>> EditKind.for_action('T')
        <EditKind.MODIFY: 'modify'>
        """
        if action == 'A':
            return cls.ADD
        if action == 'D':
            return cls.DELETE
        return cls.MODIFY


def parse_hash(value: str) -> str | None:
    """Return ``None`` for the all-zero sentinel hash, else *value*."""
    return None if value == NULL_HASH else value


def parse_tz_offset(tz: str | None) -> timezone:
    """Turn a git ``±HHMM`` offset into a :class:`~datetime.timezone`.

    Anything else (missing, empty, malformed, out of range) yields UTC.

    >>> parse_tz_offset('+0200')
    datetime.timezone(datetime.timedelta(seconds=7200))
    >>> parse_tz_offset('bogus')
    datetime.timezone.utc
    """
    if tz is None or len(tz) != 5 or tz[0] not in '+-' or not (tz[1:].isascii() and tz[1:].isdigit()):
        return timezone.utc
    hours, minutes = int(tz[1:3]), int(tz[3:5])
    if minutes >= 60:
        return timezone.utc
    offset = timedelta(hours=hours, minutes=minutes)
    try:
        return timezone(-offset if tz[0] == '-' else offset)
    except ValueError:
        return timezone.utc


@dataclass(frozen=True)
class FileChange:
    """A single file touched by a change set.

    Attributes:
        src: Content id before the change, ``None`` if the file did not
            exist (or the status letter carries no content ids).
        dst: Content id after the change, ``None`` if the file no longer
            exists.
        edit_kind: Collapsed edit classification.
        path: Repository-relative path of the file.
        owner: The :class:`ChangeSet` this entry belongs to.  Not part
            of equality or hashing.
    """

    src: str | None
    dst: str | None
    edit_kind: EditKind
    path: str
    owner: ChangeSet | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, eq=False)
class ChangeSet:
    """One commit parsed from ``git whatchanged``-style log output.

    Instances are immutable.  Two change sets are equal when their commit
    ids are equal; a change set without an id is only equal to itself.

    Attributes:
        id: Full commit hash, ``None`` if the block had no ``commit`` line.
        parent_commit: Hash from the last ``parent`` line seen.
        branch: Branch name from a ``Changes in branch`` header.
        author: Author display name.
        author_email: Author email address.
        committer: Committer display name.
        committer_email: Committer email address.
        author_time: Raw epoch-seconds string.
        author_tz: Raw timezone offset string (e.g. ``"+0100"``).
        committer_time: Raw epoch-seconds string.
        committer_tz: Raw timezone offset string.
        message: Commit message with the four-space indent removed,
            one trailing newline per line.
        files_changed: Count from the summary line, 0 if absent.
        insertions: Count from the summary line, 0 if absent.
        deletions: Count from the summary line, 0 if absent.
        file_changes: Deduplicated file entries.
        author_or_committer: Whether accessors surface the author
            (``True``) or the committer (``False``).
    """

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
    message: str = ''
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0
    file_changes: frozenset[FileChange] = frozenset()
    author_or_committer: bool = False

    def __post_init__(self) -> None:
        """Point every file change back at this change set."""
        owned = frozenset(replace(fc, owner=self) for fc in self.file_changes)
        object.__setattr__(self, 'file_changes', owned)

    def __eq__(self, other: object) -> bool:
        """Compare by commit id."""
        if other is self:
            return True
        if isinstance(other, ChangeSet):
            return self.id is not None and self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        """Hash by commit id, falling back to identity."""
        if self.id is not None:
            return hash(self.id)
        return object.__hash__(self)

    @property
    def commit_id(self) -> str:
        """The commit hash.

        Raises:
            MissingDataError: If the log block had no ``commit`` line.
        """
        if self.id is None:
            raise MissingDataError(
                'change set has no commit id',
                hint='the log block is missing its "commit <hash>" line',
            )
        return self.id

    @property
    def revision(self) -> str | None:
        """Alias for :attr:`id`."""
        return self.id

    @property
    def title(self) -> str:
        """First line of the commit message."""
        return self.message.split('\n', 1)[0]

    @property
    def affected_paths(self) -> frozenset[str]:
        """Paths of every file change."""
        return frozenset(fc.path for fc in self.file_changes)

    @property
    def author_name(self) -> str:
        """Author or committer name, depending on :attr:`author_or_committer`."""
        name = self.author if self.author_or_committer else self.committer
        return name if name is not None else UNKNOWN_AUTHOR

    @property
    def author_email_address(self) -> str:
        """Email paired with :attr:`author_name`, ``''`` when unknown."""
        email = self.author_email if self.author_or_committer else self.committer_email
        return email or ''

    def _selected_time(self) -> tuple[str | None, str | None]:
        if self.author_or_committer:
            return self.author_time, self.author_tz
        return self.committer_time, self.committer_tz

    @property
    def timestamp(self) -> int:
        """Selected epoch seconds, 0 when missing or not an integer."""
        raw, _ = self._selected_time()
        try:
            return int(raw) if raw is not None else 0
        except ValueError:
            return 0

    @property
    def date(self) -> str:
        """Selected commit time as ``YYYY-MM-DD HH:MM:SS <tz>``.

        The time is rendered in the commit's own ``±HHMM`` offset (UTC
        when the offset cannot be read) and followed by the raw timezone
        string from the log.  If the epoch value is missing or not an
        integer, the current time is used instead.
        """
        raw, tz = self._selected_time()
        zone = parse_tz_offset(tz)
        try:
            when = datetime.fromtimestamp(int(raw), tz=zone)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError, OSError):
            when = datetime.now(tz=zone)
        rendered = when.strftime(DATE_FORMAT)
        return rendered if tz is None else f'{rendered} {tz}'

    def resolve_author(self, resolver: UserResolver, *, prefer_email: bool = False) -> Any:  # noqa: ANN401
        """Hand the selected name and email to an identity resolver.

        Args:
            resolver: Collaborator that maps a name/email pair to a user.
            prefer_email: Key the identity by email rather than name.

        Returns:
            Whatever *resolver* returns.
        """
        return resolver.resolve(self.author_name, self.author_email_address, prefer_email=prefer_email)

    def annotated_message(self, annotators: Iterable[MessageAnnotator] = ()) -> str:
        """Return the message after passing it through each annotator in turn."""
        text = self.message
        for annotator in annotators:
            text = annotator.annotate(text, self)
        return text


@runtime_checkable
class UserResolver(Protocol):
    """Maps an author name and email to a user identity.

    Implementations live outside changesetkit; the change set only
    supplies the raw strings.
    """

    def resolve(self, name: str, email: str, *, prefer_email: bool) -> Any:  # noqa: ANN401
        """Return a user identity for *name* / *email*."""
        ...


@runtime_checkable
class MessageAnnotator(Protocol):
    """Marks up a commit message for display (e.g. linking issue ids)."""

    def annotate(self, message: str, changeset: ChangeSet) -> str:
        """Return *message* with markup added."""
        ...
