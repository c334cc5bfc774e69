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

"""Exception hierarchy for changesetkit.

Only caller mistakes are raised.  Malformed individual log lines are a
data-quality problem and never surface as exceptions; the parser skips
them and logs at debug level instead.
"""

from __future__ import annotations

__all__ = [
    'ChangeSetError',
    'EmptyInputError',
    'MissingDataError',
]


class ChangeSetError(Exception):
    """Base class for all changesetkit errors.

    Attributes:
        message: Human-readable description of the problem.
        hint: Optional suggestion for fixing it.
    """

    def __init__(self, message: str, *, hint: str = '') -> None:
        """Initialize with a message and an optional hint."""
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        """Return the message, followed by the hint when present."""
        if self.hint:
            return f'{self.message} (hint: {self.hint})'
        return self.message


class EmptyInputError(ChangeSetError, ValueError):
    """Raised when asked to parse a commit block with no lines."""


class MissingDataError(ChangeSetError, LookupError):
    """Raised when a change set lacks a field the caller asked for."""
