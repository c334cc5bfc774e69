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

"""Parse version-control log output into structured change sets.

See :mod:`changesetkit.changeset` for the data model and parser,
:mod:`changesetkit.changelog` for splitting a whole log into commits.
"""

from changesetkit.changeset import (
    ChangeSet,
    ChangeSetParser,
    EditKind,
    FileChange,
    parse_changeset,
)
from changesetkit.errors import ChangeSetError, EmptyInputError, MissingDataError

__version__ = '0.1.0'

__all__ = [
    'ChangeSet',
    'ChangeSetError',
    'ChangeSetParser',
    'EditKind',
    'EmptyInputError',
    'FileChange',
    'MissingDataError',
    'parse_changeset',
]
