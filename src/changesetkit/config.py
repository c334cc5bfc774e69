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

"""Configuration for changesetkit.

Settings are read from either a ``changesetkit.toml`` file (top-level
keys) or the ``[tool.changesetkit]`` table of a ``pyproject.toml``::

    [tool.changesetkit]
    author_or_committer = true
    create_account_based_on_email = false
    json_output = false

Unknown keys and wrongly-typed values are rejected with a
:class:`~changesetkit.errors.ChangeSetError`.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from changesetkit.changeset import ChangeSet, UserResolver
from changesetkit.errors import ChangeSetError
from changesetkit.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = 'changesetkit.toml'


@dataclass(frozen=True)
class ChangeSetConfig:
    """Resolved changesetkit settings.

    Attributes:
        author_or_committer: Report the commit author (``True``) rather
            than the committer.
        create_account_based_on_email: Ask identity resolvers to key
            users by email instead of by display name; applied by
            :meth:`resolve_author`.
        json_output: Default the CLI to JSON output.
    """

    author_or_committer: bool = False
    create_account_based_on_email: bool = False
    json_output: bool = False

    def resolve_author(self, changeset: ChangeSet, resolver: UserResolver) -> Any:  # noqa: ANN401
        """Resolve *changeset*'s author, keyed as this config asks.

        Passes :attr:`create_account_based_on_email` through as the
        resolver's ``prefer_email`` flag.
        """
        return changeset.resolve_author(resolver, prefer_email=self.create_account_based_on_email)


_KNOWN_KEYS: frozenset[str] = frozenset(f.name for f in fields(ChangeSetConfig))


def _parse_config(raw: dict[str, Any]) -> ChangeSetConfig:
    """Validate a raw TOML table and build a :class:`ChangeSetConfig`."""
    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        raise ChangeSetError(
            f'Unknown key(s) in changesetkit config: {", ".join(unknown)}',
            hint=f'valid keys are: {", ".join(sorted(_KNOWN_KEYS))}',
        )
    for key, value in raw.items():
        if not isinstance(value, bool):
            raise ChangeSetError(f'changesetkit.{key} must be a boolean, got {type(value).__name__}')
    return ChangeSetConfig(**raw)


def load_config(path: Path) -> ChangeSetConfig:
    """Load settings from *path*.

    *path* may be a ``pyproject.toml`` (reads ``[tool.changesetkit]``),
    any other TOML file (reads top-level keys), or a directory, in which
    case ``changesetkit.toml`` and then ``pyproject.toml`` are tried.
    A missing file yields the defaults.

    Raises:
        ChangeSetError: If the file is not valid TOML or the settings
            are invalid.
    """
    if path.is_dir():
        for name in (CONFIG_FILENAME, 'pyproject.toml'):
            if (path / name).is_file():
                return load_config(path / name)
        return ChangeSetConfig()

    if not path.is_file():
        logger.debug('config_not_found', path=str(path))
        return ChangeSetConfig()

    try:
        data = tomllib.loads(path.read_text(encoding='utf-8'))
    except tomllib.TOMLDecodeError as exc:
        raise ChangeSetError(f'Invalid TOML in {path}: {exc}') from exc

    if path.name == 'pyproject.toml':
        section = data.get('tool', {}).get('changesetkit', {})
    else:
        section = data
    if not isinstance(section, dict):
        raise ChangeSetError(f'[tool.changesetkit] in {path} must be a table')

    config = _parse_config(section)
    logger.debug('config_loaded', path=str(path))
    return config


__all__ = [
    'CONFIG_FILENAME',
    'ChangeSetConfig',
    'load_config',
]
