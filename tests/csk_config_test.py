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

"""Tests for changesetkit configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from changesetkit.changeset import ChangeSet, parse_changeset
from changesetkit.config import ChangeSetConfig, _parse_config, load_config
from changesetkit.errors import ChangeSetError


class TestParseConfig:
    """Tests for _parse_config() validation."""

    def test_empty_section(self) -> None:
        """An empty table gives the defaults."""
        assert _parse_config({}) == ChangeSetConfig()

    def test_defaults(self) -> None:
        """All switches default to off."""
        cfg = ChangeSetConfig()
        assert cfg.author_or_committer is False
        assert cfg.create_account_based_on_email is False
        assert cfg.json_output is False

    def test_values(self) -> None:
        """Known keys are applied."""
        cfg = _parse_config({'author_or_committer': True, 'json_output': True})
        assert cfg.author_or_committer is True
        assert cfg.json_output is True
        assert cfg.create_account_based_on_email is False

    def test_unknown_key_rejected(self) -> None:
        """Unknown keys are an error."""
        with pytest.raises(ChangeSetError, match='Unknown key'):
            _parse_config({'bogus': True})

    def test_wrong_type_rejected(self) -> None:
        """Values must be booleans."""
        with pytest.raises(ChangeSetError, match='changesetkit.json_output must be a boolean'):
            _parse_config({'json_output': 'yes'})


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file yields defaults."""
        assert load_config(tmp_path / 'absent.toml') == ChangeSetConfig()

    def test_empty_directory(self, tmp_path: Path) -> None:
        """A directory without config files yields defaults."""
        assert load_config(tmp_path) == ChangeSetConfig()

    def test_pyproject_section(self, tmp_path: Path) -> None:
        """The [tool.changesetkit] table of pyproject.toml is read."""
        (tmp_path / 'pyproject.toml').write_text(
            '[project]\nname = "x"\n\n[tool.changesetkit]\nauthor_or_committer = true\n',
            encoding='utf-8',
        )
        assert load_config(tmp_path).author_or_committer is True

    def test_pyproject_without_section(self, tmp_path: Path) -> None:
        """A pyproject.toml without our table yields defaults."""
        path = tmp_path / 'pyproject.toml'
        path.write_text('[project]\nname = "x"\n', encoding='utf-8')
        assert load_config(path) == ChangeSetConfig()

    def test_dedicated_file_preferred(self, tmp_path: Path) -> None:
        """changesetkit.toml wins over pyproject.toml."""
        (tmp_path / 'changesetkit.toml').write_text('json_output = true\n', encoding='utf-8')
        (tmp_path / 'pyproject.toml').write_text('[tool.changesetkit]\nbogus = 1\n', encoding='utf-8')
        assert load_config(tmp_path).json_output is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML is reported."""
        path = tmp_path / 'changesetkit.toml'
        path.write_text('json_output = = true\n', encoding='utf-8')
        with pytest.raises(ChangeSetError, match='Invalid TOML'):
            load_config(path)

    def test_section_not_a_table(self, tmp_path: Path) -> None:
        """[tool] changesetkit must be a table."""
        path = tmp_path / 'pyproject.toml'
        path.write_text('[tool]\nchangesetkit = 3\n', encoding='utf-8')
        with pytest.raises(ChangeSetError, match='must be a table'):
            load_config(path)


class _KeyRecorder:
    """Identity resolver double that records the keying choice."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, bool]] = []

    def resolve(self, name: str, email: str, *, prefer_email: bool) -> str:
        self.calls.append((name, email, prefer_email))
        return email if prefer_email else name


class TestConfigResolveAuthor:
    """Tests for ChangeSetConfig.resolve_author()."""

    def _changeset(self) -> ChangeSet:
        return parse_changeset(['commit abc', 'Author: Jane Doe <jane@example.com>'])

    def test_keys_by_name_by_default(self) -> None:
        """The default config resolves by display name."""
        resolver = _KeyRecorder()
        assert ChangeSetConfig().resolve_author(self._changeset(), resolver) == 'Jane Doe'
        assert resolver.calls == [('Jane Doe', 'jane@example.com', False)]

    def test_email_setting_passed_through(self) -> None:
        """create_account_based_on_email becomes prefer_email."""
        resolver = _KeyRecorder()
        cfg = ChangeSetConfig(create_account_based_on_email=True)
        assert cfg.resolve_author(self._changeset(), resolver) == 'jane@example.com'
        assert resolver.calls == [('Jane Doe', 'jane@example.com', True)]

    def test_setting_loaded_from_file(self, tmp_path: Path) -> None:
        """The TOML setting reaches the resolver."""
        (tmp_path / 'changesetkit.toml').write_text('create_account_based_on_email = true\n', encoding='utf-8')
        resolver = _KeyRecorder()
        load_config(tmp_path).resolve_author(self._changeset(), resolver)
        assert resolver.calls[0][2] is True
