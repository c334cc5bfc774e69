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

"""Tests for changesetkit.logging module."""

from __future__ import annotations

import logging
from unittest.mock import patch

import changesetkit.logging as cl
from changesetkit.logging import (
    _REDACTED,
    _scrub,
    configure_logging,
    get_logger,
    redact_email_addresses,
)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_default_level_is_info(self) -> None:
        """Default logging level should be INFO."""
        configure_logging()
        assert logging.root.level == logging.INFO

    def test_verbose_sets_debug(self) -> None:
        """Verbose flag should set DEBUG level."""
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG

    def test_quiet_sets_warning(self) -> None:
        """Quiet flag should set WARNING level."""
        configure_logging(quiet=True)
        assert logging.root.level == logging.WARNING

    def test_json_log_does_not_crash(self) -> None:
        """JSON log mode should configure without errors."""
        configure_logging(json_log=True)
        log = get_logger()
        log.info('test_json', key='value')

    def test_logger_can_log(self) -> None:
        """Logger should emit messages without crashing."""
        configure_logging(quiet=True)
        log = get_logger('test')
        log.info('test message', key='value')
        log.debug('debug message')
        log.warning('warning message')


class TestRedactEmailAddresses:
    """Tests for the structlog email redaction processor."""

    def test_redacts_when_enabled(self) -> None:
        """Email addresses in any string field are replaced."""
        old = cl._redaction_enabled
        try:
            cl._redaction_enabled = True
            result = redact_email_addresses(
                None,
                'debug',
                {'event': 'skipped', 'line': 'Author: Jane <jane.doe+x@example.co.uk>', 'count': 3},
            )
            assert result['line'] == f'Author: Jane <{_REDACTED}>'
            assert result['count'] == 3
        finally:
            cl._redaction_enabled = old

    def test_noop_when_disabled(self) -> None:
        """The event dict is returned untouched when redaction is off."""
        old = cl._redaction_enabled
        try:
            cl._redaction_enabled = False
            event = {'event': 'x', 'email': 'a@b.c'}
            assert redact_email_addresses(None, 'info', event) is event
        finally:
            cl._redaction_enabled = old

    def test_scrub_returns_non_strings_unchanged(self) -> None:
        """_scrub passes through non-string types."""
        assert _scrub(42) == 42
        assert _scrub(None) is None

    def test_flag_enables_redaction(self) -> None:
        """redact_emails=True turns the processor on."""
        configure_logging(quiet=True, redact_emails=True)
        assert cl._redaction_enabled is True
        configure_logging(quiet=True)
        assert cl._redaction_enabled is False

    def test_env_var_enables_redaction(self) -> None:
        """CHANGESETKIT_REDACT_EMAILS=1 turns the processor on."""
        with patch.dict('os.environ', {'CHANGESETKIT_REDACT_EMAILS': '1'}, clear=False):
            configure_logging(quiet=True)
            assert cl._redaction_enabled is True
        configure_logging(quiet=True)
