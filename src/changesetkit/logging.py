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

"""Structured logging for changesetkit.

Configures `structlog <https://www.structlog.org/>`_ with two output modes:

- **Console** (default when TTY): colored, human-readable output.
- **JSON** (``--json-log``): one JSON object per line.

Both modes write to stderr so stdout stays clean for piped output
(e.g., ``changesetkit show changelog.txt --json | jq``).

Change sets carry author and committer email addresses.  When
redaction is on, every address in a log event is replaced with
``[REDACTED]`` before rendering.

Usage::

    from changesetkit.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger()
    log.info('parsed changelog', commits=12)
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Any

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    redact_emails: bool = False,
) -> None:
    """Configure structlog for changesetkit.

    Should be called once at startup, before any logging calls.

    Args:
        verbose: Enable debug-level output.
        quiet: Suppress info-level output (only warnings and errors).
        json_log: Use JSON output instead of colored console output.
        redact_emails: Scrub email addresses from log output.  Can also
            be enabled via the ``CHANGESETKIT_REDACT_EMAILS=1`` env var.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    global _redaction_enabled  # noqa: PLW0603
    _redaction_enabled = redact_emails or os.environ.get('CHANGESETKIT_REDACT_EMAILS', '0') == '1'

    shared_processors: list[structlog.types.Processor] = [  # type: ignore[assignment]
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_email_addresses,
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'changesetkit') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger.

    Args:
        name: Logger name, used for filtering and identification.

    Returns:
        A :class:`structlog.stdlib.BoundLogger` instance.
    """
    return structlog.get_logger(name)


_EMAIL_RE: re.Pattern[str] = re.compile(r'[\w.+-]+@[\w-]+(?:\.[\w-]+)*')

_REDACTED = '[REDACTED]'

# Set by configure_logging(); read by the processor.
_redaction_enabled: bool = False


def _scrub(value: object) -> object:
    """Replace every email address in a string value with ``[REDACTED]``."""
    if not isinstance(value, str):
        return value
    return _EMAIL_RE.sub(_REDACTED, value)


def redact_email_addresses(
    logger: Any,  # noqa: ANN401
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor: scrub email addresses from all event fields."""
    if not _redaction_enabled:
        return event_dict
    return {k: _scrub(v) for k, v in event_dict.items()}


__all__ = [
    'configure_logging',
    'get_logger',
    'redact_email_addresses',
]
