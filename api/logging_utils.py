# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
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

"""Secure logging utilities for the Lissto API.

Provides per-request file logging with automatic redaction of sensitive data
(IP addresses, JWT tokens, passwords, API keys, emails) so that request log
files never contain exploitable information. Request files are written only
when ``LISSTO_LOG_DIR`` is set.
"""

import logging
import os
import re
import traceback
from pathlib import Path
from typing import Dict, Optional

LOG_DIR_ENV = "LISSTO_LOG_DIR"

_LOG_FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

_request_loggers: Dict[str, logging.Logger] = {}

# ---------------------------------------------------------------------------
# Sensitive-data redaction patterns
# ---------------------------------------------------------------------------
_SENSITIVE_PATTERNS = [
    # IPv4 addresses  (e.g. 192.168.1.100)
    (re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b"), "<REDACTED_IP>"),
    # IPv6 addresses, colon-hex groups
    (re.compile(r"\b(?:[0-9a-fA-F]{1,4}:){2,7}[0-9a-fA-F]{1,4}\b"), "<REDACTED_IP>"),
    # JWTs
    (re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"), "<REDACTED_TOKEN>"),
    # Authorization header values
    (re.compile(r"(?i)(bearer\s+)[A-Za-z0-9_\-\.]+"), r"\1<REDACTED_TOKEN>"),
    # password=, secret=, token= and friends
    (re.compile(
        r"(?i)((?:password|passwd|secret|api_key|apikey|token|auth_token)"
        r"\s*[=:]\s*)[^\s,;\"']+"
    ), r"\1<REDACTED>"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"), "<REDACTED_EMAIL>"),
]

_SEPARATOR = "-" * 80

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,127}$")


def sanitize_message(message: str) -> str:
    """Redact sensitive data from a log message."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def _log_base() -> Optional[Path]:
    value = os.getenv(LOG_DIR_ENV)
    return Path(value) if value else None


# ---------------------------------------------------------------------------
# Request log-file lifecycle
# ---------------------------------------------------------------------------
def _get_or_create_request_logger(request_id: str) -> Optional[logging.Logger]:
    """Return a cached per-request logger writing ``<LOG_DIR>/requests/<id>.log``."""
    if request_id in _request_loggers:
        return _request_loggers[request_id]

    base = _log_base()
    if base is None or not _SAFE_REQUEST_ID.match(request_id):
        return None

    try:
        log_dir = base / "requests"
        log_dir.mkdir(parents=True, exist_ok=True)
        request_logger = logging.getLogger(f"lissto.request.{request_id}")
        request_logger.setLevel(logging.DEBUG)
        request_logger.propagate = False
        handler = logging.FileHandler(str(log_dir / f"{request_id}.log"), mode="a")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(_LOG_FORMATTER)
        request_logger.addHandler(handler)
        _request_loggers[request_id] = request_logger
        return request_logger
    except OSError:
        logging.getLogger(__name__).warning(
            "Failed to create request log file for request: %s", request_id
        )
        return None


def remove_request_logger(request_id: str) -> None:
    """Flush, close, and remove the cached logger for *request_id*."""
    request_logger = _request_loggers.pop(request_id, None)
    if request_logger is None:
        return
    for handler in list(request_logger.handlers):
        handler.flush()
        handler.close()
        request_logger.removeHandler(handler)


# ---------------------------------------------------------------------------
# Public logging entry point
# ---------------------------------------------------------------------------
def log_secure_info(
    level: str,
    message: str,
    identifier: Optional[str] = None,
    request_id: Optional[str] = None,
    exc_info: bool = False,
    end_section: bool = False,
) -> None:
    """Log a message after redacting sensitive data.

    * *identifier* is truncated to its first 8 characters.
    * IP addresses, JWT tokens, passwords, API keys, and emails are
      automatically replaced with ``<REDACTED_*>`` placeholders.
    * When *request_id* is supplied the entry is also written to the
      per-request log file.

    Args:
        level: ``'info'``, ``'warning'``, ``'error'``, ``'debug'``, or ``'critical'``.
        message: Human-readable log message.
        identifier: Optional opaque id; only the first 8 chars are kept.
        request_id: Route the entry to the request-specific log file.
        exc_info: Append the current exception traceback.
        end_section: Append a separator line to visually delimit this execution.
    """
    logger = logging.getLogger(__name__)

    if identifier:
        log_message = f"{message}: {identifier[:8]}..."
    else:
        log_message = message

    if exc_info:
        log_message = f"{log_message}\n{traceback.format_exc().rstrip()}"

    log_message = sanitize_message(log_message)

    log_func = getattr(logger, level, logger.info)
    log_func(log_message)

    if request_id:
        request_logger = _get_or_create_request_logger(request_id)
        if request_logger:
            request_log_func = getattr(request_logger, level, request_logger.info)
            request_log_func(log_message)
            if end_section:
                request_logger.info(_SEPARATOR)
