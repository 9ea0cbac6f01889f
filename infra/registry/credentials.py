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

"""Registry credentials from a docker ``config.json``."""

import base64
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Tuple

from infra.registry.references import DOCKER_HUB_ALIASES, DOCKER_HUB_REGISTRY

logger = logging.getLogger(__name__)

DOCKER_CONFIG_ENV = "DOCKER_CONFIG"
DOCKER_HUB_AUTH_KEY = "https://index.docker.io/v1/"

Credentials = Tuple[str, str]


def _normalize_host(key: str) -> str:
    host = key
    for scheme in ("https://", "http://"):
        if host.startswith(scheme):
            host = host[len(scheme):]
    host = host.split("/", 1)[0]
    if host in DOCKER_HUB_ALIASES:
        return DOCKER_HUB_REGISTRY
    return host


class DockerConfigCredentials:
    """Basic credentials per registry host, read once from ``config.json``.

    ``$DOCKER_CONFIG/config.json`` wins over the configured path. A missing
    or unreadable file yields no credentials, so every registry is accessed
    anonymously.
    """

    def __init__(self, config_path: Optional[str] = None):
        self._credentials: Dict[str, Credentials] = {}
        path = self._resolve_path(config_path)
        if path is not None:
            self._load(path)

    @staticmethod
    def _resolve_path(config_path: Optional[str]) -> Optional[Path]:
        docker_config = os.getenv(DOCKER_CONFIG_ENV)
        if docker_config:
            return Path(docker_config) / "config.json"
        if config_path:
            return Path(config_path)
        return None

    def _load(self, path: Path) -> None:
        if not path.exists():
            logger.info("Docker config %s not found, using anonymous registry access", path)
            return
        try:
            with open(path, "r", encoding="utf-8") as config_file:
                auths = json.load(config_file).get("auths") or {}
        except (OSError, ValueError, AttributeError) as exc:
            logger.warning("Failed to read docker config %s: %s", path, exc)
            return

        for key, entry in auths.items():
            credentials = self._decode(entry)
            if credentials:
                self._credentials[_normalize_host(key)] = credentials
        logger.info("Loaded registry credentials for %d hosts", len(self._credentials))

    @staticmethod
    def _decode(entry: Dict[str, str]) -> Optional[Credentials]:
        if not isinstance(entry, dict):
            return None
        if entry.get("username") and entry.get("password"):
            return entry["username"], entry["password"]
        encoded = entry.get("auth")
        if not encoded:
            return None
        try:
            username, _, password = base64.b64decode(encoded).decode("utf-8").partition(":")
        except (ValueError, UnicodeDecodeError):
            return None
        if not username:
            return None
        return username, password

    def get(self, registry: str) -> Optional[Credentials]:
        """Return ``(username, password)`` for ``registry``, if configured."""
        return self._credentials.get(_normalize_host(registry))
