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

"""Compose document parsing and serialization."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import ValidationError, validate

from core.compose.entities import (
    DEFAULT_PROJECT_NAME,
    EXTENSION_KEY,
    ComposeProject,
    ComposeService,
    LisstoExtension,
)
from core.compose.exceptions import InvalidComposeError

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "resources" / "compose_schema.json"

_KNOWN_SERVICE_KEYS = {
    "image",
    "build",
    "labels",
    "deploy",
    "environment",
    "ports",
    "volumes",
    "command",
    "entrypoint",
    "container_name",
    "restart",
}

_KNOWN_PROJECT_KEYS = {"name", "services", "volumes", "networks", EXTENSION_KEY}


@lru_cache(maxsize=1)
def _load_schema() -> Dict[str, Any]:
    with open(_SCHEMA_PATH, "r", encoding="utf-8") as schema_file:
        return json.load(schema_file)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _normalize_labels(raw: Any) -> Dict[str, str]:
    """Accept both ``{key: value}`` and ``["key=value"]`` label forms."""
    if not raw:
        return {}
    if isinstance(raw, dict):
        return {str(key): _stringify(value) for key, value in raw.items()}

    labels: Dict[str, str] = {}
    for item in raw:
        key, _, value = str(item).partition("=")
        labels[key.strip()] = value
    return labels


def _normalize_environment(raw: Any) -> Dict[str, Optional[str]]:
    if not raw:
        return {}
    if isinstance(raw, dict):
        return {
            str(key): (None if value is None else _stringify(value))
            for key, value in raw.items()
        }

    environment: Dict[str, Optional[str]] = {}
    for item in raw:
        key, sep, value = str(item).partition("=")
        environment[key.strip()] = value if sep else None
    return environment


def _parse_service(name: str, raw: Dict[str, Any]) -> ComposeService:
    deploy = dict(raw.get("deploy") or {})
    if "labels" in deploy:
        deploy["labels"] = _normalize_labels(deploy["labels"])

    return ComposeService(
        name=name,
        image=raw.get("image"),
        build=raw.get("build"),
        labels=_normalize_labels(raw.get("labels")),
        deploy=deploy,
        environment=_normalize_environment(raw.get("environment")),
        ports=list(raw.get("ports") or []),
        volumes=list(raw.get("volumes") or []),
        command=raw.get("command"),
        entrypoint=raw.get("entrypoint"),
        container_name=raw.get("container_name"),
        restart=raw.get("restart"),
        extra={key: value for key, value in raw.items() if key not in _KNOWN_SERVICE_KEYS},
    )


def load_compose_document(content: str) -> Dict[str, Any]:
    """Parse compose YAML and validate its structure.

    Args:
        content: Raw compose YAML.

    Returns:
        The parsed document as a mapping.

    Raises:
        InvalidComposeError: If the YAML is malformed or fails schema validation.
    """
    if not content or not content.strip():
        raise InvalidComposeError("Compose content cannot be empty")

    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise InvalidComposeError(f"Failed to parse compose YAML: {exc}") from exc

    if not isinstance(document, dict):
        raise InvalidComposeError("Compose document must be a mapping")

    try:
        validate(instance=document, schema=_load_schema())
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path)
        suffix = f" at '{location}'" if location else ""
        raise InvalidComposeError(
            f"Compose validation failed{suffix}: {exc.message}"
        ) from exc

    return document


def parse_compose(content: str) -> ComposeProject:
    """Parse compose YAML into a ``ComposeProject``.

    Raises:
        InvalidComposeError: If the document is malformed.
    """
    document = load_compose_document(content)

    services = {
        str(name): _parse_service(str(name), raw)
        for name, raw in document["services"].items()
    }

    project = ComposeProject(
        name=str(document.get("name") or DEFAULT_PROJECT_NAME),
        services=services,
        volumes=dict(document.get("volumes") or {}),
        networks=dict(document.get("networks") or {}),
        extension=LisstoExtension.from_dict(document.get(EXTENSION_KEY)),
        extra={key: value for key, value in document.items() if key not in _KNOWN_PROJECT_KEYS},
    )
    logger.debug("Parsed compose project %s with %d services", project.name, len(services))
    return project
