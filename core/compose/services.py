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

"""Blueprint metadata extraction and compose validation."""

import logging
from typing import Dict, List, Optional, Tuple

from core.compose.entities import (
    BlueprintMetadata,
    ComposeProject,
    ComposeService,
    RepoConfig,
    ValidationResult,
)
from core.compose.exceptions import InvalidComposeError
from core.compose.parser import parse_compose

logger = logging.getLogger(__name__)

SERVICE_GROUPS = ("service", "services")
INFRA_GROUPS = ("data", "infra", "infrastructure", "cache")


def normalize_repository_url(url: str) -> str:
    """Reduce a git remote to ``host/owner/repo`` form."""
    normalized = (url or "").strip()
    for scheme in ("https://", "http://", "ssh://"):
        if normalized.startswith(scheme):
            normalized = normalized[len(scheme):]
            break
    if normalized.startswith("git@"):
        normalized = normalized[len("git@"):].replace(":", "/", 1)
    if normalized.endswith(".git"):
        normalized = normalized[: -len(".git")]
    return normalized.rstrip("/")


def extract_title(project: ComposeProject, repo: RepoConfig) -> str:
    """Title priority: ``x-lissto.title``, repository name, repository URL."""
    if project.extension.title:
        return project.extension.title
    if repo.name:
        return repo.name
    return normalize_repository_url(repo.url)


def categorize_service(
    service: ComposeService, warnings: Optional[List[str]] = None
) -> str:
    """Return ``"services"`` or ``"infra"`` for a compose service.

    The ``lissto.dev/group`` label wins over the build heuristic. Unknown
    group values fall back to ``"services"``.
    """
    group = service.lissto_labels.group
    if group:
        lowered = group.lower()
        if lowered in SERVICE_GROUPS:
            return "services"
        if lowered in INFRA_GROUPS:
            return "infra"
        message = f"service {service.name}: unknown group '{group}', treating as service"
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)
        return "services"

    return "services" if service.has_build else "infra"


def categorize_services(
    project: ComposeProject, warnings: Optional[List[str]] = None
) -> Tuple[List[str], List[str]]:
    """Split services into (services, infra), each sorted by name."""
    services: List[str] = []
    infra: List[str] = []
    for name in project.service_names():
        if categorize_service(project.services[name], warnings) == "infra":
            infra.append(name)
        else:
            services.append(name)
    return services, infra


def extract_metadata(
    project: ComposeProject,
    repo: Optional[RepoConfig] = None,
    warnings: Optional[List[str]] = None,
) -> BlueprintMetadata:
    """Derive blueprint metadata from a parsed project."""
    services, infra = categorize_services(project, warnings)
    return BlueprintMetadata(
        title=extract_title(project, repo or RepoConfig()),
        services=services,
        infra=infra,
        volumes=sorted(project.volumes),
        networks=sorted(project.networks),
    )


def _collect_warnings(project: ComposeProject) -> List[str]:
    warnings: List[str] = []
    if "version" in project.extra:
        warnings.append("the attribute `version` is obsolete, it will be ignored")
    for name in project.service_names():
        service = project.services[name]
        labels = service.lissto_labels
        if labels.is_exposed and not service.ports:
            warnings.append(f"service {name}: exposed but declares no ports")
        if labels.image_override and service.has_build:
            warnings.append(
                f"service {name}: {labels.image_override} overrides the build context"
            )
    return warnings


def validate_compose(
    content: str, repo: Optional[RepoConfig] = None
) -> ValidationResult:
    """Validate compose content and collect metadata, errors and warnings.

    Never raises: parse failures are reported in ``errors``.
    """
    try:
        project = parse_compose(content)
    except InvalidComposeError as exc:
        return ValidationResult(valid=False, errors=[exc.message])

    warnings = _collect_warnings(project)
    metadata = extract_metadata(project, repo, warnings)
    return ValidationResult(valid=True, metadata=metadata, warnings=warnings)


def summarize_services(metadata: BlueprintMetadata) -> Dict[str, List[str]]:
    """Return the services/infra split as a serializable mapping."""
    return {"services": list(metadata.services), "infra": list(metadata.infra)}
