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

"""CreateBlueprint use case implementation."""

import logging
from datetime import datetime, timezone
from typing import Callable

from core.compose.entities import RepoConfig
from core.compose.exceptions import ComposeValidationError
from core.compose.services import normalize_repository_url, validate_compose
from core.stack.entities import Blueprint
from core.stack.namespaces import NamespaceManager
from core.stack.repositories import BlueprintRepository, NamespaceRepository
from core.stack.value_objects import compose_hash, generate_blueprint_name
from orchestrator.blueprint.commands import CreateBlueprintCommand
from orchestrator.blueprint.dtos import CreateBlueprintResult

logger = logging.getLogger(__name__)


def repo_config_for(repository: str) -> RepoConfig:
    """Build the title context of a repository URL; its last path segment names it."""
    normalized = normalize_repository_url(repository)
    name = normalized.rsplit("/", 1)[-1] if normalized else ""
    return RepoConfig(url=repository, name=name)


class CreateBlueprintUseCase:  # pylint: disable=too-few-public-methods
    """Stores a validated compose document, deduplicated by content hash."""

    def __init__(
        self,
        namespace_manager: NamespaceManager,
        namespace_repo: NamespaceRepository,
        blueprint_repo: BlueprintRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._namespaces = namespace_manager
        self._namespace_repo = namespace_repo
        self._blueprint_repo = blueprint_repo
        self._clock = clock

    def execute(self, command: CreateBlueprintCommand) -> CreateBlueprintResult:
        """Create the blueprint, or return the identical one that exists.

        Raises:
            ComposeValidationError: If the compose document fails validation.
            PermissionDeniedError: If the caller may not target the namespace.
            ClusterError: If the blueprint cannot be stored.
        """
        validation = validate_compose(command.compose, repo_config_for(command.repository))
        if not validation.valid:
            raise ComposeValidationError(validation.errors, command.correlation_id)

        namespace = self._namespaces.determine_namespace(
            command.caller, command.branch, command.author
        )
        content_hash = compose_hash(command.compose)

        existing = self._blueprint_repo.find_by_hash(namespace, content_hash)
        if existing is not None:
            logger.info(
                "Blueprint %s/%s already holds content %s", namespace, existing.name, content_hash[:8]
            )
            return CreateBlueprintResult(
                id=self._namespaces.generate_scoped_id(namespace, existing.name),
                created=False,
                warnings=validation.warnings,
            )

        metadata = validation.metadata
        blueprint = Blueprint(
            name=generate_blueprint_name(content_hash, self._clock()),
            namespace=namespace,
            compose=command.compose,
            content_hash=content_hash,
            title=metadata.title if metadata else "",
            services=list(metadata.services) if metadata else [],
            infra=list(metadata.infra) if metadata else [],
            repository=command.repository,
            created_by=command.caller.username,
        )
        self._namespace_repo.ensure_namespace(namespace)
        self._blueprint_repo.create(blueprint)
        logger.info(
            "Created blueprint %s/%s (%d services, %d infra)",
            namespace,
            blueprint.name,
            len(blueprint.services),
            len(blueprint.infra),
        )
        return CreateBlueprintResult(
            id=self._namespaces.generate_scoped_id(namespace, blueprint.name),
            created=True,
            warnings=validation.warnings,
        )
