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

"""Blueprint read and delete use cases."""

import logging
from typing import List

from core.stack.entities import Blueprint
from core.stack.exceptions import BlueprintNotFoundError
from core.stack.namespaces import NamespaceManager
from core.stack.repositories import BlueprintRepository
from core.stack.services import ResourceLocator
from core.stack.value_objects import Caller
from orchestrator.blueprint.commands import BlueprintCommand
from orchestrator.blueprint.dtos import BlueprintView

logger = logging.getLogger(__name__)


def to_blueprint_view(blueprint: Blueprint, scoped_id: str, with_compose: bool = False) -> BlueprintView:
    return BlueprintView(
        id=scoped_id,
        name=blueprint.name,
        namespace=blueprint.namespace,
        title=blueprint.title,
        services=list(blueprint.services),
        infra=list(blueprint.infra),
        repository=blueprint.repository,
        content_hash=blueprint.content_hash,
        created_at=blueprint.created_at.isoformat(),
        compose=blueprint.compose if with_compose else "",
    )


class GetBlueprintUseCase:  # pylint: disable=too-few-public-methods
    def __init__(self, locator: ResourceLocator) -> None:
        self._locator = locator

    def execute(self, command: BlueprintCommand) -> BlueprintView:
        blueprint = self._locator.find_blueprint(command.blueprint_id, command.caller)
        return to_blueprint_view(
            blueprint,
            self._locator.scoped_id(blueprint.namespace, blueprint.name),
            with_compose=True,
        )


class ListBlueprintsUseCase:  # pylint: disable=too-few-public-methods
    def __init__(self, locator: ResourceLocator) -> None:
        self._locator = locator

    def execute(self, caller: Caller) -> List[BlueprintView]:
        return [
            to_blueprint_view(bp, self._locator.scoped_id(bp.namespace, bp.name))
            for bp in self._locator.list_blueprints(caller)
        ]


class DeleteBlueprintUseCase:  # pylint: disable=too-few-public-methods
    """Deletes a blueprint from a namespace the caller may write."""

    def __init__(
        self,
        namespace_manager: NamespaceManager,
        blueprint_repo: BlueprintRepository,
    ) -> None:
        self._namespaces = namespace_manager
        self._blueprint_repo = blueprint_repo

    def execute(self, command: BlueprintCommand) -> None:
        """Raises BlueprintNotFoundError if it is missing or not writable."""
        namespaces, name = self._namespaces.namespaces_to_search(
            command.blueprint_id, command.caller, write=True
        )
        for namespace in namespaces:
            try:
                self._blueprint_repo.delete(namespace, name)
            except BlueprintNotFoundError:
                continue
            logger.info("Deleted blueprint %s/%s", namespace, name)
            return
        raise BlueprintNotFoundError(command.blueprint_id, command.correlation_id)
