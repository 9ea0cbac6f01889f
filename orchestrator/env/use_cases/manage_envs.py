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

"""Env use cases.

Envs always live in the caller's own developer namespace.
"""

import logging
from typing import List

from core.stack.entities import Env
from core.stack.exceptions import EnvNotFoundError, InvalidReferenceError, StackValidationError
from core.stack.namespaces import NamespaceManager
from core.stack.repositories import EnvRepository, NamespaceRepository
from core.stack.value_objects import Caller, ScopedId, validate_resource_name
from orchestrator.env.commands import CreateEnvCommand, EnvCommand
from orchestrator.env.dtos import EnvView

logger = logging.getLogger(__name__)


class CreateEnvUseCase:  # pylint: disable=too-few-public-methods
    """Creates an env, ensuring the caller's namespace exists first."""

    def __init__(
        self,
        namespace_manager: NamespaceManager,
        namespace_repo: NamespaceRepository,
        env_repo: EnvRepository,
    ) -> None:
        self._namespaces = namespace_manager
        self._namespace_repo = namespace_repo
        self._env_repo = env_repo

    def execute(self, command: CreateEnvCommand) -> str:
        """Create the env and return its scoped id.

        Raises:
            StackValidationError: If the name is not a valid resource name.
            ResourceAlreadyExistsError: If the env already exists.
            ClusterError: If the namespace or env cannot be created.
        """
        try:
            name = validate_resource_name(command.name)
        except ValueError as exc:
            raise StackValidationError(str(exc), command.correlation_id) from exc

        namespace = self._namespaces.developer_namespace(command.caller.username)
        self._namespace_repo.ensure_namespace(namespace)
        self._env_repo.create(Env(name=name, namespace=namespace))
        logger.info("Created env %s/%s", namespace, name)
        return self._namespaces.generate_scoped_id(namespace, name)


def _to_view(namespaces: NamespaceManager, env: Env) -> EnvView:
    return EnvView(
        id=namespaces.generate_scoped_id(env.namespace, env.name),
        name=env.name,
        namespace=env.namespace,
        created_at=env.created_at.isoformat(),
    )


class ListEnvsUseCase:  # pylint: disable=too-few-public-methods
    def __init__(self, namespace_manager: NamespaceManager, env_repo: EnvRepository) -> None:
        self._namespaces = namespace_manager
        self._env_repo = env_repo

    def execute(self, caller: Caller) -> List[EnvView]:
        namespace = self._namespaces.developer_namespace(caller.username)
        return [_to_view(self._namespaces, env) for env in self._env_repo.list(namespace)]


class GetEnvUseCase:  # pylint: disable=too-few-public-methods
    """Returns an env of the caller by bare name or by ``<user>/<name>``."""

    def __init__(self, namespace_manager: NamespaceManager, env_repo: EnvRepository) -> None:
        self._namespaces = namespace_manager
        self._env_repo = env_repo

    def execute(self, command: EnvCommand) -> EnvView:
        """Raises EnvNotFoundError if the env is missing or belongs to someone else."""
        own = self._namespaces.developer_namespace(command.caller.username)
        try:
            scoped = ScopedId.parse(command.env_id)
        except ValueError as exc:
            raise InvalidReferenceError(str(exc), command.correlation_id) from exc

        if not scoped.is_legacy and self._namespaces.namespace_of(scoped.scope) != own:
            raise EnvNotFoundError(command.env_id, command.correlation_id)
        return _to_view(self._namespaces, self._env_repo.get(own, scoped.name))
