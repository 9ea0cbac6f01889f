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

"""Port interfaces for the stack domain.

Cluster-backed adapters raise ``ResourceNotFoundError`` subclasses for
missing objects and ``ClusterError`` for everything else.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from core.stack.entities import Blueprint, ConfigMap, Env, PrepareResult, Stack


class NamespaceRepository(ABC):
    """Ensures namespaces exist."""

    @abstractmethod
    def ensure_namespace(self, name: str) -> None:
        """Create ``name`` unless it already exists.

        Raises:
            ClusterError: If the namespace cannot be created.
        """
        ...


class BlueprintRepository(ABC):
    """Blueprint custom resources."""

    @abstractmethod
    def create(self, blueprint: Blueprint) -> Blueprint:
        """Persist a new blueprint.

        Raises:
            ResourceAlreadyExistsError: If the name is taken.
            ClusterError: If the cluster rejects the blueprint.
        """
        ...

    @abstractmethod
    def get(self, namespace: str, name: str) -> Blueprint:
        """Return a blueprint.

        Raises:
            BlueprintNotFoundError: If it does not exist.
        """
        ...

    @abstractmethod
    def list(self, namespace: Optional[str] = None) -> List[Blueprint]:
        """List blueprints of one namespace, or of all when ``namespace`` is None."""
        ...

    @abstractmethod
    def find_by_hash(self, namespace: str, content_hash: str) -> Optional[Blueprint]:
        """Return the blueprint of ``namespace`` whose content hash matches."""
        ...

    @abstractmethod
    def delete(self, namespace: str, name: str) -> None:
        """Delete a blueprint.

        Raises:
            BlueprintNotFoundError: If it does not exist.
        """
        ...


class EnvRepository(ABC):
    """Env custom resources."""

    @abstractmethod
    def create(self, env: Env) -> Env:
        """Persist a new env.

        Raises:
            ResourceAlreadyExistsError: If the name is taken.
        """
        ...

    @abstractmethod
    def get(self, namespace: str, name: str) -> Env:
        """Return an env.

        Raises:
            EnvNotFoundError: If it does not exist.
        """
        ...

    @abstractmethod
    def list(self, namespace: str) -> List[Env]:
        """List envs of a namespace."""
        ...


class StackRepository(ABC):
    """Stack custom resources."""

    @abstractmethod
    def create(self, stack: Stack) -> Stack:
        """Persist a new stack and return it with its assigned uid.

        Raises:
            ResourceAlreadyExistsError: If the name is taken.
            ClusterError: If the cluster rejects the stack.
        """
        ...

    @abstractmethod
    def get(self, namespace: str, name: str) -> Stack:
        """Return a stack.

        Raises:
            StackNotFoundError: If it does not exist.
        """
        ...

    @abstractmethod
    def list(self, namespace: Optional[str] = None) -> List[Stack]:
        """List stacks of one namespace, or of all when ``namespace`` is None."""
        ...

    @abstractmethod
    def update(self, stack: Stack) -> Stack:
        """Replace the spec of an existing stack.

        Raises:
            StackNotFoundError: If it does not exist.
        """
        ...

    @abstractmethod
    def delete(self, namespace: str, name: str) -> None:
        """Delete a stack; owned ConfigMaps go with it.

        Raises:
            StackNotFoundError: If it does not exist.
        """
        ...


class ConfigMapRepository(ABC):
    """Manifest ConfigMaps."""

    @abstractmethod
    def create(self, config_map: ConfigMap) -> ConfigMap:
        """Persist a new ConfigMap.

        Raises:
            ClusterError: If the cluster rejects it.
        """
        ...

    @abstractmethod
    def get(self, namespace: str, name: str) -> ConfigMap:
        """Return a ConfigMap.

        Raises:
            ConfigMapNotFoundError: If it does not exist.
        """
        ...

    @abstractmethod
    def update(self, config_map: ConfigMap) -> ConfigMap:
        """Replace an existing ConfigMap.

        Raises:
            ConfigMapNotFoundError: If it does not exist.
        """
        ...

    @abstractmethod
    def delete(self, namespace: str, name: str) -> None:
        """Delete a ConfigMap.

        Raises:
            ConfigMapNotFoundError: If it does not exist.
        """
        ...


class PrepareResultStore(ABC):
    """Short-lived store bridging prepare and create."""

    @abstractmethod
    def save(self, request_id: str, result: PrepareResult) -> None:
        """Store ``result`` under ``request_id``."""
        ...

    @abstractmethod
    def load(self, request_id: str) -> Optional[PrepareResult]:
        """Return the result, or None if unknown or expired."""
        ...


class RequestIdGenerator(ABC):  # pylint: disable=R0903
    """Generates prepare request identifiers."""

    @abstractmethod
    def generate(self) -> str:
        """Return a new, unguessable request id."""
        ...
