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

""" This file contains in-memory implementations of the cluster repositories.
    It is used in testing and development."""

import copy
import threading
import uuid
from typing import Dict, List, Optional, Set, Tuple

from core.stack.entities import Blueprint, ConfigMap, Env, Stack
from core.stack.exceptions import (
    BlueprintNotFoundError,
    ConfigMapNotFoundError,
    EnvNotFoundError,
    ResourceAlreadyExistsError,
    StackNotFoundError,
)
from core.stack.repositories import (
    BlueprintRepository,
    ConfigMapRepository,
    EnvRepository,
    NamespaceRepository,
    StackRepository,
)

Key = Tuple[str, str]


class InMemoryNamespaceRepository(NamespaceRepository):
    def __init__(self) -> None:
        self._namespaces: Set[str] = set()

    def ensure_namespace(self, name: str) -> None:
        self._namespaces.add(name)

    def exists(self, name: str) -> bool:
        return name in self._namespaces


class InMemoryBlueprintRepository(BlueprintRepository):
    def __init__(self) -> None:
        self._blueprints: Dict[Key, Blueprint] = {}
        self._lock = threading.Lock()

    def create(self, blueprint: Blueprint) -> Blueprint:
        key = (blueprint.namespace, blueprint.name)
        with self._lock:
            if key in self._blueprints:
                raise ResourceAlreadyExistsError("Blueprint", blueprint.name)
            self._blueprints[key] = copy.deepcopy(blueprint)
        return blueprint

    def get(self, namespace: str, name: str) -> Blueprint:
        blueprint = self._blueprints.get((namespace, name))
        if blueprint is None:
            raise BlueprintNotFoundError(name)
        return copy.deepcopy(blueprint)

    def list(self, namespace: Optional[str] = None) -> List[Blueprint]:
        return [
            copy.deepcopy(bp)
            for (ns, _), bp in sorted(self._blueprints.items())
            if namespace is None or ns == namespace
        ]

    def find_by_hash(self, namespace: str, content_hash: str) -> Optional[Blueprint]:
        for blueprint in self.list(namespace):
            if blueprint.content_hash == content_hash:
                return blueprint
        return None

    def delete(self, namespace: str, name: str) -> None:
        with self._lock:
            if self._blueprints.pop((namespace, name), None) is None:
                raise BlueprintNotFoundError(name)


class InMemoryEnvRepository(EnvRepository):
    def __init__(self) -> None:
        self._envs: Dict[Key, Env] = {}
        self._lock = threading.Lock()

    def create(self, env: Env) -> Env:
        key = (env.namespace, env.name)
        with self._lock:
            if key in self._envs:
                raise ResourceAlreadyExistsError("Env", env.name)
            self._envs[key] = copy.deepcopy(env)
        return env

    def get(self, namespace: str, name: str) -> Env:
        env = self._envs.get((namespace, name))
        if env is None:
            raise EnvNotFoundError(name)
        return copy.deepcopy(env)

    def list(self, namespace: str) -> List[Env]:
        return [copy.deepcopy(env) for (ns, _), env in sorted(self._envs.items()) if ns == namespace]


class InMemoryConfigMapRepository(ConfigMapRepository):
    def __init__(self) -> None:
        self._config_maps: Dict[Key, ConfigMap] = {}
        self._lock = threading.Lock()

    def create(self, config_map: ConfigMap) -> ConfigMap:
        key = (config_map.namespace, config_map.name)
        with self._lock:
            if key in self._config_maps:
                raise ResourceAlreadyExistsError("ConfigMap", config_map.name)
            self._config_maps[key] = copy.deepcopy(config_map)
        return config_map

    def get(self, namespace: str, name: str) -> ConfigMap:
        config_map = self._config_maps.get((namespace, name))
        if config_map is None:
            raise ConfigMapNotFoundError(name)
        return copy.deepcopy(config_map)

    def update(self, config_map: ConfigMap) -> ConfigMap:
        key = (config_map.namespace, config_map.name)
        with self._lock:
            if key not in self._config_maps:
                raise ConfigMapNotFoundError(config_map.name)
            self._config_maps[key] = copy.deepcopy(config_map)
        return config_map

    def delete(self, namespace: str, name: str) -> None:
        with self._lock:
            if self._config_maps.pop((namespace, name), None) is None:
                raise ConfigMapNotFoundError(name)

    def delete_owned_by(self, uid: str) -> None:
        with self._lock:
            owned = [
                key for key, cm in self._config_maps.items()
                if any(ref.uid == uid for ref in cm.owner_references)
            ]
            for key in owned:
                del self._config_maps[key]


class InMemoryStackRepository(StackRepository):
    """Stacks keyed by namespace and name.

    Deleting a stack also deletes the ConfigMaps it owns when a ConfigMap
    repository is attached, the way the cluster garbage collector would.
    """

    def __init__(self, config_maps: Optional[InMemoryConfigMapRepository] = None) -> None:
        self._stacks: Dict[Key, Stack] = {}
        self._config_maps = config_maps
        self._lock = threading.Lock()

    def create(self, stack: Stack) -> Stack:
        key = (stack.namespace, stack.name)
        with self._lock:
            if key in self._stacks:
                raise ResourceAlreadyExistsError("Stack", stack.name)
            stored = copy.deepcopy(stack)
            stored.uid = str(uuid.uuid4())
            self._stacks[key] = stored
        return copy.deepcopy(stored)

    def get(self, namespace: str, name: str) -> Stack:
        stack = self._stacks.get((namespace, name))
        if stack is None:
            raise StackNotFoundError(name)
        return copy.deepcopy(stack)

    def list(self, namespace: Optional[str] = None) -> List[Stack]:
        return [
            copy.deepcopy(stack)
            for (ns, _), stack in sorted(self._stacks.items())
            if namespace is None or ns == namespace
        ]

    def update(self, stack: Stack) -> Stack:
        key = (stack.namespace, stack.name)
        with self._lock:
            current = self._stacks.get(key)
            if current is None:
                raise StackNotFoundError(stack.name)
            current.spec = copy.deepcopy(stack.spec)
            current.labels = dict(stack.labels)
            current.annotations = dict(stack.annotations)
        return copy.deepcopy(current)

    def delete(self, namespace: str, name: str) -> None:
        with self._lock:
            stack = self._stacks.pop((namespace, name), None)
        if stack is None:
            raise StackNotFoundError(name)
        if self._config_maps is not None:
            self._config_maps.delete_owned_by(stack.uid)
