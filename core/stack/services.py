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

"""Lookup of namespaced resources by public identifier."""

import logging
from typing import Callable, List, Tuple, TypeVar

from core.stack.entities import Blueprint, Stack
from core.stack.exceptions import (
    BlueprintNotFoundError,
    ResourceNotFoundError,
    StackNotFoundError,
)
from core.stack.namespaces import NamespaceManager
from core.stack.repositories import BlueprintRepository, StackRepository
from core.stack.value_objects import Caller

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceLocator:
    """Finds blueprints and stacks the caller is allowed to see.

    Identifiers outside the caller's namespaces are reported as missing,
    never as forbidden, so their existence does not leak.
    """

    def __init__(
        self,
        namespace_manager: NamespaceManager,
        blueprint_repo: BlueprintRepository,
        stack_repo: StackRepository,
    ):
        self._namespaces = namespace_manager
        self._blueprints = blueprint_repo
        self._stacks = stack_repo

    def _search(
        self,
        identifier: str,
        caller: Caller,
        write: bool,
        getter: Callable[[str, str], T],
    ) -> Tuple[T, str]:
        namespaces, name = self._namespaces.namespaces_to_search(identifier, caller, write)
        for namespace in namespaces:
            try:
                return getter(namespace, name), namespace
            except ResourceNotFoundError:
                continue
        raise ResourceNotFoundError("resource", identifier)

    def find_blueprint(self, identifier: str, caller: Caller) -> Blueprint:
        """Return the blueprint ``identifier`` names.

        Raises:
            InvalidReferenceError: If the identifier is malformed.
            BlueprintNotFoundError: If no readable namespace holds it.
        """
        try:
            blueprint, _ = self._search(identifier, caller, False, self._blueprints.get)
        except ResourceNotFoundError as exc:
            raise BlueprintNotFoundError(identifier) from exc
        return blueprint

    def find_stack(self, identifier: str, caller: Caller, write: bool = False) -> Stack:
        """Return the stack ``identifier`` names.

        Raises:
            InvalidReferenceError: If the identifier is malformed.
            StackNotFoundError: If no allowed namespace holds it.
        """
        try:
            stack, _ = self._search(identifier, caller, write, self._stacks.get)
        except ResourceNotFoundError as exc:
            raise StackNotFoundError(identifier) from exc
        return stack

    def list_stacks(self, caller: Caller) -> List[Stack]:
        """Return the stacks of every namespace the caller may read."""
        namespaces = self._namespaces.listable_namespaces(caller)
        if namespaces is None:
            return self._stacks.list()
        stacks: List[Stack] = []
        for namespace in namespaces:
            stacks.extend(self._stacks.list(namespace))
        return stacks

    def list_blueprints(self, caller: Caller) -> List[Blueprint]:
        """Return the blueprints of every namespace the caller may read."""
        namespaces = self._namespaces.listable_namespaces(caller)
        if namespaces is None:
            return self._blueprints.list()
        blueprints: List[Blueprint] = []
        for namespace in namespaces:
            blueprints.extend(self._blueprints.list(namespace))
        return blueprints

    def scoped_id(self, namespace: str, name: str) -> str:
        return self._namespaces.generate_scoped_id(namespace, name)
