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

"""Read-only stack use cases."""

from typing import List

from core.stack.entities import Stack
from core.stack.services import ResourceLocator
from core.stack.value_objects import Caller
from orchestrator.stack.commands import StackCommand
from orchestrator.stack.dtos import StackPhaseView, StackView


def to_stack_view(stack: Stack, scoped_id: str) -> StackView:
    """Build the standard view of ``stack``."""
    suspension = stack.spec.suspension
    return StackView(
        id=scoped_id,
        name=stack.name,
        namespace=stack.namespace,
        blueprint_reference=stack.spec.blueprint_reference,
        env=stack.spec.env,
        phase=stack.status.phase,
        services=dict(stack.status.services),
        images=dict(stack.spec.images),
        suspended_services=list(suspension.services) if suspension is not None else None,
        created_at=stack.created_at.isoformat(),
    )


class GetStackUseCase:  # pylint: disable=too-few-public-methods
    """Returns one stack the caller may read."""

    def __init__(self, locator: ResourceLocator) -> None:
        self._locator = locator

    def execute(self, command: StackCommand) -> StackView:
        """Raises StackNotFoundError if the stack is missing or not readable."""
        stack = self._locator.find_stack(command.stack_id, command.caller)
        return to_stack_view(stack, self._locator.scoped_id(stack.namespace, stack.name))


class ListStacksUseCase:  # pylint: disable=too-few-public-methods
    """Lists stacks across every namespace the caller may read."""

    def __init__(self, locator: ResourceLocator) -> None:
        self._locator = locator

    def execute(self, caller: Caller) -> List[StackView]:
        return [
            to_stack_view(stack, self._locator.scoped_id(stack.namespace, stack.name))
            for stack in self._locator.list_stacks(caller)
        ]


class GetStackPhaseUseCase:  # pylint: disable=too-few-public-methods
    """Returns the controller-reported phase of a stack."""

    def __init__(self, locator: ResourceLocator) -> None:
        self._locator = locator

    def execute(self, command: StackCommand) -> StackPhaseView:
        stack = self._locator.find_stack(command.stack_id, command.caller)
        return StackPhaseView(
            phase=stack.status.phase,
            phase_history=list(stack.status.phase_history),
            services=dict(stack.status.services),
        )
