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

"""Suspend and resume use cases."""

import logging

from core.stack.entities import SuspensionSpec
from core.stack.exceptions import StackValidationError
from core.stack.repositories import StackRepository
from core.stack.services import ResourceLocator
from core.stack.value_objects import parse_duration
from orchestrator.stack.commands import StackCommand, SuspendStackCommand
from orchestrator.stack.dtos import StackActionResult

logger = logging.getLogger(__name__)

ALL_SERVICES = "*"


class SuspendStackUseCase:  # pylint: disable=too-few-public-methods
    """Sets the suspension spec of a stack; the controller scales it down."""

    def __init__(self, locator: ResourceLocator, stack_repo: StackRepository) -> None:
        self._locator = locator
        self._stack_repo = stack_repo

    def execute(self, command: SuspendStackCommand) -> StackActionResult:
        """Suspend the requested services, or all of them.

        Raises:
            StackValidationError: If the timeout cannot be parsed.
            StackNotFoundError: If the stack is missing or not writable.
        """
        timeout = None
        if command.timeout:
            try:
                timeout = parse_duration(command.timeout)
            except ValueError as exc:
                raise StackValidationError(
                    f"Invalid timeout format: {exc}", command.correlation_id
                ) from exc

        stack = self._locator.find_stack(command.stack_id, command.caller, write=True)
        services = list(command.services) or [ALL_SERVICES]
        stack.spec.suspension = SuspensionSpec(services=services, timeout=timeout)
        self._stack_repo.update(stack)
        logger.info(
            "Suspension requested for stack %s/%s: services=%s",
            stack.namespace,
            stack.name,
            ",".join(services),
        )
        return StackActionResult(
            id=self._locator.scoped_id(stack.namespace, stack.name),
            phase=stack.status.phase,
            message="Stack suspension initiated",
        )


class ResumeStackUseCase:  # pylint: disable=too-few-public-methods
    """Clears the suspension spec of a stack."""

    def __init__(self, locator: ResourceLocator, stack_repo: StackRepository) -> None:
        self._locator = locator
        self._stack_repo = stack_repo

    def execute(self, command: StackCommand) -> StackActionResult:
        stack = self._locator.find_stack(command.stack_id, command.caller, write=True)
        stack.spec.suspension = None
        self._stack_repo.update(stack)
        logger.info("Resume requested for stack %s/%s", stack.namespace, stack.name)
        return StackActionResult(
            id=self._locator.scoped_id(stack.namespace, stack.name),
            phase=stack.status.phase,
            message="Stack resume initiated",
        )
