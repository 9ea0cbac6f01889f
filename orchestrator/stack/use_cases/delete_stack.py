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

"""DeleteStack use case implementation."""

import logging

from core.stack.repositories import StackRepository
from core.stack.services import ResourceLocator
from orchestrator.stack.commands import StackCommand

logger = logging.getLogger(__name__)


class DeleteStackUseCase:  # pylint: disable=too-few-public-methods
    """Deletes a stack; its manifests ConfigMap goes with it through the owner link."""

    def __init__(self, locator: ResourceLocator, stack_repo: StackRepository) -> None:
        self._locator = locator
        self._stack_repo = stack_repo

    def execute(self, command: StackCommand) -> None:
        """Raises StackNotFoundError if the stack is missing or not writable."""
        stack = self._locator.find_stack(command.stack_id, command.caller, write=True)
        self._stack_repo.delete(stack.namespace, stack.name)
        logger.info("Deleted stack %s/%s", stack.namespace, stack.name)
