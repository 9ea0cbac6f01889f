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

"""FastAPI dependency providers for the Stacks API."""

from api.dependencies import _get_container
from orchestrator.stack.use_cases import (
    CreateStackUseCase,
    DeleteStackUseCase,
    GetStackPhaseUseCase,
    GetStackUseCase,
    ListStacksUseCase,
    ResumeStackUseCase,
    SuspendStackUseCase,
    UpdateStackImagesUseCase,
)


def get_create_stack_use_case() -> CreateStackUseCase:
    return _get_container().create_stack_use_case()


def get_get_stack_use_case() -> GetStackUseCase:
    return _get_container().get_stack_use_case()


def get_list_stacks_use_case() -> ListStacksUseCase:
    return _get_container().list_stacks_use_case()


def get_stack_phase_use_case() -> GetStackPhaseUseCase:
    return _get_container().get_stack_phase_use_case()


def get_update_stack_images_use_case() -> UpdateStackImagesUseCase:
    return _get_container().update_stack_images_use_case()


def get_suspend_stack_use_case() -> SuspendStackUseCase:
    return _get_container().suspend_stack_use_case()


def get_resume_stack_use_case() -> ResumeStackUseCase:
    return _get_container().resume_stack_use_case()


def get_delete_stack_use_case() -> DeleteStackUseCase:
    return _get_container().delete_stack_use_case()
