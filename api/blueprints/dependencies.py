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

"""FastAPI dependency providers for the Blueprints API."""

from api.dependencies import _get_container
from orchestrator.blueprint.use_cases import (
    CreateBlueprintUseCase,
    DeleteBlueprintUseCase,
    GetBlueprintUseCase,
    ListBlueprintsUseCase,
)


def get_create_blueprint_use_case() -> CreateBlueprintUseCase:
    return _get_container().create_blueprint_use_case()


def get_get_blueprint_use_case() -> GetBlueprintUseCase:
    return _get_container().get_blueprint_use_case()


def get_list_blueprints_use_case() -> ListBlueprintsUseCase:
    return _get_container().list_blueprints_use_case()


def get_delete_blueprint_use_case() -> DeleteBlueprintUseCase:
    return _get_container().delete_blueprint_use_case()
