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

"""FastAPI dependency providers for the Envs API."""

from api.dependencies import _get_container
from orchestrator.env.use_cases import CreateEnvUseCase, GetEnvUseCase, ListEnvsUseCase


def get_create_env_use_case() -> CreateEnvUseCase:
    return _get_container().create_env_use_case()


def get_list_envs_use_case() -> ListEnvsUseCase:
    return _get_container().list_envs_use_case()


def get_get_env_use_case() -> GetEnvUseCase:
    return _get_container().get_env_use_case()
