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

"""Env command DTOs."""

from dataclasses import dataclass

from core.stack.value_objects import Caller


@dataclass(frozen=True)
class CreateEnvCommand:
    """Command to create an env in the caller's namespace."""

    caller: Caller
    name: str
    correlation_id: str = ""


@dataclass(frozen=True)
class EnvCommand:
    """Command addressing one existing env."""

    caller: Caller
    env_id: str
    correlation_id: str = ""
