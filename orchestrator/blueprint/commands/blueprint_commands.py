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

"""Blueprint command DTOs."""

from dataclasses import dataclass

from core.stack.value_objects import Caller


@dataclass(frozen=True)
class CreateBlueprintCommand:
    """Command to store a compose document as a blueprint.

    Attributes:
        caller: Authenticated caller.
        compose: Raw compose YAML.
        repository: Source repository URL, used for the title.
        branch: Source branch; global branches target the global namespace.
        author: Developer the blueprint is created for (deploy role).
        correlation_id: Request correlation identifier for tracing.
    """

    caller: Caller
    compose: str
    repository: str = ""
    branch: str = ""
    author: str = ""
    correlation_id: str = ""


@dataclass(frozen=True)
class BlueprintCommand:
    """Command addressing one existing blueprint."""

    caller: Caller
    blueprint_id: str
    correlation_id: str = ""
