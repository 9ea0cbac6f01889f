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

"""Blueprint response DTOs."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class CreateBlueprintResult:
    """Outcome of a create request.

    Attributes:
        id: Scoped identifier of the new or existing blueprint.
        created: False when an identical blueprint already existed.
        warnings: Non-fatal findings of compose validation.
    """

    id: str
    created: bool
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class BlueprintView:  # pylint: disable=too-many-instance-attributes
    """Standard view of a blueprint."""

    id: str
    name: str
    namespace: str
    title: str
    services: List[str]
    infra: List[str]
    repository: str
    content_hash: str
    created_at: str
    compose: str = ""
