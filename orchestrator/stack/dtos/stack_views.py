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

"""Stack response DTOs."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.stack.entities import ImageInfo, PhaseTransition, ServiceStatus


@dataclass(frozen=True)
class StackView:  # pylint: disable=too-many-instance-attributes
    """Standard view of a stack.

    Attributes:
        id: Scoped identifier.
        name: Stack name.
        namespace: Owning namespace.
        blueprint_reference: Blueprint the stack was created from.
        env: Env the stack runs in.
        phase: Controller-reported phase.
        services: Controller-reported service statuses.
        images: Pinned image per service.
        suspended_services: Services the suspension spec covers, if any.
        created_at: Creation timestamp (ISO 8601).
    """

    id: str
    name: str
    namespace: str
    blueprint_reference: str
    env: str
    phase: str
    services: Dict[str, ServiceStatus] = field(default_factory=dict)
    images: Dict[str, ImageInfo] = field(default_factory=dict)
    suspended_services: Optional[List[str]] = None
    created_at: str = ""


@dataclass(frozen=True)
class StackPhaseView:
    """Phase, phase history and service statuses of a stack."""

    phase: str
    phase_history: List[PhaseTransition]
    services: Dict[str, ServiceStatus]


@dataclass(frozen=True)
class StackActionResult:
    """Outcome of a state change on a stack."""

    id: str
    phase: str
    message: str = ""
