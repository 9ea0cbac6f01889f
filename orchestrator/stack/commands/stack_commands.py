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

"""Stack command DTOs."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.stack.value_objects import Caller


@dataclass(frozen=True)
class CreateStackCommand:
    """Command to materialize a blueprint into an env.

    Attributes:
        caller: Authenticated caller; the stack goes to their namespace.
        blueprint: Scoped or legacy blueprint identifier.
        env: Env name inside the caller's namespace.
        request_id: Request id returned by prepare.
        correlation_id: Request correlation identifier for tracing.
    """

    caller: Caller
    blueprint: str
    env: str
    request_id: str
    correlation_id: str = ""


@dataclass(frozen=True)
class StackCommand:
    """Command addressing one existing stack."""

    caller: Caller
    stack_id: str
    correlation_id: str = ""


@dataclass(frozen=True)
class UpdateStackImagesCommand:
    """Command to replace image digests of a stack.

    Attributes:
        images: Per service, either a digest string or a mapping with
            ``digest`` and optionally ``image``.
    """

    caller: Caller
    stack_id: str
    images: Dict[str, Any]
    correlation_id: str = ""


@dataclass(frozen=True)
class SuspendStackCommand:
    """Command to scale down services of a stack.

    Attributes:
        services: Services to suspend; ``*`` or empty means all.
        timeout: Optional duration such as ``30m``.
    """

    caller: Caller
    stack_id: str
    services: List[str] = field(default_factory=list)
    timeout: Optional[str] = None
    correlation_id: str = ""
