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

"""Stack domain module.

Stacks, blueprints, envs and the namespace model they live in.
"""

from core.stack.entities import (
    Blueprint,
    ConfigMap,
    Env,
    ImageInfo,
    PrepareResult,
    Stack,
    StackSpec,
    SuspensionSpec,
)
from core.stack.exceptions import (
    BlueprintNotFoundError,
    ClusterError,
    EnvNotFoundError,
    InvalidReferenceError,
    PermissionDeniedError,
    PrepareResultExpiredError,
    PrepareResultNotFoundError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    StackDomainError,
    StackNotFoundError,
    StackValidationError,
)
from core.stack.namespaces import NamespaceManager
from core.stack.value_objects import Caller, Role, ScopedId

__all__ = [
    "Blueprint",
    "ConfigMap",
    "Env",
    "ImageInfo",
    "PrepareResult",
    "Stack",
    "StackSpec",
    "SuspensionSpec",
    "BlueprintNotFoundError",
    "ClusterError",
    "EnvNotFoundError",
    "InvalidReferenceError",
    "PermissionDeniedError",
    "PrepareResultExpiredError",
    "PrepareResultNotFoundError",
    "ResourceAlreadyExistsError",
    "ResourceNotFoundError",
    "StackDomainError",
    "StackNotFoundError",
    "StackValidationError",
    "NamespaceManager",
    "Caller",
    "Role",
    "ScopedId",
]
