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

"""PrepareStack command DTO."""

from dataclasses import dataclass

from core.stack.value_objects import Caller


@dataclass(frozen=True)
class PrepareStackCommand:
    """Command to resolve the images of a blueprint ahead of stack creation.

    Attributes:
        caller: Authenticated caller.
        blueprint: Scoped or legacy blueprint identifier.
        env: Env name inside the caller's namespace.
        commit: Commit hash tried as an image tag.
        branch: Branch name tried as an image tag.
        tag: Release tag; names the stack created from this result.
        detailed: Embed per-service failures instead of failing the request.
        correlation_id: Request correlation identifier for tracing.
    """

    caller: Caller
    blueprint: str
    env: str
    commit: str = ""
    branch: str = ""
    tag: str = ""
    detailed: bool = False
    correlation_id: str = ""
