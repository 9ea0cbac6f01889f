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

"""Pydantic schemas for the Stacks API."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class CreateStackRequest(BaseModel):
    """Request model for materializing a prepared stack."""

    blueprint: str = Field(..., min_length=1, description="Blueprint identifier (scope/name)")
    env: str = Field(..., min_length=1, description="Env name in the caller's namespace")
    request_id: str = Field(..., min_length=1, description="Request id returned by prepare")


class StackIdData(BaseModel):
    """Identifier of the affected stack."""

    id: str = Field(..., description="Scoped stack identifier")


class StackIdResponse(BaseModel):
    """Envelope returned by create and update."""

    data: StackIdData


class ImageUpdate(BaseModel):
    """New image of one service."""

    digest: str = Field(..., min_length=1, description="Digest-pinned reference")
    image: Optional[str] = Field(None, description="Human readable reference")


class UpdateStackImagesRequest(BaseModel):
    """Request model for replacing service images."""

    images: Dict[str, Union[str, ImageUpdate]] = Field(
        ..., description="Per service, a digest or {digest, image}"
    )

    def to_command_images(self) -> Dict[str, Any]:
        """Return plain values the use case understands."""
        return {
            service: value if isinstance(value, str) else value.model_dump(exclude_none=True)
            for service, value in self.images.items()
        }


class SuspendStackRequest(BaseModel):
    """Request model for suspending services of a stack."""

    services: List[str] = Field(default_factory=list, description="Services to suspend; empty means all")
    timeout: Optional[str] = Field(None, description="Duration such as 30m")


class StackActionResponse(BaseModel):
    """Outcome of a suspend or resume request."""

    id: str
    message: str
    phase: str


class ImageInfoSchema(BaseModel):
    digest: str
    image: str = ""
    url: Optional[str] = None
    container_name: Optional[str] = None


class ServiceStatusSchema(BaseModel):
    phase: str = ""
    suspended_at: Optional[str] = None


class PhaseTransitionSchema(BaseModel):
    phase: str
    transition_time: str
    reason: str = ""
    message: str = ""


class StackResponse(BaseModel):
    """Standard view of a stack."""

    id: str
    name: str
    namespace: str
    blueprint_reference: str
    env: str
    phase: str
    services: Dict[str, ServiceStatusSchema] = Field(default_factory=dict)
    images: Dict[str, ImageInfoSchema] = Field(default_factory=dict)
    suspended_services: Optional[List[str]] = None
    created_at: str = ""


class StackListResponse(BaseModel):
    stacks: List[StackResponse]


class StackPhaseResponse(BaseModel):
    """Phase, phase history and service statuses of a stack."""

    phase: str
    phase_history: List[PhaseTransitionSchema]
    services: Dict[str, ServiceStatusSchema]
