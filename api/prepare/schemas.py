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

"""Pydantic schemas for the Prepare API."""

from typing import List, Optional

from pydantic import BaseModel, Field


class PrepareStackRequest(BaseModel):
    """Request model for resolving the images of a blueprint."""

    blueprint: str = Field(..., min_length=1, description="Blueprint identifier (scope/name)")
    env: str = Field(..., min_length=1, description="Env name in the caller's namespace")
    commit: Optional[str] = Field(None, description="Commit hash tried as an image tag")
    branch: Optional[str] = Field(None, description="Branch name tried as an image tag")
    tag: Optional[str] = Field(None, description="Tag used to name the stack")
    detailed: bool = Field(False, description="Return every candidate and embed per-service failures")


class CandidateSchema(BaseModel):
    """One candidate image reference tried during resolution."""

    image_url: str
    tag: str
    source: str
    success: bool
    digest: Optional[str] = None
    error: Optional[str] = None


class CompactImageSchema(BaseModel):
    """Resolved image of one service, compact form."""

    service: str = Field(..., description="Compose service name")
    image: str = Field(..., description="Digest-pinned image reference")
    method: str = Field(..., description="How the image was chosen")
    tag: str = Field(..., description="Reference that produced the digest")


class DetailedImageSchema(BaseModel):
    """Resolution trail of one service."""

    service: str
    digest: str = ""
    image: str = ""
    method: str = ""
    registry: str = ""
    image_name: str = ""
    candidates: List[CandidateSchema] = Field(default_factory=list)
    exposed: bool = False
    url: Optional[str] = None
    error: Optional[str] = None


class ExposedServiceSchema(BaseModel):
    """Hostname assigned to an exposed service."""

    service: str
    url: str


class CompactPrepareResponse(BaseModel):
    """Compact prepare response."""

    request_id: str = Field(..., description="Present back on stack creation")
    blueprint: str
    images: List[CompactImageSchema]


class DetailedPrepareResponse(BaseModel):
    """Detailed prepare response."""

    request_id: str = Field(..., description="Present back on stack creation")
    blueprint: str
    images: List[DetailedImageSchema]
    exposed: List[ExposedServiceSchema] = Field(default_factory=list)
