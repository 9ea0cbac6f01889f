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

"""Pydantic schemas for the Blueprints API."""

from typing import List, Optional

from pydantic import BaseModel, Field


class CreateBlueprintRequest(BaseModel):
    """Request model for storing a compose document."""

    compose: str = Field(..., min_length=1, description="Compose YAML")
    repository: Optional[str] = Field(None, description="Source repository URL")
    branch: Optional[str] = Field(None, description="Source branch")
    author: Optional[str] = Field(None, description="Developer the blueprint is created for")


class BlueprintIdData(BaseModel):
    id: str = Field(..., description="Scoped blueprint identifier")


class CreateBlueprintResponse(BaseModel):
    """Identifier of the new or identical existing blueprint."""

    data: BlueprintIdData
    created: bool
    warnings: List[str] = Field(default_factory=list)


class BlueprintResponse(BaseModel):
    """Standard view of a blueprint."""

    id: str
    name: str
    namespace: str
    title: str = ""
    services: List[str] = Field(default_factory=list)
    infra: List[str] = Field(default_factory=list)
    repository: str = ""
    content_hash: str = ""
    created_at: str = ""
    compose: Optional[str] = None


class BlueprintListResponse(BaseModel):
    blueprints: List[BlueprintResponse]
