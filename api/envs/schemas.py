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

"""Pydantic schemas for the Envs API."""

from typing import List

from pydantic import BaseModel, Field


class CreateEnvRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=63, description="Env name")


class EnvIdData(BaseModel):
    id: str = Field(..., description="Scoped env identifier")


class CreateEnvResponse(BaseModel):
    data: EnvIdData


class EnvResponse(BaseModel):
    """Standard view of an env."""

    id: str
    name: str
    namespace: str
    created_at: str = ""


class EnvListResponse(BaseModel):
    envs: List[EnvResponse]
