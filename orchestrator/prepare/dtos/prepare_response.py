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

"""Prepare response DTOs."""

from dataclasses import dataclass, field
from typing import List

from core.image.entities import CandidateAttempt


@dataclass
class ServiceImageResult:  # pylint: disable=too-many-instance-attributes
    """Resolution outcome of one service.

    Attributes:
        service: Compose service name.
        digest: Digest-pinned reference, empty on failure.
        image: Human readable reference that produced the digest.
        method: ``override``, ``original`` or the winning candidate source.
        registry: Registry used to compose candidates.
        image_name: Repository used to compose candidates.
        candidates: Every candidate tried, in order.
        exposed: Whether the service gets an ingress.
        url: Public hostname of an exposed service.
        error: Failure message, empty on success.
    """

    service: str
    digest: str = ""
    image: str = ""
    method: str = ""
    registry: str = ""
    image_name: str = ""
    candidates: List[CandidateAttempt] = field(default_factory=list)
    exposed: bool = False
    url: str = ""
    error: str = ""


@dataclass(frozen=True)
class ExposedService:
    """Hostname assigned to an exposed service."""

    service: str
    url: str


@dataclass(frozen=True)
class PrepareStackResponse:
    """Response DTO for a prepare request.

    Attributes:
        request_id: Key of the cached result, presented back on create.
        blueprint: Blueprint identifier as requested.
        images: One result per service, sorted by service name.
        exposed: Exposed services and their hostnames.
    """

    request_id: str
    blueprint: str
    images: List[ServiceImageResult]
    exposed: List[ExposedService]
