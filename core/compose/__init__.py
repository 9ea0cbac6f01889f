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

"""Compose domain module.

Parsing, metadata extraction and validation of compose blueprints.
"""

from core.compose.entities import (
    BlueprintMetadata,
    ComposeProject,
    ComposeService,
    LisstoExtension,
    RepoConfig,
    ValidationResult,
)
from core.compose.exceptions import (
    ComposeDomainError,
    ComposeValidationError,
    InvalidComposeError,
)
from core.compose.labels import ServiceLabels
from core.compose.parser import parse_compose

__all__ = [
    "BlueprintMetadata",
    "ComposeProject",
    "ComposeService",
    "LisstoExtension",
    "RepoConfig",
    "ValidationResult",
    "ComposeDomainError",
    "ComposeValidationError",
    "InvalidComposeError",
    "ServiceLabels",
    "parse_compose",
]
