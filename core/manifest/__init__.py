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

"""Manifest domain module.

Conversion of compose projects to Kubernetes objects, postprocessing and
serialization.
"""

from core.manifest.converter import ComposeConverter
from core.manifest.exceptions import (
    ManifestConversionError,
    ManifestDomainError,
    ManifestTooLargeError,
)
from core.manifest.kinds import KubernetesObject, ObjectKind
from core.manifest.postprocessors import PostprocessingChain, build_postprocessing_chain
from core.manifest.serializer import (
    MAX_MANIFEST_BYTES,
    check_manifest_size,
    serialize_objects,
)

__all__ = [
    "ComposeConverter",
    "ManifestConversionError",
    "ManifestDomainError",
    "ManifestTooLargeError",
    "KubernetesObject",
    "ObjectKind",
    "PostprocessingChain",
    "build_postprocessing_chain",
    "MAX_MANIFEST_BYTES",
    "check_manifest_size",
    "serialize_objects",
]
