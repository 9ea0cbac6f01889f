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

"""Manifest serialization."""

from typing import Iterable

import yaml

from core.manifest.exceptions import ManifestTooLargeError
from core.manifest.kinds import KubernetesObject

# ConfigMap payload limit
MAX_MANIFEST_BYTES = 1024 * 1024

DOCUMENT_SEPARATOR = "---\n"


def serialize_objects(objects: Iterable[KubernetesObject]) -> str:
    """Dump every object as YAML and join the documents with ``---``."""
    documents = [
        yaml.safe_dump(obj.to_dict(), default_flow_style=False, sort_keys=False)
        for obj in objects
    ]
    return DOCUMENT_SEPARATOR.join(documents)


def check_manifest_size(manifest: str, limit: int = MAX_MANIFEST_BYTES) -> int:
    """Return the encoded size of ``manifest``.

    Raises:
        ManifestTooLargeError: If it exceeds ``limit`` bytes.
    """
    size = len(manifest.encode("utf-8"))
    if size > limit:
        raise ManifestTooLargeError(size, limit)
    return size
