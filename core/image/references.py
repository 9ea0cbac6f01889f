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

"""Image reference helpers.

A reference such as ``registry.com:5000/team/app:1.0`` carries two kinds of
colon: the registry port separator and the tag separator. A colon is a port
separator only when it ends the host segment: no ``/`` comes before it and
its digits are followed by ``/``. The first colon from the right that is not
a port separator is the tag separator.
"""

from typing import Optional

DIGEST_MARKER = "@sha256:"


def _is_port_colon(reference: str, index: int) -> bool:
    if "/" in reference[:index]:
        return False
    rest = reference[index + 1:]
    port, slash, _ = rest.partition("/")
    return bool(slash) and port.isdigit()


def _tag_colon_index(reference: str) -> int:
    """Return the index of the tag-separating colon, or -1."""
    for index in range(len(reference) - 1, -1, -1):
        if reference[index] != ":":
            continue
        if not _is_port_colon(reference, index):
            return index
    return -1


def strip_digest(reference: str) -> str:
    """Drop a trailing ``@digest`` segment."""
    at_index = reference.rfind("@")
    if at_index == -1:
        return reference
    return reference[:at_index]


def has_digest(reference: Optional[str]) -> bool:
    """Check if the reference is pinned by a sha256 digest."""
    return bool(reference) and DIGEST_MARKER in reference


def format_image_with_digest(reference: str, digest: str) -> str:
    """Pin a reference to ``digest``, dropping any tag.

    ``nginx:latest`` + ``sha256:abc`` gives ``nginx@sha256:abc``. A reference
    that already carries a digest has it replaced rather than appended.
    """
    at_index = reference.rfind("@")
    if at_index != -1:
        return f"{reference[:at_index]}@{digest}"

    colon = _tag_colon_index(reference)
    if colon == -1:
        return f"{reference}@{digest}"
    return f"{reference[:colon]}@{digest}"


def extract_tag(reference: str) -> str:
    """Return the tag of a reference, ignoring digests and registry ports."""
    reference = strip_digest(reference)
    colon = _tag_colon_index(reference)
    if colon == -1:
        return ""
    return reference[colon + 1:]


def extract_original_tag(image: Optional[str]) -> str:
    """Return the tag the compose author pinned on ``image``.

    Digest references carry no tag. A text after the last colon that
    contains ``/`` is a registry port, not a tag.
    """
    if not image or "@" in image:
        return ""
    colon = image.rfind(":")
    if colon == -1:
        return ""
    tag = image[colon + 1:]
    if "/" in tag:
        return ""
    return tag


def build_image_url(registry: str, image_name: str, tag: str) -> str:
    """Compose ``registry/name:tag`` or ``name:tag`` without a registry."""
    if registry:
        return f"{registry}/{image_name}:{tag}"
    return f"{image_name}:{tag}"
