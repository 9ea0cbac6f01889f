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

"""Digest cache eligibility and TTL rules.

Infra images (declared image, no build) are cached for 24 hours whatever
their tag. Service images are cached for one hour, and only when their tag
looks like a semantic version; mutable tags such as ``latest`` or a branch
name are always checked live.
"""

import re
from datetime import timedelta

from core.compose.entities import ComposeService
from core.image.references import extract_tag
from core.image.value_objects import ImageType, Platform

SEMVER_PATTERN = re.compile(r"^v?\d+\.\d+(\.\d+)?(-[a-zA-Z0-9.-]+)?$")

INFRA_TTL = timedelta(hours=24)
SERVICE_SEMVER_TTL = timedelta(hours=1)
NO_CACHE = timedelta(0)


def is_infra_image(service: ComposeService) -> bool:
    """Infra images declare an image and have no build section."""
    return service.is_infra


def is_semver_tag(image_url: str) -> bool:
    """Check the tag of ``image_url`` against the semantic version shape.

    The part before the first ``-`` is checked first so ``1.2.3-alpine``
    qualifies, then the full tag.
    """
    tag = extract_tag(image_url)
    if not tag:
        return False
    if SEMVER_PATTERN.match(tag.split("-", 1)[0]):
        return True
    return bool(SEMVER_PATTERN.match(tag))


def should_cache(is_infra: bool, image_url: str) -> bool:
    """Decide whether a digest lookup result may be cached."""
    if is_infra:
        return True
    return is_semver_tag(image_url)


def cache_ttl(is_infra: bool, image_url: str) -> timedelta:
    """Return the TTL for a lookup, or zero when it must not be cached."""
    if not should_cache(is_infra, image_url):
        return NO_CACHE
    if is_infra:
        return INFRA_TTL
    return SERVICE_SEMVER_TTL


def image_type(is_infra: bool) -> ImageType:
    """Classify an image for cache bookkeeping."""
    return ImageType.INFRA if is_infra else ImageType.SERVICE


def cache_key(image_url: str, platform: Platform) -> str:
    """Return the cache key ``reference@os/arch``."""
    return f"{image_url}@{platform.os}/{platform.arch}"
