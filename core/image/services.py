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

"""Image resolution service.

Turns the image intent of a compose service into a digest-pinned reference.
Registry, repository and tag are each chosen by an ordered list of rules;
every rule returns ``None`` when it has no opinion, so the chains can be
tested one rule at a time.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from core.cache.exceptions import CacheError, CacheExpiredError, CacheNotFoundError
from core.cache.repositories import Cache
from core.compose.entities import ComposeService
from core.compose.labels import PLATFORM_ARCH_LABEL, PLATFORM_OS_LABEL
from core.image import cache_policy
from core.image.entities import (
    CandidateAttempt,
    DigestCacheEntry,
    ImageResolution,
    ResolutionContext,
)
from core.image.exceptions import (
    DeclaredImageNotFoundError,
    ImageNotFoundError,
    ImageOverrideNotFoundError,
    InvalidPlatformError,
    NoImageFoundError,
    RegistryError,
)
from core.image.references import (
    build_image_url,
    extract_original_tag,
    format_image_with_digest,
)
from core.image.repositories import ImageChecker
from core.image.value_objects import (
    CandidateSource,
    Platform,
    ResolutionMethod,
    TagCandidate,
)

logger = logging.getLogger(__name__)

LATEST_TAG = "latest"


@dataclass(frozen=True)
class GlobalImageDefaults:
    """Process-wide fallbacks for registry and repository prefix."""

    registry: str = ""
    repository_prefix: str = ""


NameRule = Callable[[ComposeService, ResolutionContext, GlobalImageDefaults], Optional[str]]
TagRule = Callable[[ComposeService, ResolutionContext], Optional[TagCandidate]]


def registry_from_label(service, context, defaults):
    return service.lissto_labels.registry


def registry_from_compose(service, context, defaults):
    return context.compose_registry or None


def registry_from_global(service, context, defaults):
    return defaults.registry or None


REGISTRY_RULES: Sequence[NameRule] = (
    registry_from_label,
    registry_from_compose,
    registry_from_global,
)


def name_from_label(service, context, defaults):
    return service.lissto_labels.repository


def name_from_compose_repository(service, context, defaults):
    return context.compose_repository or None


def name_from_compose_prefix(service, context, defaults):
    if context.compose_repository_prefix:
        return context.compose_repository_prefix + service.name
    return None


def name_from_global_prefix(service, context, defaults):
    if defaults.repository_prefix:
        return defaults.repository_prefix + service.name
    return None


def name_from_service(service, context, defaults):
    return service.name


IMAGE_NAME_RULES: Sequence[NameRule] = (
    name_from_label,
    name_from_compose_repository,
    name_from_compose_prefix,
    name_from_global_prefix,
    name_from_service,
)


def _candidate(tag: Optional[str], source: CandidateSource) -> Optional[TagCandidate]:
    if not tag or not tag.strip():
        return None
    return TagCandidate(tag=tag, source=source)


def tag_from_original(service, context):
    return _candidate(extract_original_tag(service.image), CandidateSource.ORIGINAL)


def tag_from_label(service, context):
    return _candidate(service.lissto_labels.tag, CandidateSource.LABEL)


def tag_from_commit(service, context):
    return _candidate(context.commit, CandidateSource.COMMIT)


def tag_from_branch(service, context):
    return _candidate(context.branch, CandidateSource.BRANCH)


def tag_latest(service, context):
    return TagCandidate(tag=LATEST_TAG, source=CandidateSource.LATEST)


TAG_RULES: Sequence[TagRule] = (
    tag_from_original,
    tag_from_label,
    tag_from_commit,
    tag_from_branch,
    tag_latest,
)


def first_opinion(
    rules: Sequence[NameRule],
    service: ComposeService,
    context: ResolutionContext,
    defaults: GlobalImageDefaults,
) -> str:
    """Return the value of the first rule that has one, or ``""``."""
    for rule in rules:
        value = rule(service, context, defaults)
        if value:
            return value
    return ""


class ImageResolver:
    """Resolves service images to digest-pinned references.

    The cache is optional; when absent, or when a lookup is not eligible for
    caching, every check goes to the registry.
    """

    def __init__(
        self,
        image_checker: ImageChecker,
        cache: Optional[Cache] = None,
        global_registry: str = "",
        global_prefix: str = "",
        default_platform: Optional[Platform] = None,
    ):
        """Initialize resolver with its collaborators.

        Args:
            image_checker: Registry existence checker.
            cache: Digest cache, or None to always check live.
            global_registry: Registry used when neither label nor compose sets one.
            global_prefix: Repository prefix used when nothing else applies.
            default_platform: Platform used when a service sets no platform labels.
        """
        self._checker = image_checker
        self._cache = cache
        self._defaults = GlobalImageDefaults(global_registry, global_prefix)
        self._default_platform = default_platform or Platform()

    def resolve_registry(self, service: ComposeService, context: ResolutionContext) -> str:
        """Label, then compose extension, then global default, then none."""
        return first_opinion(REGISTRY_RULES, service, context, self._defaults)

    def resolve_image_name(self, service: ComposeService, context: ResolutionContext) -> str:
        """Label, then compose repository, then compose or global prefix, then name."""
        return first_opinion(IMAGE_NAME_RULES, service, context, self._defaults)

    def tag_candidates(
        self, service: ComposeService, context: ResolutionContext
    ) -> List[TagCandidate]:
        """Return tag candidates in the order they are tried."""
        candidates = []
        for rule in TAG_RULES:
            candidate = rule(service, context)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def platform_for(self, service: ComposeService) -> Platform:
        """Return the platform requested by the service labels.

        Raises:
            InvalidPlatformError: If a platform label is malformed.
        """
        labels = service.labels
        os_name = labels.get(PLATFORM_OS_LABEL) or self._default_platform.os
        arch = labels.get(PLATFORM_ARCH_LABEL) or self._default_platform.arch
        try:
            return Platform(os=str(os_name).strip(), arch=str(arch).strip())
        except ValueError as exc:
            raise InvalidPlatformError(
                f"service {service.name}: {exc}"
            ) from exc

    def get_image_digest_for_platform(self, image_url: str, platform: Platform) -> str:
        """Check ``image_url`` live and return its digest-pinned form.

        An image the registry reports without a digest is returned unchanged.

        Raises:
            ImageNotFoundError: If the image is missing or the registry failed.
        """
        try:
            metadata = self._checker.check_image_exists_for_platform(
                image_url, platform.os, platform.arch
            )
        except RegistryError as exc:
            logger.info("Registry check failed for %s (%s): %s", image_url, platform, exc.message)
            raise ImageNotFoundError(image_url) from exc

        if not metadata.exists:
            raise ImageNotFoundError(image_url)

        if not metadata.digest:
            logger.warning(
                "Image %s exists but its digest is unavailable for %s", image_url, platform
            )
            return image_url

        return format_image_with_digest(image_url, metadata.digest)

    def get_image_digest(self, image_url: str, service: ComposeService) -> str:
        """Digest lookup for ``image_url`` through the cache when eligible.

        Cache failures are logged and fall back to a live check.

        Raises:
            ImageNotFoundError: If the image does not exist.
            InvalidPlatformError: If the service platform labels are malformed.
        """
        platform = self.platform_for(service)
        if self._cache is None:
            return self.get_image_digest_for_platform(image_url, platform)

        is_infra = cache_policy.is_infra_image(service)
        kind = cache_policy.image_type(is_infra)
        if not cache_policy.should_cache(is_infra, image_url):
            logger.debug("Image %s (%s) is not cacheable, checking live", image_url, kind.value)
            return self.get_image_digest_for_platform(image_url, platform)

        key = cache_policy.cache_key(image_url, platform)
        cached = self._read_cache(key)
        if cached is not None:
            logger.info("Image digest cache hit for %s (%s, %s)", image_url, kind.value, platform)
            return cached.digest

        logger.debug("Image digest cache miss for %s (%s, %s)", image_url, kind.value, platform)
        digest = self.get_image_digest_for_platform(image_url, platform)

        ttl = cache_policy.cache_ttl(is_infra, image_url)
        if ttl:
            entry = DigestCacheEntry(
                image_url=image_url,
                digest=digest,
                platform=str(platform),
                image_type=kind.value,
                cached_at=datetime.now(timezone.utc),
            )
            try:
                self._cache.set(key, entry.to_dict(), ttl)
            except CacheError as exc:
                logger.warning("Failed to cache digest of %s: %s", image_url, exc.message)
        return digest

    def _read_cache(self, key: str) -> Optional[DigestCacheEntry]:
        try:
            return DigestCacheEntry.from_dict(self._cache.get(key))
        except (CacheNotFoundError, CacheExpiredError):
            return None
        except CacheError as exc:
            logger.warning("Digest cache read failed for %s: %s", key, exc.message)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Discarding malformed digest cache entry %s: %s", key, exc)
        return None

    def resolve_override(self, service: ComposeService) -> Optional[ImageResolution]:
        """Resolve the ``lissto.dev/image`` override, if the service sets one.

        Returns:
            The resolution, or None when the service has no override.

        Raises:
            ImageOverrideNotFoundError: If the override does not exist. No
                other candidate is tried afterwards.
        """
        override = service.lissto_labels.image_override
        if not override:
            return None

        logger.info("Using image override %s for service %s", override, service.name)
        attempt = CandidateAttempt(
            image_url=override, tag=ResolutionMethod.OVERRIDE.value,
            source=ResolutionMethod.OVERRIDE.value,
        )
        resolution = ImageResolution(
            method=ResolutionMethod.OVERRIDE.value, candidates=[attempt]
        )
        try:
            digest = self.get_image_digest(override, service)
        except ImageNotFoundError as exc:
            logger.warning("Image override %s for service %s not found", override, service.name)
            attempt.error = exc.message
            raise ImageOverrideNotFoundError(override, service.name, resolution) from exc

        attempt.success = True
        attempt.digest = digest
        resolution.final_image = digest
        resolution.selected = override
        return resolution

    def resolve_declared(self, service: ComposeService) -> ImageResolution:
        """Pin the image an infra service declares, as a single ``original`` candidate.

        Raises:
            DeclaredImageNotFoundError: If the declared image does not exist.
        """
        attempt = CandidateAttempt(
            image_url=service.image,
            tag=ResolutionMethod.ORIGINAL.value,
            source=ResolutionMethod.ORIGINAL.value,
        )
        resolution = ImageResolution(
            method=ResolutionMethod.ORIGINAL.value,
            selected=service.image,
            candidates=[attempt],
        )
        try:
            digest = self.get_image_digest(service.image, service)
        except ImageNotFoundError as exc:
            attempt.error = exc.message
            raise DeclaredImageNotFoundError(service.image, service.name, resolution) from exc

        attempt.success = True
        attempt.digest = digest
        resolution.final_image = digest
        return resolution

    def resolve_detailed(
        self, service: ComposeService, context: ResolutionContext
    ) -> ImageResolution:
        """Try every tag candidate in order and stop at the first existing image.

        Raises:
            NoImageFoundError: If no candidate exists; the exception carries
                the registry, image name and every attempt.
        """
        registry = self.resolve_registry(service, context)
        image_name = self.resolve_image_name(service, context)
        candidates = self.tag_candidates(service, context)
        resolution = ImageResolution(registry=registry, image_name=image_name)

        logger.info(
            "Resolving image for service %s: registry=%s, image_name=%s, candidates=%d",
            service.name,
            registry,
            image_name,
            len(candidates),
        )

        for candidate in candidates:
            image_url = build_image_url(registry, image_name, candidate.tag)
            attempt = CandidateAttempt(
                image_url=image_url, tag=candidate.tag, source=candidate.source.value
            )
            resolution.candidates.append(attempt)
            try:
                digest = self.get_image_digest(image_url, service)
            except ImageNotFoundError as exc:
                attempt.error = exc.message
                logger.info(
                    "Image %s (%s) not found for service %s, trying next candidate",
                    image_url,
                    candidate.source.value,
                    service.name,
                )
                continue

            attempt.success = True
            attempt.digest = digest
            resolution.final_image = digest
            resolution.method = candidate.source.value
            resolution.selected = image_url
            logger.info(
                "Found image %s (%s) for service %s", digest, candidate.source.value, service.name
            )
            return resolution

        raise NoImageFoundError(service.name, resolution)

    def resolve(self, service: ComposeService, context: ResolutionContext) -> ImageResolution:
        """Resolve one service: override, then declared infra image, then candidates.

        Raises:
            ImageResolutionError: If no image could be pinned; the exception
                carries the partial resolution.
            InvalidPlatformError: If the platform labels are malformed.
        """
        override = self.resolve_override(service)
        if override is not None:
            return override
        if service.is_infra:
            return self.resolve_declared(service)
        return self.resolve_detailed(service, context)
