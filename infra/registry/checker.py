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

"""Registry v2 image checker over httpx.

Manifests are fetched with the Accept headers of both Docker and OCI
formats. An image index (manifest list) is resolved to the entry of the
requested platform; a single manifest is taken as it is.
"""

import hashlib
import logging
import re
from typing import Dict, Iterable, Optional, Tuple

import httpx

from core.image.entities import ImageMetadata
from core.image.exceptions import RegistryError
from core.image.repositories import ImageChecker
from infra.registry.credentials import DockerConfigCredentials
from infra.registry.references import RegistryReference

logger = logging.getLogger(__name__)

OCI_INDEX = "application/vnd.oci.image.index.v1+json"
DOCKER_MANIFEST_LIST = "application/vnd.docker.distribution.manifest.list.v2+json"
DOCKER_MANIFEST = "application/vnd.docker.distribution.manifest.v2+json"
OCI_MANIFEST = "application/vnd.oci.image.manifest.v1+json"

INDEX_MEDIA_TYPES = (OCI_INDEX, DOCKER_MANIFEST_LIST)
ACCEPT_HEADER = ", ".join((OCI_INDEX, DOCKER_MANIFEST_LIST, DOCKER_MANIFEST, OCI_MANIFEST))

_CHALLENGE_PARAM = re.compile(r'(\w+)="([^"]*)"')


def parse_challenge(header: str) -> Tuple[str, Dict[str, str]]:
    """Split a ``WWW-Authenticate`` header into scheme and parameters."""
    scheme, _, params = header.strip().partition(" ")
    return scheme.lower(), dict(_CHALLENGE_PARAM.findall(params))


class RegistryImageChecker(ImageChecker):
    """Checks image existence against OCI distribution registries.

    Bearer tokens are cached per ``(registry, repository)`` for the lifetime
    of the checker.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        credentials: Optional[DockerConfigCredentials] = None,
        insecure_registries: Iterable[str] = (),
    ):
        self._client = http_client
        self._credentials = credentials
        self._insecure = set(insecure_registries)
        self._tokens: Dict[Tuple[str, str], str] = {}

    def check_image_exists_for_platform(
        self, image_url: str, os: str, arch: str
    ) -> ImageMetadata:
        try:
            ref = RegistryReference.parse(image_url)
        except ValueError as exc:
            logger.warning("Skipping unparsable image reference %s: %s", image_url, exc)
            return ImageMetadata(exists=False)

        response = self._get_manifest(ref)
        if response.status_code in (401, 403, 404):
            logger.debug(
                "Image %s not available (HTTP %d)", image_url, response.status_code
            )
            return ImageMetadata(exists=False)
        if response.status_code >= 400:
            raise RegistryError(
                f"registry {ref.registry} answered HTTP {response.status_code} for {image_url}"
            )

        media_type = self._media_type(response)
        try:
            manifest = response.json()
        except ValueError as exc:
            raise RegistryError(f"invalid manifest for {image_url}: {exc}") from exc
        media_type = media_type or manifest.get("mediaType", "")

        if media_type in INDEX_MEDIA_TYPES or "manifests" in manifest:
            return self._select_platform(image_url, manifest, media_type, os, arch)

        digest = response.headers.get("Docker-Content-Digest", "")
        if not digest:
            digest = "sha256:" + hashlib.sha256(response.content).hexdigest()
        return ImageMetadata(
            exists=True,
            digest=digest,
            manifest_type=media_type,
            manifest=manifest,
        )

    @staticmethod
    def _media_type(response: httpx.Response) -> str:
        return response.headers.get("Content-Type", "").split(";", 1)[0].strip()

    @staticmethod
    def _select_platform(
        image_url: str, index: dict, media_type: str, os: str, arch: str
    ) -> ImageMetadata:
        platform_digests: Dict[str, str] = {}
        architectures = []
        for entry in index.get("manifests") or []:
            platform = entry.get("platform") or {}
            entry_os, entry_arch = platform.get("os", ""), platform.get("architecture", "")
            if not entry_os or not entry_arch or entry_os == "unknown":
                continue
            key = f"{entry_os}/{entry_arch}"
            if key not in platform_digests:
                platform_digests[key] = entry.get("digest", "")
                architectures.append(entry_arch)

        digest = platform_digests.get(f"{os}/{arch}", "")
        if not digest:
            logger.info(
                "Image %s has no manifest for %s/%s (available: %s)",
                image_url, os, arch, ", ".join(sorted(platform_digests)) or "none",
            )
        return ImageMetadata(
            exists=bool(digest),
            digest=digest,
            manifest_type=media_type or OCI_INDEX,
            architectures=architectures,
            platform_digests=platform_digests,
            is_multi_arch=True,
            manifest=index,
        )

    def _manifest_url(self, ref: RegistryReference) -> str:
        scheme = "http" if ref.registry in self._insecure else "https"
        return f"{scheme}://{ref.registry}/v2/{ref.repository}/manifests/{ref.reference}"

    def _get_manifest(self, ref: RegistryReference) -> httpx.Response:
        headers = {"Accept": ACCEPT_HEADER}
        token = self._tokens.get((ref.registry, ref.repository))
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = self._request("GET", self._manifest_url(ref), headers=headers)
        if response.status_code != 401:
            return response

        scheme, params = parse_challenge(response.headers.get("WWW-Authenticate", ""))
        if scheme == "bearer" and params.get("realm"):
            token = self._fetch_token(ref, params)
            if token is None:
                return response
            self._tokens[(ref.registry, ref.repository)] = token
            headers["Authorization"] = f"Bearer {token}"
            return self._request("GET", self._manifest_url(ref), headers=headers)

        basic = self._basic_credentials(ref.registry)
        if scheme == "basic" and basic:
            return self._request("GET", self._manifest_url(ref), headers=headers, auth=basic)
        return response

    def _basic_credentials(self, registry: str) -> Optional[Tuple[str, str]]:
        if self._credentials is None:
            return None
        return self._credentials.get(registry)

    def _fetch_token(self, ref: RegistryReference, challenge: Dict[str, str]) -> Optional[str]:
        params = {"scope": challenge.get("scope") or f"repository:{ref.repository}:pull"}
        if challenge.get("service"):
            params["service"] = challenge["service"]

        basic = self._basic_credentials(ref.registry)
        response = self._request("GET", challenge["realm"], params=params, auth=basic)
        if response.status_code >= 400:
            logger.warning(
                "Token request to %s failed with HTTP %d", challenge["realm"], response.status_code
            )
            return None
        try:
            body = response.json()
        except ValueError:
            logger.warning("Token endpoint %s returned invalid JSON", challenge["realm"])
            return None
        return body.get("token") or body.get("access_token")

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise RegistryError(f"registry request to {url} failed: {exc}") from exc
        if response.status_code >= 500:
            raise RegistryError(f"registry {url} answered HTTP {response.status_code}")
        return response
