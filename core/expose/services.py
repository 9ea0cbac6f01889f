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

"""Expose preprocessing.

Rewrites ``lissto.dev/expose`` into the labels the manifest converter turns
into an Ingress, and stamps every service with the stack label so it ends up
on the generated pod templates.
"""

import copy
import logging
from typing import Dict, Mapping, Optional

from core.compose.entities import ComposeService
from core.compose.labels import (
    EXPOSE_LABEL,
    KOMPOSE_EXPOSE_LABEL,
    KOMPOSE_INGRESS_CLASS_LABEL,
    KOMPOSE_TLS_SECRET_LABEL,
    STACK_LABEL,
)
from core.expose.exceptions import ExposeConfigurationError
from core.expose.value_objects import ExposeTier, IngressTierConfig

logger = logging.getLogger(__name__)


def strip_ingress_labels(labels: Mapping[str, str]) -> Dict[str, str]:
    """Return a copy of ``labels`` without converter ingress labels."""
    return {
        key: value
        for key, value in labels.items()
        if not key.startswith(KOMPOSE_EXPOSE_LABEL)
    }


class ExposePreprocessor:
    """Turns expose labels into ingress labels for one env and stack."""

    def __init__(self, tiers: Optional[Mapping[ExposeTier, IngressTierConfig]] = None):
        """Initialize with the ingress configuration of each tier."""
        self._tiers = dict(tiers or {})

    def tier_config(self, service: ComposeService) -> Optional[IngressTierConfig]:
        """Return the configured tier of an exposed service.

        Returns:
            None when the service is not exposed.

        Raises:
            ExposeConfigurationError: If the requested tier is not configured.
        """
        labels = service.lissto_labels
        if not labels.is_exposed:
            return None
        tier = ExposeTier.from_label(labels.expose)
        config = self._tiers.get(tier)
        if config is None or not config.is_configured:
            raise ExposeConfigurationError(service.name, tier.value)
        return config

    @staticmethod
    def hostname(service_name: str, env: str, config: IngressTierConfig) -> str:
        """Return ``<service>-<env><suffix>``."""
        return f"{service_name}-{env}{config.host_suffix}"

    def process(
        self, services: Mapping[str, ComposeService], env: str, stack: str
    ) -> Dict[str, ComposeService]:
        """Return rewritten copies of ``services``.

        Every tier is checked before any service is rewritten, so a
        misconfigured tier leaves nothing half processed.

        Raises:
            ExposeConfigurationError: If an exposed service needs a tier that
                is not configured.
        """
        tiers = {name: self.tier_config(service) for name, service in services.items()}

        processed = {}
        for name, service in services.items():
            rewritten = copy.deepcopy(service)
            labels = strip_ingress_labels(rewritten.labels)
            rewritten.deploy_labels[STACK_LABEL] = stack

            config = tiers[name]
            if config is not None:
                host = self.hostname(name, env, config)
                labels.pop(EXPOSE_LABEL, None)
                labels[KOMPOSE_EXPOSE_LABEL] = host
                labels[KOMPOSE_INGRESS_CLASS_LABEL] = config.ingress_class
                labels[KOMPOSE_TLS_SECRET_LABEL] = config.tls_secret
                logger.info(
                    "Service %s exposed at %s (class %s, stack %s)",
                    name,
                    host,
                    config.ingress_class,
                    stack,
                )

            rewritten.labels = labels
            processed[name] = rewritten
        return processed

    def get_exposed_service_url(self, service: ComposeService, env: str) -> str:
        """Preview the hostname ``process`` would assign, without mutating.

        Returns ``""`` when the service is not exposed, ``env`` is empty or the
        requested tier is not configured.
        """
        if not env:
            return ""
        try:
            config = self.tier_config(service)
        except ExposeConfigurationError as exc:
            logger.warning("Cannot preview URL: %s", exc.message)
            return ""
        if config is None:
            return ""
        return self.hostname(service.name, env, config)
