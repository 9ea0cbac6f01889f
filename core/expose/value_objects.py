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

"""Value objects for service exposure."""

from dataclasses import dataclass
from enum import Enum


class ExposeTier(str, Enum):
    """Visibility tier requested by ``lissto.dev/expose``."""

    INTERNAL = "internal"
    INTERNET = "internet"

    @classmethod
    def from_label(cls, value: str) -> "ExposeTier":
        """Map a label value to a tier; only an explicit ``internet`` leaves the internal tier."""
        normalized = (value or "").strip().lower()
        if normalized == cls.INTERNET.value:
            return cls.INTERNET
        return cls.INTERNAL


@dataclass(frozen=True)
class IngressTierConfig:
    """Ingress settings of one visibility tier.

    Attributes:
        ingress_class: Ingress class name handed to the controller.
        host_suffix: Suffix appended to ``<service>-<env>``, e.g. ``.dev.example.com``.
        tls_secret: Secret holding the tier's TLS certificate.
    """

    ingress_class: str = ""
    host_suffix: str = ""
    tls_secret: str = ""

    @property
    def is_configured(self) -> bool:
        """Check if every setting the tier needs is present."""
        return bool(self.ingress_class and self.host_suffix and self.tls_secret)
