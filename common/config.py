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

"""Configuration loader for the Lissto API."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import configparser

CONFIG_PATH_ENV = "LISSTO_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "/etc/lissto/lissto.ini"

CLUSTER_BACKENDS = ("memory", "kubernetes")


@dataclass
class NamespacesConfig:
    """Namespace model configuration."""
    global_namespace: str = "lissto-global"
    developer_prefix: str = "dev-"
    global_branches: Tuple[str, ...] = ("main", "master")


@dataclass
class RegistryConfig:
    """Image registry configuration."""
    default_registry: str = ""
    repository_prefix: str = ""
    docker_config_path: str = ""
    timeout_seconds: float = 10.0
    insecure_registries: Tuple[str, ...] = ()


@dataclass
class IngressConfig:
    """One exposure tier."""
    ingress_class: str = ""
    host_suffix: str = ""
    tls_secret: str = ""


@dataclass
class ImageCacheConfig:
    """Image digest cache configuration."""
    file_path: str = ""
    sweep_interval_seconds: int = 300
    persist_interval_seconds: int = 30


@dataclass
class ClusterConfig:
    """Cluster backend configuration.

    An empty backend lets the ENV profile decide.
    """
    backend: str = ""
    api_server: str = "https://kubernetes.default.svc"
    token_path: str = "/var/run/secrets/kubernetes.io/serviceaccount/token"
    ca_path: str = "/var/run/secrets/kubernetes.io/serviceaccount/ca.crt"
    timeout_seconds: float = 10.0


@dataclass
class LisstoConfig:
    """Lissto API configuration."""
    namespaces: NamespacesConfig = field(default_factory=NamespacesConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    internal_ingress: IngressConfig = field(default_factory=IngressConfig)
    internet_ingress: IngressConfig = field(default_factory=IngressConfig)
    image_cache: ImageCacheConfig = field(default_factory=ImageCacheConfig)
    cluster: ClusterConfig = field(default_factory=ClusterConfig)

    @classmethod
    def defaults(cls) -> "LisstoConfig":
        """Return the configuration used when no file is present."""
        return cls()


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _ingress(parser: configparser.ConfigParser, section: str) -> IngressConfig:
    if not parser.has_section(section):
        return IngressConfig()
    return IngressConfig(
        ingress_class=parser.get(section, "ingress_class", fallback=""),
        host_suffix=parser.get(section, "host_suffix", fallback=""),
        tls_secret=parser.get(section, "tls_secret", fallback=""),
    )


def load_config(config_path: Optional[str] = None) -> LisstoConfig:
    """Load Lissto configuration from INI file.

    Args:
        config_path: Path to configuration file. If None, uses LISSTO_CONFIG_PATH
                    environment variable or default path.

    Returns:
        LisstoConfig instance.

    Raises:
        FileNotFoundError: If config file not found.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    parser = configparser.ConfigParser()
    try:
        parser.read(config_file)
    except configparser.Error as exc:
        raise ValueError(f"Malformed configuration file {config_file}: {exc}") from exc

    if not parser.sections():
        raise ValueError(f"Empty configuration file: {config_file}")

    defaults = LisstoConfig.defaults()

    try:
        namespaces = NamespacesConfig(
            global_namespace=parser.get(
                "namespaces", "global", fallback=defaults.namespaces.global_namespace
            ),
            developer_prefix=parser.get(
                "namespaces", "developer_prefix", fallback=defaults.namespaces.developer_prefix
            ),
            global_branches=tuple(_split_list(parser.get(
                "namespaces", "global_branches",
                fallback=",".join(defaults.namespaces.global_branches),
            ))),
        )

        registry = RegistryConfig(
            default_registry=parser.get("registry", "default_registry", fallback=""),
            repository_prefix=parser.get("registry", "repository_prefix", fallback=""),
            docker_config_path=parser.get("registry", "docker_config_path", fallback=""),
            timeout_seconds=parser.getfloat(
                "registry", "timeout_seconds", fallback=defaults.registry.timeout_seconds
            ),
            insecure_registries=tuple(_split_list(
                parser.get("registry", "insecure_registries", fallback="")
            )),
        )

        image_cache = ImageCacheConfig(
            file_path=parser.get("image_cache", "file_path", fallback=""),
            sweep_interval_seconds=parser.getint(
                "image_cache", "sweep_interval_seconds",
                fallback=defaults.image_cache.sweep_interval_seconds,
            ),
            persist_interval_seconds=parser.getint(
                "image_cache", "persist_interval_seconds",
                fallback=defaults.image_cache.persist_interval_seconds,
            ),
        )

        cluster = ClusterConfig(
            backend=parser.get("cluster", "backend", fallback="").strip().lower(),
            api_server=parser.get("cluster", "api_server", fallback=defaults.cluster.api_server),
            token_path=parser.get("cluster", "token_path", fallback=defaults.cluster.token_path),
            ca_path=parser.get("cluster", "ca_path", fallback=defaults.cluster.ca_path),
            timeout_seconds=parser.getfloat(
                "cluster", "timeout_seconds", fallback=defaults.cluster.timeout_seconds
            ),
        )
    except configparser.Error as exc:
        raise ValueError(f"Invalid configuration in {config_file}: {exc}") from exc

    if cluster.backend and cluster.backend not in CLUSTER_BACKENDS:
        raise ValueError(
            f"cluster backend must be one of {', '.join(CLUSTER_BACKENDS)}, got '{cluster.backend}'"
        )
    if image_cache.sweep_interval_seconds <= 0 or image_cache.persist_interval_seconds <= 0:
        raise ValueError("image_cache intervals must be positive")

    return LisstoConfig(
        namespaces=namespaces,
        registry=registry,
        internal_ingress=_ingress(parser, "ingress.internal"),
        internet_ingress=_ingress(parser, "ingress.internet"),
        image_cache=image_cache,
        cluster=cluster,
    )
