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

"""Dependency Injector containers for the Lissto API."""
# pylint: disable=c-extension-no-member

import logging
import os

import httpx
from dependency_injector import containers, providers

from common.config import LisstoConfig, load_config
from core.expose.services import ExposePreprocessor
from core.expose.value_objects import ExposeTier, IngressTierConfig
from core.image.services import ImageResolver
from core.stack.namespaces import NamespaceManager
from core.stack.services import ResourceLocator
from infra.cache.factory import create_image_cache
from infra.cache.prepare_store import CachePrepareResultStore
from infra.cluster.in_memory import (
    InMemoryBlueprintRepository,
    InMemoryConfigMapRepository,
    InMemoryEnvRepository,
    InMemoryNamespaceRepository,
    InMemoryStackRepository,
)
from infra.cluster.kubernetes import (
    KubernetesApi,
    KubernetesBlueprintRepository,
    KubernetesConfigMapRepository,
    KubernetesEnvRepository,
    KubernetesNamespaceRepository,
    KubernetesStackRepository,
    build_kubernetes_client,
)
from infra.id_generator import UUIDRequestIdGenerator
from infra.registry import DockerConfigCredentials, RegistryImageChecker
from infra.services.cache_maintenance import CacheMaintenanceWorker
from orchestrator.blueprint.use_cases import (
    CreateBlueprintUseCase,
    DeleteBlueprintUseCase,
    GetBlueprintUseCase,
    ListBlueprintsUseCase,
)
from orchestrator.env.use_cases import CreateEnvUseCase, GetEnvUseCase, ListEnvsUseCase
from orchestrator.prepare.use_cases import PrepareStackUseCase
from orchestrator.stack.use_cases import (
    CreateStackUseCase,
    DeleteStackUseCase,
    GetStackPhaseUseCase,
    GetStackUseCase,
    ListStacksUseCase,
    ResumeStackUseCase,
    SuspendStackUseCase,
    UpdateStackImagesUseCase,
)

logger = logging.getLogger(__name__)


def _load_config() -> LisstoConfig:
    """Load configuration, falling back to defaults when no file is usable.

    Returns:
        LisstoConfig from ``LISSTO_CONFIG_PATH`` or built-in defaults.
    """
    try:
        return load_config()
    except FileNotFoundError:
        logger.info("No configuration file found, using defaults")
        return LisstoConfig.defaults()
    except ValueError as exc:
        logger.warning("Invalid configuration, using defaults: %s", exc)
        return LisstoConfig.defaults()


def _expose_tiers(config: LisstoConfig):
    """Map configured ingress sections onto exposure tiers."""
    return {
        ExposeTier.INTERNAL: IngressTierConfig(
            ingress_class=config.internal_ingress.ingress_class,
            host_suffix=config.internal_ingress.host_suffix,
            tls_secret=config.internal_ingress.tls_secret,
        ),
        ExposeTier.INTERNET: IngressTierConfig(
            ingress_class=config.internet_ingress.ingress_class,
            host_suffix=config.internet_ingress.host_suffix,
            tls_secret=config.internet_ingress.tls_secret,
        ),
    }


def _registry_http_client(config: LisstoConfig) -> httpx.Client:
    return httpx.Client(timeout=config.registry.timeout_seconds, follow_redirects=True)


def _registry_credentials(config: LisstoConfig) -> DockerConfigCredentials:
    return DockerConfigCredentials(config.registry.docker_config_path or None)


def _cluster_backend(config: LisstoConfig) -> str:
    """Return the configured cluster backend, or the ENV profile default.

    ENV=prod talks to the Kubernetes API, anything else keeps resources in memory.
    """
    if config.cluster.backend:
        return config.cluster.backend
    return "kubernetes" if os.getenv("ENV", "dev").lower() == "prod" else "memory"


def _kubernetes_api(config: LisstoConfig) -> KubernetesApi:
    return KubernetesApi(
        build_kubernetes_client(
            api_server=config.cluster.api_server,
            token_path=config.cluster.token_path,
            ca_path=config.cluster.ca_path,
            timeout_seconds=config.cluster.timeout_seconds,
        )
    )


class Container(containers.DeclarativeContainer):  # pylint: disable=R0903
    """Application container.

    Cluster adapters are chosen by backend: ``memory`` keeps blueprints, envs
    and stacks in process, ``kubernetes`` stores them as custom resources
    through the API server using the pod's service account. Registries are
    queried over HTTP in both cases.
    """

    config = providers.Singleton(_load_config)
    cluster_backend = providers.Callable(_cluster_backend, config=config)

    namespace_manager = providers.Singleton(
        NamespaceManager,
        global_namespace=config.provided.namespaces.global_namespace,
        developer_prefix=config.provided.namespaces.developer_prefix,
        global_branches=config.provided.namespaces.global_branches,
    )

    request_id_generator = providers.Singleton(UUIDRequestIdGenerator)

    # --- Caches ---
    image_cache = providers.Singleton(
        create_image_cache,
        file_path=config.provided.image_cache.file_path,
    )

    prepare_result_store = providers.Singleton(CachePrepareResultStore, cache=image_cache)

    cache_maintenance_worker = providers.Singleton(
        CacheMaintenanceWorker,
        cache=image_cache,
        sweep_interval=config.provided.image_cache.sweep_interval_seconds,
        persist_interval=config.provided.image_cache.persist_interval_seconds,
    )

    # --- Registry ---
    registry_http_client = providers.Singleton(_registry_http_client, config=config)
    registry_credentials = providers.Singleton(_registry_credentials, config=config)

    image_checker = providers.Singleton(
        RegistryImageChecker,
        http_client=registry_http_client,
        credentials=registry_credentials,
        insecure_registries=config.provided.registry.insecure_registries,
    )

    image_resolver = providers.Singleton(
        ImageResolver,
        image_checker=image_checker,
        cache=image_cache,
        global_registry=config.provided.registry.default_registry,
        global_prefix=config.provided.registry.repository_prefix,
    )

    expose_preprocessor = providers.Singleton(
        ExposePreprocessor,
        tiers=providers.Callable(_expose_tiers, config=config),
    )

    # --- Cluster repositories ---
    kubernetes_api = providers.Singleton(_kubernetes_api, config=config)

    namespace_repository = providers.Selector(
        cluster_backend,
        memory=providers.Singleton(InMemoryNamespaceRepository),
        kubernetes=providers.Singleton(KubernetesNamespaceRepository, api=kubernetes_api),
    )

    blueprint_repository = providers.Selector(
        cluster_backend,
        memory=providers.Singleton(InMemoryBlueprintRepository),
        kubernetes=providers.Singleton(KubernetesBlueprintRepository, api=kubernetes_api),
    )

    env_repository = providers.Selector(
        cluster_backend,
        memory=providers.Singleton(InMemoryEnvRepository),
        kubernetes=providers.Singleton(KubernetesEnvRepository, api=kubernetes_api),
    )

    memory_config_map_repository = providers.Singleton(InMemoryConfigMapRepository)

    config_map_repository = providers.Selector(
        cluster_backend,
        memory=memory_config_map_repository,
        kubernetes=providers.Singleton(KubernetesConfigMapRepository, api=kubernetes_api),
    )

    stack_repository = providers.Selector(
        cluster_backend,
        memory=providers.Singleton(InMemoryStackRepository, config_maps=memory_config_map_repository),
        kubernetes=providers.Singleton(KubernetesStackRepository, api=kubernetes_api),
    )

    resource_locator = providers.Factory(
        ResourceLocator,
        namespace_manager=namespace_manager,
        blueprint_repo=blueprint_repository,
        stack_repo=stack_repository,
    )

    # --- Use cases ---
    prepare_stack_use_case = providers.Factory(
        PrepareStackUseCase,
        namespace_manager=namespace_manager,
        env_repo=env_repository,
        locator=resource_locator,
        resolver=image_resolver,
        expose_preprocessor=expose_preprocessor,
        result_store=prepare_result_store,
        id_generator=request_id_generator,
    )

    create_stack_use_case = providers.Factory(
        CreateStackUseCase,
        namespace_manager=namespace_manager,
        namespace_repo=namespace_repository,
        env_repo=env_repository,
        locator=resource_locator,
        stack_repo=stack_repository,
        config_map_repo=config_map_repository,
        result_store=prepare_result_store,
        expose_preprocessor=expose_preprocessor,
    )

    get_stack_use_case = providers.Factory(GetStackUseCase, locator=resource_locator)
    list_stacks_use_case = providers.Factory(ListStacksUseCase, locator=resource_locator)
    get_stack_phase_use_case = providers.Factory(GetStackPhaseUseCase, locator=resource_locator)

    update_stack_images_use_case = providers.Factory(
        UpdateStackImagesUseCase,
        locator=resource_locator,
        stack_repo=stack_repository,
    )

    suspend_stack_use_case = providers.Factory(
        SuspendStackUseCase,
        locator=resource_locator,
        stack_repo=stack_repository,
    )

    resume_stack_use_case = providers.Factory(
        ResumeStackUseCase,
        locator=resource_locator,
        stack_repo=stack_repository,
    )

    delete_stack_use_case = providers.Factory(
        DeleteStackUseCase,
        locator=resource_locator,
        stack_repo=stack_repository,
    )

    create_blueprint_use_case = providers.Factory(
        CreateBlueprintUseCase,
        namespace_manager=namespace_manager,
        namespace_repo=namespace_repository,
        blueprint_repo=blueprint_repository,
    )

    get_blueprint_use_case = providers.Factory(GetBlueprintUseCase, locator=resource_locator)
    list_blueprints_use_case = providers.Factory(ListBlueprintsUseCase, locator=resource_locator)

    delete_blueprint_use_case = providers.Factory(
        DeleteBlueprintUseCase,
        namespace_manager=namespace_manager,
        blueprint_repo=blueprint_repository,
    )

    create_env_use_case = providers.Factory(
        CreateEnvUseCase,
        namespace_manager=namespace_manager,
        namespace_repo=namespace_repository,
        env_repo=env_repository,
    )

    list_envs_use_case = providers.Factory(
        ListEnvsUseCase,
        namespace_manager=namespace_manager,
        env_repo=env_repository,
    )

    get_env_use_case = providers.Factory(
        GetEnvUseCase,
        namespace_manager=namespace_manager,
        env_repo=env_repository,
    )


# Singleton container instance shared across app and dependencies
container = Container()

__all__ = ["Container", "container"]
