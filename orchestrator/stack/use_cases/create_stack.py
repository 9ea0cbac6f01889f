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

"""CreateStack use case implementation.

Pipeline: validate, load the prepare result, bind images, expose-preprocess,
convert, postprocess, serialize, size check, then create the ConfigMap,
create the Stack and link the ConfigMap to it. Once the ConfigMap exists,
any failure deletes every created resource in reverse order before the
original error propagates.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Tuple

from api.logging_utils import log_secure_info
from core.compose.entities import ComposeProject
from core.compose.labels import STACK_LABEL
from core.compose.parser import parse_compose
from core.expose.services import ExposePreprocessor
from core.manifest.converter import ComposeConverter
from core.manifest.postprocessors import build_postprocessing_chain
from core.manifest.serializer import MAX_MANIFEST_BYTES, check_manifest_size, serialize_objects
from core.stack.entities import (
    CREATED_BY_ANNOTATION,
    MANAGED_BY_LABEL,
    MANAGED_BY_VALUE,
    MANIFESTS_KEY,
    STACK_BLUEPRINT_TITLE_ANNOTATION,
    Blueprint,
    ConfigMap,
    ImageInfo,
    PrepareResult,
    Stack,
    StackSpec,
)
from core.stack.exceptions import (
    InvalidReferenceError,
    InvalidImageDigestError,
    MaterializationError,
    MissingServiceImageError,
    PrepareResultExpiredError,
    PrepareResultNotFoundError,
    ResourceNotFoundError,
    StackDomainError,
)
from core.stack.namespaces import NamespaceManager
from core.stack.repositories import (
    ConfigMapRepository,
    EnvRepository,
    NamespaceRepository,
    PrepareResultStore,
    StackRepository,
)
from core.stack.services import ResourceLocator
from core.stack.value_objects import ScopedId, generate_stack_name
from orchestrator.stack.commands import CreateStackCommand

logger = logging.getLogger(__name__)

CONFIG_MAP_PREFIX = "lissto-"
DIGEST_MARKER = "@sha256:"

Compensation = Tuple[str, Callable[[], None]]


class CreateStackUseCase:  # pylint: disable=too-few-public-methods
    """Use case for materializing a prepared blueprint into a stack.

    Attributes:
        namespace_manager: Maps callers to namespaces.
        namespace_repo: Ensures the target namespace exists.
        env_repo: Env repository port.
        locator: Finds the blueprint by identifier.
        stack_repo: Stack repository port.
        config_map_repo: ConfigMap repository port.
        result_store: Prepare result store.
        expose_preprocessor: Rewrites exposed services into ingress labels.
        max_manifest_bytes: Manifest size limit.
    """

    def __init__(
        self,
        namespace_manager: NamespaceManager,
        namespace_repo: NamespaceRepository,
        env_repo: EnvRepository,
        locator: ResourceLocator,
        stack_repo: StackRepository,
        config_map_repo: ConfigMapRepository,
        result_store: PrepareResultStore,
        expose_preprocessor: ExposePreprocessor,
        max_manifest_bytes: int = MAX_MANIFEST_BYTES,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self._namespaces = namespace_manager
        self._namespace_repo = namespace_repo
        self._env_repo = env_repo
        self._locator = locator
        self._stack_repo = stack_repo
        self._config_map_repo = config_map_repo
        self._result_store = result_store
        self._expose = expose_preprocessor
        self._max_manifest_bytes = max_manifest_bytes
        self._clock = clock

    def execute(self, command: CreateStackCommand) -> str:
        """Create the stack and return its scoped id.

        Args:
            command: CreateStack command.

        Returns:
            Scoped identifier ``<scope>/<name>`` of the new stack.

        Raises:
            InvalidReferenceError: If the blueprint identifier is malformed.
            EnvNotFoundError: If the env does not exist in the caller's namespace.
            PrepareResultExpiredError: If the request id is unknown or expired.
            PrepareResultNotFoundError: If the request id belongs to another namespace.
            BlueprintNotFoundError: If the blueprint is not readable by the caller.
            StackValidationError: If a service has no digest-pinned image.
            ExposeConfigurationError: If an exposed service has no configured tier.
            ManifestDomainError: If conversion fails or the manifest is too large.
            ClusterError: If a cluster operation fails.
        """
        caller = command.caller
        try:
            ScopedId.parse(command.blueprint)
        except ValueError as exc:
            raise InvalidReferenceError(
                f"Invalid blueprint reference: {exc}", command.correlation_id
            ) from exc
        namespace = self._namespaces.developer_namespace(caller.username)

        env = self._env_repo.get(namespace, command.env)
        prepared = self._load_prepare_result(command, namespace)
        blueprint = self._locator.find_blueprint(command.blueprint, caller)

        project = parse_compose(blueprint.compose)
        images = self._bind_images(project, prepared, command.correlation_id)

        stack_name = generate_stack_name(prepared.commit, prepared.tag, self._clock())
        project.services = self._expose.process(project.services, env.name, stack_name)
        manifest = self._generate_manifest(project, namespace, stack_name)

        self._namespace_repo.ensure_namespace(namespace)
        self._materialize(command, namespace, stack_name, blueprint, env.name, images, manifest)

        scoped_id = self._namespaces.generate_scoped_id(namespace, stack_name)
        log_secure_info(
            "info",
            f"Created stack {scoped_id} from blueprint {command.blueprint} in env {env.name}",
            identifier=caller.username,
            request_id=command.request_id,
            end_section=True,
        )
        return scoped_id

    def _load_prepare_result(self, command: CreateStackCommand, namespace: str) -> PrepareResult:
        prepared = self._result_store.load(command.request_id)
        if prepared is None:
            raise PrepareResultExpiredError(
                "Invalid or expired request ID. Please run /prepare again.",
                command.correlation_id,
            )
        if prepared.namespace != namespace:
            logger.warning(
                "Request id presented from namespace %s belongs to %s",
                namespace,
                prepared.namespace,
            )
            raise PrepareResultNotFoundError("Request ID not found", command.correlation_id)
        return prepared

    @staticmethod
    def _bind_images(
        project: ComposeProject, prepared: PrepareResult, correlation_id: str
    ) -> Dict[str, ImageInfo]:
        """Pin every service to its prepared digest, before any cluster mutation."""
        images: Dict[str, ImageInfo] = {}
        for name in project.service_names():
            info = prepared.images.get(name)
            if info is None or not info.digest:
                raise MissingServiceImageError(name, correlation_id)
            if DIGEST_MARKER not in info.digest:
                raise InvalidImageDigestError(name, info.digest, correlation_id)

            service = project.services[name]
            bound = ImageInfo(
                digest=info.digest,
                image=info.image,
                url=info.url,
                container_name=service.container_name or "",
            )
            service.image = info.digest
            images[name] = bound
        return images

    def _generate_manifest(self, project: ComposeProject, namespace: str, stack_name: str) -> str:
        objects = ComposeConverter(namespace).convert_to_objects(project)
        service_labels = {name: dict(svc.labels) for name, svc in project.services.items()}
        objects = build_postprocessing_chain(stack_name, service_labels).run(objects)
        manifest = serialize_objects(objects)
        size = check_manifest_size(manifest, self._max_manifest_bytes)
        logger.info(
            "Generated %d objects (%d bytes) for stack %s", len(objects), size, stack_name
        )
        return manifest

    def _materialize(
        self,
        command: CreateStackCommand,
        namespace: str,
        stack_name: str,
        blueprint: Blueprint,
        env_name: str,
        images: Dict[str, ImageInfo],
        manifest: str,
    ) -> Stack:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        config_map_name = f"{CONFIG_MAP_PREFIX}{stack_name}"
        config_map = ConfigMap(
            name=config_map_name,
            namespace=namespace,
            data={MANIFESTS_KEY: manifest},
            labels={MANAGED_BY_LABEL: MANAGED_BY_VALUE, STACK_LABEL: stack_name},
        )
        self._config_map_repo.create(config_map)
        created: List[Compensation] = [
            (
                f"ConfigMap {namespace}/{config_map_name}",
                lambda: self._config_map_repo.delete(namespace, config_map_name),
            )
        ]

        try:
            stack = self._stack_repo.create(
                Stack(
                    name=stack_name,
                    namespace=namespace,
                    spec=StackSpec(
                        blueprint_reference=command.blueprint,
                        env=env_name,
                        manifests_config_map=config_map_name,
                        images=images,
                    ),
                    labels={MANAGED_BY_LABEL: MANAGED_BY_VALUE},
                    annotations={
                        STACK_BLUEPRINT_TITLE_ANNOTATION: blueprint.title or blueprint.name,
                        CREATED_BY_ANNOTATION: command.caller.username,
                    },
                )
            )
            created.append(
                (
                    f"Stack {namespace}/{stack_name}",
                    lambda: self._stack_repo.delete(namespace, stack_name),
                )
            )

            try:
                owner = stack.owner_reference()
            except ValueError as exc:
                raise MaterializationError(str(exc), command.correlation_id) from exc
            config_map.set_owner(owner)
            self._config_map_repo.update(config_map)
        except Exception:
            self._rollback(created)
            raise
        return stack

    @staticmethod
    def _rollback(created: List[Compensation]) -> None:
        """Delete created resources newest first; failures are logged only."""
        for description, delete in reversed(created):
            try:
                delete()
                logger.info("Rolled back %s", description)
            except ResourceNotFoundError:
                logger.info("%s already gone during rollback", description)
            except StackDomainError as exc:
                logger.error("Rollback of %s failed: %s", description, exc.message)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Rollback of %s failed", description)

