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

"""PrepareStack use case implementation."""

import logging

from api.logging_utils import log_secure_info
from core.compose.entities import ComposeService
from core.compose.parser import parse_compose
from core.expose.services import ExposePreprocessor
from core.image.entities import ImageResolution, ResolutionContext
from core.image.exceptions import ImageDomainError, ImageResolutionError
from core.image.services import ImageResolver
from core.stack.entities import ImageInfo, PrepareResult
from core.stack.namespaces import NamespaceManager
from core.stack.repositories import EnvRepository, PrepareResultStore, RequestIdGenerator
from core.stack.services import ResourceLocator
from orchestrator.prepare.commands import PrepareStackCommand
from orchestrator.prepare.dtos import ExposedService, PrepareStackResponse, ServiceImageResult

logger = logging.getLogger(__name__)


class PrepareStackUseCase:  # pylint: disable=too-few-public-methods
    """Use case for resolving the images of a blueprint.

    Every service is resolved independently. In compact mode the first
    failure aborts the request; in detailed mode failures are embedded in
    the per-service results. The outcome is cached for the create step under
    a fresh request id, scoped to the caller's namespace.

    Attributes:
        namespace_manager: Maps callers to namespaces.
        env_repo: Env repository port.
        locator: Finds the blueprint by identifier.
        resolver: Image resolver.
        expose_preprocessor: Computes hostnames of exposed services.
        result_store: Prepare result store.
        id_generator: Request id generator.
    """

    def __init__(
        self,
        namespace_manager: NamespaceManager,
        env_repo: EnvRepository,
        locator: ResourceLocator,
        resolver: ImageResolver,
        expose_preprocessor: ExposePreprocessor,
        result_store: PrepareResultStore,
        id_generator: RequestIdGenerator,
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self._namespaces = namespace_manager
        self._env_repo = env_repo
        self._locator = locator
        self._resolver = resolver
        self._expose = expose_preprocessor
        self._result_store = result_store
        self._id_generator = id_generator

    def execute(self, command: PrepareStackCommand) -> PrepareStackResponse:
        """Resolve every service of the blueprint.

        Args:
            command: PrepareStack command.

        Returns:
            PrepareStackResponse with one result per service.

        Raises:
            EnvNotFoundError: If the env does not exist in the caller's namespace.
            InvalidReferenceError: If the blueprint identifier is malformed.
            BlueprintNotFoundError: If the blueprint is not readable by the caller.
            InvalidComposeError: If the stored compose document is malformed.
            ImageResolutionError: In compact mode, if a service cannot be resolved.
        """
        namespace = self._namespaces.developer_namespace(command.caller.username)
        env = self._env_repo.get(namespace, command.env)
        blueprint = self._locator.find_blueprint(command.blueprint, command.caller)
        project = parse_compose(blueprint.compose)

        extension = project.extension
        context = ResolutionContext(
            commit=command.commit,
            branch=command.branch,
            compose_registry=extension.registry or "",
            compose_repository=extension.repository or "",
            compose_repository_prefix=extension.repository_prefix or "",
        )
        logger.info(
            "Preparing blueprint %s for env %s: %d services, detailed=%s",
            command.blueprint,
            env.name,
            len(project.services),
            command.detailed,
        )

        results = []
        exposed = []
        for name in project.service_names():
            service = project.services[name]
            result = self._resolve_service(service, context, command)
            result.url = self._expose.get_exposed_service_url(service, env.name)
            result.exposed = bool(result.url)
            if result.exposed:
                exposed.append(ExposedService(service=name, url=result.url))
            results.append(result)

        request_id = self._id_generator.generate()
        self._result_store.save(
            request_id,
            PrepareResult(
                namespace=namespace,
                images={
                    r.service: ImageInfo(digest=r.digest, image=r.image, url=r.url)
                    for r in results
                },
                commit=command.commit,
                tag=command.tag,
            ),
        )
        log_secure_info(
            "info",
            f"Prepared {len(results)} services for blueprint {command.blueprint}",
            identifier=command.caller.username,
            request_id=request_id,
        )
        return PrepareStackResponse(
            request_id=request_id,
            blueprint=command.blueprint,
            images=results,
            exposed=exposed,
        )

    def _resolve_service(
        self,
        service: ComposeService,
        context: ResolutionContext,
        command: PrepareStackCommand,
    ) -> ServiceImageResult:
        try:
            resolution = self._resolver.resolve(service, context)
        except ImageDomainError as exc:
            logger.warning("Failed to resolve image for service %s: %s", service.name, exc.message)
            if not command.detailed:
                if isinstance(exc, ImageResolutionError):
                    raise
                raise ImageResolutionError(
                    exc.message, service.name, correlation_id=command.correlation_id
                ) from exc
            partial = exc.resolution if isinstance(exc, ImageResolutionError) else ImageResolution()
            result = self._to_result(service.name, partial)
            result.error = exc.message
            return result
        return self._to_result(service.name, resolution)

    @staticmethod
    def _to_result(service: str, resolution: ImageResolution) -> ServiceImageResult:
        return ServiceImageResult(
            service=service,
            digest=resolution.final_image,
            image=resolution.selected,
            method=resolution.method,
            registry=resolution.registry,
            image_name=resolution.image_name,
            candidates=list(resolution.candidates),
        )
