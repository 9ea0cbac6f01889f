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

"""FastAPI routes for stack operations.

Stack identifiers are ``<scope>/<name>``, so they are captured as paths;
routes with a trailing action are declared before the bare identifier routes.
"""

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_caller, get_correlation_id
from api.errors import ErrorResponse, http_error, map_domain_error
from api.logging_utils import log_secure_info
from api.stacks.dependencies import (
    get_create_stack_use_case,
    get_delete_stack_use_case,
    get_get_stack_use_case,
    get_list_stacks_use_case,
    get_resume_stack_use_case,
    get_stack_phase_use_case,
    get_suspend_stack_use_case,
    get_update_stack_images_use_case,
)
from api.stacks.schemas import (
    CreateStackRequest,
    ImageInfoSchema,
    PhaseTransitionSchema,
    ServiceStatusSchema,
    StackActionResponse,
    StackIdData,
    StackIdResponse,
    StackListResponse,
    StackPhaseResponse,
    StackResponse,
    SuspendStackRequest,
    UpdateStackImagesRequest,
)
from core.compose.exceptions import ComposeDomainError
from core.expose.exceptions import ExposeDomainError
from core.manifest.exceptions import ManifestDomainError
from core.stack.entities import ServiceStatus
from core.stack.exceptions import StackDomainError
from core.stack.value_objects import Caller
from orchestrator.stack.commands import (
    CreateStackCommand,
    StackCommand,
    SuspendStackCommand,
    UpdateStackImagesCommand,
)
from orchestrator.stack.dtos import StackActionResult, StackView
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

router = APIRouter(prefix="/stacks", tags=["Stacks"])

_DOMAIN_ERRORS = (StackDomainError, ComposeDomainError, ExposeDomainError, ManifestDomainError)

_ERROR_RESPONSES = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    401: {"description": "Unauthorized", "model": ErrorResponse},
    404: {"description": "Stack not found", "model": ErrorResponse},
    500: {"description": "Internal error", "model": ErrorResponse},
}


def _domain_failure(action: str, exc: Exception, caller: Caller, correlation_id: str) -> HTTPException:
    error = map_domain_error(exc, correlation_id)
    level = "error" if error.status_code >= 500 else "warning"
    log_secure_info(
        level,
        f"{action} failed: reason={type(exc).__name__}, status={error.status_code}",
        identifier=caller.username,
        end_section=True,
    )
    return error


def _unexpected_failure(action: str, caller: Caller, correlation_id: str) -> HTTPException:
    log_secure_info(
        "error",
        f"{action} failed: reason=unexpected_error, status=500",
        identifier=caller.username,
        exc_info=True,
        end_section=True,
    )
    return http_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        correlation_id,
    )


def _service_statuses(services: Dict[str, ServiceStatus]) -> Dict[str, ServiceStatusSchema]:
    return {
        name: ServiceStatusSchema(
            phase=svc.phase,
            suspended_at=svc.suspended_at.isoformat() if svc.suspended_at else None,
        )
        for name, svc in services.items()
    }


def _to_response(view: StackView) -> StackResponse:
    return StackResponse(
        id=view.id,
        name=view.name,
        namespace=view.namespace,
        blueprint_reference=view.blueprint_reference,
        env=view.env,
        phase=view.phase,
        services=_service_statuses(view.services),
        images={
            name: ImageInfoSchema(
                digest=info.digest,
                image=info.image,
                url=info.url or None,
                container_name=info.container_name or None,
            )
            for name, info in view.images.items()
        },
        suspended_services=view.suspended_services,
        created_at=view.created_at,
    )


def _to_action_response(result: StackActionResult) -> StackActionResponse:
    return StackActionResponse(id=result.id, message=result.message, phase=result.phase)


@router.post(
    "",
    response_model=StackIdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create stack",
    description="Materialize a prepared blueprint as a stack in the caller's namespace",
    responses={201: {"description": "Stack created", "model": StackIdResponse}, **_ERROR_RESPONSES},
)
def create_stack(
    request_body: CreateStackRequest,
    caller: Caller = Depends(get_caller),
    use_case: CreateStackUseCase = Depends(get_create_stack_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> StackIdResponse:
    """Create a stack from a prepare request id."""
    log_secure_info(
        "info",
        f"Create stack request: blueprint={request_body.blueprint}, env={request_body.env}, "
        f"correlation_id={correlation_id}",
        identifier=caller.username,
        request_id=request_body.request_id,
    )

    try:
        stack_id = use_case.execute(
            CreateStackCommand(
                caller=caller,
                blueprint=request_body.blueprint,
                env=request_body.env,
                request_id=request_body.request_id,
                correlation_id=correlation_id,
            )
        )
        log_secure_info(
            "info",
            f"Create stack success: id={stack_id}, status=201",
            identifier=caller.username,
            request_id=request_body.request_id,
            end_section=True,
        )
        return StackIdResponse(data=StackIdData(id=stack_id))

    except _DOMAIN_ERRORS as exc:
        raise _domain_failure("Create stack", exc, caller, correlation_id) from exc

    except Exception as exc:
        raise _unexpected_failure("Create stack", caller, correlation_id) from exc


@router.get(
    "",
    response_model=StackListResponse,
    summary="List stacks",
    description="List stacks in every namespace the caller may read",
    responses=_ERROR_RESPONSES,
)
def list_stacks(
    caller: Caller = Depends(get_caller),
    use_case: ListStacksUseCase = Depends(get_list_stacks_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> StackListResponse:
    try:
        views = use_case.execute(caller)
        return StackListResponse(stacks=[_to_response(view) for view in views])

    except _DOMAIN_ERRORS as exc:
        raise _domain_failure("List stacks", exc, caller, correlation_id) from exc

    except Exception as exc:
        raise _unexpected_failure("List stacks", caller, correlation_id) from exc


@router.post(
    "/{stack_id:path}/suspend",
    response_model=StackActionResponse,
    summary="Suspend stack",
    description="Suspend some or all services of a stack, optionally for a limited time",
    responses=_ERROR_RESPONSES,
)
def suspend_stack(
    stack_id: str,
    request_body: SuspendStackRequest,
    caller: Caller = Depends(get_caller),
    use_case: SuspendStackUseCase = Depends(get_suspend_stack_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> StackActionResponse:
    log_secure_info(
        "info",
        f"Suspend stack request: id={stack_id}, services={request_body.services}, "
        f"timeout={request_body.timeout}",
        identifier=caller.username,
    )
    try:
        result = use_case.execute(
            SuspendStackCommand(
                caller=caller,
                stack_id=stack_id,
                services=list(request_body.services),
                timeout=request_body.timeout,
                correlation_id=correlation_id,
            )
        )
        log_secure_info(
            "info",
            f"Suspend stack success: id={result.id}, status=200",
            identifier=caller.username,
            end_section=True,
        )
        return _to_action_response(result)

    except _DOMAIN_ERRORS as exc:
        raise _domain_failure("Suspend stack", exc, caller, correlation_id) from exc

    except Exception as exc:
        raise _unexpected_failure("Suspend stack", caller, correlation_id) from exc


@router.post(
    "/{stack_id:path}/resume",
    response_model=StackActionResponse,
    summary="Resume stack",
    description="Clear the suspension of a stack",
    responses=_ERROR_RESPONSES,
)
def resume_stack(
    stack_id: str,
    caller: Caller = Depends(get_caller),
    use_case: ResumeStackUseCase = Depends(get_resume_stack_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> StackActionResponse:
    try:
        result = use_case.execute(
            StackCommand(caller=caller, stack_id=stack_id, correlation_id=correlation_id)
        )
        log_secure_info(
            "info",
            f"Resume stack success: id={result.id}, status=200",
            identifier=caller.username,
            end_section=True,
        )
        return _to_action_response(result)

    except _DOMAIN_ERRORS as exc:
        raise _domain_failure("Resume stack", exc, caller, correlation_id) from exc

    except Exception as exc:
        raise _unexpected_failure("Resume stack", caller, correlation_id) from exc


@router.get(
    "/{stack_id:path}/phase",
    response_model=StackPhaseResponse,
    summary="Get stack phase",
    description="Return the phase, phase history and service statuses of a stack",
    responses=_ERROR_RESPONSES,
)
def get_stack_phase(
    stack_id: str,
    caller: Caller = Depends(get_caller),
    use_case: GetStackPhaseUseCase = Depends(get_stack_phase_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> StackPhaseResponse:
    try:
        view = use_case.execute(
            StackCommand(caller=caller, stack_id=stack_id, correlation_id=correlation_id)
        )
        return StackPhaseResponse(
            phase=view.phase,
            phase_history=[
                PhaseTransitionSchema(
                    phase=t.phase,
                    transition_time=t.transition_time.isoformat(),
                    reason=t.reason,
                    message=t.message,
                )
                for t in view.phase_history
            ],
            services=_service_statuses(view.services),
        )

    except _DOMAIN_ERRORS as exc:
        raise _domain_failure("Get stack phase", exc, caller, correlation_id) from exc

    except Exception as exc:
        raise _unexpected_failure("Get stack phase", caller, correlation_id) from exc


@router.get(
    "/{stack_id:path}",
    response_model=StackResponse,
    summary="Get stack",
    description="Return the standard view of a stack",
    responses=_ERROR_RESPONSES,
)
def get_stack(
    stack_id: str,
    caller: Caller = Depends(get_caller),
    use_case: GetStackUseCase = Depends(get_get_stack_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> StackResponse:
    try:
        view = use_case.execute(
            StackCommand(caller=caller, stack_id=stack_id, correlation_id=correlation_id)
        )
        return _to_response(view)

    except _DOMAIN_ERRORS as exc:
        raise _domain_failure("Get stack", exc, caller, correlation_id) from exc

    except Exception as exc:
        raise _unexpected_failure("Get stack", caller, correlation_id) from exc


@router.put(
    "/{stack_id:path}",
    response_model=StackIdResponse,
    summary="Update stack images",
    description="Replace the pinned image of the listed services",
    responses=_ERROR_RESPONSES,
)
def update_stack_images(
    stack_id: str,
    request_body: UpdateStackImagesRequest,
    caller: Caller = Depends(get_caller),
    use_case: UpdateStackImagesUseCase = Depends(get_update_stack_images_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> StackIdResponse:
    log_secure_info(
        "info",
        f"Update stack images request: id={stack_id}, services={sorted(request_body.images)}",
        identifier=caller.username,
    )
    try:
        updated_id = use_case.execute(
            UpdateStackImagesCommand(
                caller=caller,
                stack_id=stack_id,
                images=request_body.to_command_images(),
                correlation_id=correlation_id,
            )
        )
        log_secure_info(
            "info",
            f"Update stack images success: id={updated_id}, status=200",
            identifier=caller.username,
            end_section=True,
        )
        return StackIdResponse(data=StackIdData(id=updated_id))

    except _DOMAIN_ERRORS as exc:
        raise _domain_failure("Update stack images", exc, caller, correlation_id) from exc

    except Exception as exc:
        raise _unexpected_failure("Update stack images", caller, correlation_id) from exc


@router.delete(
    "/{stack_id:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete stack",
    description="Delete a stack and the resources it owns",
    responses=_ERROR_RESPONSES,
)
def delete_stack(
    stack_id: str,
    caller: Caller = Depends(get_caller),
    use_case: DeleteStackUseCase = Depends(get_delete_stack_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> Response:
    try:
        use_case.execute(
            StackCommand(caller=caller, stack_id=stack_id, correlation_id=correlation_id)
        )
        log_secure_info(
            "info",
            f"Delete stack success: id={stack_id}, status=204",
            identifier=caller.username,
            end_section=True,
        )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    except _DOMAIN_ERRORS as exc:
        raise _domain_failure("Delete stack", exc, caller, correlation_id) from exc

    except Exception as exc:
        raise _unexpected_failure("Delete stack", caller, correlation_id) from exc
