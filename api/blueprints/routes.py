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

"""FastAPI routes for blueprint operations."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.blueprints.dependencies import (
    get_create_blueprint_use_case,
    get_delete_blueprint_use_case,
    get_get_blueprint_use_case,
    get_list_blueprints_use_case,
)
from api.blueprints.schemas import (
    BlueprintIdData,
    BlueprintListResponse,
    BlueprintResponse,
    CreateBlueprintRequest,
    CreateBlueprintResponse,
)
from api.dependencies import get_caller, get_correlation_id
from api.errors import ErrorResponse, http_error, map_domain_error
from api.logging_utils import log_secure_info
from core.compose.exceptions import ComposeDomainError
from core.stack.exceptions import StackDomainError
from core.stack.value_objects import Caller
from orchestrator.blueprint.commands import BlueprintCommand, CreateBlueprintCommand
from orchestrator.blueprint.dtos import BlueprintView
from orchestrator.blueprint.use_cases import (
    CreateBlueprintUseCase,
    DeleteBlueprintUseCase,
    GetBlueprintUseCase,
    ListBlueprintsUseCase,
)

router = APIRouter(prefix="/blueprints", tags=["Blueprints"])

_DOMAIN_ERRORS = (StackDomainError, ComposeDomainError)

_ERROR_RESPONSES = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    401: {"description": "Unauthorized", "model": ErrorResponse},
    403: {"description": "Namespace not allowed", "model": ErrorResponse},
    404: {"description": "Blueprint not found", "model": ErrorResponse},
    500: {"description": "Internal error", "model": ErrorResponse},
}


def _fail(action: str, exc: Exception, caller: Caller, correlation_id: str) -> HTTPException:
    if isinstance(exc, _DOMAIN_ERRORS):
        error = map_domain_error(exc, correlation_id)
        log_secure_info(
            "warning" if error.status_code < 500 else "error",
            f"{action} failed: reason={type(exc).__name__}, status={error.status_code}",
            identifier=caller.username,
            end_section=True,
        )
        return error
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


def _to_response(view: BlueprintView) -> BlueprintResponse:
    return BlueprintResponse(
        id=view.id,
        name=view.name,
        namespace=view.namespace,
        title=view.title,
        services=view.services,
        infra=view.infra,
        repository=view.repository,
        content_hash=view.content_hash,
        created_at=view.created_at,
        compose=view.compose or None,
    )


@router.post(
    "",
    response_model=CreateBlueprintResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create blueprint",
    description="Store a compose document; an identical document returns the existing blueprint",
    responses={
        200: {"description": "Identical blueprint exists", "model": CreateBlueprintResponse},
        201: {"description": "Blueprint created", "model": CreateBlueprintResponse},
        **_ERROR_RESPONSES,
    },
)
def create_blueprint(
    request_body: CreateBlueprintRequest,
    response: Response,
    caller: Caller = Depends(get_caller),
    use_case: CreateBlueprintUseCase = Depends(get_create_blueprint_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> CreateBlueprintResponse:
    """Validate and store a compose document as a blueprint."""
    log_secure_info(
        "info",
        f"Create blueprint request: repository={request_body.repository}, "
        f"branch={request_body.branch}, correlation_id={correlation_id}",
        identifier=caller.username,
    )
    try:
        result = use_case.execute(
            CreateBlueprintCommand(
                caller=caller,
                compose=request_body.compose,
                repository=request_body.repository or "",
                branch=request_body.branch or "",
                author=request_body.author or "",
                correlation_id=correlation_id,
            )
        )
    except Exception as exc:
        raise _fail("Create blueprint", exc, caller, correlation_id) from exc

    if not result.created:
        response.status_code = status.HTTP_200_OK
    log_secure_info(
        "info",
        f"Create blueprint success: id={result.id}, created={result.created}, "
        f"status={response.status_code or status.HTTP_201_CREATED}",
        identifier=caller.username,
        end_section=True,
    )
    return CreateBlueprintResponse(
        data=BlueprintIdData(id=result.id),
        created=result.created,
        warnings=list(result.warnings),
    )


@router.get(
    "",
    response_model=BlueprintListResponse,
    summary="List blueprints",
    description="List blueprints in every namespace the caller may read",
    responses=_ERROR_RESPONSES,
)
def list_blueprints(
    caller: Caller = Depends(get_caller),
    use_case: ListBlueprintsUseCase = Depends(get_list_blueprints_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> BlueprintListResponse:
    try:
        views = use_case.execute(caller)
    except Exception as exc:
        raise _fail("List blueprints", exc, caller, correlation_id) from exc
    return BlueprintListResponse(blueprints=[_to_response(view) for view in views])


@router.get(
    "/{blueprint_id:path}",
    response_model=BlueprintResponse,
    summary="Get blueprint",
    description="Return a blueprint together with its compose document",
    responses=_ERROR_RESPONSES,
)
def get_blueprint(
    blueprint_id: str,
    caller: Caller = Depends(get_caller),
    use_case: GetBlueprintUseCase = Depends(get_get_blueprint_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> BlueprintResponse:
    try:
        view = use_case.execute(
            BlueprintCommand(caller=caller, blueprint_id=blueprint_id, correlation_id=correlation_id)
        )
    except Exception as exc:
        raise _fail("Get blueprint", exc, caller, correlation_id) from exc
    return _to_response(view)


@router.delete(
    "/{blueprint_id:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete blueprint",
    description="Delete a blueprint the caller may write",
    responses=_ERROR_RESPONSES,
)
def delete_blueprint(
    blueprint_id: str,
    caller: Caller = Depends(get_caller),
    use_case: DeleteBlueprintUseCase = Depends(get_delete_blueprint_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> Response:
    try:
        use_case.execute(
            BlueprintCommand(caller=caller, blueprint_id=blueprint_id, correlation_id=correlation_id)
        )
    except Exception as exc:
        raise _fail("Delete blueprint", exc, caller, correlation_id) from exc
    log_secure_info(
        "info",
        f"Delete blueprint success: id={blueprint_id}, status=204",
        identifier=caller.username,
        end_section=True,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
