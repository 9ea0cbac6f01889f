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

"""FastAPI routes for env operations.

Envs always live in the caller's own developer namespace.
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_caller, get_correlation_id
from api.envs.dependencies import (
    get_create_env_use_case,
    get_get_env_use_case,
    get_list_envs_use_case,
)
from api.envs.schemas import (
    CreateEnvRequest,
    CreateEnvResponse,
    EnvIdData,
    EnvListResponse,
    EnvResponse,
)
from api.errors import ErrorResponse, http_error, map_domain_error
from api.logging_utils import log_secure_info
from core.stack.exceptions import StackDomainError
from core.stack.value_objects import Caller
from orchestrator.env.commands import CreateEnvCommand, EnvCommand
from orchestrator.env.dtos import EnvView
from orchestrator.env.use_cases import CreateEnvUseCase, GetEnvUseCase, ListEnvsUseCase

router = APIRouter(prefix="/envs", tags=["Envs"])


def _to_response(view: EnvView) -> EnvResponse:
    return EnvResponse(id=view.id, name=view.name, namespace=view.namespace, created_at=view.created_at)


@router.post(
    "",
    response_model=CreateEnvResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create env",
    description="Create an env in the caller's namespace",
    responses={
        400: {"description": "Invalid env name", "model": ErrorResponse},
        401: {"description": "Unauthorized", "model": ErrorResponse},
        409: {"description": "Env already exists", "model": ErrorResponse},
        500: {"description": "Internal error", "model": ErrorResponse},
    },
)
def create_env(
    request_body: CreateEnvRequest,
    caller: Caller = Depends(get_caller),
    use_case: CreateEnvUseCase = Depends(get_create_env_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> CreateEnvResponse:
    log_secure_info(
        "info",
        f"Create env request: name={request_body.name}, correlation_id={correlation_id}",
        identifier=caller.username,
    )
    try:
        env_id = use_case.execute(
            CreateEnvCommand(caller=caller, name=request_body.name, correlation_id=correlation_id)
        )
        log_secure_info(
            "info",
            f"Create env success: id={env_id}, status=201",
            identifier=caller.username,
            end_section=True,
        )
        return CreateEnvResponse(data=EnvIdData(id=env_id))

    except StackDomainError as exc:
        error = map_domain_error(exc, correlation_id)
        log_secure_info(
            "warning",
            f"Create env failed: name={request_body.name}, reason={type(exc).__name__}, "
            f"status={error.status_code}",
            identifier=caller.username,
            end_section=True,
        )
        raise error from exc

    except Exception as exc:
        log_secure_info(
            "error",
            f"Create env failed: name={request_body.name}, reason=unexpected_error, status=500",
            identifier=caller.username,
            exc_info=True,
            end_section=True,
        )
        raise http_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            correlation_id,
        ) from exc


@router.get(
    "",
    response_model=EnvListResponse,
    summary="List envs",
    description="List the envs of the caller",
)
def list_envs(
    caller: Caller = Depends(get_caller),
    use_case: ListEnvsUseCase = Depends(get_list_envs_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> EnvListResponse:
    try:
        views = use_case.execute(caller)
    except StackDomainError as exc:
        raise map_domain_error(exc, correlation_id) from exc
    return EnvListResponse(envs=[_to_response(view) for view in views])


@router.get(
    "/{env_id:path}",
    response_model=EnvResponse,
    summary="Get env",
    description="Return one env of the caller",
    responses={
        400: {"description": "Malformed identifier", "model": ErrorResponse},
        404: {"description": "Env not found", "model": ErrorResponse},
    },
)
def get_env(
    env_id: str,
    caller: Caller = Depends(get_caller),
    use_case: GetEnvUseCase = Depends(get_get_env_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> EnvResponse:
    try:
        view = use_case.execute(EnvCommand(caller=caller, env_id=env_id, correlation_id=correlation_id))
    except StackDomainError as exc:
        raise map_domain_error(exc, correlation_id) from exc
    return _to_response(view)
