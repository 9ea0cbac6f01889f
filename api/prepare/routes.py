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

"""FastAPI routes for image preparation."""

from typing import Union

from fastapi import APIRouter, Depends, status

from api.dependencies import get_caller, get_correlation_id
from api.errors import ErrorResponse, http_error, map_domain_error
from api.logging_utils import log_secure_info
from api.prepare.dependencies import get_prepare_stack_use_case
from api.prepare.schemas import (
    CandidateSchema,
    CompactImageSchema,
    CompactPrepareResponse,
    DetailedImageSchema,
    DetailedPrepareResponse,
    ExposedServiceSchema,
    PrepareStackRequest,
)
from core.compose.exceptions import ComposeDomainError
from core.expose.exceptions import ExposeDomainError
from core.image.exceptions import ImageDomainError, ImageResolutionError
from core.stack.exceptions import StackDomainError
from core.stack.value_objects import Caller
from orchestrator.prepare.commands import PrepareStackCommand
from orchestrator.prepare.dtos import PrepareStackResponse
from orchestrator.prepare.use_cases import PrepareStackUseCase

router = APIRouter(prefix="/prepare", tags=["Prepare"])


def _to_compact(result: PrepareStackResponse) -> CompactPrepareResponse:
    return CompactPrepareResponse(
        request_id=result.request_id,
        blueprint=result.blueprint,
        images=[
            CompactImageSchema(service=r.service, image=r.digest, method=r.method, tag=r.image)
            for r in result.images
        ],
    )


def _to_detailed(result: PrepareStackResponse) -> DetailedPrepareResponse:
    return DetailedPrepareResponse(
        request_id=result.request_id,
        blueprint=result.blueprint,
        images=[
            DetailedImageSchema(
                service=r.service,
                digest=r.digest,
                image=r.image,
                method=r.method,
                registry=r.registry,
                image_name=r.image_name,
                candidates=[CandidateSchema(**c.to_dict()) for c in r.candidates],
                exposed=r.exposed,
                url=r.url or None,
                error=r.error or None,
            )
            for r in result.images
        ],
        exposed=[ExposedServiceSchema(service=e.service, url=e.url) for e in result.exposed],
    )


@router.post(
    "",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="Prepare stack images",
    description="Resolve every service of a blueprint to a digest-pinned image",
    responses={
        200: {"description": "Compact or detailed resolution", "model": DetailedPrepareResponse},
        400: {"description": "Invalid request or unresolvable image", "model": ErrorResponse},
        401: {"description": "Unauthorized", "model": ErrorResponse},
        404: {"description": "Blueprint or env not found", "model": ErrorResponse},
        500: {"description": "Internal error", "model": ErrorResponse},
    },
)
def prepare_stack(
    request_body: PrepareStackRequest,
    caller: Caller = Depends(get_caller),
    use_case: PrepareStackUseCase = Depends(get_prepare_stack_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> Union[DetailedPrepareResponse, CompactPrepareResponse]:
    """Resolve images for a blueprint and cache the result under a request id."""
    log_secure_info(
        "info",
        f"Prepare request: blueprint={request_body.blueprint}, env={request_body.env}, "
        f"detailed={request_body.detailed}, correlation_id={correlation_id}",
        identifier=caller.username,
    )

    try:
        command = PrepareStackCommand(
            caller=caller,
            blueprint=request_body.blueprint,
            env=request_body.env,
            commit=request_body.commit or "",
            branch=request_body.branch or "",
            tag=request_body.tag or "",
            detailed=request_body.detailed,
            correlation_id=correlation_id,
        )
        result = use_case.execute(command)

        log_secure_info(
            "info",
            f"Prepare success: blueprint={request_body.blueprint}, "
            f"services={len(result.images)}, status=200",
            identifier=caller.username,
            request_id=result.request_id,
            end_section=True,
        )
        if request_body.detailed:
            return _to_detailed(result)
        return _to_compact(result)

    except ImageResolutionError as exc:
        log_secure_info(
            "warning",
            f"Prepare failed: service={exc.service}, reason=image_resolution, status=400",
            identifier=caller.username,
            end_section=True,
        )
        raise http_error(
            status.HTTP_400_BAD_REQUEST,
            "IMAGE_RESOLUTION_FAILED",
            f"Failed to resolve image for service {exc.service}: {exc.message}",
            correlation_id,
        ) from exc

    except (StackDomainError, ComposeDomainError, ExposeDomainError, ImageDomainError) as exc:
        error = map_domain_error(exc, correlation_id)
        log_secure_info(
            "warning",
            f"Prepare failed: reason={type(exc).__name__}, status={error.status_code}",
            identifier=caller.username,
            end_section=True,
        )
        raise error from exc

    except Exception as exc:
        log_secure_info(
            "error",
            f"Prepare failed: blueprint={request_body.blueprint}, reason=unexpected_error, status=500",
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
