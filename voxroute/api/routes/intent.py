"""Intent API – resolve an utterance into an action."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from voxroute.intent.engine import Failed, FailureKind, IntentService, to_response
from voxroute.intent.models import ResolveIntentRequest, ResolveIntentResponse

router = APIRouter()


def get_intent_service(request: Request) -> IntentService:
    return request.app.state.intent_service


IntentServiceDep = Annotated[IntentService, Depends(get_intent_service)]

# Backend failures are reported in-band through ``errorMessage``.
_FAILURE_STATUS: dict[FailureKind, int] = {
    FailureKind.MISSING_TASK_CONFIG: status.HTTP_412_PRECONDITION_FAILED,
    FailureKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post("/resolve", response_model=ResolveIntentResponse)
async def resolve(body: ResolveIntentRequest, service: IntentServiceDep) -> ResolveIntentResponse:
    outcome = await service.resolve(body)
    if isinstance(outcome, Failed) and outcome.kind in _FAILURE_STATUS:
        raise HTTPException(status_code=_FAILURE_STATUS[outcome.kind], detail=outcome.message)
    return to_response(outcome, body)
