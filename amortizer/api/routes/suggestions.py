"""Prepayment suggestion routes."""

from fastapi import APIRouter, Depends, HTTPException

from amortizer.api.deps import get_suggestion_client
from amortizer.api.routes.schedule import build_parameters
from amortizer.api.schemas import SuggestionRequest, SuggestionResponse
from amortizer.data.suggestions import SuggestionClient
from amortizer.engine.amortization import validate_parameters
from amortizer.models.loan import InvalidParameters

router = APIRouter(prefix="/api/v1", tags=["suggestions"])


@router.post("/suggestions", response_model=SuggestionResponse)
async def get_suggestions(
    req: SuggestionRequest,
    client: SuggestionClient = Depends(get_suggestion_client),
):
    """Ask the text-generation service for a pay-off-sooner plan.

    Service failures come back as status "failure" with a readable message,
    not as HTTP errors.
    """
    params = build_parameters(req)
    try:
        validate_parameters(params)
    except InvalidParameters as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = await client.get_suggestions(
        params, req.annual_salary, req.additional_affordability
    )
    return SuggestionResponse(status=result.status.value, text=result.text, error=result.error)
