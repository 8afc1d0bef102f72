from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from cropcast.models.flow_result import FlowResult
from cropcast.models.recommendation import RecommendationResponse
from cropcast.services.inference_client import InferenceClient, get_inference_client
from cropcast.services.recommendation_service import personalized_recommendations

from .common import flow_status_code

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.post(
    "",
    response_model=FlowResult[RecommendationResponse],
    response_model_exclude_none=True,
)
async def create_recommendation(
    response: Response,
    payload: Any = Body(...),
    client: InferenceClient = Depends(get_inference_client),
) -> FlowResult[RecommendationResponse]:
    """
    Generates personalized irrigation, fertilization and planting time
    recommendations for a farm profile.
    """
    result = await personalized_recommendations(payload, client)
    response.status_code = flow_status_code(result)
    return result
