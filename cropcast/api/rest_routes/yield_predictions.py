from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from cropcast.models.flow_result import FlowResult
from cropcast.models.yield_prediction import YieldPredictionResponse
from cropcast.services.inference_client import InferenceClient, get_inference_client
from cropcast.services.yield_prediction_service import predict_yield

from .common import flow_status_code

router = APIRouter(prefix="/yield-predictions", tags=["Yield Prediction"])


@router.post(
    "",
    response_model=FlowResult[YieldPredictionResponse],
    response_model_exclude_none=True,
)
async def create_yield_prediction(
    response: Response,
    payload: Any = Body(...),
    client: InferenceClient = Depends(get_inference_client),
) -> FlowResult[YieldPredictionResponse]:
    """Predicts crop yield in tons from raw CSV agricultural data."""
    result = await predict_yield(payload, client)
    response.status_code = flow_status_code(result)
    return result
