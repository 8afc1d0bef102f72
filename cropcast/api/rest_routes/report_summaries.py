from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from cropcast.models.flow_result import FlowResult
from cropcast.models.report_summary import ReportSummaryResponse
from cropcast.services.inference_client import InferenceClient, get_inference_client
from cropcast.services.report_summary_service import summarize_report

from .common import flow_status_code

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post(
    "/summaries",
    response_model=FlowResult[ReportSummaryResponse],
    response_model_exclude_none=True,
)
async def create_report_summary(
    response: Response,
    payload: Any = Body(...),
    client: InferenceClient = Depends(get_inference_client),
) -> FlowResult[ReportSummaryResponse]:
    result = await summarize_report(payload, client)
    response.status_code = flow_status_code(result)
    return result
