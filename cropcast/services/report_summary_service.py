import logging
from typing import Any, Optional

from langchain_core.messages import HumanMessage

from cropcast.core.exceptions import CropCastError, InputValidationError
from cropcast.models.flow_result import FlowResult
from cropcast.models.report_summary import ReportSummaryRequest, ReportSummaryResponse
from cropcast.services.conversation_loop import ConversationLoop
from cropcast.services.flow_runtime import INVALID_INPUT_MESSAGE, run_with_timeout
from cropcast.services.prompt_renderer import SUMMARIZE_REPORT, render_prompt
from cropcast.services.schema_validator import validate_input

logger = logging.getLogger(__name__)

REPORT_SUMMARY_FAILURE_MESSAGE = "Failed to summarize the report. Please try again later."


async def summarize_report(
    payload: Any,
    client,
    *,
    timeout: Optional[float] = None,
) -> FlowResult[ReportSummaryResponse]:
    """Summarizes a lengthy agricultural report into its key findings."""
    try:
        request = validate_input(ReportSummaryRequest, payload)
    except InputValidationError as exc:
        logger.warning(
            "Report summary input rejected: %s",
            [violation.model_dump() for violation in exc.violations],
        )
        return FlowResult[ReportSummaryResponse].fail(
            INVALID_INPUT_MESSAGE, errors=exc.violations
        )

    prompt = render_prompt(SUMMARIZE_REPORT, request.model_dump(mode="json", by_alias=True))
    loop = ConversationLoop(client, max_iterations=1)

    try:
        response = await run_with_timeout(
            loop.run((HumanMessage(content=prompt),), ReportSummaryResponse),
            timeout,
        )
    except CropCastError:
        logger.exception(
            "Report summary failed for a report of %d characters",
            len(request.report_text),
        )
        return FlowResult[ReportSummaryResponse].fail(REPORT_SUMMARY_FAILURE_MESSAGE)

    return FlowResult[ReportSummaryResponse].ok(response)
