import logging
from typing import Any, Optional

from langchain_core.messages import HumanMessage

from cropcast.core.exceptions import CropCastError, InputValidationError
from cropcast.models.flow_result import FlowResult
from cropcast.models.yield_prediction import (
    YieldPredictionRequest,
    YieldPredictionResponse,
)
from cropcast.services.conversation_loop import ConversationLoop
from cropcast.services.flow_runtime import INVALID_INPUT_MESSAGE, run_with_timeout
from cropcast.services.prompt_renderer import YIELD_PREDICTION, render_prompt
from cropcast.services.schema_validator import validate_input
from cropcast.services.tool_executor import (
    ToolExecutor,
    build_agricultural_tool_executor,
)

logger = logging.getLogger(__name__)

YIELD_PREDICTION_FAILURE_MESSAGE = (
    "Failed to get a yield prediction from AI. Please try again later."
)


async def predict_yield(
    payload: Any,
    client,
    tool_executor: Optional[ToolExecutor] = None,
    *,
    max_iterations: Optional[int] = None,
    timeout: Optional[float] = None,
) -> FlowResult[YieldPredictionResponse]:
    try:
        request = validate_input(YieldPredictionRequest, payload)
    except InputValidationError as exc:
        logger.warning(
            "Yield prediction input rejected: %s",
            [violation.model_dump() for violation in exc.violations],
        )
        return FlowResult[YieldPredictionResponse].fail(
            INVALID_INPUT_MESSAGE, errors=exc.violations
        )

    if tool_executor is None:
        tool_executor = build_agricultural_tool_executor(client)

    prompt = render_prompt(
        YIELD_PREDICTION, request.model_dump(mode="json", by_alias=True)
    )
    loop = ConversationLoop(client, max_iterations=max_iterations)

    try:
        response = await run_with_timeout(
            loop.run(
                (HumanMessage(content=prompt),),
                YieldPredictionResponse,
                tool_executor=tool_executor,
            ),
            timeout,
        )
    except CropCastError:
        logger.exception(
            "Yield prediction failed after %d model calls and %d tool calls",
            loop.model_calls,
            loop.tool_calls,
        )
        return FlowResult[YieldPredictionResponse].fail(YIELD_PREDICTION_FAILURE_MESSAGE)

    logger.info(
        "Yield prediction finished after %d model calls and %d tool calls",
        loop.model_calls,
        loop.tool_calls,
    )
    return FlowResult[YieldPredictionResponse].ok(response)
