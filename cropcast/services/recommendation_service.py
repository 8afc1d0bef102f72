import logging
from typing import Any, Optional

from langchain_core.messages import HumanMessage

from cropcast.core.exceptions import CropCastError, InputValidationError
from cropcast.core.genai_client import RECOMMENDATION_SAFETY_SETTINGS
from cropcast.models.flow_result import FlowResult
from cropcast.models.recommendation import RecommendationRequest, RecommendationResponse
from cropcast.services.conversation_loop import ConversationLoop
from cropcast.services.flow_runtime import INVALID_INPUT_MESSAGE, run_with_timeout
from cropcast.services.prompt_renderer import PERSONALIZED_RECOMMENDATIONS, render_prompt
from cropcast.services.schema_validator import validate_input

logger = logging.getLogger(__name__)

RECOMMENDATION_FAILURE_MESSAGE = (
    "Failed to get recommendations from AI. Please try again later."
)


async def personalized_recommendations(
    payload: Any,
    client,
    *,
    max_iterations: Optional[int] = None,
    timeout: Optional[float] = None,
) -> FlowResult[RecommendationResponse]:
    """
    Generates irrigation, fertilization and planting time advice for a farm.

    Invalid input never reaches the model. Model failures of any kind are
    logged and returned as a generic failure message.
    """
    try:
        request = validate_input(RecommendationRequest, payload)
    except InputValidationError as exc:
        logger.warning(
            "Recommendation input rejected: %s",
            [violation.model_dump() for violation in exc.violations],
        )
        return FlowResult[RecommendationResponse].fail(
            INVALID_INPUT_MESSAGE, errors=exc.violations
        )

    prompt = render_prompt(
        PERSONALIZED_RECOMMENDATIONS, request.model_dump(mode="json", by_alias=True)
    )
    loop = ConversationLoop(client, max_iterations=max_iterations)

    try:
        response = await run_with_timeout(
            loop.run(
                (HumanMessage(content=prompt),),
                RecommendationResponse,
                safety_settings=RECOMMENDATION_SAFETY_SETTINGS,
            ),
            timeout,
        )
    except CropCastError:
        logger.exception(
            "Personalized recommendations failed for crop_type=%s location=%s",
            request.crop_type.value,
            request.location,
        )
        return FlowResult[RecommendationResponse].fail(RECOMMENDATION_FAILURE_MESSAGE)

    return FlowResult[RecommendationResponse].ok(response)
