import asyncio
import json
import logging
from typing import Optional, Sequence, Type, TypeVar

from langchain_core.messages import BaseMessage, ToolMessage
from pydantic import BaseModel

from cropcast.core.config import settings
from cropcast.core.exceptions import ModelOutputError, ToolLoopExceededError
from cropcast.models.conversation import ConversationState, ConversationTurn, ToolRequest

from .tool_executor import ToolExecutor

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ConversationLoop:
    """
    Drives one conversation with the model until it produces a final answer.

    The model may ask for a tool; its request and the tool's result are
    appended to the history and the model is called again with everything so
    far. The number of model calls is bounded by ``max_iterations``.
    """

    def __init__(self, client, max_iterations: Optional[int] = None) -> None:
        self.client = client
        self.max_iterations = (
            settings.MAX_TOOL_ITERATIONS if max_iterations is None else max_iterations
        )
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.state = ConversationState.START
        self.history: ConversationTurn = ()
        self.model_calls = 0
        self.tool_calls = 0

    def _transition(self, state: ConversationState) -> None:
        logger.debug("Conversation %s -> %s", self.state.value, state.value)
        self.state = state

    async def run(
        self,
        messages: Sequence[BaseMessage],
        output_schema: Type[M],
        tool_executor: Optional[ToolExecutor] = None,
        safety_settings: Optional[dict] = None,
    ) -> M:
        if self.state != ConversationState.START:
            raise RuntimeError("A ConversationLoop can only be run once")

        self.history = tuple(messages)
        tools = tool_executor.declarations if tool_executor is not None else None

        try:
            for iteration in range(1, self.max_iterations + 1):
                self._transition(ConversationState.AWAITING_MODEL)
                self.model_calls += 1
                result = await self.client.invoke(
                    self.history,
                    output_schema,
                    tools=tools,
                    safety_settings=safety_settings,
                )

                if not isinstance(result, ToolRequest):
                    self._transition(ConversationState.DONE)
                    return result

                if tool_executor is None:
                    raise ModelOutputError(
                        f"Model requested tool '{result.tool_name}' but no tools were offered"
                    )
                if iteration == self.max_iterations:
                    raise ToolLoopExceededError(self.max_iterations)

                self._transition(ConversationState.AWAITING_TOOL)
                self.tool_calls += 1
                tool_output = await tool_executor.run(result.tool_name, result.tool_input)
                self.history = self.history + (
                    result.message,
                    ToolMessage(
                        content=json.dumps(tool_output, default=str),
                        tool_call_id=result.call_id or result.tool_name,
                        name=result.tool_name,
                    ),
                )
        except (Exception, asyncio.CancelledError):
            self._transition(ConversationState.FAILED)
            raise

        # range() above always returns or raises; kept for type checkers.
        raise ToolLoopExceededError(self.max_iterations)
