import asyncio
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langchain_core.messages import AIMessage, BaseMessage  # noqa: E402
from langchain_core.runnables import RunnableLambda  # noqa: E402
from langchain_core.tools import StructuredTool  # noqa: E402

from cropcast.models.conversation import ToolRequest  # noqa: E402
from cropcast.models.yield_prediction import SummarizeDataInput  # noqa: E402
from cropcast.services.tool_executor import SUMMARIZE_DATA_TOOL_NAME  # noqa: E402

SCENARIO_A_PAYLOAD = {
    "soilPh": 7.0,
    "nitrogenLevels": 50,
    "rainfall": 100,
    "temperature": 25,
    "humidity": 60,
    "cropType": "Wheat",
    "location": "Punjab",
    "historicalYieldTrends": "stable",
}

SCENARIO_B_CSV = "year,yield\n2020,10\n2021,12"


@dataclass
class InvokeCall:
    messages: Tuple[BaseMessage, ...]
    output_schema: Any
    tools: Optional[List[Any]]
    safety_settings: Optional[dict]


class ScriptedInferenceClient:
    """Stands in for the remote model, replaying scripted answers in order.

    Each scripted item is a ToolRequest, a pydantic answer, a dict that is
    validated against the requested schema, or an exception to raise.
    """

    def __init__(self, responses: Sequence[Any], repeat_last: bool = False, delay: float = 0):
        self.responses = list(responses)
        self.repeat_last = repeat_last
        self.delay = delay
        self.calls: List[InvokeCall] = []

    async def invoke(self, messages, output_schema, tools=None, safety_settings=None):
        self.calls.append(
            InvokeCall(
                messages=tuple(messages),
                output_schema=output_schema,
                tools=list(tools) if tools else None,
                safety_settings=safety_settings,
            )
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.responses:
            raise AssertionError("Unexpected model call")
        if self.repeat_last and len(self.responses) == 1:
            item = self.responses[0]
        else:
            item = self.responses.pop(0)

        if isinstance(item, BaseException):
            raise item
        if isinstance(item, dict):
            return output_schema.model_validate(item)
        return item


def make_tool_request(
    tool_name: str = SUMMARIZE_DATA_TOOL_NAME,
    args: Optional[Dict[str, Any]] = None,
    call_id: str = "call-1",
) -> ToolRequest:
    args = args or {"agricultural_data": SCENARIO_B_CSV}
    message = AIMessage(
        content="",
        tool_calls=[{"name": tool_name, "args": args, "id": call_id, "type": "tool_call"}],
    )
    return ToolRequest(tool_name=tool_name, tool_input=args, call_id=call_id, message=message)


@dataclass
class StubSummarizeTool:
    summary: str = "upward trend"
    error: Optional[BaseException] = None
    received: List[str] = field(default_factory=list)

    def as_tool(self) -> StructuredTool:
        async def summarize_data(agricultural_data: str) -> Dict[str, Any]:
            self.received.append(agricultural_data)
            if self.error is not None:
                raise self.error
            return {"summary": self.summary}

        return StructuredTool.from_function(
            coroutine=summarize_data,
            name=SUMMARIZE_DATA_TOOL_NAME,
            description="Summarizes agricultural data.",
            args_schema=SummarizeDataInput,
        )


class ScriptedChatModel:
    """Stands in for ChatGoogleGenerativeAI in tool mode, recording what it is sent."""

    def __init__(self, replies: Sequence[AIMessage]):
        self.replies = list(replies)
        self.received: List[List[BaseMessage]] = []

    def bind_tools(self, tools):
        return RunnableLambda(self._reply)

    def _reply(self, messages):
        self.received.append(list(messages))
        return self.replies.pop(0)
