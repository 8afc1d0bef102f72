import json
import unittest

from support import (
    SCENARIO_B_CSV,
    ScriptedInferenceClient,
    StubSummarizeTool,
    make_tool_request,
)

from langchain_core.messages import HumanMessage, ToolMessage

from cropcast.core.exceptions import (
    ModelOutputError,
    ToolExecutionError,
    ToolLoopExceededError,
    TransportError,
)
from cropcast.models.conversation import ConversationState
from cropcast.models.yield_prediction import YieldPredictionResponse
from cropcast.services.conversation_loop import ConversationLoop
from cropcast.services.tool_executor import ToolExecutor

PROMPT = (HumanMessage(content="predict the yield"),)
FINAL = {"predictedYield": 13, "recommendations": "increase nitrogen"}


class ConversationLoopTests(unittest.IsolatedAsyncioTestCase):
    async def test_single_call_without_tools(self) -> None:
        client = ScriptedInferenceClient([FINAL])
        loop = ConversationLoop(client, max_iterations=5)

        result = await loop.run(PROMPT, YieldPredictionResponse)

        self.assertEqual(result.predicted_yield, 13)
        self.assertEqual(loop.state, ConversationState.DONE)
        self.assertEqual(len(client.calls), 1)
        self.assertIsNone(client.calls[0].tools)

    async def test_tool_request_then_final_answer_runs_tool_once(self) -> None:
        stub = StubSummarizeTool()
        executor = ToolExecutor([stub.as_tool()])
        request = make_tool_request()
        client = ScriptedInferenceClient([request, FINAL])
        loop = ConversationLoop(client, max_iterations=5)

        result = await loop.run(PROMPT, YieldPredictionResponse, tool_executor=executor)

        self.assertEqual(result, YieldPredictionResponse.model_validate(FINAL))
        self.assertEqual(stub.received, [SCENARIO_B_CSV])
        self.assertEqual(loop.tool_calls, 1)
        self.assertEqual(loop.model_calls, 2)
        self.assertEqual(loop.state, ConversationState.DONE)

        first, second = client.calls
        self.assertEqual(len(first.messages), 1)
        self.assertEqual([tool.name for tool in first.tools], ["summarizeDataTool"])
        self.assertEqual(len(second.messages), 3)
        self.assertIs(second.messages[0], PROMPT[0])
        self.assertIs(second.messages[1], request.message)
        tool_message = second.messages[2]
        self.assertIsInstance(tool_message, ToolMessage)
        self.assertEqual(tool_message.tool_call_id, "call-1")
        self.assertEqual(json.loads(tool_message.content), {"summary": "upward trend"})

    async def test_tool_loop_is_bounded(self) -> None:
        stub = StubSummarizeTool()
        executor = ToolExecutor([stub.as_tool()])
        client = ScriptedInferenceClient([make_tool_request()], repeat_last=True)
        loop = ConversationLoop(client, max_iterations=3)

        with self.assertRaises(ToolLoopExceededError):
            await loop.run(PROMPT, YieldPredictionResponse, tool_executor=executor)

        self.assertEqual(loop.state, ConversationState.FAILED)
        self.assertEqual(len(client.calls), 3)
        self.assertEqual(len(stub.received), 2)

    async def test_history_grows_without_mutating_earlier_calls(self) -> None:
        executor = ToolExecutor([StubSummarizeTool().as_tool()])
        client = ScriptedInferenceClient(
            [make_tool_request(call_id="a"), make_tool_request(call_id="b"), FINAL]
        )
        loop = ConversationLoop(client, max_iterations=5)

        await loop.run(PROMPT, YieldPredictionResponse, tool_executor=executor)

        self.assertEqual([len(call.messages) for call in client.calls], [1, 3, 5])
        self.assertEqual(len(loop.history), 5)

    async def test_tool_request_without_declared_tools_fails(self) -> None:
        client = ScriptedInferenceClient([make_tool_request()])
        loop = ConversationLoop(client, max_iterations=5)

        with self.assertRaises(ModelOutputError):
            await loop.run(PROMPT, YieldPredictionResponse)
        self.assertEqual(loop.state, ConversationState.FAILED)

    async def test_client_failure_moves_to_failed(self) -> None:
        client = ScriptedInferenceClient([TransportError("boom")])
        loop = ConversationLoop(client, max_iterations=5)

        with self.assertRaises(TransportError):
            await loop.run(PROMPT, YieldPredictionResponse)
        self.assertEqual(loop.state, ConversationState.FAILED)

    async def test_tool_failure_stops_the_loop(self) -> None:
        stub = StubSummarizeTool(error=ModelOutputError("nested call returned nothing"))
        executor = ToolExecutor([stub.as_tool()])
        client = ScriptedInferenceClient([make_tool_request(), FINAL])
        loop = ConversationLoop(client, max_iterations=5)

        with self.assertRaises(ToolExecutionError):
            await loop.run(PROMPT, YieldPredictionResponse, tool_executor=executor)
        self.assertEqual(len(client.calls), 1)
        self.assertEqual(loop.state, ConversationState.FAILED)

    async def test_loop_runs_only_once(self) -> None:
        client = ScriptedInferenceClient([FINAL, FINAL])
        loop = ConversationLoop(client, max_iterations=1)
        await loop.run(PROMPT, YieldPredictionResponse)

        with self.assertRaises(RuntimeError):
            await loop.run(PROMPT, YieldPredictionResponse)

    def test_max_iterations_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            ConversationLoop(ScriptedInferenceClient([]), max_iterations=0)


if __name__ == "__main__":
    unittest.main()
