import logging
from typing import Any, Dict, List, Mapping, Sequence

from langchain_core.messages import HumanMessage
from langchain_core.tools import BaseTool, StructuredTool, ToolException
from pydantic import BaseModel, ValidationError

from cropcast.core.exceptions import CropCastError, ModelOutputError, ToolExecutionError
from cropcast.models.conversation import ToolRequest
from cropcast.models.yield_prediction import DataSummary, SummarizeDataInput
from cropcast.services.prompt_renderer import SUMMARIZE_DATA, render_prompt

logger = logging.getLogger(__name__)

SUMMARIZE_DATA_TOOL_NAME = "summarizeDataTool"
SUMMARIZE_DATA_TOOL_DESCRIPTION = (
    "Summarizes large agricultural data sets into key insights. "
    "This MUST be called before making a yield prediction."
)


class ToolExecutor:
    """Runs tools the model asks for and hands their output back to the loop."""

    def __init__(self, tools: Sequence[BaseTool]) -> None:
        self._tools: Dict[str, BaseTool] = {tool.name: tool for tool in tools}

    @property
    def declarations(self) -> List[BaseTool]:
        return list(self._tools.values())

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._tools

    async def run(self, tool_name: str, tool_input: Mapping[str, Any]) -> Dict[str, Any]:
        tool = self._tools.get(tool_name)
        if tool is None:
            raise ToolExecutionError(tool_name, "no such tool is declared")

        try:
            result = await tool.ainvoke(dict(tool_input))
        except ToolExecutionError:
            raise
        except CropCastError as exc:
            raise ToolExecutionError(tool_name, str(exc)) from exc
        except (ValidationError, ToolException, TypeError) as exc:
            raise ToolExecutionError(tool_name, f"invalid tool input: {exc}") from exc

        if isinstance(result, BaseModel):
            return result.model_dump(mode="json")
        if isinstance(result, Mapping):
            return dict(result)
        return {"result": result}


async def summarize_agricultural_data(agricultural_data: str, client) -> DataSummary:
    prompt = render_prompt(SUMMARIZE_DATA, {"agriculturalData": agricultural_data})
    result = await client.invoke((HumanMessage(content=prompt),), DataSummary)
    if isinstance(result, ToolRequest):
        raise ModelOutputError("Summary model requested a tool instead of answering")
    if not result.summary.strip():
        raise ModelOutputError("Failed to get a summary from the AI model.")
    logger.debug("Summarized %d characters of data", len(agricultural_data))
    return result


def build_summarize_data_tool(client) -> StructuredTool:
    async def summarize_data(agricultural_data: str) -> Dict[str, Any]:
        summary = await summarize_agricultural_data(agricultural_data, client)
        return summary.model_dump()

    return StructuredTool.from_function(
        coroutine=summarize_data,
        name=SUMMARIZE_DATA_TOOL_NAME,
        description=SUMMARIZE_DATA_TOOL_DESCRIPTION,
        args_schema=SummarizeDataInput,
    )


def build_agricultural_tool_executor(client) -> ToolExecutor:
    return ToolExecutor([build_summarize_data_tool(client)])
