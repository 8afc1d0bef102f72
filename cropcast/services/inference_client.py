import logging
from typing import Any, Callable, List, Optional, Sequence, Type, TypeVar, Union

from langchain_core.exceptions import OutputParserException
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langchain_core.output_parsers import PydanticOutputParser
from pydantic import BaseModel, ValidationError

from cropcast.core.config import settings
from cropcast.core.exceptions import ModelOutputError, TransportError
from cropcast.core.genai_client import get_chat_model
from cropcast.models.conversation import ToolRequest

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ChatModelFactory = Callable[..., Any]

_inference_client: Optional["InferenceClient"] = None


def _extract_ai_text(message: AIMessage) -> str:
    if isinstance(message.content, str):
        return message.content

    if isinstance(message.content, list):
        text_values = []
        skipped_types = []
        for block in message.content:
            if isinstance(block, str):
                text_values.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                text_values.append(block.get("text") or "")
            else:
                skipped_types.append(
                    block.get("type") if isinstance(block, dict) else type(block).__name__
                )
        if skipped_types:
            logger.debug("Ignoring non-text response blocks: %s", skipped_types)
        return "\n".join([text for text in text_values if text]).strip()

    return ""


def _with_format_instructions(
    messages: Sequence[BaseMessage], output_schema: Type[BaseModel]
) -> List[BaseMessage]:
    instructions = PydanticOutputParser(pydantic_object=output_schema).get_format_instructions()
    return [
        SystemMessage(
            content=(
                "When you give your final answer instead of calling a tool, "
                f"reply with JSON only.\n{instructions}"
            )
        ),
        *messages,
    ]


def _blocked_reason(message: Any) -> Optional[str]:
    metadata = getattr(message, "response_metadata", None) or {}
    finish_reason = metadata.get("finish_reason")
    if finish_reason in {"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT"}:
        return str(finish_reason)
    feedback = metadata.get("prompt_feedback") or {}
    if isinstance(feedback, dict) and feedback.get("block_reason"):
        return str(feedback["block_reason"])
    return None


class InferenceClient:
    """Single remote call to the hosted Gemini model.

    Returns the schema-valid answer, or a ToolRequest when the model decides to
    call one of the declared tools instead of answering.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        chat_model_factory: ChatModelFactory = get_chat_model,
    ) -> None:
        self.model = model or settings.GEMINI_MODEL
        self._chat_model_factory = chat_model_factory

    async def invoke(
        self,
        messages: Sequence[BaseMessage],
        output_schema: Type[M],
        tools: Optional[Sequence[Any]] = None,
        safety_settings: Optional[dict] = None,
    ) -> Union[M, ToolRequest]:
        logger.debug(
            "Invoking %s with %d messages, schema=%s, tools=%s",
            self.model,
            len(messages),
            output_schema.__name__,
            [getattr(tool, "name", tool) for tool in tools or []],
        )

        parsed: Any = None
        parsing_error: Optional[BaseException] = None
        try:
            chat_model = self._chat_model_factory(
                model=self.model, safety_settings=safety_settings
            )
            if tools:
                # Gemini cannot combine function calling with a response schema,
                # so the schema goes into the prompt and the final answer is
                # parsed from the text part.
                raw = await chat_model.bind_tools(list(tools)).ainvoke(
                    _with_format_instructions(messages, output_schema)
                )
            else:
                structured_model = chat_model.with_structured_output(
                    output_schema, method="json_schema", include_raw=True
                )
                result = await structured_model.ainvoke(list(messages))
                raw = result.get("raw")
                parsed = result.get("parsed")
                parsing_error = result.get("parsing_error")
        except Exception as exc:
            logger.exception("Model invocation failed for %s", self.model)
            raise TransportError(f"Error calling model {self.model}: {exc}") from exc

        tool_calls = getattr(raw, "tool_calls", None) or []
        if tool_calls:
            call = tool_calls[0]
            if len(tool_calls) > 1:
                logger.warning(
                    "Model requested %d tool calls at once; only '%s' is honored",
                    len(tool_calls),
                    call.get("name"),
                )
                raw = raw.model_copy(update={"tool_calls": [call]})
            return ToolRequest(
                tool_name=call.get("name") or "",
                tool_input=call.get("args") or {},
                call_id=call.get("id"),
                message=raw,
            )

        if tools and isinstance(raw, AIMessage):
            parsed, parsing_error = self._parse_text(raw, output_schema)

        if parsed is None:
            blocked = _blocked_reason(raw)
            if blocked:
                raise ModelOutputError(f"Model response was blocked ({blocked})")
            if parsing_error is not None:
                raise ModelOutputError(
                    f"Model response did not match {output_schema.__name__}: {parsing_error}"
                )
            raise ModelOutputError("Model returned an empty response")

        if isinstance(parsed, output_schema):
            return parsed
        try:
            return output_schema.model_validate(parsed)
        except ValidationError as exc:
            raise ModelOutputError(
                f"Model response did not match {output_schema.__name__}: {exc}"
            ) from exc

    @staticmethod
    def _parse_text(message: AIMessage, output_schema: Type[M]):
        text = _extract_ai_text(message)
        if not text:
            return None, None
        parser = PydanticOutputParser(pydantic_object=output_schema)
        try:
            return parser.parse(text), None
        except OutputParserException as exc:
            return None, exc


def get_inference_client() -> InferenceClient:
    global _inference_client
    if _inference_client is None:
        _inference_client = InferenceClient()
    return _inference_client
