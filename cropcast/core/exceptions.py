from typing import List

from cropcast.models.flow_result import FieldViolation


class CropCastError(Exception):
    """Base class for failures of a single flow request."""


class InputValidationError(CropCastError):
    def __init__(self, violations: List[FieldViolation]):
        self.violations = violations
        fields = ", ".join(v.field for v in violations) or "<payload>"
        super().__init__(f"Invalid input for fields: {fields}")


class ModelOutputError(CropCastError):
    """The model returned nothing usable: empty, blocked, or off-schema."""


class ToolExecutionError(ModelOutputError):
    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        super().__init__(f"Tool '{tool_name}' failed: {message}")


class ToolLoopExceededError(ModelOutputError):
    def __init__(self, max_iterations: int):
        self.max_iterations = max_iterations
        super().__init__(
            f"Model kept requesting tools after {max_iterations} calls"
        )


class TransportError(CropCastError):
    """Network, SDK or timeout failure talking to the hosted model."""


class PromptTemplateError(LookupError):
    """Unknown template or unfilled placeholder. Always a programming error."""
