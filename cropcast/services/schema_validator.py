from collections.abc import Mapping
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from cropcast.core.exceptions import InputValidationError
from cropcast.models.flow_result import FieldViolation

M = TypeVar("M", bound=BaseModel)

PAYLOAD_FIELD = "<payload>"


def _violations_from_error(exc: ValidationError) -> List[FieldViolation]:
    violations: List[FieldViolation] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or PAYLOAD_FIELD
        violations.append(FieldViolation(field=field, message=error.get("msg", "Invalid value")))
    return violations


def validate_input(model: Type[M], payload: Any) -> M:
    """
    Validates a raw request payload against a request model.

    Every offending field is reported at once so the form can annotate all of
    them, not just the first.
    """
    if isinstance(payload, model):
        return payload
    if not isinstance(payload, Mapping):
        raise InputValidationError(
            [FieldViolation(field=PAYLOAD_FIELD, message="Expected a JSON object")]
        )
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise InputValidationError(_violations_from_error(exc)) from exc
