from enum import Enum
from typing import Any, Dict, Mapping

from langchain_core.prompts import PromptTemplate

from cropcast.core.exceptions import PromptTemplateError
from cropcast.prompts.personalized_recommendations_prompt import (
    PERSONALIZED_RECOMMENDATIONS_PROMPT,
)
from cropcast.prompts.summarize_data_prompt import SUMMARIZE_DATA_PROMPT
from cropcast.prompts.summarize_report_prompt import SUMMARIZE_REPORT_PROMPT
from cropcast.prompts.yield_prediction_prompt import YIELD_PREDICTION_PROMPT

PERSONALIZED_RECOMMENDATIONS = "personalized_recommendations"
YIELD_PREDICTION = "yield_prediction"
SUMMARIZE_DATA = "summarize_data"
SUMMARIZE_REPORT = "summarize_report"

_TEMPLATES: Dict[str, PromptTemplate] = {
    PERSONALIZED_RECOMMENDATIONS: PromptTemplate.from_template(
        PERSONALIZED_RECOMMENDATIONS_PROMPT
    ),
    YIELD_PREDICTION: PromptTemplate.from_template(YIELD_PREDICTION_PROMPT),
    SUMMARIZE_DATA: PromptTemplate.from_template(SUMMARIZE_DATA_PROMPT),
    SUMMARIZE_REPORT: PromptTemplate.from_template(SUMMARIZE_REPORT_PROMPT),
}


def _stringify(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if value is None:
        return ""
    return str(value)


def get_template(template_name: str) -> PromptTemplate:
    template = _TEMPLATES.get(template_name)
    if template is None:
        raise PromptTemplateError(f"Unknown prompt template '{template_name}'")
    return template


def render_prompt(template_name: str, fields: Mapping[str, Any]) -> str:
    """Substitutes every placeholder of a named template with its field value.

    Values are inserted verbatim.
    """
    template = get_template(template_name)
    missing = sorted(set(template.input_variables) - set(fields))
    if missing:
        raise PromptTemplateError(
            f"Template '{template_name}' is missing values for: {', '.join(missing)}"
        )
    values = {name: _stringify(fields[name]) for name in template.input_variables}
    return template.format(**values)
