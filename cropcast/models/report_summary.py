from pydantic import BaseModel, ConfigDict, Field


class ReportSummaryRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    report_text: str = Field(
        alias="reportText",
        min_length=1,
        description="The text of the agricultural report to summarize.",
    )


class ReportSummaryResponse(BaseModel):
    summary: str = Field(description="A concise summary of the agricultural report.")
