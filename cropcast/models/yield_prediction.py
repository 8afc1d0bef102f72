from pydantic import BaseModel, ConfigDict, Field, field_validator


class YieldPredictionRequest(BaseModel):
    agricultural_data: str = Field(
        alias="agriculturalData",
        min_length=1,
        description=(
            "A string containing agricultural data in CSV format, including "
            "historical crop yield, soil quality, and weather data."
        ),
    )

    @field_validator("agricultural_data")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class YieldPredictionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    predicted_yield: float = Field(
        alias="predictedYield", description="The predicted crop yield in tons."
    )
    recommendations: str = Field(
        description=(
            "Actionable recommendations for the farmer based on the prediction "
            "and data summary."
        )
    )


class SummarizeDataInput(BaseModel):
    """Arguments of the data summarization tool, as declared to the model."""

    agricultural_data: str = Field(
        min_length=1,
        description="A large string of raw CSV data to be summarized.",
    )


class DataSummary(BaseModel):
    summary: str = Field(
        description="A summary of key statistics, trends, and correlations from the data."
    )
