from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CropType(str, Enum):
    WHEAT = "Wheat"
    RICE = "Rice"
    CORN = "Corn"
    SOYBEAN = "Soybean"
    COTTON = "Cotton"


class RecommendationRequest(BaseModel):
    """Farm profile submitted from the recommendation form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    location: str = Field(min_length=1, description="The location of the farm.")
    crop_type: CropType = Field(
        alias="cropType", description="The type of crop being grown."
    )
    soil_ph: float = Field(
        alias="soilPh", ge=0, le=14, description="The pH level of the soil."
    )
    nitrogen_levels: float = Field(
        alias="nitrogenLevels", ge=0, description="The nitrogen levels in the soil (ppm)."
    )
    rainfall: float = Field(ge=0, description="Rainfall in the last month (mm).")
    temperature: float = Field(description="Average temperature in the last month (°C).")
    humidity: float = Field(
        ge=0, le=100, description="Average humidity in the last month (%)."
    )
    historical_yield_trends: str = Field(
        alias="historicalYieldTrends",
        min_length=1,
        description="Description of historical yield trends.",
    )


class RecommendationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    irrigation_recommendation: str = Field(
        alias="irrigationRecommendation",
        description="Personalized irrigation recommendations.",
    )
    fertilization_recommendation: str = Field(
        alias="fertilizationRecommendation",
        description="Personalized fertilization recommendations.",
    )
    planting_time_recommendation: str = Field(
        alias="plantingTimeRecommendation",
        description="Personalized planting time recommendations.",
    )
