from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class AgriQaRequest(BaseModel):
    question: str = Field(description="The farmer's agricultural question.")
    language: Optional[str] = Field(
        default=None, description="Language code for the answer, defaults to the account language."
    )

    @field_validator("question")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Question must not be empty.")
        return value


class AgriQaResponse(BaseModel):
    answer: str = Field(description="A detailed answer to the farmer's question.")


class PriceTrend(str, Enum):
    UPWARD = "upward"
    DOWNWARD = "downward"
    STABLE = "stable"


class TrendConfidence(BaseModel):
    """Confidence percentages for each trend, always summing to 100."""

    upward: float = Field(ge=0, le=100, description="Confidence (0-100) that the price trend will be upward.")
    downward: float = Field(ge=0, le=100, description="Confidence (0-100) that the price trend will be downward.")
    stable: float = Field(ge=0, le=100, description="Confidence (0-100) that the price trend will be stable.")

    @model_validator(mode="after")
    def _normalize_total(self):
        total = self.upward + self.downward + self.stable
        if total == 0:
            self.stable = 100.0
        elif abs(total - 100) > 0.5:
            self.upward = round(self.upward * 100 / total, 1)
            self.downward = round(self.downward * 100 / total, 1)
            self.stable = round(100 - self.upward - self.downward, 1)
        return self


class MarketPricePredictionRequest(BaseModel):
    crop_name: str = Field(min_length=1, description='The name of the crop (e.g., "Wheat", "Tomato").')
    market_location: str = Field(
        min_length=1, description='The market or region (e.g., "Nashik, Maharashtra", "Indore").'
    )


class MarketPricePrediction(BaseModel):
    predicted_price: str = Field(
        description='Predicted price range in rupees per standard unit (e.g., "Rs. 1800 - Rs. 2200 per quintal").'
    )
    trend: PriceTrend = Field(description="Anticipated price trend over the next 2-4 weeks.")
    trend_confidence: TrendConfidence = Field(description="Confidence levels for each possible trend.")
    reasoning: str = Field(
        description="Brief explanation mentioning seasonality, demand and recent events."
    )


DEFAULT_WEATHER_CONDITIONS = "Temp: 25°C, Humidity: 70%, Wind: 10km/h, Last rainfall: 2 days ago"
DEFAULT_SEASONAL_DATA = "Current season: Late Spring, Average rainfall for this period: 50mm, Frost risk: Low"


class CropRecommendationRequest(BaseModel):
    soil_analysis: Optional[str] = Field(default=None, description="Soil analysis in text form.")
    soil_health_card_image: Optional[str] = Field(
        default=None,
        description="Photo of a soil health card as a data URI (data:<mime>;base64,<data>).",
        pattern=r"^data:image/[\w.+-]+;base64,",
    )
    real_time_weather_conditions: str = Field(default=DEFAULT_WEATHER_CONDITIONS)
    seasonal_data: str = Field(default=DEFAULT_SEASONAL_DATA)

    @model_validator(mode="after")
    def _require_soil_details(self):
        if not (self.soil_analysis and self.soil_analysis.strip()) and not self.soil_health_card_image:
            raise ValueError("Soil details are required.")
        return self


class CropRecommendation(BaseModel):
    optimal_crops: List[str] = Field(description="Crops best suited for the farm, best first.")
    reasoning: str = Field(description="Why these crops suit the soil, weather and season.")
