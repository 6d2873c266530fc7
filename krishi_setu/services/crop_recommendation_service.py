import json
from typing import Optional

from langchain_core.messages import HumanMessage
from langchain_core.prompts import ChatPromptTemplate

from krishi_setu.core.genai_client import genai_http_error, get_chat_model
from krishi_setu.core.languages import language_name
from krishi_setu.models.advisory import CropRecommendation, CropRecommendationRequest
from krishi_setu.prompts.crop_recommendation_system_prompt import (
    CROP_RECOMMENDATION_SYSTEM_PROMPT,
)


def _build_messages(request: CropRecommendationRequest, language: Optional[str]):
    prompt = ChatPromptTemplate.from_messages([("system", "{system_prompt}")])
    messages = prompt.format_messages(system_prompt=CROP_RECOMMENDATION_SYSTEM_PROMPT)

    input_data = {
        "soil_analysis": request.soil_analysis,
        "real_time_weather_conditions": request.real_time_weather_conditions,
        "seasonal_data": request.seasonal_data,
        "language": language_name(language),
    }
    user_content = [{"type": "text", "text": json.dumps(input_data)}]
    if request.soil_health_card_image:
        user_content.append(
            {"type": "image_url", "image_url": request.soil_health_card_image}
        )
    messages.append(HumanMessage(content=user_content))
    return messages


async def recommend_crops(
    request: CropRecommendationRequest,
    language: Optional[str] = None,
) -> CropRecommendation:
    model = get_chat_model().with_structured_output(CropRecommendation, method="json_schema")
    try:
        return await model.ainvoke(_build_messages(request, language))
    except Exception as e:
        raise genai_http_error(e, "recommend crops") from e
