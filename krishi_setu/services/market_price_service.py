import json
import logging
from typing import Optional

from krishi_setu.core.genai_client import build_structured_chain, genai_http_error
from krishi_setu.core.languages import language_name
from krishi_setu.models.advisory import MarketPricePrediction, MarketPricePredictionRequest
from krishi_setu.prompts.market_price_system_prompt import MARKET_PRICE_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


async def predict_market_price(
    request: MarketPricePredictionRequest,
    language: Optional[str] = None,
) -> MarketPricePrediction:
    chain = build_structured_chain(MarketPricePrediction)
    input_data = {
        **request.model_dump(),
        "language": language_name(language),
    }
    try:
        prediction: MarketPricePrediction = await chain.ainvoke(
            {"system_prompt": MARKET_PRICE_SYSTEM_PROMPT, "input_json": json.dumps(input_data)}
        )
    except Exception as e:
        raise genai_http_error(e, "predict the market price") from e

    logger.info(
        "Predicted %s trend for %s at %s",
        prediction.trend.value,
        request.crop_name,
        request.market_location,
    )
    return prediction
