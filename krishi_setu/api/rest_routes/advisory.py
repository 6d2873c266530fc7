from fastapi import APIRouter, Depends

from krishi_setu.core.security import get_current_language, verify_jwt
from krishi_setu.models.advisory import (
    AgriQaRequest,
    AgriQaResponse,
    CropRecommendation,
    CropRecommendationRequest,
    MarketPricePrediction,
    MarketPricePredictionRequest,
)
from krishi_setu.services.agri_qa_service import answer_question
from krishi_setu.services.crop_recommendation_service import recommend_crops
from krishi_setu.services.market_price_service import predict_market_price

router = APIRouter(tags=["Advisory"], dependencies=[Depends(verify_jwt)])


@router.post("/krishi-ai/ask", response_model=AgriQaResponse, summary="Ask Krishi-Bot")
async def ask_krishi_ai(request: AgriQaRequest, language: str = Depends(get_current_language)):
    """
    Answers a general farming question in the requested language, falling back
    to the account language.
    """
    return await answer_question(request.question, request.language or language)


@router.post(
    "/market-prices/predict",
    response_model=MarketPricePrediction,
    summary="Predict the market price of a crop",
)
async def predict_price(
    request: MarketPricePredictionRequest, language: str = Depends(get_current_language)
):
    return await predict_market_price(request, language)


@router.post(
    "/crop-recommendations",
    response_model=CropRecommendation,
    summary="Recommend crops from soil details",
)
async def get_crop_recommendations(
    request: CropRecommendationRequest, language: str = Depends(get_current_language)
):
    """
    Recommends crops from a soil analysis text and/or a soil health card photo.
    """
    return await recommend_crops(request, language)
