import logging

from fastapi import HTTPException, status
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import (
    ChatGoogleGenerativeAI,
    HarmBlockThreshold,
    HarmCategory,
)
from pydantic import ValidationError

from .config import settings

logger = logging.getLogger(__name__)

DEFAULT_SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_LOW_AND_ABOVE,
}


def get_chat_model(model: str | None = None, **kwargs) -> ChatGoogleGenerativeAI:
    if "google_api_key" not in kwargs and "api_key" not in kwargs:
        kwargs["google_api_key"] = settings.GEMINI_API_KEY
    if "safety_settings" not in kwargs:
        kwargs["safety_settings"] = DEFAULT_SAFETY_SETTINGS
    return ChatGoogleGenerativeAI(model=model or settings.GEMINI_MODEL, **kwargs)


def build_structured_chain(schema, model=None):
    """System prompt + JSON input, parsed into ``schema``."""
    prompt = ChatPromptTemplate.from_messages(
        [("system", "{system_prompt}"), ("human", "{input_json}")]
    )
    model = model or get_chat_model()
    return prompt | model.with_structured_output(schema, method="json_schema")


def genai_http_error(exc: Exception, action: str) -> HTTPException:
    """Translate a failed model call into the HTTP error returned to the client."""
    if isinstance(exc, (ValidationError, TypeError)):
        logger.warning("Invalid AI response while trying to %s: %s", action, exc)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Received an invalid response from the AI service.",
        )

    logger.exception("GenAI call failed while trying to %s", action)
    error_message = str(exc).lower()
    if "error calling model" in error_message or "api" in error_message:
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"GenAI service error: {str(exc)}",
        )
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Could not {action}. Please try again.",
    )
