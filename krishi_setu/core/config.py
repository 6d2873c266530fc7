import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = "gemini-2.5-flash"
    JWT_SECRET_KEY: str = os.environ.get("JWT_SECRET_KEY", "")
    MONGO_URI: str = os.environ.get("MONGO_URI", "")
    MONGO_DIRECT_URI: str = os.environ.get("MONGO_DIRECT_URI", "")
    MONGO_DB_NAME: str = "krishi_setu"
    CORS_ALLOW_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"


settings = Settings()
