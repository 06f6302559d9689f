from pydantic_settings import BaseSettings
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = os.getenv("APP_NAME", "Braidr")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # MongoDB Settings
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "braidr_db")

    # JWT Auth
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your_secret_key_here")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    # Scheduling
    SLOT_GRANULARITY_MINUTES: int = int(os.getenv("SLOT_GRANULARITY_MINUTES", "30"))

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:8081",  # Expo web
        "http://localhost:19006",  # Expo dev tools
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
