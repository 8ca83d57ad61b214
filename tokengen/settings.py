import os
from functools import lru_cache
from typing import Literal
from pydantic import BaseModel, Field
from dotenv import load_dotenv
import logging

load_dotenv()

DEFAULT_SUBJECT = "jeanclaude.twagiramungu70078@onetrust.com"
ONE_DAY = 86400


class Settings(BaseModel):
    jwt_secret: str | None = Field(default_factory=lambda: os.getenv("JWT_SECRET"))
    jwt_secret_encoding: Literal["utf8", "hex", "base64"] = Field(
        default_factory=lambda: os.getenv("JWT_SECRET_ENCODING", "utf8"),
        validate_default=True,
    )
    jwt_subject: str = Field(default_factory=lambda: os.getenv("JWT_SUBJECT", DEFAULT_SUBJECT))
    jwt_algorithm: str = Field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    token_lifetime: int = Field(
        default_factory=lambda: os.getenv("TOKEN_LIFETIME", ONE_DAY),
        validate_default=True,
        ge=0,
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

@lru_cache
def get_settings() -> Settings:
    return Settings()

def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )
