from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Optional
import os


class Settings(BaseSettings):
    # Mail account used both to authenticate against the SMTP relay and as the sender address
    EMAIL_USER: str = Field("", description="SMTP account / sender address")
    EMAIL_PASS: str = Field("", description="SMTP account password or app password")
    SMTP_HOST: str = Field("smtp.gmail.com", description="SMTP relay host")
    SMTP_PORT: int = Field(465, description="SMTP relay port (implicit TLS)")
    EMAIL_FROM_NAME: str = Field(
        "Ocean View Hotels", description="Display name used in the From header"
    )
    VERIFY_URL: str = Field(
        "https://hotelguestmodule-62806.web.app/verify.html",
        description="Guest verification page the check-in deep link points at",
    )

    # Firebase credentials: either the whole service account JSON in one variable,
    # or a path to the key file.
    FIREBASE_SERVICE_ACCOUNT: Optional[str] = Field(
        None, description="Firebase service account key as a JSON string"
    )
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = Field(
        None, description="Path to the Firebase service account key JSON file"
    )

    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"], description="Origins allowed by CORS"
    )
    PORT: int = Field(3000, description="Port the HTTP server listens on")
    LOG_LEVEL: str = Field("INFO", description="Root log level")

    # The .env file is expected in the project root (one level above the package).
    model_config = SettingsConfigDict(
        env_file=os.path.join(
            os.path.dirname(
                os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
            ),
            ".env",
        ),
        extra="ignore",
    )


# Instantiate the settings
settings = Settings()
