# app/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./friends.db"
    SQL_ECHO: bool = False

    # JWT
    SECRET_KEY: str = "CHANGE_THIS_TO_A_SUPER_SECRET_KEY"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    LOG_LEVEL: str = "INFO"

    # .env is read from the directory the server is started in
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
