from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./lms.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    SECRET_KEY: str = "dev-secret-lms-change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "lms-api"
    JWT_AUDIENCE: str = "lms-clients"
    JWT_EXPIRATION_MINUTES: int = 60
    LOG_LEVEL: str = "INFO"
    CACHE_TTL: int = 600  # 10 minutes, every entity
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 100
    LOGIN_RATE_LIMIT_PER_MINUTE: int = 10
    SEED_DEFAULT_DATA: bool = True
    SEED_PASSWORD: str = "Password123!"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_long_enough(cls, v: str) -> str:
        # HS256 wants at least 256 bits of key material
        if len(v) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("JWT_ISSUER", "JWT_AUDIENCE")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("JWT_EXPIRATION_MINUTES", "CACHE_TTL")
    @classmethod
    def positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v


settings = Settings()
