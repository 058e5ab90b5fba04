from urllib.parse import quote_plus

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGODB_URI: str | None = None
    DB_USER: str | None = None
    DB_PASS: str | None = None
    DB_HOST: str = "cluster0.kygk2l2.mongodb.net"
    DB_NAME: str = "EduSparkDB"
    ACCESS_TOKEN_SECRET: str
    STRIPE_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_HOURS: int = 24
    PORT: int = 5000
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL: int = 300  # 5 minutes
    LOG_LEVEL: str = "INFO"
    RATE_LIMIT_PER_MINUTE: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @model_validator(mode="after")
    def _require_db_credentials(self):
        if not self.MONGODB_URI and not (self.DB_USER and self.DB_PASS):
            raise ValueError("DB_USER and DB_PASS are required when MONGODB_URI is not set")
        return self

    @property
    def mongodb_uri(self) -> str:
        if self.MONGODB_URI:
            return self.MONGODB_URI
        return (
            f"mongodb+srv://{quote_plus(self.DB_USER)}:{quote_plus(self.DB_PASS)}@{self.DB_HOST}"
            "/?retryWrites=true&w=majority&appName=Cluster0"
        )


settings = Settings()
