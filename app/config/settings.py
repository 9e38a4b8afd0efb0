from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # App Info
    app_name: str = "PDV Morango API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./pdv_morango.db"

    # Security
    secret_key: str = "change-me"
    algorithm: str = "HS256"

    # CORS
    allowed_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:8080"],
        description="Origens autorizadas para o frontend"
    )

    # Caixa
    expense_description_max_length: int = Field(
        default=500,
        description="Tamanho máximo da descrição de uma despesa"
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
