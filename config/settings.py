"""
Configurações globais do sistema usando Pydantic Settings.
Carrega variáveis de ambiente e define valores padrão.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configurações principais do sistema."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ambiente
    env: Literal["development", "production", "testing"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False

    # Oráculo semântico (Gemini)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    oracle_timeout: float = Field(default=30.0, ge=1, le=300)

    # Matching
    candidate_limit: int = Field(default=40, ge=1, le=200)
    max_concurrency: int = Field(default=8, ge=1, le=64)
    min_line_length: int = Field(default=3, ge=0, le=20)

    # Paths
    base_path: Path = Field(default_factory=lambda: Path(__file__).parent.parent)
    data_path: Path = Field(default=Path("./data"))
    log_path: Path = Field(default=Path("./logs"))

    # Persistência do catálogo
    storage_type: Literal["json", "sqlite"] = "json"

    @field_validator("data_path", "log_path", mode="after")
    @classmethod
    def ensure_path_exists(cls, v: Path) -> Path:
        """Garante que os diretórios existam."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def has_oracle_credentials(self) -> bool:
        """Indica se há chave configurada para o oráculo."""
        return bool(self.gemini_api_key)


@lru_cache
def get_settings() -> Settings:
    """
    Retorna instância singleton das configurações.
    Usa cache para evitar recarregar .env múltiplas vezes.
    """
    return Settings()
