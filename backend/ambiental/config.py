"""
Configurações da aplicação
"""
import os
from pathlib import Path
from typing import Optional


class Settings:
    """Configurações da aplicação"""

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: list = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8501",
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Upload
    MAX_UPLOAD_SIZE: int = int(os.getenv("MAX_UPLOAD_SIZE_MB", "50")) * 1024 * 1024
    ALLOWED_EXTENSIONS: list = [".xlsx"]
    INVALID_EXTENSION_MESSAGE: str = "Por favor, envie um arquivo .xlsx válido."

    # Sessões (somente em memória)
    DEFAULT_SESSION_ID: str = os.getenv("DEFAULT_SESSION_ID", "default")

    # Gráficos
    DEFAULT_PALETTE: str = os.getenv("DEFAULT_PALETTE", "Floresta")
    DEFAULT_THEME: str = os.getenv("DEFAULT_THEME", "dark")

    @classmethod
    def is_allowed_file(cls, filename: Optional[str]) -> bool:
        """Verifica se a extensão do arquivo é aceita"""
        if not filename:
            return False
        return Path(filename).suffix.lower() in cls.ALLOWED_EXTENSIONS


settings = Settings()
