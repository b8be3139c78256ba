from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "DXF Page Converter API"
    environment: str = "development"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    default_font: str = "Helvetica"
    points_per_unit: float = 72.0  # se asume pulgada como unidad del DXF
    text_width_factor: float = 0.6

    # Carta (8.5 x 11 in) en puntos
    default_page_width: float = 612.0
    default_page_height: float = 792.0

    max_upload_bytes: int = 20 * 1024 * 1024

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, value):  # noqa: D401
        """Acepta el nivel de log en minúsculas."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    class Config:
        env_file = ".env"
        env_prefix = "DXFPAGE_"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
