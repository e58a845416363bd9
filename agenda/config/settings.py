from datetime import time
from typing import Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración de la agenda médica utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    PROJECT_NAME: str = "Physician Agenda"
    VERSION: str = "0.1.0"

    # Remote appointment store (REST backend)
    REMOTE_STORE_BASE_URL: str = Field("http://localhost:8080/api", description="URL base del backend de turnos")
    REMOTE_STORE_TIMEOUT: float = Field(30.0, description="Timeout para requests al backend en segundos")
    REMOTE_STORE_TOKEN: str | None = Field(None, description="Bearer token del médico autenticado")

    # Scheduling rules
    DEFAULT_APPOINTMENT_DURATION: int = Field(30, description="Duración por defecto de un turno en minutos")
    ADJACENCY_THRESHOLD_MINUTES: int = Field(
        5, description="Hueco máximo entre turnos para unirlos en un mismo rango bloqueado"
    )
    DAY_END_TIME: time = Field(time(18, 0), description="Hora límite de la jornada (HH:MM)")
    MIN_VIABLE_DURATION_MINUTES: int = Field(15, description="Duración mínima utilizable para un turno")

    # Auto-completion sweep
    AUTO_COMPLETE_ENABLED: bool = Field(True, description="Habilitar el barrido de auto-completado")
    AUTO_COMPLETE_GRACE_PERIOD_MINUTES: int = Field(
        5, description="Minutos de gracia después del fin del turno antes de completarlo"
    )
    AUTO_COMPLETE_CHECK_INTERVAL_SECONDS: int = Field(60, description="Intervalo del barrido en segundos")
    AUTO_COMPLETE_REFRESH_DELAY_SECONDS: float = Field(
        1.0, description="Demora antes de refrescar la agenda tras completar turnos"
    )

    # Duration ledger
    DURATION_LEDGER_BACKEND: str = Field("memory", description="Backend del ledger de duraciones: memory | redis")
    DURATION_LEDGER_RETENTION_DAYS: int = Field(90, description="Días de retención de cada duración")
    DURATION_LEDGER_MAX_ENTRIES: int = Field(1000, description="Cantidad máxima de duraciones guardadas")
    DURATION_LEDGER_REDIS_KEY: str = Field("agenda:appointment_durations", description="Hash de Redis del ledger")

    # Redis Settings
    REDIS_HOST: str = Field("localhost", description="Host de Redis")
    REDIS_PORT: int = Field(6379, description="Puerto de Redis")
    REDIS_DB: int = Field(0, description="Base de datos de Redis")
    REDIS_PASSWORD: str | None = Field(None, description="Contraseña de Redis")

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Nivel de logging")
    LOG_FORMAT: str = Field("colored", description="Formato de logging: colored | json | plain")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorar campos extras en lugar de generar un error
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("DAY_END_TIME", mode="before")
    @classmethod
    def parse_day_end_time(cls, value):
        if isinstance(value, str):
            hours, _, minutes = value.strip().partition(":")
            return time(int(hours), int(minutes or 0))
        return value

    @field_validator("DURATION_LEDGER_BACKEND")
    @classmethod
    def validate_ledger_backend(cls, v):
        if v not in ("memory", "redis"):
            raise ValueError("DURATION_LEDGER_BACKEND must be 'memory' or 'redis'")
        return v

    @field_validator(
        "DEFAULT_APPOINTMENT_DURATION",
        "AUTO_COMPLETE_CHECK_INTERVAL_SECONDS",
        "DURATION_LEDGER_RETENTION_DAYS",
        "DURATION_LEDGER_MAX_ENTRIES",
    )
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @field_validator("ADJACENCY_THRESHOLD_MINUTES", "AUTO_COMPLETE_GRACE_PERIOD_MINUTES", "MIN_VIABLE_DURATION_MINUTES")
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("value must be 0 or greater")
        return v

    @computed_field
    @property
    def redis_url(self) -> str:
        """Construye la URL de conexión a Redis"""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
