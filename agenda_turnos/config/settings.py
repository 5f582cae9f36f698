from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración del motor de turnos utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    PROJECT_NAME: str = "Agenda Turnos"
    VERSION: str = "0.1.0"

    # Backend de turnos
    TURNOS_API_BASE_URL: str = Field("http://localhost:3000", description="URL base del backend de turnos")
    TURNOS_API_TIMEOUT: float = Field(30.0, description="Timeout para requests al backend en segundos")

    # Caché del cliente
    CACHE_TTL_SECONDS: float = Field(30.0, description="Tiempo de vida de las consultas cacheadas en segundos")
    CACHE_MAX_SIZE: int = Field(500, description="Cantidad máxima de entradas en caché")

    # Turnos express
    EXPRESS_WINDOW_START_HOUR: int = Field(7, description="Hora mínima de inicio para propuestas express")
    EXPRESS_WINDOW_END_HOUR: int = Field(22, description="Hora máxima de fin para propuestas express")

    # Editor de disponibilidad
    AVAILABILITY_MINUTE_STEP: int = Field(5, description="Los minutos de cada bloque deben ser múltiplo de este valor")
    AVAILABILITY_MAX_BLOCK_MINUTES: int = Field(60, description="Duración máxima de un bloque en minutos")

    # Circuit breaker
    CIRCUIT_BREAKER_FAILURE_THRESHOLD: int = Field(5, description="Fallos consecutivos antes de abrir el circuito")
    CIRCUIT_BREAKER_RECOVERY_TIMEOUT: float = Field(
        60.0, description="Segundos antes de probar nuevamente el backend"
    )

    DEFAULT_CURRENCY: str = Field("ARS", description="Moneda de los costos de consulta")

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Nivel de log")
    LOG_FORMAT: str = Field("colored", description="Formato de log: colored, json o plain")

    # Application Settings
    DEBUG: bool = Field(False, description="Modo de depuración")
    ENVIRONMENT: str = Field("production", description="Entorno de ejecución")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorar campos extras en lugar de generar un error
    )

    @field_validator("EXPRESS_WINDOW_START_HOUR", "EXPRESS_WINDOW_END_HOUR")
    @classmethod
    def validate_hour(cls, v):
        if not 0 <= v <= 23:
            raise ValueError("Express window hours must be between 0 and 23")
        return v

    @field_validator("AVAILABILITY_MINUTE_STEP", "AVAILABILITY_MAX_BLOCK_MINUTES", "CACHE_MAX_SIZE")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def validate_currency(cls, v):
        if len(v) != 3:
            raise ValueError("DEFAULT_CURRENCY must be a 3-letter ISO code")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("colored", "json", "plain"):
            raise ValueError("LOG_FORMAT must be 'colored', 'json' or 'plain'")
        return v

    @computed_field
    @property
    def is_development(self) -> bool:
        """Determina si está en modo desarrollo"""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]


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
