from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AREAS = ["ADMINISTRACION", "PUNTO_DE_VENTA", "EXTERNO"]

DEFAULT_PERSONAL_ITEMS = [
    "BANDA-RELOJ-INTELIGENTE",
    "CELULAR-CORPORATIVO",
    "COMPUTADOR-PORTATIL",
    "NO-INGRESA-NADA",
]

DEFAULT_TASKS = [
    "TAREAS DIARIAS DIGI",
    "APOYO TAREAS DIGI",
    "INVENTARIO",
    "INVENTARIO SELECTIVO",
    "SISTEMAS",
    "REVISIÓN DE PROCESOS",
    "SUPERVISOR / ADMIN",
    "MANTENIMIENTO",
    "PERSONAL EXTERNO",
    "COORDINADOR",
    "JEFE DE TIENDA",
    "PERSONAL SST",
    "SEGURIDAD",
    "CAJEROS",
]


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Registro Bodega"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Database URL (read from .env file)
    DATABASE_URL: str = ''

    # JWT Authentication settings
    JWT_SECRET_KEY: str = 'change-me'
    JWT_ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Initial admin, created on startup only when no operator exists
    INITIAL_ADMIN_USERNAME: str = 'admin'
    INITIAL_ADMIN_PASSWORD: str = ''

    # Client URL for CORS
    CLIENT_URL: str = 'http://localhost:3000'
    ADDITIONAL_CORS_ORIGINS: str = ''

    # Local calendar used to decide what "today" means for a record
    TIMEZONE: str = 'America/Bogota'

    # Catalogs validated by the attendance engine
    PERSONAL_ITEMS: List[str] = DEFAULT_PERSONAL_ITEMS
    TASKS: List[str] = DEFAULT_TASKS

    # Export file name prefixes
    RECORDS_EXPORT_PREFIX: str = 'Reporte_Bodega'
    METRICS_EXPORT_PREFIX: str = 'Metricas_Bodega'

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

    @property
    def AREAS(self) -> List[str]:
        return list(DEFAULT_AREAS)

    @property
    def DB_URL(self) -> str:
        if self.ENV_MODE == "dev":
            return self.DEV_DB_URL
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return '{}://{}:{}@{}:{}/{}'.format(
            self.DB_ENGINE,
            self.DB_USERNAME,
            self.DB_PASS,
            self.DB_HOST,
            self.DB_PORT,
            self.DB_NAME
        )


class DevSettings(Settings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'dev'

    @property
    def DEV_DB_URL(self) -> str:
        # Use DATABASE_URL from .env when provided, otherwise a local SQLite file
        return self.DATABASE_URL if self.DATABASE_URL else "sqlite:///./dev.db"

    model_config = SettingsConfigDict(env_file=".env", extra='allow')


class ProdSettings(Settings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'prod'

    # Database settings for production
    DB_ENGINE: str = 'postgresql'
    DB_USERNAME: str = ''
    DB_PASS: str = ''
    DB_HOST: str = ''
    DB_PORT: str = ''
    DB_NAME: str = ''

    model_config = SettingsConfigDict(env_file=".env", extra='allow')


def get_settings(env_mode: str = "dev") -> Settings:
    if env_mode == "dev":
        return DevSettings()
    return ProdSettings()
