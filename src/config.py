"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe HOLOCRON_,
et peut optionnellement être fournie via un fichier .env.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe HOLOCRON_.
    Exemple : HOLOCRON_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="HOLOCRON_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///holocron.db")

    # Catalogue externe (SWAPI)
    swapi_base_url: str = Field(default="https://swapi.dev/api")
    swapi_verify_ssl: bool = Field(default=True)
    swapi_timeout_seconds: float = Field(default=30.0, gt=0)
    swapi_max_attempts: int = Field(default=5, ge=1)

    # Synchronisation planifiée (quotidienne, minuit par défaut)
    sync_schedule_enabled: bool = Field(default=True)
    sync_cron_hour: int = Field(default=0, ge=0, le=23)
    sync_cron_minute: int = Field(default=0, ge=0, le=59)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/holocron.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("swapi_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Retire le slash final de l'URL du catalogue."""
        return v.rstrip("/")
