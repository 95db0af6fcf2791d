"""Application settings with environment variable loading.

Supports both local development (.env) and CI/admin machines (environment
variables). Credentials for the remote document store never live in code.
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings


load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Attributes:
        qdrant_url: URL of the remote document store.
        qdrant_api_key: API key for the remote document store.
        project_id: Optional namespace prefix for collection names.
        use_emulator: Talk to a local store instead of the network.
        emulator_host: host:port of the local store.
        lessons_collection: Collection holding lesson documents.
        configs_collection: Collection holding the config document.
        config_document_id: Fixed identity of the config document.
        sync_batch_size: Maximum writes per committed batch.
        app_name: Key used for the local run-count store.
        lessons_file_path: Default lesson file for uploadLessons.
        words_file_path: Word list read by the words command.
        log_level: Application logging level.
    """

    # Remote store credentials
    qdrant_url: str = Field(default="", alias="QDRANT_URL")
    qdrant_api_key: str = Field(default="", alias="QDRANT_API_KEY")
    project_id: str = Field(default="", alias="PROJECT_ID")

    # Emulator (local store) configuration
    use_emulator: bool = Field(default=False, alias="USE_EMULATOR")
    emulator_host: str = Field(default="localhost:6333", alias="EMULATOR_HOST")

    # Collections
    lessons_collection: str = Field(default="lessons")
    configs_collection: str = Field(default="configs")
    config_document_id: str = Field(default="configs_id")

    sync_batch_size: int = Field(
        default=500,
        ge=1,
        le=1000,
        alias="SYNC_BATCH_SIZE",
        description="Writes per batch commit; larger record sets are chunked",
    )

    # Local files and state
    app_name: str = Field(default="tpadmin", alias="APP_NAME")
    lessons_file_path: str = Field(default="./data/lessons.txt", alias="LESSONS_FILE_PATH")
    words_file_path: str = Field(default="./data/words.txt", alias="WORDS_FILE_PATH")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("qdrant_url", "qdrant_api_key", "project_id", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from credentials."""
        return v.strip() if v else ""

    def is_store_configured(self) -> bool:
        """Check if the remote document store can be reached.

        The emulator needs no credentials.

        Returns:
            True if emulator mode is on or a store URL is set.
        """
        return self.use_emulator or bool(self.qdrant_url)

    def store_url(self) -> str:
        """Get the URL the store client should connect to.

        Returns:
            Emulator URL in emulator mode, the configured URL otherwise.
        """
        if self.use_emulator:
            return f"http://{self.emulator_host}"
        return self.qdrant_url

    def collection_name(self, base: str) -> str:
        """Get a collection name namespaced by project id.

        Args:
            base: Unqualified collection name (e.g., "lessons").

        Returns:
            "<project_id>_<base>" when a project id is set, else base.
        """
        if self.project_id:
            return f"{self.project_id}_{base}"
        return base


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance with loaded configuration.
    """
    return Settings()


def refresh_settings() -> Settings:
    """Clear settings cache and reload.

    Useful for testing or when environment changes (e.g., --emulator).

    Returns:
        Fresh Settings instance.
    """
    get_settings.cache_clear()
    return get_settings()
