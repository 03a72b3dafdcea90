from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AnyHttpUrl, SecretStr, Field

class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./omeka.db"

    solr_url: AnyHttpUrl = "http://localhost:8983/solr"
    solr_core: str = "omeka"
    solr_timeout: float = 15.0

    # File or directory holding the JSON addon definitions
    addons_path: str = "addons"
    index_batch_size: int = Field(default=100, ge=1)

    # Protects POST /index
    admin_api_key: Optional[SecretStr] = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
