from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.schemas import EncryptionMode


class Settings(BaseSettings):
    AWS_REGION: str = "us-east-1"
    ATHENA_DATABASE: str = "project"
    ATHENA_CATALOG: str = "AwsDataCatalog"
    ATHENA_WORKGROUP: str = "primary"
    ATHENA_OUTPUT_LOCATION: str = "s3://athena-results/"
    ATHENA_ENCRYPTION_MODE: Optional[EncryptionMode] = None

    # {offset} and {limit} are filled in for every page request
    QUERY_TEMPLATE: str = "SELECT * FROM project.gse OFFSET {offset} LIMIT {limit}"
    PAGE_SIZE: int = 10
    POLL_INTERVAL_SECONDS: float = 1.0
    MAX_POLL_ATTEMPTS: int = 30

    LOG_LEVEL: str = "INFO"

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class AthenaConfig(BaseModel):
    """Everything the orchestrator needs to know about the engine, passed in explicitly."""

    region: str
    database: str
    catalog: str
    workgroup: str
    output_location: str
    encryption_mode: Optional[EncryptionMode] = None
    page_size: int = 10
    poll_interval: float = 1.0
    max_poll_attempts: int = 30

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AthenaConfig":
        return cls(
            region=settings.AWS_REGION,
            database=settings.ATHENA_DATABASE,
            catalog=settings.ATHENA_CATALOG,
            workgroup=settings.ATHENA_WORKGROUP,
            output_location=settings.ATHENA_OUTPUT_LOCATION,
            encryption_mode=settings.ATHENA_ENCRYPTION_MODE,
            page_size=settings.PAGE_SIZE,
            poll_interval=settings.POLL_INTERVAL_SECONDS,
            max_poll_attempts=settings.MAX_POLL_ATTEMPTS,
        )


# Create a single instance of the settings to use everywhere
settings = Settings()
