from typing import List, Union
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
import json

class Settings(BaseSettings):
    PROJECT_NAME: str = "Contractor Ad API"
    VERSION: str = "0.1.0"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Security
    # No fallback: the service refuses to start without a shared secret.
    INTERNAL_WEBHOOK_KEY: str

    @field_validator("INTERNAL_WEBHOOK_KEY")
    def validate_internal_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("INTERNAL_WEBHOOK_KEY must not be blank")
        return v

    # CORS
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str):
            if v.startswith("[") and v.endswith("]"):
                # Parse JSON array string
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    # Fallback to treating as comma-separated
                    return [i.strip() for i in v[1:-1].split(",") if i.strip()]
            else:
                # Comma-separated string
                return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    # Database
    SQLITE_DB_PATH: str = "./data/contractor_ads.db"
    DATABASE_URL: str = Field(default="", validate_default=True)

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_connection(cls, v: str, values) -> str:
        if isinstance(v, str) and v:
            return v
        db_path = values.data.get("SQLITE_DB_PATH")
        if db_path == ":memory:":
            return "sqlite://"
        return f"sqlite:///{db_path}"

    # Seed endpoint for smoke testing a fresh deployment
    ENABLE_SEED_ENDPOINT: bool = False

    # Logging Configuration
    LOG_DIR: str = "./logs"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_ROTATION_SIZE: int = 10485760  # 10MB
    LOG_BACKUP_COUNT: int = 5

    @field_validator("LOG_FORMAT", mode="before")
    def validate_log_format(cls, v):
        value = str(v).split('#')[0].strip().lower()
        if value not in ("json", "console"):
            raise ValueError(f"LOG_FORMAT must be 'json' or 'console', got: {v}")
        return value

    @field_validator("PORT", "LOG_ROTATION_SIZE", "LOG_BACKUP_COUNT", mode="before")
    def validate_integers(cls, v):
        if isinstance(v, str):
            # Handle comments in env values (e.g., "10485760  # 10MB")
            value = v.split('#')[0].strip()
            return int(value)
        return v

    class Config:
        case_sensitive = True
        env_file = ".env"
        extra = "allow"

settings = Settings()
