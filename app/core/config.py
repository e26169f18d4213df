import os
import json
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
env_path = os.path.join(project_root, '.env')
load_dotenv(env_path)


class Settings(BaseSettings):
    # Basic settings
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Weather Forecasts"
    VERSION: str = "0.1.0"

    # "development" lets unhandled errors propagate with a traceback,
    # anything else renders the error page
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS settings
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            # JSON array first, then a plain comma-separated list
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [i.strip() for i in v.split(",") if i.strip()]

        if isinstance(v, list):
            return v

        return []

    # Database settings
    DB_PATH: str = "weather.db"
    DATABASE_URI: Optional[str] = None
    DB_ECHO: bool = False

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        Database URI, defaulting to a SQLite file driven through aiosqlite
        """
        if self.DATABASE_URI:
            return self.DATABASE_URI

        return f"sqlite+aiosqlite:///{self.DB_PATH}"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    # Create the schema on startup if it is missing
    CREATE_TABLES: bool = True
    # Insert sample forecasts on startup when the table is empty
    SEED_DATA: bool = False

    # Server startup settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = True

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")


settings = Settings()
