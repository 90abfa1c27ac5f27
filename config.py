import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv


@dataclass(frozen=True)
class Settings:
    mongodb_uri: str
    database_name: str
    environment: str
    port: int
    log_level: str

    @property
    def expose_errors(self) -> bool:
        # Exception text only leaves the server in development.
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    # Values already in the process environment win over the .env file.
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
        database_name=os.getenv("DATABASE_NAME", "boardgames"),
        environment=os.getenv("ENVIRONMENT", "production"),
        port=int(os.getenv("PORT", 8000)),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
