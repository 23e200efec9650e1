import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    db_host: str = "localhost"
    db_name: str = "customerdb"
    host: str = "0.0.0.0"
    port: int = 8080
    database_url: Optional[str] = None
    db_echo: bool = False

    @property
    def url(self) -> str:
        # DATABASE_URL wins over host/name
        if self.database_url:
            return self.database_url
        return f"postgresql+asyncpg://{self.db_host}/{self.db_name}"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_host=os.getenv("DB_HOST", cls.db_host),
            db_name=os.getenv("DB_NAME", cls.db_name),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            database_url=os.getenv("DATABASE_URL") or None,
            db_echo=_env_flag("DB_ECHO"),
        )
