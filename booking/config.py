import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

# Cargar las variables de entorno desde el archivo .env
load_dotenv()

DEFAULT_DB_DIR = "localDb"


@dataclass(frozen=True)
class Settings:
    train_db_path: str
    user_db_path: str
    log_level: str = "INFO"
    allowed_origins: tuple = ("http://localhost:5173",)

    @classmethod
    def from_env(cls) -> "Settings":
        db_dir = os.getenv("BOOKING_DB_DIR", DEFAULT_DB_DIR)
        return cls(
            train_db_path=os.getenv("TRAIN_DB_PATH", os.path.join(db_dir, "trains.json")),
            user_db_path=os.getenv("USER_DB_PATH", os.path.join(db_dir, "users.json")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            allowed_origins=tuple(_split_origins(os.getenv("ALLOWED_ORIGINS", ""))) or cls.allowed_origins,
        )


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]
