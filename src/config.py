from __future__ import annotations
import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from src.core.models import CorridorConfig

# Load .env early (no error if missing)
load_dotenv()

DATA_DIR = Path(__file__).parent / "data"


@dataclass(frozen=True)
class ServiceConfig:
    corridor_path: str = os.getenv("INTERLOCKING_CORRIDOR_PATH", str(DATA_DIR / "corridor.json"))
    db_path: str | None = os.getenv("INTERLOCKING_DB_PATH")
    log_level: str = os.getenv("INTERLOCKING_LOG_LEVEL", "INFO").upper()


def load_corridor(path: str | Path | None = None) -> CorridorConfig:
    path = Path(path or ServiceConfig().corridor_path)
    return CorridorConfig.from_dict(json.loads(path.read_text(encoding="utf-8")))
