"""Load service settings from the environment or a JSON profile."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)

DEFAULT_PORT = 5210
DEFAULT_DB_PATH = Path("depthchart.sqlite")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class AppSettings:
    db_path: str = str(DEFAULT_DB_PATH)
    seed_path: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppSettings":
        return cls(
            db_path=os.getenv("DEPTHCHART_DB_PATH") or str(DEFAULT_DB_PATH),
            seed_path=os.getenv("DEPTHCHART_SEED_PATH") or None,
            host=os.getenv("HOST") or "0.0.0.0",
            port=_env_int("PORT", DEFAULT_PORT),
            cors_origins=_split_origins(os.getenv("DEPTHCHART_CORS_ORIGINS", "*")) or ["*"],
            log_level=(os.getenv("DEPTHCHART_LOG_LEVEL") or "INFO").upper(),
        )

    @classmethod
    def load(cls, path: Path) -> "AppSettings":
        data = json.loads(path.read_text(encoding="utf-8"))
        defaults = cls()
        origins = data.get("cors_origins", defaults.cors_origins)
        if isinstance(origins, str):
            origins = _split_origins(origins)
        return cls(
            db_path=str(data.get("db_path", defaults.db_path)),
            seed_path=data.get("seed_path"),
            host=data.get("host", defaults.host),
            port=int(data.get("port", defaults.port)),
            cors_origins=list(origins),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
        )

    def save(self, path: Path) -> None:
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
