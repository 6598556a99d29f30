"""Runtime settings, read from ``LABSTOCK_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEV_JWT_SECRET = "labstock-development-secret-change-me"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    jwt_secret: str = DEV_JWT_SECRET
    token_ttl_days: int = 7
    bcrypt_rounds: int = 12
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        secret = env.get("LABSTOCK_JWT_SECRET")
        if not secret:
            logger.warning(
                "LABSTOCK_JWT_SECRET is not set - using the development secret. "
                "Never do this in production."
            )
            secret = DEV_JWT_SECRET

        return Settings(
            data_dir=Path(env.get("LABSTOCK_DATA_DIR") or _DEFAULT_DATA_DIR),
            jwt_secret=secret,
            token_ttl_days=_int(env, "LABSTOCK_TOKEN_TTL_DAYS", 7),
            bcrypt_rounds=_int(env, "LABSTOCK_BCRYPT_ROUNDS", 12),
            log_level=env.get("LABSTOCK_LOG_LEVEL", "WARNING").upper(),
        )


def _int(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
