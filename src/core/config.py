"""Runtime settings, read from the environment once at start-up"""

import os
from dataclasses import dataclass, field


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8081
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.environ.get("SKIRMISH_HOST", "127.0.0.1"),
            port=int(os.environ.get("SKIRMISH_PORT", "8081")),
            log_level=os.environ.get("SKIRMISH_LOG_LEVEL", "INFO").upper(),
            cors_origins=_split_origins(os.environ.get("SKIRMISH_CORS_ORIGINS", "*")),
        )
