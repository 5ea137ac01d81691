from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {'1', 'true', 'yes', 'y', 'on'}


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    app_name: str
    environment: Literal['dev', 'prod', 'test']
    cors_origins: str
    registry_base_url: str
    http_timeout_seconds: int
    decode_workers: int
    emit_nulls: bool


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    environment = os.getenv('ENVIRONMENT', 'dev').strip().lower()
    if environment not in {'dev', 'prod', 'test'}:
        environment = 'dev'

    return Settings(
        app_name=os.getenv('APP_NAME', 'registry-schema-api'),
        environment=environment,  # type: ignore[arg-type]
        cors_origins=os.getenv('CORS_ORIGINS', 'http://localhost:3000'),
        registry_base_url=os.getenv('REGISTRY_BASE_URL', 'https://registry.initia.xyz').rstrip('/'),
        http_timeout_seconds=max(1, _env_int('REGISTRY_HTTP_TIMEOUT_SECONDS', 10)),
        decode_workers=max(0, _env_int('REGISTRY_DECODE_WORKERS', 0)),
        emit_nulls=_env_bool('REGISTRY_EMIT_NULLS', False)
    )
