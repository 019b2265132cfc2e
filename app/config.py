from enum import Enum
import configparser
from os import environ
from os.path import exists
from typing import Any, Optional
import logging

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

_PATH = "app{suffix}.conf"
_CONFIG = None


def _to_bool(v: Any, default: bool) -> bool:
    if v in (None, "", " "):
        return default
    if isinstance(v, str):
        return v.lower() in ("yes", "true", "t", "1")
    return bool(v)


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"
    critical = "critical"


class ConfigApp(BaseModel):
    loglevel: LogLevel = Field(default=LogLevel.info)


class ConfigUvicorn(BaseModel):
    swagger_enabled: bool = Field(default=False)
    docs_url: str = Field(default="/docs")
    redoc_url: str = Field(default="/redoc")
    host: str = Field(default="127.0.0.1")
    port: Optional[int] = Field(default=8000, gt=0, lt=65535)
    reload: bool = Field(default=True)
    reload_delay: float = Field(default=1)
    reload_dirs: list[str] = Field(default=["app"])
    use_ssl: bool = Field(default=False)
    ssl_base_dir: str | None = Field(default=None)
    ssl_cert_file: str | None = Field(default=None)
    ssl_key_file: str | None = Field(default=None)

    @field_validator("host", mode="before")
    def validate_host(cls, v: Any) -> str:
        if v in (None, "", " "):
            return "127.0.0.1"
        return str(v)

    @field_validator("port", mode="before")
    def validate_port(cls, v: Any) -> int:
        if v in (None, "", " "):
            return 8000
        return int(v)

    @field_validator("reload", mode="before")
    def validate_reload(cls, v: Any) -> bool:
        return _to_bool(v, True)

    @field_validator("reload_delay", mode="before")
    def validate_reload_delay(cls, v: Any) -> float:
        if v in (None, "", " "):
            return 1.0
        return float(v)

    @field_validator("reload_dirs", mode="before")
    def validate_reload_dirs(cls, v: Any) -> list[str]:
        if v in (None, "", " "):
            return ["app"]
        if isinstance(v, str):
            return [d.strip() for d in v.split(",")]
        return v  # type: ignore

    @field_validator("use_ssl", "swagger_enabled", mode="before")
    def validate_flags(cls, v: Any) -> bool:
        return _to_bool(v, False)


class ConfigStats(BaseModel):
    enabled: bool = Field(default=False)
    host: str | None = Field(default=None)
    port: int | None = Field(default=None)
    module_name: str | None = Field(default="simtax")

    @field_validator("enabled", mode="before")
    def validate_enabled(cls, v: Any) -> bool:
        return _to_bool(v, False)

    @field_validator("host", mode="before")
    def validate_host(cls, v: Any) -> str | None:
        if v in (None, "", " "):
            return None
        return str(v)

    @field_validator("port", mode="before")
    def validate_port(cls, v: Any) -> int | None:
        if v in (None, "", " "):
            return None
        return int(v)


class ConfigGateway(BaseModel):
    backend: str = Field(
        default="memory",
        description="Host platform backend, can be 'memory' or 'http'",
    )
    base_url: str | None = Field(default=None)
    authentication: str = Field(
        default="off",
        description="Authentication towards the host platform, can be 'off' or 'api_key'",
    )
    api_key: str | None = Field(default=None)
    timeout: int = Field(default=10)
    retries: int = Field(default=3)
    backoff: float = Field(default=0.5)

    @field_validator("backend")
    def validate_backend(cls, value: Any) -> str:
        if value not in {"memory", "http"}:
            raise ValueError("backend must be either 'memory' or 'http'")
        return str(value)

    @field_validator("authentication")
    def validate_authentication(cls, value: Any) -> str:
        if value not in {"off", "api_key"}:
            raise ValueError("authentication must be either 'off' or 'api_key'")
        return str(value)

    @field_validator("timeout", "retries", mode="before")
    def validate_ints(cls, v: Any, info: Any) -> int:
        if v in (None, "", " "):
            return 10 if info.field_name == "timeout" else 3
        return int(v)

    @field_validator("backoff", mode="before")
    def validate_backoff(cls, v: Any) -> float:
        if v in (None, "", " "):
            return 0.5
        return float(v)


class ConfigSimTax(BaseModel):
    source_ref: str = Field(default="https://openbelasting.nl/source/openbelasting.pinkapi.source.json")
    assessment_schema_ref: str = Field(
        default="https://openbelasting.nl/schemas/openblasting.aanslagbiljet.schema.json"
    )
    objection_schema_ref: str = Field(
        default="https://openbelasting.nl/schemas/openblasting.bezwaaraanvraag.schema.json"
    )
    objection_event_type: str = Field(default="simtax.bezwaar.created")
    sync_before_search: bool = Field(default=True)
    fail_on_sync_error: bool = Field(default=False)

    @field_validator("sync_before_search", mode="before")
    def validate_sync_before_search(cls, v: Any) -> bool:
        return _to_bool(v, True)

    @field_validator("fail_on_sync_error", mode="before")
    def validate_fail_on_sync_error(cls, v: Any) -> bool:
        return _to_bool(v, False)


class Config(BaseModel):
    app: ConfigApp
    uvicorn: ConfigUvicorn
    stats: ConfigStats
    gateway: ConfigGateway
    sim_tax: ConfigSimTax


def read_ini_file(path: str) -> Any:
    ini_data = configparser.ConfigParser()
    ini_data.read(path)

    ret = {}
    for section in ini_data.sections():
        ret[section] = dict(ini_data[section])

    return ret


def reset_config() -> None:
    global _CONFIG
    _CONFIG = None


def set_config(config: Config) -> None:
    global _CONFIG
    _CONFIG = config


def get_config(path: str | None = None) -> Config:
    global _CONFIG
    global _PATH

    if _CONFIG is not None:
        return _CONFIG

    if path is None:
        suffix = environ.get("APP_ENV", "")
        if suffix:
            suffix = f".{suffix}"
        path = _PATH.replace("{suffix}", suffix)
        logger.info(f"Reading configuration using file: {path}")

    if not exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    # INI files are not a native pydantic source, so sections are read into dicts first.
    ini_data = read_ini_file(path)
    for section in ("app", "uvicorn", "stats", "gateway", "sim_tax"):
        ini_data.setdefault(section, {})

    try:
        _CONFIG = Config(**ini_data)
    except ValidationError as e:
        logger.error(f"Configuration validation error: {e}")
        raise e

    return _CONFIG
