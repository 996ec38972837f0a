# config.py
"""
Process configuration.

Values come from the environment, with a .env file loaded first. Each
setting reads the environment variable of the same name in upper case
(hedera_network <- HEDERA_NETWORK). The operator credentials are
mandatory; everything else has a default.
"""
import logging
from typing import Annotated, Literal, Tuple

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from services.accounts import is_valid_account_format


class ConfigurationError(Exception):
    """Raised when the process cannot start with the given environment."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(frozen=True, extra="ignore", env_ignore_empty=True)

    operator_id: str = ""
    operator_key: str = Field(default="", repr=False)
    hedera_network: Literal["testnet", "previewnet", "mainnet"] = "testnet"
    # Derived from hedera_network when left empty
    mirror_node_url: str = ""
    explorer_url: str = ""
    mirror_page_limit: int = Field(default=50, ge=1)
    mirror_max_pages: int = Field(default=1, ge=1)
    mirror_timeout: float = Field(default=10.0, gt=0)
    # Comma-separated in the environment
    cors_origins: Annotated[Tuple[str, ...], NoDecode] = ("*",)
    static_dir: str = "public"
    log_level: str = "INFO"
    port: int = Field(default=3000, ge=1, le=65535)

    @model_validator(mode="before")
    @classmethod
    def derive_network_urls(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        network = str(data.get("hedera_network") or "testnet").strip().lower()
        data["hedera_network"] = network
        if not data.get("mirror_node_url"):
            data["mirror_node_url"] = f"https://{network}.mirrornode.hedera.com"
        if not data.get("explorer_url"):
            data["explorer_url"] = f"https://hashscan.io/{network}/transaction"
        return data

    @field_validator("operator_id", "operator_key", mode="before")
    @classmethod
    def strip_credentials(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("operator_id")
    @classmethod
    def check_operator_id(cls, value: str) -> str:
        if value and not is_valid_account_format(value):
            raise ValueError(f"not a shard.realm.num account id: {value!r}")
        return value

    @field_validator("mirror_node_url", "explorer_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            value = [origin.strip() for origin in value.split(",") if origin.strip()]
        return tuple(value) or ("*",)

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def require_credentials(self):
        if not self.operator_id or not self.operator_key:
            raise ValueError("OPERATOR_ID and OPERATOR_KEY must be set in .env")
        return self


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        name = ".".join(str(part) for part in error["loc"]).upper()
        message = error["msg"].removeprefix("Value error, ")
        problems.append(f"{name}: {message}" if name else message)
    return "; ".join(problems)


def load_settings() -> Settings:
    """
    Build Settings from the process environment, after loading a .env
    file from the working directory (existing variables win).

    Raises:
        ConfigurationError: operator credentials missing or malformed, or
            a numeric/network setting is invalid.
    """
    load_dotenv()
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc)) from exc


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
