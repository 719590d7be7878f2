from typing import Any

from apisign.const import (
    DEFAULT_CLOCK_SKEW,
    DEFAULT_KEY_SIZE,
    DEFAULT_MAX_AGE,
    DEFAULT_SALT_LENGTH,
    DEFAULT_TOKEN_LENGTH,
    PADDING_OAEP,
    PADDING_PKCS1V15,
)
from apisign.logging import get_logger

from pydantic import BaseModel, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from pathlib import Path

import os
import re
import yaml


load_dotenv()

ENV_VAR_PATTERN = re.compile(r".*?\${(\w+)}.*?")

LOGGER = get_logger(__name__)


def check_for_env_variables(value_in: dict[str, Any], prefix: str) -> dict[str, Any]:
    """Replaces values with the content of the environment variables named
    PREFIX_KEY, then expands any ${VAR} found in string values."""

    value_out = dict()

    for key, value in value_in.items():
        value_out[key] = value

        if isinstance(value, list):
            continue

        if isinstance(value, dict):
            value_out[key] = check_for_env_variables(value, f"{prefix}_{key}")
            continue

        var_env = f"{prefix}_{key}".upper()
        value = os.environ.get(var_env, value)
        LOGGER.debug(f"Configuration: {key:24} {var_env:48} {value}")

        value_out[key] = value

        if isinstance(value, str):
            # find all env variables in line
            match = ENV_VAR_PATTERN.findall(value)

            if match:
                full_value: str = value
                for g in match:
                    full_value = full_value.replace(f"${{{g}}}", os.environ.get(g, g))
                value_out[key] = full_value

    return value_out


class SigningConfiguration(BaseModel):
    # size in bits of newly generated keys
    key_size: int = DEFAULT_KEY_SIZE
    # length of newly generated access tokens
    token_length: int = DEFAULT_TOKEN_LENGTH
    # number of random digits added to each signature
    salt_length: int = DEFAULT_SALT_LENGTH
    # seconds after which a request is rejected, 0 or less disables the check
    max_age: float = DEFAULT_MAX_AGE
    # seconds a request may come from the future
    clock_skew: float = DEFAULT_CLOCK_SKEW
    # padding scheme, shared by senders and receiver
    padding: str = PADDING_PKCS1V15

    encoding: str = "utf8"

    @field_validator("padding")
    @classmethod
    def padding_validator(cls, v: str) -> str:
        valid = (PADDING_PKCS1V15, PADDING_OAEP)

        if v not in valid:
            raise ValueError(f"Invalid padding: expected one of {list(valid)}")

        return v

    @field_validator("key_size")
    @classmethod
    def key_size_validator(cls, v: int) -> int:
        if v < 1024 or v % 8:
            raise ValueError("key_size must be a multiple of 8 and at least 1024")

        return v

    @model_validator(mode="before")
    @classmethod
    def env_var_validate(cls, values: Any) -> Any:
        if isinstance(values, dict):
            return check_for_env_variables(values, "apisign_signing")
        return values

    def staleness(self) -> float | None:
        return self.max_age if self.max_age > 0 else None


class Configuration(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="apisign_",
        env_nested_delimiter="__",
    )

    signing: SigningConfiguration = SigningConfiguration()

    workdir: str = os.path.join(".", "storage")

    @model_validator(mode="before")
    @classmethod
    def env_var_validate(cls, values: Any) -> Any:
        if isinstance(values, dict):
            return check_for_env_variables(values, "apisign")
        return values

    def get_workdir(self) -> Path:
        return Path(self.workdir)

    def private_key_location(self) -> Path:
        return self.get_workdir() / "private_key.pem"

    def public_key_location(self) -> Path:
        return self.get_workdir() / "public_key.pem"

    def public_numbers_location(self) -> Path:
        return self.get_workdir() / "public_key.json"


class ConfigManager:
    def __init__(self, config_path: Path | None = None) -> None:
        self.config: Configuration

        self._set_config(config_path)

    def _set_config(self, config_path: Path | None = None) -> None:
        # config path from env variable
        env_path = os.environ.get("APISIGN_CONFIG_FILE", None)

        if config_path is None and env_path is not None:
            config_path = Path(env_path)
            LOGGER.info(f"configuration file provided through environment variable path={config_path}")

        # default config path
        if config_path is None:
            LOGGER.debug("no configuration file provided")
            self._set_default_config()
            return

        if not os.path.exists(config_path):
            LOGGER.warning(f"configuration file not found at {config_path}")
            self._set_default_config()
            return

        LOGGER.info(f"loading configuration from path={config_path}")

        with open(config_path, "r") as f:
            try:
                yaml_data: dict[str, Any] = yaml.safe_load(f) or dict()
                self.config = Configuration(**yaml_data)

            except yaml.YAMLError as e:
                LOGGER.error(f"could not read config file {config_path}")
                LOGGER.exception(e)
                self._set_default_config()

    def _set_default_config(self) -> None:
        LOGGER.debug("using default configuration.")
        self.config = Configuration()

    def load(self, config_path: Path | None) -> Configuration:
        self._set_config(config_path)
        return self.config

    def get(self) -> Configuration:
        return self.config


config_manager = ConfigManager()
