import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml

from placement_studio.components.configuration.configuration_interface import (
    ConfigurationInterface,
)

T = TypeVar("T")

_TRUE_VALUES = {"true", "1", "yes", "on"}


class Configuration(ConfigurationInterface):
    """
    Layered configuration for one environment.

    Values come from `<config_path>/<env>.yaml`; a process environment variable
    with the same key takes precedence over the file.
    """

    def __init__(self, env: str, config_path: str) -> None:
        self.env = env
        self.config_file = Path(config_path) / f"{env}.yaml"
        self.__values: dict[str, Any] = self.__load()

    def __load(self) -> dict[str, Any]:
        if not self.config_file.exists():
            return {}

        with self.config_file.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration file {self.config_file} must contain a mapping"
            )
        return data

    def get_configuration(
        self, key: str, type_: type[T], default: Any | None = None
    ) -> T:
        raw: Any = os.getenv(key)
        if raw is None:
            raw = self.__values.get(key, default)

        if raw is None:
            raise ValueError(
                f"Configuration key {key} is not set for environment {self.env}"
            )

        if type_ is bool and isinstance(raw, str):
            return cast(T, raw.strip().lower() in _TRUE_VALUES)

        try:
            return cast(T, type_(raw))  # type: ignore[call-arg]
        except (TypeError, ValueError) as error:
            raise ValueError(
                f"Configuration key {key} cannot be read as {type_.__name__}: {raw!r}"
            ) from error
