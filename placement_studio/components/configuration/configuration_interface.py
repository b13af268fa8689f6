from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class ConfigurationInterface(ABC):
    @abstractmethod
    def get_configuration(
        self, key: str, type_: type[T], default: Any | None = None
    ) -> T:
        """Return the value for `key` cast to `type_`."""
        raise NotImplementedError
