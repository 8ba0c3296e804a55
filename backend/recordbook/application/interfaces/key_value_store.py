"""Abstract key-value storage interface (port) used to mirror the record collection."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Port for flat key-value persistence — implemented in the infrastructure layer."""

    @abstractmethod
    def read(self, key: str) -> bytes | None:
        """Return the stored value for ``key``, or None when nothing was written yet."""
        ...

    @abstractmethod
    def write(self, key: str, value: bytes) -> None:
        """Overwrite the value for ``key``.

        Raises PersistenceError when the value cannot be stored.
        """
        ...
