"""Abstract base class for the repository configuration store."""

from abc import ABC, abstractmethod
from pathlib import Path

from rulem.core.repository import RulemConfig


class ConfigStore(ABC):
    """Reads and atomically persists the repository configuration."""

    @abstractmethod
    def config_path(self) -> Path:
        """Location of the configuration document."""
        ...

    @abstractmethod
    def load(self) -> RulemConfig:
        """Load the current snapshot.

        A missing document loads as an empty snapshot.

        Raises:
            ValueError: If the document is malformed
            OSError: If the document cannot be read
        """
        ...

    @abstractmethod
    def save(self, config: RulemConfig) -> None:
        """Persist config, replacing the stored document atomically.

        Raises:
            PermissionError: If the directory or file cannot be written
            OSError: For other write failures
        """
        ...
