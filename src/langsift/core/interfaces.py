"""Core interfaces and protocols for LangSift components."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Protocol

from langsift.models.language import Language, NgramOrder

if TYPE_CHECKING:
    from langsift.core.ngrams.language_model import LanguageModel


class ModelSource(Protocol):
    """Protocol for the data source that serves frequency tables."""

    def load(self, language: Language, order: NgramOrder) -> "LanguageModel":
        """Load the frequency table of one language at one n-gram order.

        Args:
            language: Language whose table is requested
            order: N-gram order of the table

        Returns:
            The immutable language model

        Raises:
            ModelLoadError: If the table is missing or malformed
        """
        ...


class ModelRepository(Protocol):
    """Protocol for loading and caching language models."""

    def load(
        self,
        languages: Iterable[Language],
        orders: Iterable[NgramOrder],
    ) -> Dict[Language, Dict[NgramOrder, "LanguageModel"]]:
        """Load every (language, order) model, at most once per key.

        Args:
            languages: Languages to load
            orders: N-gram orders to load for each language

        Returns:
            Mapping of language to its models keyed by order

        Raises:
            ModelLoadError: If any required model cannot be loaded
        """
        ...


# Abstract base classes for common functionality

class BaseComponent(ABC):
    """Base class for LangSift components."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize component with configuration."""
        self.config = config or {}

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the component (check data sources, warm caches, etc.)."""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release held resources."""
        pass

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()


# Exception classes

class LangSiftError(Exception):
    """Base exception for LangSift."""
    pass


class ConfigurationError(LangSiftError, ValueError):
    """Exception raised when a detector or configuration is invalid."""
    pass


class ModelLoadError(LangSiftError):
    """Exception raised when a language model cannot be loaded."""
    pass


class LanguageDetectionError(LangSiftError):
    """Exception raised when language detection fails internally."""
    pass
