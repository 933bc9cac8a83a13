"""Core components and interfaces for LangSift."""

from langsift.core.interfaces import (
    BaseComponent,
    ConfigurationError,
    LangSiftError,
    LanguageDetectionError,
    ModelLoadError,
    ModelRepository,
    ModelSource,
)

from langsift.core.ngrams import (
    CachingModelRepository,
    DirectoryModelSource,
    InMemoryModelSource,
    LanguageModel,
    ModelRepositoryFactory,
)

from langsift.core.text import (
    AlphabetFilter,
    TextPreprocessor,
)

from langsift.core.detection import (
    LanguageDetector,
    LanguageDetectorBuilder,
    Scorer,
)

__all__ = [
    "BaseComponent",
    "ConfigurationError",
    "LangSiftError",
    "LanguageDetectionError",
    "ModelLoadError",
    "ModelRepository",
    "ModelSource",
    "CachingModelRepository",
    "DirectoryModelSource",
    "InMemoryModelSource",
    "LanguageModel",
    "ModelRepositoryFactory",
    "AlphabetFilter",
    "TextPreprocessor",
    "LanguageDetector",
    "LanguageDetectorBuilder",
    "Scorer",
]
