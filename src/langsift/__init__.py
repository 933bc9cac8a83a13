"""LangSift - statistical n-gram language identification.

Detects the most probable language of a short text out of a configurable
set of candidate languages.
"""

__version__ = "0.1.0"

from langsift.models.language import Alphabet, Language, NgramOrder
from langsift.models.result import LanguageDetectionResult
from langsift.core.interfaces import ConfigurationError, LangSiftError, ModelLoadError
from langsift.models.config import LangSiftConfig
from langsift.core.ngrams import (
    CachingModelRepository,
    DirectoryModelSource,
    InMemoryModelSource,
    LanguageModel,
    ModelRepositoryFactory,
)
from langsift.core.detection import LanguageDetector, LanguageDetectorBuilder

__all__ = [
    "Alphabet",
    "Language",
    "NgramOrder",
    "LanguageDetectionResult",
    "ConfigurationError",
    "LangSiftError",
    "ModelLoadError",
    "LangSiftConfig",
    "CachingModelRepository",
    "DirectoryModelSource",
    "InMemoryModelSource",
    "LanguageModel",
    "ModelRepositoryFactory",
    "LanguageDetector",
    "LanguageDetectorBuilder",
]
