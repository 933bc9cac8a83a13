"""Language models, their sources and the caching repository."""

from langsift.core.ngrams.language_model import LanguageModel
from langsift.core.ngrams.sources import DirectoryModelSource, InMemoryModelSource
from langsift.core.ngrams.repository import CachingModelRepository
from langsift.core.ngrams.factory import ModelRepositoryFactory

__all__ = [
    "LanguageModel",
    "DirectoryModelSource",
    "InMemoryModelSource",
    "CachingModelRepository",
    "ModelRepositoryFactory",
]
