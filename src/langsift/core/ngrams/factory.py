"""Factory for creating model repositories."""

import logging
import threading
from pathlib import Path
from typing import Dict, Mapping, Optional

from langsift.core.interfaces import ConfigurationError
from langsift.core.ngrams.repository import CachingModelRepository
from langsift.core.ngrams.sources import DirectoryModelSource, InMemoryModelSource
from langsift.models.config import LangSiftConfig
from langsift.models.language import Language, NgramOrder

logger = logging.getLogger(__name__)

_default_repositories: Dict[Path, CachingModelRepository] = {}
_default_lock = threading.Lock()


class ModelRepositoryFactory:
    """Factory for creating model repositories over the available sources."""

    @staticmethod
    def create_repository(
        source_type: str = "auto",
        config: Optional[LangSiftConfig] = None,
        tables: Optional[Mapping[Language, Mapping[NgramOrder, Mapping[str, float]]]] = None,
    ) -> CachingModelRepository:
        """Create a repository with its own cache.

        Args:
            source_type: Type of source ('auto', 'directory', 'memory')
            config: Configuration supplying the models directory
            tables: Frequency tables for the 'memory' source

        Returns:
            Repository over the requested source

        Raises:
            ConfigurationError: If the source type is unknown or lacks its input
        """
        config = config or LangSiftConfig()

        if source_type == "auto":
            source_type = config.models.source_type
            if source_type == "auto":
                source_type = "memory" if tables is not None else "directory"

        if source_type == "directory":
            models_dir = config.models.resolve_models_dir()
            logger.info(f"Creating directory model repository at {models_dir}")
            return CachingModelRepository(DirectoryModelSource(models_dir))

        elif source_type == "memory":
            if tables is None:
                raise ConfigurationError("Memory model source requested without frequency tables")
            logger.info(f"Creating in-memory model repository for {len(tables)} languages")
            return CachingModelRepository(InMemoryModelSource(tables))

        else:
            raise ConfigurationError(f"Unknown model source type: {source_type}")

    @staticmethod
    def get_default_repository(config: Optional[LangSiftConfig] = None) -> CachingModelRepository:
        """Return the process-wide repository for the configured models directory.

        Detectors built from the same directory share one cache, so each
        model file is read at most once per process.
        """
        config = config or LangSiftConfig()
        models_dir = config.models.resolve_models_dir()

        with _default_lock:
            repository = _default_repositories.get(models_dir)
            if repository is None:
                repository = CachingModelRepository(DirectoryModelSource(models_dir))
                repository.initialize()
                _default_repositories[models_dir] = repository
        return repository

    @staticmethod
    def clear_default_repositories() -> None:
        """Drop every shared repository and its cached models."""
        with _default_lock:
            for repository in _default_repositories.values():
                repository.cleanup()
            _default_repositories.clear()
