"""Thread-safe, load-once cache of language models."""

import logging
import threading
from typing import Dict, Iterable, Optional, Set, Tuple

from langsift.core.interfaces import BaseComponent, ModelLoadError, ModelSource
from langsift.core.ngrams.language_model import LanguageModel
from langsift.models.language import Language, NgramOrder

logger = logging.getLogger(__name__)

ModelKey = Tuple[Language, NgramOrder]


class CachingModelRepository(BaseComponent):
    """Loads models from a source at most once per (language, order) key.

    Each key has its own lock, so loads of different keys proceed in
    parallel while concurrent loads of the same key wait for the first one.
    A failed load leaves nothing cached and is not retried automatically.
    """

    def __init__(self, source: ModelSource, config: Optional[dict] = None):
        super().__init__(config)
        self.source = source
        self._models: Dict[ModelKey, LanguageModel] = {}
        self._key_locks: Dict[ModelKey, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def initialize(self) -> None:
        """Warn early when a directory source has nothing to serve."""
        is_available = getattr(self.source, "is_available", None)
        if is_available is not None and not is_available():
            logger.warning(f"Model source {self.source!r} is not available")

    def cleanup(self) -> None:
        """Drop every cached model.

        Per-key locks are kept so a load still in progress stays serialized
        with loads that start after the cache was cleared.
        """
        with self._locks_guard:
            self._models.clear()
        logger.info("Language model cache cleared")

    def load(
        self,
        languages: Iterable[Language],
        orders: Iterable[NgramOrder],
    ) -> Dict[Language, Dict[NgramOrder, LanguageModel]]:
        """Load the models of every requested language and order."""
        languages = sorted(set(languages), key=lambda language: language.sort_key)
        orders = sorted({NgramOrder(order) for order in orders})

        model_set: Dict[Language, Dict[NgramOrder, LanguageModel]] = {}
        for language in languages:
            model_set[language] = {order: self.get(language, order) for order in orders}

        logger.info(
            f"Loaded {len(languages) * len(orders)} models for "
            f"{', '.join(language.name for language in languages)}"
        )
        return model_set

    def get(self, language: Language, order: NgramOrder) -> LanguageModel:
        """Return one model, loading it on first use."""
        key = (language, NgramOrder(order))

        model = self._models.get(key)
        if model is not None:
            return model

        with self._lock_for(key):
            model = self._models.get(key)
            if model is not None:
                return model

            logger.debug(f"Loading {key[1].file_stem} model for {language.name}")
            try:
                model = self.source.load(language, key[1])
            except ModelLoadError as e:
                logger.error(f"Failed to load {key[1].file_stem} model for {language.name}: {e}")
                raise
            except Exception as e:
                logger.error(f"Failed to load {key[1].file_stem} model for {language.name}: {e}")
                raise ModelLoadError(
                    f"Failed to load {key[1].file_stem} model for {language.name}: {e}"
                ) from e

            if model.language is not language or model.order is not key[1]:
                raise ModelLoadError(
                    f"Source returned {model!r} when asked for {language.name} {key[1].name}"
                )

            self._models[key] = model
            return model

    def loaded_keys(self) -> Set[ModelKey]:
        """Keys of the models currently resident in memory."""
        with self._locks_guard:
            return set(self._models)

    def _lock_for(self, key: ModelKey) -> threading.Lock:
        with self._locks_guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock
