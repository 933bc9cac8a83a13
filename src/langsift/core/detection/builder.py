"""Builder enforcing the invariants of a language detector."""

import logging
from typing import FrozenSet, Iterable, Optional

from langsift.core.detection.detector import MINIMUM_LANGUAGES_MESSAGE, LanguageDetector
from langsift.core.interfaces import ConfigurationError, ModelRepository
from langsift.core.ngrams.factory import ModelRepositoryFactory
from langsift.models.config import LangSiftConfig
from langsift.models.language import Language

logger = logging.getLogger(__name__)


class LanguageDetectorBuilder:
    """Resolves a language set and assembles a :class:`LanguageDetector`.

    Every ``from_*`` factory funnels into the constructor, which rejects
    sets of fewer than two distinct languages right away.
    """

    def __init__(self, languages: Iterable[Language]):
        resolved = frozenset(languages)
        for language in resolved:
            if not isinstance(language, Language) or language is Language.UNKNOWN:
                raise ConfigurationError(f"Not a detectable language: {language!r}")
        if len(resolved) < 2:
            raise ConfigurationError(MINIMUM_LANGUAGES_MESSAGE)

        self._languages = resolved
        self._repository: Optional[ModelRepository] = None
        self._config: Optional[LangSiftConfig] = None
        self._minimum_relative_distance: Optional[float] = None
        self._low_accuracy_mode: Optional[bool] = None

    @classmethod
    def from_all_built_in_languages(cls) -> "LanguageDetectorBuilder":
        return cls(Language.all())

    @classmethod
    def from_all_built_in_spoken_languages(cls) -> "LanguageDetectorBuilder":
        return cls(Language.all_spoken())

    @classmethod
    def from_languages(cls, *languages: Language) -> "LanguageDetectorBuilder":
        return cls(languages)

    @classmethod
    def from_all_built_in_languages_without(cls, *languages: Language) -> "LanguageDetectorBuilder":
        return cls(Language.all() - frozenset(languages))

    @classmethod
    def from_iso_codes_639_1(cls, *codes: str) -> "LanguageDetectorBuilder":
        try:
            languages = [Language.from_iso_code_639_1(code) for code in codes]
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        return cls(languages)

    @property
    def languages(self) -> FrozenSet[Language]:
        return self._languages

    def with_repository(self, repository: ModelRepository) -> "LanguageDetectorBuilder":
        self._repository = repository
        return self

    def with_config(self, config: LangSiftConfig) -> "LanguageDetectorBuilder":
        self._config = config
        return self

    def with_minimum_relative_distance(self, distance: float) -> "LanguageDetectorBuilder":
        """Require the winner to lead the runner-up by this confidence gap."""
        if not 0.0 <= distance <= 0.99:
            raise ConfigurationError("Minimum relative distance must lie between 0.0 and 0.99")
        self._minimum_relative_distance = distance
        return self

    def with_low_accuracy_mode(self) -> "LanguageDetectorBuilder":
        """Score trigrams only: faster and smaller, less accurate on short text."""
        self._low_accuracy_mode = True
        return self

    def _apply(
        self,
        repository: Optional[ModelRepository] = None,
        config: Optional[LangSiftConfig] = None,
        minimum_relative_distance: Optional[float] = None,
        low_accuracy_mode: bool = False,
    ) -> "LanguageDetectorBuilder":
        if repository is not None:
            self.with_repository(repository)
        if config is not None:
            self.with_config(config)
        if minimum_relative_distance is not None:
            self.with_minimum_relative_distance(minimum_relative_distance)
        if low_accuracy_mode:
            self.with_low_accuracy_mode()
        return self

    def build(self) -> LanguageDetector:
        """Load the models of the resolved languages and create the detector.

        Raises:
            ModelLoadError: If any model is missing or malformed
        """
        config = self._resolved_config()
        orders = config.detection.active_orders()
        repository = self._repository or ModelRepositoryFactory.get_default_repository(config)

        logger.info(
            f"Building detector for {len(self._languages)} languages "
            f"with orders {[int(order) for order in orders]}"
        )
        models = repository.load(self._languages, orders)
        return LanguageDetector(self._languages, models, config)

    def _resolved_config(self) -> LangSiftConfig:
        config = self._config or LangSiftConfig()

        updates = {}
        if self._minimum_relative_distance is not None:
            updates["minimum_relative_distance"] = self._minimum_relative_distance
        if self._low_accuracy_mode is not None:
            updates["low_accuracy_mode"] = self._low_accuracy_mode

        if not updates:
            return config
        detection = config.detection.model_copy(update=updates)
        return config.model_copy(update={"detection": detection})
