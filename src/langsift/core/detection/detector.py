"""The public language detector."""

import logging
from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from langsift.core.detection.scorer import Scorer
from langsift.core.interfaces import ConfigurationError, LanguageDetectionError, ModelLoadError, ModelRepository
from langsift.core.ngrams.language_model import LanguageModel
from langsift.core.text.alphabet_filter import AlphabetFilter
from langsift.core.text.preprocessor import TextPreprocessor
from langsift.models.config import LangSiftConfig
from langsift.models.language import Language, NgramOrder
from langsift.models.result import LanguageDetectionResult

logger = logging.getLogger(__name__)

MINIMUM_LANGUAGES_MESSAGE = "LanguageDetector needs at least 2 languages to choose from"


class _Evaluation(NamedTuple):
    confidences: List[Tuple[Language, float]]
    candidates: FrozenSet[Language]
    ngram_count: int
    known_ngram_count: int


class LanguageDetector:
    """Detects the language of a text among a fixed set of languages.

    Instances are built by :class:`LanguageDetectorBuilder` (or the
    ``from_*`` class methods below) and hold their models read-only, so one
    detector can serve concurrent callers without locking.
    """

    def __init__(
        self,
        languages: FrozenSet[Language],
        models: Mapping[Language, Mapping[NgramOrder, LanguageModel]],
        config: LangSiftConfig,
    ):
        """Create a detector over already loaded models.

        Raises:
            ConfigurationError: If fewer than two distinct languages are given
            ModelLoadError: If a language lacks the model of an active order
        """
        languages = frozenset(languages)
        for language in languages:
            if not isinstance(language, Language) or language is Language.UNKNOWN:
                raise ConfigurationError(f"Not a detectable language: {language!r}")
        if len(languages) < 2:
            raise ConfigurationError(MINIMUM_LANGUAGES_MESSAGE)

        detection = config.detection
        orders = detection.active_orders()
        for language in sorted(languages, key=lambda language: language.sort_key):
            loaded = models.get(language, {})
            missing = [order for order in orders if order not in loaded]
            if missing:
                raise ModelLoadError(
                    f"No {', '.join(order.file_stem for order in missing)} model for {language.name}"
                )

        self._languages = languages
        self._models = {language: dict(models[language]) for language in languages}
        self._config = config

        self._orders = orders
        self._minimum_relative_distance = detection.minimum_relative_distance
        self._use_alphabet_filter = detection.alphabet_filter

        self._preprocessor = TextPreprocessor(config.preprocessing)
        self._alphabet_filter = AlphabetFilter()
        self._scorer = Scorer(self._models, detection.weights(), detection.smoothing_constant)

    # Construction shortcuts

    @classmethod
    def from_all_built_in_languages(cls, **options) -> "LanguageDetector":
        from langsift.core.detection.builder import LanguageDetectorBuilder
        return LanguageDetectorBuilder.from_all_built_in_languages()._apply(**options).build()

    @classmethod
    def from_all_built_in_spoken_languages(cls, **options) -> "LanguageDetector":
        from langsift.core.detection.builder import LanguageDetectorBuilder
        return LanguageDetectorBuilder.from_all_built_in_spoken_languages()._apply(**options).build()

    @classmethod
    def from_languages(cls, *languages: Language, **options) -> "LanguageDetector":
        from langsift.core.detection.builder import LanguageDetectorBuilder
        return LanguageDetectorBuilder.from_languages(*languages)._apply(**options).build()

    @classmethod
    def from_all_built_in_languages_without(cls, *languages: Language, **options) -> "LanguageDetector":
        from langsift.core.detection.builder import LanguageDetectorBuilder
        return LanguageDetectorBuilder.from_all_built_in_languages_without(*languages)._apply(**options).build()

    @classmethod
    def from_iso_codes_639_1(cls, *codes: str, **options) -> "LanguageDetector":
        from langsift.core.detection.builder import LanguageDetectorBuilder
        return LanguageDetectorBuilder.from_iso_codes_639_1(*codes)._apply(**options).build()

    # Accessors

    @property
    def languages(self) -> FrozenSet[Language]:
        return self._languages

    @property
    def number_of_loaded_languages(self) -> int:
        return len(self._languages)

    @property
    def orders(self) -> List[NgramOrder]:
        return list(self._orders)

    @property
    def minimum_relative_distance(self) -> float:
        return self._minimum_relative_distance

    # Detection

    def detect(self, text: str) -> Language:
        """Most likely language of the text, or ``Language.UNKNOWN``."""
        return self._decide(self._evaluate(text))[0]

    def detect_confidence_values(self, text: str) -> Dict[Language, float]:
        """Confidence of every loaded language, highest first, summing to 1."""
        return dict(self._evaluate(text).confidences)

    def compute_language_confidence(self, text: str, language: Language) -> float:
        """Confidence of a single language; 0.0 if it is not loaded."""
        return self.detect_confidence_values(text).get(language, 0.0)

    def detect_with_details(self, text: str) -> LanguageDetectionResult:
        """Detect language and report ranking details."""
        evaluation = self._evaluate(text)
        language, confidence = self._decide(evaluation)

        return LanguageDetectionResult(
            language=language,
            confidence=confidence,
            alternative_languages=[
                (other, value) for other, value in evaluation.confidences if other is not language
            ],
            candidate_languages=sorted(evaluation.candidates, key=lambda candidate: candidate.sort_key),
            ngram_count=evaluation.ngram_count,
        )

    def detect_batch(self, texts: Iterable[str]) -> List[Language]:
        """Detect the language of several texts."""
        return [self.detect(text) for text in texts]

    def _decide(self, evaluation: _Evaluation) -> Tuple[Language, float]:
        if len(evaluation.candidates) == 1:
            return evaluation.confidences[0]

        if evaluation.known_ngram_count == 0:
            return Language.UNKNOWN, 0.0

        (best, best_confidence), (_, runner_up_confidence) = evaluation.confidences[:2]
        if best_confidence - runner_up_confidence < self._minimum_relative_distance:
            return Language.UNKNOWN, 0.0

        return best, best_confidence

    def _evaluate(self, text: str) -> _Evaluation:
        if not isinstance(text, str):
            raise LanguageDetectionError(f"Expected text as str, got {type(text).__name__}")

        words = self._preprocessor.words(text)

        if self._use_alphabet_filter:
            candidates = self._alphabet_filter.filter(words, self._languages)
        else:
            candidates = self._languages

        ngrams = {order: tuple(TextPreprocessor.ngrams(words, order)) for order in self._orders}
        ngram_count = sum(len(order_ngrams) for order_ngrams in ngrams.values())

        if len(candidates) == 1:
            known_ngram_count = 0
            candidate_confidences = {next(iter(candidates)): 1.0}
        else:
            known_ngram_count = self._scorer.count_known_ngrams(ngrams, candidates)
            if known_ngram_count == 0:
                candidate_confidences = {language: 1.0 / len(candidates) for language in candidates}
            else:
                candidate_confidences = Scorer.to_confidences(self._scorer.score(ngrams, candidates))

        confidences = Scorer.rank(
            {language: candidate_confidences.get(language, 0.0) for language in self._languages}
        )

        logger.debug(
            f"Evaluated {ngram_count} n-grams against {len(candidates)} candidates, "
            f"{known_ngram_count} known"
        )
        return _Evaluation(confidences, candidates, ngram_count, known_ngram_count)
