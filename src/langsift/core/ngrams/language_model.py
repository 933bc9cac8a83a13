"""Immutable n-gram frequency table of one language at one order."""

import json
import logging
from fractions import Fraction
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from langsift.core.interfaces import ModelLoadError
from langsift.models.language import Language, NgramOrder

logger = logging.getLogger(__name__)


class LanguageModel:
    """Relative frequencies of the n-grams of one order in one language.

    Instances are immutable once constructed. Every n-gram has exactly
    ``order`` characters and every frequency lies in (0, 1].
    """

    __slots__ = ("_language", "_order", "_frequencies")

    def __init__(self, language: Language, order: NgramOrder, frequencies: Mapping[str, float]):
        order = NgramOrder(order)
        checked = {}
        for ngram, frequency in frequencies.items():
            if len(ngram) != order:
                raise ModelLoadError(
                    f"{language.name} {order.file_stem} model contains n-gram {ngram!r} "
                    f"of length {len(ngram)}"
                )
            frequency = float(frequency)
            if not 0.0 < frequency <= 1.0:
                raise ModelLoadError(
                    f"{language.name} {order.file_stem} model has frequency {frequency} "
                    f"for {ngram!r} outside (0, 1]"
                )
            checked[ngram] = frequency

        self._language = language
        self._order = order
        self._frequencies = MappingProxyType(checked)

    @property
    def language(self) -> Language:
        return self._language

    @property
    def order(self) -> NgramOrder:
        return self._order

    @property
    def frequencies(self) -> Mapping[str, float]:
        """Read-only view of the frequency table."""
        return self._frequencies

    def get_relative_frequency(self, ngram: str) -> Optional[float]:
        """Return the stored frequency of an n-gram, or None if unseen."""
        return self._frequencies.get(ngram)

    def __contains__(self, ngram: object) -> bool:
        return ngram in self._frequencies

    def __len__(self) -> int:
        return len(self._frequencies)

    def __iter__(self) -> Iterator[str]:
        return iter(self._frequencies)

    def __repr__(self) -> str:
        return f"LanguageModel({self._language.name}, {self._order.name}, {len(self)} n-grams)"

    @classmethod
    def from_json(cls, content: str, language: Language, order: NgramOrder) -> "LanguageModel":
        """Parse a serialized frequency table.

        The expected layout groups n-grams sharing one frequency::

            {"language": "ENGLISH", "ngrams": {"3/100": "th he", "1/100": "an"}}

        Args:
            content: JSON document
            language: Language the table must describe
            order: Order the n-grams must have

        Returns:
            Parsed language model

        Raises:
            ModelLoadError: If the document is malformed or describes another language
        """
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise ModelLoadError(f"Invalid JSON in {language.name} {order.file_stem} model: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get("ngrams"), dict):
            raise ModelLoadError(f"{language.name} {order.file_stem} model has no 'ngrams' table")

        declared = document.get("language")
        if declared != language.name:
            raise ModelLoadError(
                f"Model declares language {declared!r}, expected {language.name!r}"
            )

        frequencies = {}
        for fraction, ngrams in document["ngrams"].items():
            try:
                frequency = float(Fraction(fraction))
            except (ValueError, ZeroDivisionError) as e:
                raise ModelLoadError(
                    f"Invalid frequency {fraction!r} in {language.name} {order.file_stem} model"
                ) from e
            if not isinstance(ngrams, str):
                raise ModelLoadError(
                    f"N-grams for frequency {fraction!r} must be a space-separated string"
                )
            for ngram in ngrams.split(" "):
                if ngram:
                    frequencies[ngram] = frequency

        model = cls(language, order, frequencies)
        logger.debug(f"Parsed {model!r}")
        return model
