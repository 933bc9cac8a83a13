"""Narrows candidate languages by the characters a text is written with."""

import logging
from collections import Counter
from typing import AbstractSet, FrozenSet, Iterable, Mapping, Optional, Sequence, Set

from langsift.models.language import CHARS_TO_LANGUAGES, Alphabet, Language

logger = logging.getLogger(__name__)


class AlphabetFilter:
    """Drops candidates that cannot have produced the characters of a text.

    The filter only ever narrows. When the evidence rules out every
    candidate it falls back to the previous, wider set, so a non-empty
    input set never yields an empty result.
    """

    def __init__(self, chars_to_languages: Optional[Mapping[str, FrozenSet[Language]]] = None):
        self.chars_to_languages = chars_to_languages if chars_to_languages is not None else CHARS_TO_LANGUAGES

    def filter(self, words: Iterable[str], candidates: AbstractSet[Language]) -> FrozenSet[Language]:
        """Return the candidates compatible with the given normalized words."""
        candidates = frozenset(candidates)
        if len(candidates) < 2:
            return candidates

        words = list(words)
        by_script = self._filter_by_script(words, candidates)
        by_chars = self._filter_by_characteristic_chars(words, by_script)

        if by_chars != candidates:
            logger.debug(
                f"Alphabet filter narrowed {len(candidates)} candidates to "
                f"{sorted(language.name for language in by_chars)}"
            )
        return by_chars

    @staticmethod
    def _filter_by_script(words: Iterable[str], candidates: FrozenSet[Language]) -> FrozenSet[Language]:
        scripts: Set[Alphabet] = set()
        for word in words:
            for char in word:
                alphabet = Alphabet.of_char(char)
                if alphabet is not None:
                    scripts.add(alphabet)

        if not scripts:
            return candidates

        compatible = frozenset(language for language in candidates if scripts <= language.alphabets)
        return compatible or candidates

    def _filter_by_characteristic_chars(
        self,
        words: Sequence[str],
        candidates: FrozenSet[Language],
    ) -> FrozenSet[Language]:
        """Keep the languages claimed by at least half of all words.

        Each word votes once for every language that uses one of its
        characteristic characters. A single loanword such as "naïve" in an
        otherwise English sentence does not reach the quorum.
        """
        if not words:
            return candidates

        votes: Counter = Counter()
        for word in words:
            claimed: Set[Language] = set()
            for char in word:
                claimed |= self.chars_to_languages.get(char, frozenset())
            votes.update(claimed & candidates)

        quorum = len(words) / 2
        elected = frozenset(language for language, count in votes.items() if count >= quorum)
        return elected or candidates
