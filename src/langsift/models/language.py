"""Closed sets of languages, alphabets and n-gram orders known to LangSift."""

import unicodedata
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, List, Optional


class Alphabet(Enum):
    """Writing systems a language can be written in."""

    ARABIC = "ARABIC"
    CYRILLIC = "CYRILLIC"
    DEVANAGARI = "DEVANAGARI"
    GREEK = "GREEK"
    HEBREW = "HEBREW"
    LATIN = "LATIN"

    def matches_char(self, char: str) -> bool:
        """Check whether a single character belongs to this alphabet."""
        return unicodedata.name(char, "").startswith(self.value)

    @classmethod
    def of_char(cls, char: str) -> Optional["Alphabet"]:
        """Return the alphabet of a character, or None for unknown scripts."""
        name = unicodedata.name(char, "")
        for alphabet in cls:
            if name.startswith(alphabet.value):
                return alphabet
        return None


class Language(str, Enum):
    """Languages with built-in models, valued by ISO 639-1 code.

    Definition order is alphabetical and doubles as the tie-break order
    when two languages score the same.
    """

    ENGLISH = "en"
    FRENCH = "fr"
    GERMAN = "de"
    ITALIAN = "it"
    LATIN = "la"
    PORTUGUESE = "pt"
    SPANISH = "es"
    UNKNOWN = "unknown"

    @property
    def iso_code_639_1(self) -> str:
        return self.value

    @property
    def is_spoken(self) -> bool:
        return self not in _NON_SPOKEN_LANGUAGES and self is not Language.UNKNOWN

    @property
    def alphabets(self) -> FrozenSet[Alphabet]:
        return LANGUAGE_ALPHABETS.get(self, frozenset())

    @property
    def sort_key(self) -> int:
        return _LANGUAGE_ORDER[self]

    @classmethod
    def all(cls) -> FrozenSet["Language"]:
        """Every built-in language."""
        return frozenset(language for language in cls if language is not cls.UNKNOWN)

    @classmethod
    def all_spoken(cls) -> FrozenSet["Language"]:
        """Every built-in language that is still spoken today."""
        return frozenset(language for language in cls.all() if language.is_spoken)

    @classmethod
    def from_iso_code_639_1(cls, code: str) -> "Language":
        """Resolve an ISO 639-1 code such as 'de' to its language.

        Raises:
            ValueError: If no built-in language has this code
        """
        normalized = code.strip().lower()
        for language in cls.all():
            if language.value == normalized:
                return language
        raise ValueError(f"Unknown ISO 639-1 code: {code!r}")


class NgramOrder(IntEnum):
    """Length of the character sequences a language model covers."""

    UNIGRAM = 1
    BIGRAM = 2
    TRIGRAM = 3
    QUADRIGRAM = 4
    FIVEGRAM = 5

    @property
    def file_stem(self) -> str:
        """Name used for model files, e.g. 'trigrams'."""
        return f"{self.name.lower()}s"

    @classmethod
    def all(cls) -> List["NgramOrder"]:
        return sorted(cls)


_NON_SPOKEN_LANGUAGES = frozenset({Language.LATIN})

_LANGUAGE_ORDER: Dict[Language, int] = {language: i for i, language in enumerate(Language)}

LANGUAGE_ALPHABETS: Dict[Language, FrozenSet[Alphabet]] = {
    Language.ENGLISH: frozenset({Alphabet.LATIN}),
    Language.FRENCH: frozenset({Alphabet.LATIN}),
    Language.GERMAN: frozenset({Alphabet.LATIN}),
    Language.ITALIAN: frozenset({Alphabet.LATIN}),
    Language.LATIN: frozenset({Alphabet.LATIN}),
    Language.PORTUGUESE: frozenset({Alphabet.LATIN}),
    Language.SPANISH: frozenset({Alphabet.LATIN}),
}

# Letters that only a few of the built-in languages use
_CHARACTERISTIC_CHARS: Dict[str, FrozenSet[Language]] = {
    "ß": frozenset({Language.GERMAN}),
    "äö": frozenset({Language.GERMAN}),
    "ü": frozenset({Language.GERMAN, Language.SPANISH}),
    "ñ": frozenset({Language.SPANISH}),
    "ãõ": frozenset({Language.PORTUGUESE}),
    "çâêô": frozenset({Language.FRENCH, Language.PORTUGUESE}),
    "îûëïÿ": frozenset({Language.FRENCH}),
    "æœ": frozenset({Language.FRENCH, Language.LATIN}),
    "à": frozenset({Language.FRENCH, Language.ITALIAN, Language.PORTUGUESE}),
    "èù": frozenset({Language.FRENCH, Language.ITALIAN}),
    "ìò": frozenset({Language.ITALIAN}),
    "é": frozenset({Language.FRENCH, Language.ITALIAN, Language.PORTUGUESE, Language.SPANISH}),
    "á": frozenset({Language.PORTUGUESE, Language.SPANISH}),
    "íóú": frozenset({Language.ITALIAN, Language.PORTUGUESE, Language.SPANISH}),
    "āēīōūȳ": frozenset({Language.LATIN}),
}

CHARS_TO_LANGUAGES: Dict[str, FrozenSet[Language]] = {
    char: languages
    for chars, languages in _CHARACTERISTIC_CHARS.items()
    for char in chars
}
