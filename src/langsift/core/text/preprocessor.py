"""Text normalization and n-gram extraction."""

import re
from typing import Dict, Iterable, Iterator, List, Optional

from langsift.models.config import PreprocessingConfig
from langsift.models.language import NgramOrder

_URL_PATTERN = re.compile(r"https?://\S+|www\.\S+")
_EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
_WHITESPACE_PATTERN = re.compile(r"\s+")


class TextPreprocessor:
    """Turns raw text into lowercase words and their n-grams."""

    def __init__(self, config: Optional[PreprocessingConfig] = None):
        self.config = config or PreprocessingConfig()

    def normalize(self, text: str) -> str:
        """Lowercase text and replace everything but letters with single spaces."""
        if not text:
            return ""

        processed = text

        if self.config.remove_urls:
            processed = _URL_PATTERN.sub(" ", processed)

        if self.config.remove_emails:
            processed = _EMAIL_PATTERN.sub(" ", processed)

        # str.lower keeps ß, which casefold would turn into ss
        processed = processed.lower()
        processed = "".join(char if char.isalpha() else " " for char in processed)
        processed = _WHITESPACE_PATTERN.sub(" ", processed).strip()

        max_length = self.config.max_text_length
        if max_length and len(processed) > max_length:
            processed = processed[:max_length].rstrip()

        return processed

    def words(self, text: str) -> List[str]:
        normalized = self.normalize(text)
        return normalized.split(" ") if normalized else []

    @staticmethod
    def ngrams(words: Iterable[str], order: NgramOrder) -> Iterator[str]:
        """Yield the overlapping n-grams of each word; none span two words."""
        length = int(order)
        for word in words:
            for start in range(len(word) - length + 1):
                yield word[start:start + length]

    def extract(self, text: str, orders: Iterable[NgramOrder]) -> Dict[NgramOrder, Iterator[str]]:
        """Lazy n-gram sequences of every requested order."""
        words = self.words(text)
        return {NgramOrder(order): self.ngrams(words, order) for order in orders}
