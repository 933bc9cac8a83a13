"""Text preprocessing and alphabet-based candidate filtering."""

from langsift.core.text.preprocessor import TextPreprocessor
from langsift.core.text.alphabet_filter import AlphabetFilter

__all__ = [
    "TextPreprocessor",
    "AlphabetFilter",
]
