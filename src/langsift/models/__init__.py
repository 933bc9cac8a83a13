"""Data models for LangSift."""

from langsift.models.language import Alphabet, Language, NgramOrder
from langsift.models.result import LanguageDetectionResult

__all__ = [
    "Alphabet",
    "Language",
    "NgramOrder",
    "LanguageDetectionResult",
]
