"""Scoring, the detector and its builder."""

from langsift.core.detection.scorer import Scorer
from langsift.core.detection.detector import LanguageDetector
from langsift.core.detection.builder import LanguageDetectorBuilder

__all__ = [
    "Scorer",
    "LanguageDetector",
    "LanguageDetectorBuilder",
]
