"""Result records returned by detailed detection."""

from typing import Dict, List, Tuple

from pydantic import BaseModel, Field

from langsift.models.language import Language


class LanguageDetectionResult(BaseModel):
    """Result of language detection on one text."""

    language: Language
    confidence: float = Field(..., ge=0.0, le=1.0)
    alternative_languages: List[Tuple[Language, float]] = Field(default_factory=list)
    candidate_languages: List[Language] = Field(default_factory=list)
    ngram_count: int = 0

    @property
    def is_unknown(self) -> bool:
        return self.language is Language.UNKNOWN

    def summary(self) -> str:
        if self.is_unknown:
            return "unknown"
        return f"{self.language.name} ({self.confidence:.2%})"

    def confidence_values(self) -> Dict[Language, float]:
        """Confidence of every loaded language, highest first."""
        if self.is_unknown:
            return dict(self.alternative_languages)
        return dict([(self.language, self.confidence)] + self.alternative_languages)
