"""Log-space n-gram scoring of candidate languages."""

import math
from typing import AbstractSet, Dict, List, Mapping, Sequence, Tuple

from langsift.core.ngrams.language_model import LanguageModel
from langsift.models.language import Language, NgramOrder

DEFAULT_SMOOTHING_CONSTANT = 1e-6


class Scorer:
    """Scores languages by the weighted log probability of a text's n-grams.

    For every order the log frequencies of all n-grams are summed; an
    n-gram missing from a model contributes ``log(smoothing_constant)``
    instead of eliminating the language. Each order sum is divided by its
    n-gram count and the resulting means are averaged with the order weights.
    """

    def __init__(
        self,
        models: Mapping[Language, Mapping[NgramOrder, LanguageModel]],
        weights: Mapping[NgramOrder, float],
        smoothing_constant: float = DEFAULT_SMOOTHING_CONSTANT,
    ):
        if not 0.0 < smoothing_constant < 1.0:
            raise ValueError(f"Smoothing constant must lie in (0, 1), got {smoothing_constant}")
        self.models = models
        self.weights = weights
        self.smoothing_constant = smoothing_constant
        self._unseen_log_probability = math.log(smoothing_constant)

    def score_order(self, language: Language, order: NgramOrder, ngrams: Sequence[str]) -> float:
        """Sum of log probabilities of the n-grams of one order."""
        model = self.models[language][order]
        total = 0.0
        for ngram in ngrams:
            frequency = model.get_relative_frequency(ngram)
            total += math.log(frequency) if frequency is not None else self._unseen_log_probability
        return total

    def score(
        self,
        ngrams: Mapping[NgramOrder, Sequence[str]],
        candidates: AbstractSet[Language],
    ) -> Dict[Language, float]:
        """Weighted mean log probability per n-gram of every candidate."""
        present = {order: order_ngrams for order, order_ngrams in ngrams.items() if order_ngrams}
        total_weight = sum(self.weights[order] for order in present)
        if not total_weight:
            return {language: 0.0 for language in candidates}

        scores = {}
        for language in candidates:
            weighted = sum(
                self.weights[order] * self.score_order(language, order, order_ngrams) / len(order_ngrams)
                for order, order_ngrams in present.items()
            )
            scores[language] = weighted / total_weight
        return scores

    def count_known_ngrams(
        self,
        ngrams: Mapping[NgramOrder, Sequence[str]],
        candidates: AbstractSet[Language],
    ) -> int:
        """Number of n-grams found in at least one candidate's model."""
        count = 0
        for order, order_ngrams in ngrams.items():
            order_models = [self.models[language][order] for language in candidates]
            count += sum(1 for ngram in order_ngrams if any(ngram in model for model in order_models))
        return count

    @staticmethod
    def rank(scores: Mapping[Language, float]) -> List[Tuple[Language, float]]:
        """Sort descending by value; equal values keep the fixed language order."""
        return sorted(scores.items(), key=lambda item: (-item[1], item[0].sort_key))

    @staticmethod
    def to_confidences(scores: Mapping[Language, float]) -> Dict[Language, float]:
        """Softmax over log-space scores, shifted by the maximum to avoid overflow."""
        if not scores:
            return {}
        best = max(scores.values())
        exponentials = {language: math.exp(score - best) for language, score in scores.items()}
        total = sum(exponentials.values())
        return {language: value / total for language, value in exponentials.items()}
