"""Shared fixtures for the LangSift test suite.

Provides small frequency tables built from sample sentences, sources
that count their loads, and helpers writing tables to disk in the JSON
model layout.
"""

import json
import threading
import time
from collections import Counter, defaultdict
from fractions import Fraction
from pathlib import Path
from typing import Dict, Mapping

import pytest

from langsift.core.ngrams.factory import ModelRepositoryFactory
from langsift.core.ngrams.repository import CachingModelRepository
from langsift.core.ngrams.sources import InMemoryModelSource
from langsift.core.text.preprocessor import TextPreprocessor
from langsift.models.language import Language, NgramOrder

SAMPLE_CORPORA = {
    Language.ENGLISH: (
        "The quick brown fox jumps over the lazy dog. The weather is nice today and the "
        "children are playing in the garden. We should think about what we want to do "
        "with the house. There is nothing better than a good book and a cup of tea in "
        "the evening. This is the house that Jack built."
    ),
    Language.FRENCH: (
        "Le renard brun rapide saute par dessus le chien paresseux. Il fait beau "
        "aujourd'hui et les enfants jouent dans le jardin. Nous devrions réfléchir à ce "
        "que nous voulons faire avec la maison. Il n'y a rien de mieux qu'un bon livre "
        "et une tasse de thé le soir. C'est la vie."
    ),
    Language.GERMAN: (
        "Der schnelle braune Fuchs springt über den faulen Hund. Das Wetter ist heute "
        "schön und die Kinder spielen im Garten. Wir sollten darüber nachdenken, was wir "
        "mit dem Haus machen wollen. Es gibt nichts Besseres als ein gutes Buch und eine "
        "Tasse Tee am Abend. Die Straße ist nass."
    ),
    Language.ITALIAN: (
        "La volpe marrone veloce salta sopra il cane pigro. Oggi il tempo è bello e i "
        "bambini giocano nel giardino. Dovremmo pensare a cosa vogliamo fare con la casa. "
        "Non c'è niente di meglio di un buon libro e una tazza di tè la sera. Questa è "
        "la casa della nonna."
    ),
    Language.LATIN: (
        "Gallia est omnis divisa in partes tres, quarum unam incolunt Belgae, aliam "
        "Aquitani, tertiam qui ipsorum lingua Celtae, nostra Galli appellantur. Arma "
        "virumque cano, Troiae qui primus ab oris. Senatus populusque Romanus. Veni, "
        "vidi, vici. Cogito, ergo sum."
    ),
    Language.PORTUGUESE: (
        "A raposa marrom rápida pula sobre o cão preguiçoso. O tempo está bom hoje e as "
        "crianças estão brincando no jardim. Devemos pensar no que queremos fazer com a "
        "casa. Não há nada melhor do que um bom livro e uma xícara de chá à noite."
    ),
    Language.SPANISH: (
        "El rápido zorro marrón salta sobre el perro perezoso. Hoy hace buen tiempo y "
        "los niños están jugando en el jardín. Deberíamos pensar en lo que queremos "
        "hacer con la casa. No hay nada mejor que un buen libro y una taza de té por "
        "la noche."
    ),
}


def frequencies_from_text(text: str, order: NgramOrder) -> Dict[str, Fraction]:
    """Relative frequencies of the n-grams of one order in a text."""
    preprocessor = TextPreprocessor()
    counts = Counter(TextPreprocessor.ngrams(preprocessor.words(text), order))
    total = sum(counts.values())
    return {ngram: Fraction(count, total) for ngram, count in counts.items()}


def build_tables(corpora: Mapping[Language, str] = SAMPLE_CORPORA):
    return {
        language: {order: frequencies_from_text(text, order) for order in NgramOrder}
        for language, text in corpora.items()
    }


def write_model_files(root: Path, tables) -> Path:
    """Write tables as ``<root>/<iso>/<order>s.json`` documents."""
    for language, orders in tables.items():
        language_dir = root / language.iso_code_639_1
        language_dir.mkdir(parents=True, exist_ok=True)
        for order, frequencies in orders.items():
            grouped = defaultdict(list)
            for ngram, frequency in frequencies.items():
                fraction = Fraction(frequency)
                grouped[f"{fraction.numerator}/{fraction.denominator}"].append(ngram)
            document = {
                "language": language.name,
                "ngrams": {fraction: " ".join(ngrams) for fraction, ngrams in grouped.items()},
            }
            path = language_dir / f"{NgramOrder(order).file_stem}.json"
            path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
    return root


class CountingSource:
    """Wraps a source and counts how often each key is loaded."""

    def __init__(self, source, delay: float = 0.0):
        self.source = source
        self.delay = delay
        self.calls = Counter()
        self._lock = threading.Lock()

    def load(self, language, order):
        with self._lock:
            self.calls[(language, NgramOrder(order))] += 1
        if self.delay:
            time.sleep(self.delay)
        return self.source.load(language, order)


@pytest.fixture(scope="session")
def model_tables():
    return build_tables()


@pytest.fixture
def memory_source(model_tables) -> InMemoryModelSource:
    return InMemoryModelSource(model_tables)


@pytest.fixture
def repository(memory_source) -> CachingModelRepository:
    return CachingModelRepository(memory_source)


@pytest.fixture
def models_dir(tmp_path, model_tables) -> Path:
    return write_model_files(tmp_path / "language-models", model_tables)


@pytest.fixture(autouse=True)
def clear_shared_repositories():
    yield
    ModelRepositoryFactory.clear_default_repositories()


@pytest.fixture
def counting_source():
    """Factory wrapping a source in a :class:`CountingSource`."""
    return CountingSource
