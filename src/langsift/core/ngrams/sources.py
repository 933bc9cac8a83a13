"""Data sources serving serialized frequency tables."""

import logging
from pathlib import Path
from typing import Mapping, Union

from langsift.core.interfaces import ModelLoadError
from langsift.core.ngrams.language_model import LanguageModel
from langsift.models.language import Language, NgramOrder

logger = logging.getLogger(__name__)


class DirectoryModelSource:
    """Reads models laid out as ``<root>/<iso code>/<order>s.json``."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path_for(self, language: Language, order: NgramOrder) -> Path:
        return self.root / language.iso_code_639_1 / f"{NgramOrder(order).file_stem}.json"

    def load(self, language: Language, order: NgramOrder) -> LanguageModel:
        """Load one frequency table from disk."""
        order = NgramOrder(order)
        path = self.path_for(language, order)

        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ModelLoadError(
                f"No {order.file_stem} model for {language.name} at {path}"
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ModelLoadError(f"Failed to read {path}: {e}") from e

        logger.debug(f"Read {len(content)} bytes from {path}")
        return LanguageModel.from_json(content, language, order)

    def is_available(self) -> bool:
        """Check whether the root directory exists."""
        return self.root.is_dir()

    def __repr__(self) -> str:
        return f"DirectoryModelSource({str(self.root)!r})"


class InMemoryModelSource:
    """Serves models from nested mappings of already known frequencies."""

    def __init__(self, tables: Mapping[Language, Mapping[NgramOrder, Mapping[str, float]]]):
        self.tables = tables

    def load(self, language: Language, order: NgramOrder) -> LanguageModel:
        order = NgramOrder(order)
        try:
            frequencies = self.tables[language][order]
        except KeyError as e:
            raise ModelLoadError(f"No {order.file_stem} model for {language.name} in memory") from e
        return LanguageModel(language, order, frequencies)

    def __repr__(self) -> str:
        return f"InMemoryModelSource({len(self.tables)} languages)"
