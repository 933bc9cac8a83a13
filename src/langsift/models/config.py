"""Configuration models for LangSift."""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

import platformdirs
import toml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from langsift.core.interfaces import ConfigurationError
from langsift.models.language import NgramOrder

logger = logging.getLogger(__name__)

MODELS_DIR_ENV_VAR = "LANGSIFT_MODELS_DIR"

PACKAGED_MODELS_DIR = Path(__file__).resolve().parent.parent / "language-models"

DEFAULT_CONFIG_PATHS = [
    Path("langsift.toml"),
    Path.home() / ".config" / "langsift" / "config.toml",
]


def user_models_dir() -> Path:
    """Platform-appropriate data directory for downloaded models."""
    return Path(platformdirs.user_data_dir("langsift", "langsift")) / "language-models"


class DetectionConfig(BaseModel):
    """Scoring and decision settings."""

    minimum_relative_distance: float = Field(0.0, ge=0.0, le=0.99)
    smoothing_constant: float = Field(1e-6, gt=0.0, lt=1.0)
    orders: List[int] = Field(default_factory=lambda: [int(order) for order in NgramOrder])
    order_weights: Dict[int, float] = Field(
        default_factory=lambda: {int(order): float(order) for order in NgramOrder}
    )
    low_accuracy_mode: bool = False
    alphabet_filter: bool = True

    @field_validator("orders")
    @classmethod
    def check_orders(cls, orders: List[int]) -> List[int]:
        if not orders:
            raise ValueError("at least one n-gram order is required")
        for order in orders:
            NgramOrder(order)
        return sorted(set(orders))

    @field_validator("order_weights")
    @classmethod
    def check_weights(cls, weights: Dict[int, float]) -> Dict[int, float]:
        for order, weight in weights.items():
            NgramOrder(order)
            if weight <= 0:
                raise ValueError(f"weight of order {order} must be positive")
        return weights

    @model_validator(mode="after")
    def check_weights_cover_orders(self) -> "DetectionConfig":
        missing = [order for order in self.orders if order not in self.order_weights]
        if missing:
            raise ValueError(f"no weight configured for orders {missing}")
        return self

    def active_orders(self) -> List[NgramOrder]:
        """Orders actually scored, honouring low accuracy mode."""
        if self.low_accuracy_mode:
            return [NgramOrder.TRIGRAM]
        return [NgramOrder(order) for order in self.orders]

    def weights(self) -> Dict[NgramOrder, float]:
        return {NgramOrder(order): weight for order, weight in self.order_weights.items()}


class PreprocessingConfig(BaseModel):
    """Text normalization settings."""

    remove_urls: bool = True
    remove_emails: bool = True
    max_text_length: int = Field(10000, ge=0)


class ModelsConfig(BaseModel):
    """Where language models come from."""

    models_dir: Optional[str] = None
    source_type: str = "auto"

    @field_validator("source_type")
    @classmethod
    def check_source_type(cls, source_type: str) -> str:
        if source_type not in ("auto", "directory", "memory"):
            raise ValueError(f"unknown source type {source_type!r}")
        return source_type

    def resolve_models_dir(self) -> Path:
        """Configured directory, then the environment, then packaged or user data models."""
        if self.models_dir:
            return Path(self.models_dir).expanduser()
        env_dir = os.environ.get(MODELS_DIR_ENV_VAR)
        if env_dir:
            return Path(env_dir).expanduser()
        if PACKAGED_MODELS_DIR.is_dir():
            return PACKAGED_MODELS_DIR
        return user_models_dir()


class LoggingConfig(BaseModel):
    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def check_level(cls, level: str) -> str:
        level = level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {level!r}")
        return level


class LangSiftConfig(BaseModel):
    """Complete LangSift configuration."""

    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    models: ModelsConfig = Field(default_factory=ModelsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "LangSiftConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LangSiftConfig":
        """Load configuration from a TOML file.

        Raises:
            ConfigurationError: If the file cannot be read or holds invalid values
        """
        path = Path(path)
        try:
            data = toml.load(path)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration {path}: {e}") from e

        # TOML keys are strings; weights are keyed by order number
        weights = data.get("detection", {}).get("order_weights")
        if isinstance(weights, dict):
            try:
                data["detection"]["order_weights"] = {int(k): v for k, v in weights.items()}
            except ValueError as e:
                raise ConfigurationError(f"Order weights must be keyed by order number: {e}") from e

        config = cls.from_dict(data)
        logger.debug(f"Configuration loaded from {path}")
        return config

    def to_file(self, path: Union[str, Path]) -> None:
        """Write configuration as TOML."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(exclude_none=True)
        data["detection"]["order_weights"] = {
            str(order): weight for order, weight in data["detection"]["order_weights"].items()
        }
        with open(path, "w", encoding="utf-8") as f:
            toml.dump(data, f)

    @classmethod
    def discover(cls, explicit: Optional[Path] = None) -> "LangSiftConfig":
        """Load the first configuration file found, or defaults."""
        candidates = [explicit] if explicit else DEFAULT_CONFIG_PATHS
        for candidate in candidates:
            if candidate.exists():
                return cls.from_file(candidate)
        if explicit:
            raise ConfigurationError(f"Configuration file not found: {explicit}")
        return cls()
