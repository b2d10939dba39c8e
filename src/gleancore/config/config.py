"""
Configuration management for GleanCore using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, List, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Defaults ---

DEFAULT_CONTAINER_HINTS: List[str] = [
    "article-content",
    "article-body",
    "articleBody",
    "entry-content",
    "post-content",
    "post-body",
    "story-body",
    "story-content",
    "content-body",
]

DEFAULT_AUTHOR_BLOCKLIST: List[str] = [
    "verlag",
    "media",
    "news",
    "press",
    "zeitung",
    "agency",
    "redaktion",
    "editorial",
    "newsroom",
    "gmbh",
    "magazin",
    "online",
]


def _normalize_terms(values: List[str]) -> List[str]:
    """Trim, drop empties, and de-duplicate while keeping first-seen order."""
    seen: set[str] = set()
    normalized: List[str] = []
    for value in values:
        term = value.strip()
        if term and term.lower() not in seen:
            seen.add(term.lower())
            normalized.append(term)
    return normalized


# --- Nested Configuration Models ---


class ExtractionSettings(BaseModel):
    """Tunable constants of the extraction engine."""

    min_main_text_length: int = Field(
        default=50, ge=0, description="Below this many characters the full page is retried."
    )
    min_fallback_text_length: int = Field(
        default=20, ge=0, description="Below this many characters the whole page is reduced to text."
    )
    isolation_window: int = Field(
        default=200_000, description="Maximum characters taken after a container-hint match."
    )
    srcset_max_width: int = Field(default=1600, description="Width ceiling for srcset candidate selection.")
    words_per_minute: int = Field(default=200, description="Reading speed used for reading time.")
    byline_scan_chars: int = Field(default=10_000, ge=0, description="Leading characters scanned for bylines.")
    max_meta_images: int = Field(default=3, ge=0, description="Maximum images taken from page-level meta tags.")
    container_hints: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTAINER_HINTS),
        description="Class-name hints identifying article containers.",
    )
    author_blocklist: List[str] = Field(
        default_factory=lambda: list(DEFAULT_AUTHOR_BLOCKLIST),
        description="Organization-like tokens rejected in author names.",
    )
    default_title: str = Field(default="Untitled Article")
    default_audio_title: str = Field(default="Audio")
    detect_language: bool = Field(default=True, description="Run statistical language detection on body text.")

    @field_validator("container_hints")
    @classmethod
    def validate_container_hints(cls, v: List[str]) -> List[str]:
        """Ensure at least one container hint is configured."""
        hints = _normalize_terms(v)
        if not hints:
            raise ValueError("container_hints must contain at least one hint")
        return hints

    @field_validator("author_blocklist")
    @classmethod
    def normalize_blocklist(cls, v: List[str]) -> List[str]:
        return [term.lower() for term in _normalize_terms(v)]

    @field_validator("isolation_window", "srcset_max_width", "words_per_minute")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @model_validator(mode="after")
    def validate_fallback_thresholds(self) -> ExtractionSettings:
        if self.min_fallback_text_length > self.min_main_text_length:
            raise ValueError("min_fallback_text_length cannot exceed min_main_text_length")
        return self


class QualityConfig(BaseModel):
    """User-editable term lists and thresholds for content quality assessment."""

    min_word_count: int = Field(default=50, ge=0)
    min_reading_time: int = Field(default=1, ge=0)
    max_link_density: float = Field(default=0.3, ge=0, le=1)
    min_content_length: int = Field(default=200, ge=0)

    excluded_url_patterns: List[str] = Field(
        default_factory=lambda: [
            "sitemap", "robots.txt", "privacy", "terms", "legal",
            ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
            ".zip", ".rar", ".exe", ".dmg", ".iso",
        ]
    )
    quality_indicators: List[str] = Field(
        default_factory=lambda: [
            # EN
            "article", "news", "story", "report", "analysis", "opinion", "interview", "review",
            "tutorial", "guide", "explanation", "breaking", "update", "investigation", "feature", "editorial",
            # DE
            "artikel", "nachrichten", "bericht", "analyse", "meinung", "anleitung", "leitfaden",
            "erklärung", "eilmeldung", "untersuchung", "leitartikel",
            # FR / ES / IT
            "actualités", "rapport", "entretien", "enquête", "éditorial",
            "artículo", "noticias", "informe", "análisis", "entrevista",
            "articolo", "notizie", "analisi", "intervista",
        ]
    )
    low_quality_indicators: List[str] = Field(
        default_factory=lambda: [
            # EN
            "cookie", "consent", "banner", "popup", "modal", "overlay", "advertisement", "sponsored",
            "promo", "offer", "sale", "login", "signup", "register", "subscribe", "newsletter",
            "follow us", "like us", "share this", "click here", "read more",
            # DE
            "einverständnis", "werbung", "gesponsert", "angebot", "anmelden", "registrieren",
            "abonnieren", "folgen sie uns", "hier klicken", "mehr lesen",
            # FR / ES / IT
            "publicité", "sponsorisé", "s'abonner", "cliquez ici", "lire la suite",
            "publicidad", "suscribirse", "haz clic aquí", "leer más",
            "pubblicità", "iscriviti", "clicca qui", "leggi di più",
        ]
    )
    meaningful_content_patterns: List[str] = Field(
        default_factory=lambda: [
            # EN
            "reports", "explains", "analyzes", "investigates", "shows", "describes", "tells", "informs",
            "covers", "discusses", "development", "situation", "event", "commentary", "exclusive",
            # DE
            "berichtet", "erklärt", "analysiert", "untersucht", "zeigt", "beschreibt", "erzählt",
            "informiert", "meldung", "entwicklung", "ereignis", "kommentar", "reportage",
            # FR / ES / IT
            "rapporte", "explique", "décrit", "raconte", "informa", "explica", "analiza",
            "describe", "spiega", "analizza", "descrive", "racconta",
        ]
    )
    empty_content_patterns: List[str] = Field(
        default_factory=lambda: [
            # EN
            "follow us", "share this", "like us", "sign up", "log in", "create account", "no content",
            "nothing to see", "placeholder", "privacy", "disclaimer", "learn more", "find out more",
            # DE
            "folgen sie uns", "teilen sie", "einloggen", "konto erstellen", "keine inhalte",
            "datenschutz", "impressum", "agb", "widerruf",
            # FR / ES / IT
            "suivez-nous", "aucun contenu", "mentions légales",
            "síguenos", "sin contenido", "seguici", "nessun contenuto",
        ]
    )

    @field_validator(
        "excluded_url_patterns",
        "quality_indicators",
        "low_quality_indicators",
        "meaningful_content_patterns",
        "empty_content_patterns",
    )
    @classmethod
    def normalize_terms(cls, v: List[str]) -> List[str]:
        return [term.lower() for term in _normalize_terms(v)]


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "GleanCore"
    version: str = "0.1.0"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    quality: QualityConfig = Field(default_factory=QualityConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="GLEAN_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "config.yaml", current_dir / "config.yml"):
        if path.exists():
            return path
    return None


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    A proxy for the Config object that delays its loading and validation
    until an attribute is first accessed.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        if self.__class__._config is None:
            with self.__class__._lock:
                if self.__class__._config is None:
                    self.__class__._config = self._load_config_with_fallback()
        return getattr(self.__class__._config, name)

    def _load_config_with_fallback(self) -> Config:
        """Load configuration from file or fall back to defaults."""
        config_path = find_config_file()
        if config_path:
            try:
                log.info("Lazy loading configuration from: %s", config_path)
                return Config.from_yaml(config_path)
            except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
                log.error(
                    "Failed to load or validate configuration from '%s': %s. Falling back to default settings.",
                    config_path,
                    e,
                )
        else:
            log.info("No config file found. Using default settings for lazy load.")

        try:
            return Config()
        except ValidationError as e:
            log.critical("FATAL: Default configuration is invalid: %s", e, exc_info=True)
            raise RuntimeError(f"Default configuration is invalid, cannot start: {e}") from e


# --- Global Settings Instance ---
settings: "Config" = cast("Config", LazyConfig())
