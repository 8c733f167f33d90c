"""
Configuration management for sindhi-translator.

Handles loading configuration from YAML files and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sindhi_translator.models import DEFAULT_FIELDS, RecordField
from sindhi_translator.styling.fonts import DEFAULT_FONT_FILES

# Load .env file if present (before Settings initialization)
load_dotenv()


class PathsConfig(BaseModel):
    """Configuration for file paths."""

    exports_dir: Path = Field(default=Path("./exports"), validate_default=True)
    uploads_dir: Path = Field(default=Path("./uploads"), validate_default=True)
    fonts_dir: Path = Field(default=Path("./fonts"), validate_default=True)
    static_dir: Path = Field(default=Path("./public"), validate_default=True)

    @field_validator("exports_dir", "uploads_dir", "fonts_dir", "static_dir")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand user home directory and make path absolute."""
        return Path(v).expanduser().resolve()


class ServerConfig(BaseModel):
    """Configuration for the HTTP server."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    exports_url_prefix: str = Field(default="/exports")
    max_upload_mb: int = Field(default=10, ge=1, le=200)

    @field_validator("exports_url_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Ensure a single leading slash and no trailing slash."""
        return "/" + v.strip("/")


class TranslationConfig(BaseModel):
    """Configuration for the external translation service."""

    # Google Cloud Translation API key; falls back to GOOGLE_API_KEY
    api_key: str = Field(default="")
    base_url: str = Field(default="https://translation.googleapis.com/language/translate/v2")
    # None lets the service detect the source language
    source_language: str | None = Field(default=None)
    timeout_seconds: float = Field(default=15.0, gt=0, le=300)
    max_retries: int = Field(default=2, ge=1, le=10)
    retry_delay: float = Field(default=0.5, ge=0.0, le=60.0)


class FieldConfig(BaseModel):
    """Label, language and direction of one record field."""

    label: str
    language: str
    placeholder: str
    # None derives direction from the language's script
    rtl: bool | None = None

    def to_record_field(self, attr: str) -> RecordField:
        return RecordField(
            attr=attr,
            label=self.label,
            language=self.language,
            placeholder=self.placeholder,
            rtl=self.rtl,
        )


def _default_field(index: int) -> FieldConfig:
    field = DEFAULT_FIELDS[index]
    return FieldConfig(label=field.label, language=field.language, placeholder=field.placeholder)


class FieldsConfig(BaseModel):
    """Per-field layout: source text and the two translation targets."""

    source: FieldConfig = Field(default_factory=lambda: _default_field(0))
    translation_a: FieldConfig = Field(default_factory=lambda: _default_field(1))
    translation_b: FieldConfig = Field(default_factory=lambda: _default_field(2))

    def record_fields(self) -> tuple[RecordField, ...]:
        """Record fields in export order."""
        return (
            self.source.to_record_field("source"),
            self.translation_a.to_record_field("translation_a"),
            self.translation_b.to_record_field("translation_b"),
        )

    @property
    def target_languages(self) -> tuple[str, str]:
        return (self.translation_a.language, self.translation_b.language)


class FontsConfig(BaseModel):
    """Font files per script family, relative to paths.fonts_dir."""

    files: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_FONT_FILES))


class ExportConfig(BaseModel):
    """Configuration for export formats."""

    title: str = Field(default="Translation Export")
    sheet_name: str = Field(default="Translations", min_length=1, max_length=31)
    page_size: str = Field(default="A4")


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO")
    file: Path | None = Field(default=None)
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    max_file_size_mb: int = Field(default=10, ge=1, le=100)
    backup_count: int = Field(default=5, ge=1, le=20)


class Settings(BaseSettings):
    """Main settings class that combines all configurations."""

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix for simpler env vars
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Configuration sections
    paths: PathsConfig = Field(default_factory=PathsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    languages: FieldsConfig = Field(default_factory=FieldsConfig)
    fonts: FontsConfig = Field(default_factory=FontsConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable fallbacks for the API key and port."""
        super().__init__(**data)
        if not self.translation.api_key:
            self.translation.api_key = os.getenv("GOOGLE_API_KEY", "")
        port = os.getenv("PORT")
        server_data = data.get("server")
        explicit_port = isinstance(server_data, dict) and "port" in server_data
        if port and port.isdigit() and not explicit_port:
            self.server.port = int(port)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load settings from a YAML file, with environment variable overrides."""
        path = Path(path)
        if not path.exists():
            # Return defaults if file doesn't exist
            return cls()

        with open(path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        # Process environment variable substitutions in YAML values
        yaml_config = _substitute_env_vars(yaml_config)

        return cls(**yaml_config)

    def ensure_directories(self) -> None:
        """Create the exports and uploads directories if missing."""
        for directory in (self.paths.exports_dir, self.paths.uploads_dir):
            directory.mkdir(parents=True, exist_ok=True)


def _substitute_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively substitute ${ENV_VAR} patterns in config values."""
    result = {}
    for key, value in config.items():
        if isinstance(value, dict):
            result[key] = _substitute_env_vars(value)
        elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            result[key] = os.getenv(env_var, "")
        elif isinstance(value, list):
            result[key] = [
                _substitute_env_vars(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


def load_config(path: Path | str | None = None) -> Settings:
    """
    Load configuration from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, looks for config.yaml in current directory.

    Returns:
        Settings instance with merged YAML and environment configurations.
    """
    if path is None:
        default_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(".sindhi-translator.yaml"),
        ]
        for p in default_paths:
            if p.exists():
                path = p
                break

    if path is not None:
        return Settings.from_yaml(path)

    return Settings()


def create_default_config(path: Path | str = "config.yaml") -> None:
    """Create a default configuration file."""
    default_config = """# sindhi-translator configuration
paths:
  exports_dir: "./exports"
  uploads_dir: "./uploads"
  # Put Amiri-Regular.ttf here for right-to-left PDF output
  fonts_dir: "./fonts"
  static_dir: "./public"

server:
  host: "0.0.0.0"
  port: 3000
  cors_origins: ["*"]
  exports_url_prefix: "/exports"
  max_upload_mb: 10

translation:
  # Google Cloud Translation API key
  api_key: "${GOOGLE_API_KEY}"
  # Seconds before a single translation call is abandoned
  timeout_seconds: 15
  max_retries: 2
  retry_delay: 0.5

languages:
  source:
    label: "Sindhi"
    language: "sd"
    placeholder: "(No Sindhi text)"
  translation_a:
    label: "Urdu"
    language: "ur"
    placeholder: "(No Urdu translation)"
  translation_b:
    label: "English"
    language: "en"
    placeholder: "(No English translation)"

fonts:
  files:
    arabic: "Amiri-Regular.ttf"

export:
  title: "Translation Export"
  sheet_name: "Translations"
  page_size: "A4"

logging:
  level: "INFO"
  # file: "./logs/sindhi-translator.log"
"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(default_config)
