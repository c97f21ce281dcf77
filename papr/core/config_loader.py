"""
Configuration loader for the paper library.

Reads config/config.json into one typed dataclass per section. Every key
has a default, so a partial file (or none, via Config.defaults) is valid.
A process-wide instance serves paths and logging; search settings are
copied from it into a MatcherConfig by whoever starts a search.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError


def _known_keys(section_cls, data: dict) -> dict:
    """Keep the keys of data that are fields of section_cls."""
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Section '{section_cls.SECTION}' must be a JSON object",
            {"section": section_cls.SECTION}
        )
    names = {f.name for f in fields(section_cls)}
    return {key: value for key, value in data.items() if key in names}


@dataclass
class PathsConfig:
    """File system locations; relative values resolve against the project root."""
    SECTION = "paths"

    library_directory: Path = Path("library")
    database_path: Path = Path("output/papr.db")
    logs_directory: Path = Path("output/logs")

    def resolved(self, project_root: Path) -> "PathsConfig":
        def resolve(value) -> Path:
            path = Path(value).expanduser()
            return path if path.is_absolute() else project_root / path

        return PathsConfig(
            library_directory=resolve(self.library_directory),
            database_path=resolve(self.database_path),
            logs_directory=resolve(self.logs_directory)
        )


@dataclass
class LibraryConfig:
    """Layout of a single paper directory."""
    SECTION = "library"

    pdf_filename: str = "paper.pdf"
    notes_directory: str = "summary"
    notes_extension: str = ".typ"


@dataclass
class ExtractionConfig:
    """PDF extraction backends and failure policy."""
    SECTION = "extraction"

    primary_backend: str = "pypdf"
    fallback_backend: str = "pdfplumber"
    max_file_size_mb: int = 500
    strict: bool = False


@dataclass
class SearchConfig:
    """Excerpt shape and limits of the matching engine's convergence loop."""
    SECTION = "search"

    excerpt_length: int = 120
    excerpt_suffix: str = "..."
    newline_marker: str = "↵"
    max_ticks: int = 10000
    tick_batch_size: int = 256
    worker_threads: int = 4
    default_limit: int = 0

    def __post_init__(self):
        for name in ("excerpt_length", "max_ticks", "tick_batch_size", "worker_threads"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigurationError(
                    f"search.{name} must be a positive integer, got {value!r}",
                    {"key": f"search.{name}"}
                )
        if not isinstance(self.default_limit, int) or self.default_limit < 0:
            raise ConfigurationError(
                f"search.default_limit must be zero or a positive integer, got {self.default_limit!r}",
                {"key": "search.default_limit"}
            )


@dataclass
class LoggingConfig:
    """Log level, format and rotation of papr.log."""
    SECTION = "logging"

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """
    All configuration sections.

    Use get_config() for the shared instance.
    """
    paths: PathsConfig = field(default_factory=PathsConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_dict(cls, data: dict, project_root: Path) -> "Config":
        """
        Build a Config from parsed JSON.

        Raises:
            ConfigurationError: If the root or a section is not an object,
                                or a search limit is not positive.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a JSON object")

        sections = {}
        for name, section_cls in (
            ("paths", PathsConfig),
            ("library", LibraryConfig),
            ("extraction", ExtractionConfig),
            ("search", SearchConfig),
            ("logging", LoggingConfig),
        ):
            sections[name] = section_cls(**_known_keys(section_cls, data.get(name, {})))

        sections["paths"] = sections["paths"].resolved(project_root)
        return cls(project_root=project_root, **sections)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        The project root is the parent of the directory holding the file.

        Raises:
            ConfigurationError: If the file is missing or invalid.
        """
        config_path = Path(config_path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        return cls.from_dict(data, config_path.resolve().parent.parent)

    @classmethod
    def defaults(cls, project_root: Path = None) -> "Config":
        """Configuration made only of default values."""
        return cls.from_dict({}, Path(project_root or Path.cwd()))


_config_instance: Optional[Config] = None


def _find_config_file(start: Path = None) -> Path:
    """Nearest config/config.json in start (default: cwd) or its parents."""
    start = Path(start or Path.cwd())

    for directory in (start, *start.parents):
        candidate = directory / "config" / "config.json"
        if candidate.is_file():
            return candidate

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents",
        {"start": str(start)}
    )


def get_config(config_path: Path = None) -> Config:
    """
    Shared Config instance, loaded on first use.

    Args:
        config_path: Load this file, replacing the shared instance. When
                     omitted the first call searches upward from the
                     current directory.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if config_path is not None:
        _config_instance = Config.from_file(config_path)
    elif _config_instance is None:
        _config_instance = Config.from_file(_find_config_file())

    return _config_instance


def reload_config(config_path: Path = None) -> Config:
    """Drop the shared instance and load it again."""
    global _config_instance
    _config_instance = None
    return get_config(config_path)
