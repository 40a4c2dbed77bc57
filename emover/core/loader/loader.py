from enum import Enum
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple
import ruamel.yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from emover.core.loader.validator import validate_config_schema
from emover.core.scanner.classifier import DEFAULT_STRICTNESS, Strictness
from emover.core.utils.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ENCODING,
    DEFAULT_MAX_WORKERS,
    MAX_WORKERS_LIMIT,
)
from emover.core.utils.util_methods import normalize_patterns


class RunMode(Enum):
    """What happens to detected changes."""
    CONFIRM = "confirm"
    AUTO_COMMIT = "yes"
    DRY_RUN = "dry-run"


class ConfigFileModel(BaseModel):
    """Pydantic model for the optional .emover.yaml file."""
    model_config = ConfigDict(extra="forbid")

    exclude: List[str] = Field(default_factory=list)
    respect_ignore_dirs: Optional[bool] = None
    keep_symbols: Optional[bool] = None
    max_workers: Optional[int] = Field(default=None, ge=1, le=MAX_WORKERS_LIMIT)


class RunConfig(BaseModel):
    """Immutable configuration resolved once per invocation."""
    model_config = ConfigDict(frozen=True)

    roots: Tuple[Path, ...] = Field(default=(Path("."),), min_length=1)
    mode: RunMode = RunMode.CONFIRM
    exclude_patterns: FrozenSet[str] = Field(default_factory=frozenset)
    respect_ignore_dirs: bool = True
    strictness: Strictness = DEFAULT_STRICTNESS
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1, le=MAX_WORKERS_LIMIT)

    @field_validator('exclude_patterns', mode='before')
    @classmethod
    def unwrap_exclude_patterns(cls, v):
        if isinstance(v, str):
            v = [v]
        return normalize_patterns(v)

    @property
    def dry_run(self) -> bool:
        return self.mode is RunMode.DRY_RUN


class ConfigError(Exception):
    """Custom exception for configuration errors."""

    def __init__(self, message: str, errors: List[str] = None):
        self.errors = errors or []
        super().__init__(message)


def find_config_file(directory: Path) -> Optional[Path]:
    """Return the default config file in ``directory`` if there is one."""
    candidate = Path(directory) / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def load_config_file(file_path: Path) -> ConfigFileModel:
    """
    Load and validate a YAML config file.

    Args:
        file_path: Path to the config file

    Returns:
        Validated ConfigFileModel instance

    Raises:
        ConfigError: If the file is missing, malformed or fails validation
    """
    if not file_path.exists():
        raise ConfigError(f"Config file not found: {file_path}")

    # Step 1: Load YAML
    try:
        yaml = ruamel.yaml.YAML(typ='safe')
        with open(file_path, 'r', encoding=DEFAULT_ENCODING) as f:
            config_data = yaml.load(f)
    except Exception as e:
        raise ConfigError(f"Error loading YAML file: {e}")

    if config_data is None:
        config_data = {}

    # Step 2: Schema validation
    validation_errors = validate_config_schema(config_data)
    if validation_errors:
        raise ConfigError(f"Config validation failed: {file_path}", validation_errors)

    # Step 3: Create Pydantic model (final validation layer)
    try:
        return ConfigFileModel(**config_data)
    except Exception as e:
        raise ConfigError(f"Config model validation failed: {e}")


def build_run_config(
    roots: Iterable[Path] = (),
    yes: bool = False,
    dry_run: bool = False,
    exclude: Iterable[str] = (),
    no_gitignore: bool = False,
    keep_symbols: bool = False,
    max_workers: Optional[int] = None,
    file_config: Optional[ConfigFileModel] = None,
) -> RunConfig:
    """
    Resolve the run configuration from CLI values and an optional config file.

    CLI flags win over the config file, which wins over built-in defaults.
    Exclude patterns from both sources are combined. ``dry_run`` wins over
    ``yes``.
    """
    file_config = file_config or ConfigFileModel()

    if dry_run:
        mode = RunMode.DRY_RUN
    elif yes:
        mode = RunMode.AUTO_COMMIT
    else:
        mode = RunMode.CONFIRM

    respect_ignore_dirs = True
    if no_gitignore:
        respect_ignore_dirs = False
    elif file_config.respect_ignore_dirs is not None:
        respect_ignore_dirs = file_config.respect_ignore_dirs

    keep = keep_symbols or bool(file_config.keep_symbols)
    strictness = Strictness.EMOJI_ONLY if keep else DEFAULT_STRICTNESS

    if max_workers is None:
        max_workers = file_config.max_workers or DEFAULT_MAX_WORKERS

    root_paths = tuple(Path(r) for r in roots) or (Path("."),)

    return RunConfig(
        roots=root_paths,
        mode=mode,
        exclude_patterns=list(file_config.exclude) + list(exclude),
        respect_ignore_dirs=respect_ignore_dirs,
        strictness=strictness,
        max_workers=max_workers,
    )
