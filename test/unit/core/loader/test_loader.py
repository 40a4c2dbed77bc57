import pytest
from pathlib import Path
from pydantic import ValidationError
from emover.core.loader.loader import (
    ConfigError,
    ConfigFileModel,
    RunConfig,
    RunMode,
    build_run_config,
    find_config_file,
    load_config_file,
)
from emover.core.scanner.classifier import Strictness


def write_config(directory: Path, body: str, name: str = ".emover.yaml") -> Path:
    path = directory / name
    path.write_text(body, encoding="utf-8")
    return path


class TestRunConfig:

    def test_defaults(self):
        """Test the documented defaults."""
        config = RunConfig()
        assert config.roots == (Path("."),)
        assert config.mode is RunMode.CONFIRM
        assert config.exclude_patterns == frozenset()
        assert config.respect_ignore_dirs is True
        assert config.strictness is Strictness.EMOJI_AND_SYMBOLS
        assert config.max_workers == 8
        assert config.dry_run is False

    def test_is_frozen(self):
        """Test the config cannot be mutated after construction."""
        config = RunConfig()
        with pytest.raises(ValidationError):
            config.mode = RunMode.AUTO_COMMIT

    def test_exclude_patterns_unwrapped(self):
        """Test shell quotes are stripped and empty patterns dropped."""
        config = RunConfig(exclude_patterns=["'.md'", '"test"', "plain", "''"])
        assert config.exclude_patterns == frozenset({".md", "test", "plain"})

    def test_single_exclude_string(self):
        """Test a bare string is one pattern, not a set of characters."""
        assert RunConfig(exclude_patterns=".md").exclude_patterns == frozenset({".md"})

    @pytest.mark.parametrize("workers", [0, 129])
    def test_max_workers_bounds(self, workers):
        """Test worker count is validated."""
        with pytest.raises(ValidationError):
            RunConfig(max_workers=workers)

    def test_roots_cannot_be_empty(self):
        """Test at least one root is required."""
        with pytest.raises(ValidationError):
            RunConfig(roots=())


class TestBuildRunConfig:

    def test_no_arguments(self):
        """Test defaults when no flags are given."""
        config = build_run_config()
        assert config == RunConfig()

    def test_roots_kept_in_order(self):
        """Test roots are preserved as given."""
        config = build_run_config(roots=["b", "a", "b"])
        assert config.roots == (Path("b"), Path("a"), Path("b"))

    def test_yes_selects_auto_commit(self):
        """Test --yes skips confirmation."""
        assert build_run_config(yes=True).mode is RunMode.AUTO_COMMIT

    def test_dry_run_wins_over_yes(self):
        """Test --dry-run takes precedence over --yes."""
        config = build_run_config(yes=True, dry_run=True)
        assert config.mode is RunMode.DRY_RUN
        assert config.dry_run is True

    def test_keep_symbols_selects_emoji_only(self):
        """Test --keep-symbols narrows the classifier."""
        assert build_run_config(keep_symbols=True).strictness is Strictness.EMOJI_ONLY

    def test_no_gitignore(self):
        """Test --no-gitignore disables hidden directory pruning."""
        assert build_run_config(no_gitignore=True).respect_ignore_dirs is False

    def test_file_config_applied(self):
        """Test config file values fill in unset flags."""
        file_config = ConfigFileModel(
            exclude=[".lock"], respect_ignore_dirs=False, keep_symbols=True, max_workers=3
        )
        config = build_run_config(file_config=file_config)
        assert config.exclude_patterns == frozenset({".lock"})
        assert config.respect_ignore_dirs is False
        assert config.strictness is Strictness.EMOJI_ONLY
        assert config.max_workers == 3

    def test_cli_overrides_file_config(self):
        """Test CLI values win and exclude patterns are combined."""
        file_config = ConfigFileModel(exclude=[".lock"], respect_ignore_dirs=True, max_workers=3)
        config = build_run_config(
            exclude=["'.md'"], no_gitignore=True, max_workers=5, file_config=file_config
        )
        assert config.exclude_patterns == frozenset({".lock", ".md"})
        assert config.respect_ignore_dirs is False
        assert config.max_workers == 5


class TestLoadConfigFile:

    def test_load_valid_file(self, tmp_path):
        """Test a valid YAML config is loaded into the model."""
        path = write_config(tmp_path, "exclude:\n  - .md\n  - vendor\nkeep_symbols: true\nmax_workers: 2\n")
        model = load_config_file(path)
        assert model == ConfigFileModel(exclude=[".md", "vendor"], keep_symbols=True, max_workers=2)

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test an empty config file is valid."""
        model = load_config_file(write_config(tmp_path, ""))
        assert model == ConfigFileModel()

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config_file(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        """Test YAML syntax errors raise ConfigError."""
        with pytest.raises(ConfigError, match="Error loading YAML file"):
            load_config_file(write_config(tmp_path, "exclude: [unclosed\n"))

    def test_unknown_key_reported(self, tmp_path):
        """Test unknown options are listed in the error."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(write_config(tmp_path, "excludes: [.md]\n"))
        assert len(exc_info.value.errors) == 1
        assert "excludes" in exc_info.value.errors[0]

    def test_all_schema_errors_reported(self, tmp_path):
        """Test every invalid field is reported at once."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(write_config(tmp_path, "keep_symbols: maybe\nmax_workers: 0\n"))
        errors = exc_info.value.errors
        assert len(errors) == 2
        assert any("keep_symbols" in e for e in errors)
        assert any("max_workers" in e for e in errors)

    def test_non_mapping_rejected(self, tmp_path):
        """Test a YAML list at top level is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(write_config(tmp_path, "- .md\n"))
        assert exc_info.value.errors == ["Config file must contain a mapping of options"]


class TestFindConfigFile:

    def test_found(self, tmp_path):
        """Test the default config file is discovered."""
        path = write_config(tmp_path, "")
        assert find_config_file(tmp_path) == path

    def test_not_found(self, tmp_path):
        """Test None when there is no config file."""
        assert find_config_file(tmp_path) is None
