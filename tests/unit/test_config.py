from __future__ import annotations

import os
from pathlib import Path

import pytest


def test_load_defaults_when_no_config(clean_env: None, temp_dir: Path) -> None:
    """Test that defaults are used when no config file exists."""
    os.chdir(temp_dir)

    from minlog.config import MinlogConfig, load_config
    from minlog.expressions import MissingSetting

    config = load_config()
    assert isinstance(config, MinlogConfig)
    assert config.parser.operation_limit == 1000
    assert config.parser.max_depth == 64
    assert config.evaluation.missing_setting is MissingSetting.FALSE
    assert config.settings == {}
    assert config.verbosity == "warning"


def test_load_project_config(
    clean_env: None, temp_dir: Path, sample_config_yaml: str
) -> None:
    """Test loading configuration from minlog.yaml."""
    os.chdir(temp_dir)
    (temp_dir / "minlog.yaml").write_text(sample_config_yaml)

    from minlog.config import load_config
    from minlog.expressions import MissingSetting

    config = load_config()
    assert config.parser.operation_limit == 200
    assert config.parser.max_depth == 8
    assert config.evaluation.missing_setting is MissingSetting.ERROR
    assert config.settings == {"beta": True, "banned": False}
    assert config.verbosity == "info"


def test_explicit_config_path(
    clean_env: None, temp_dir: Path, sample_config_yaml: str
) -> None:
    """Test that an explicit path replaces ./minlog.yaml."""
    os.chdir(temp_dir)
    (temp_dir / "minlog.yaml").write_text("verbosity: debug\n")
    custom = temp_dir / "custom.yaml"
    custom.write_text(sample_config_yaml)

    from minlog.config import load_config

    config = load_config(custom)
    assert config.verbosity == "info"
    assert config.parser.max_depth == 8


def test_user_config_is_lowest_file_priority(
    clean_env: None, temp_dir: Path
) -> None:
    """Test that the project file wins over ~/.config/minlog/config.yaml."""
    os.chdir(temp_dir)

    from minlog.config import get_user_config_path, load_config

    user_path = get_user_config_path()
    user_path.parent.mkdir(parents=True)
    user_path.write_text("verbosity: debug\nparser:\n  max_depth: 10\n")
    (temp_dir / "minlog.yaml").write_text("verbosity: error\n")

    config = load_config()
    assert config.verbosity == "error"
    assert config.parser.max_depth == 10


def test_env_var_overrides(
    clean_env: None, temp_dir: Path, sample_config_yaml: str
) -> None:
    """Test that MINLOG_* environment variables override config files."""
    os.chdir(temp_dir)
    (temp_dir / "minlog.yaml").write_text(sample_config_yaml)
    os.environ["MINLOG_PARSER__OPERATION_LIMIT"] = "50"
    os.environ["MINLOG_EVALUATION__MISSING_SETTING"] = "false"

    from minlog.config import load_config
    from minlog.expressions import MissingSetting

    config = load_config()
    assert config.parser.operation_limit == 50
    assert config.parser.max_depth == 8
    assert config.evaluation.missing_setting is MissingSetting.FALSE


def test_settings_from_env_json(clean_env: None, temp_dir: Path) -> None:
    """Test that flag values can be supplied as JSON in MINLOG_SETTINGS."""
    os.chdir(temp_dir)
    os.environ["MINLOG_SETTINGS"] = '{"beta": true, "x > 5": false}'

    from minlog.config import load_config

    config = load_config()
    assert config.settings == {"beta": True, "x > 5": False}


def test_invalid_config_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    """Test that invalid configuration raises ConfigError."""
    os.chdir(temp_dir)
    (temp_dir / "minlog.yaml").write_text("parser:\n  operation_limit: 0\n")

    from minlog.config import load_config
    from minlog.exceptions import ConfigError

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "parser.operation_limit"
    assert exc_info.value.value == 0


def test_invalid_missing_setting_policy(clean_env: None, temp_dir: Path) -> None:
    """Test that unknown policies are rejected."""
    os.chdir(temp_dir)
    os.environ["MINLOG_EVALUATION__MISSING_SETTING"] = "sometimes"

    from minlog.config import load_config
    from minlog.exceptions import ConfigError

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "evaluation.missing_setting"


def test_invalid_yaml_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    """Test that malformed YAML raises ConfigError."""
    os.chdir(temp_dir)
    (temp_dir / "minlog.yaml").write_text("parser: [unclosed\n")

    from minlog.config import load_config
    from minlog.exceptions import ConfigError

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config()


def test_non_mapping_yaml_raises_config_error(
    clean_env: None, temp_dir: Path
) -> None:
    """Test that a YAML list at the top level is rejected."""
    os.chdir(temp_dir)
    (temp_dir / "minlog.yaml").write_text("- a\n- b\n")

    from minlog.config import load_config
    from minlog.exceptions import ConfigError

    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_config()


def test_empty_yaml_uses_defaults(clean_env: None, temp_dir: Path) -> None:
    """Test that an empty config file is treated as no overrides."""
    os.chdir(temp_dir)
    (temp_dir / "minlog.yaml").write_text("")

    from minlog.config import load_config

    config = load_config()
    assert config.parser.operation_limit == 1000


def test_operation_limit_cannot_exceed_default(
    clean_env: None, temp_dir: Path
) -> None:
    """Test that the node ceiling can only be lowered."""
    os.chdir(temp_dir)
    os.environ["MINLOG_PARSER__OPERATION_LIMIT"] = "10000"

    from minlog.config import load_config
    from minlog.exceptions import ConfigError

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "parser.operation_limit"
