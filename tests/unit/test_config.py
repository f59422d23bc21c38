from __future__ import annotations

import os
from pathlib import Path

import pytest

from nodegate.config import (
    JobConfig,
    NodegateConfig,
    get_user_config_path,
    load_config,
    load_job_config,
)
from nodegate.exceptions import ConfigError
from nodegate.models import Interpreter


def test_load_defaults_when_no_config(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)

    config = load_config()

    assert isinstance(config, NodegateConfig)
    assert config.check.timeout_seconds == 60.0
    assert config.check.temp_file_prefix == "nodegate"
    assert config.verbosity == "warning"


def test_load_project_config(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "nodegate.yaml").write_text(
        "check:\n  timeout_seconds: 15\nverbosity: info\n"
    )

    config = load_config()

    assert config.check.timeout_seconds == 15.0
    assert config.verbosity == "info"


def test_explicit_config_path(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "nodegate.yaml").write_text("check:\n  timeout_seconds: 15\n")
    explicit = temp_dir / "ci.yaml"
    explicit.write_text("check:\n  timeout_seconds: 30\n")

    config = load_config(explicit)

    assert config.check.timeout_seconds == 30.0


def test_env_var_overrides(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "nodegate.yaml").write_text("check:\n  timeout_seconds: 15\n")
    os.environ["NODEGATE_CHECK__TIMEOUT_SECONDS"] = "5"

    config = load_config()

    assert config.check.timeout_seconds == 5.0


def test_invalid_config_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "nodegate.yaml").write_text("check:\n  timeout_seconds: -1\n")

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "check.timeout_seconds"


def test_invalid_yaml_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "nodegate.yaml").write_text("check: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config()


def test_missing_explicit_config(clean_env: None, temp_dir: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(temp_dir / "missing.yaml")


def test_user_config_path() -> None:
    assert get_user_config_path() == (
        Path.home() / ".config" / "nodegate" / "config.yaml"
    )


class TestLoadJobConfig:
    def test_job_with_prerequisites(self, temp_dir: Path, sample_job_yaml: str) -> None:
        job_file = temp_dir / "job.yaml"
        job_file.write_text(sample_job_yaml)

        job = load_job_config(job_file)

        assert job.prerequisites is not None
        assert job.prerequisites.interpreter is Interpreter.SHELL_SCRIPT
        assert job.prerequisites.script == 'test "$BRANCH" = "main"\n'

    def test_job_without_prerequisites(self, temp_dir: Path) -> None:
        job_file = temp_dir / "job.yaml"
        job_file.write_text("description: nightly\n")

        assert load_job_config(job_file) == JobConfig()

    def test_empty_job_file(self, temp_dir: Path) -> None:
        job_file = temp_dir / "job.yaml"
        job_file.write_text("")

        assert load_job_config(job_file).prerequisites is None

    def test_missing_script(self, temp_dir: Path) -> None:
        job_file = temp_dir / "job.yaml"
        job_file.write_text("prerequisites:\n  interpreter: linux shell script\n")

        with pytest.raises(ConfigError) as exc_info:
            load_job_config(job_file)

        assert exc_info.value.field == "prerequisites.script"

    def test_non_mapping(self, temp_dir: Path) -> None:
        job_file = temp_dir / "job.yaml"
        job_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="Expected a mapping"):
            load_job_config(job_file)

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigError, match="Job file not found"):
            load_job_config(temp_dir / "nope.yaml")
