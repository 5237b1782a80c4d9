import argparse
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from scripts import dev_setup


@pytest.fixture
def isolated_env(monkeypatch):
    # Recorded so every variable the .env file sets is restored afterwards.
    for name in ("FLASK_APP", "FLASK_ENV", "SECRET_KEY", "DATABASE_URL", "LOG_LEVEL"):
        monkeypatch.setenv(name, "placeholder")
    return monkeypatch


def _args(tmp_path, **overrides):
    values = {
        "flask_app": "wsgi.py",
        "flask_env": "development",
        "secret_key": "setup-secret",
        "log_level": "debug",
        "database_url": f"sqlite:///{tmp_path / 'dev.db'}",
        "env_path": tmp_path / ".env",
        "skip_db": False,
        "skip_seed": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_update_env_file_keeps_unrelated_values(tmp_path, isolated_env):
    env_path = tmp_path / ".env"
    env_path.write_text("# local settings\nEXTRA=keep\nLOG_LEVEL=INFO\n")

    values = dev_setup.update_env_file(_args(tmp_path))

    assert values["EXTRA"] == "keep"
    assert values["LOG_LEVEL"] == "DEBUG"
    assert (tmp_path / ".env.bak").exists()
    assert "DATABASE_URL=sqlite:///" in env_path.read_text()


def test_written_settings_apply_to_the_same_run(tmp_path, isolated_env, capsys):
    args = _args(tmp_path)
    dev_setup.update_env_file(args)
    dev_setup.load_env_file(args.env_path)

    config = dev_setup.setup_config()
    assert config.SQLALCHEMY_DATABASE_URI == args.database_url
    assert config.LOG_LEVEL == "DEBUG"
    assert config.SECRET_KEY == "setup-secret"

    dev_setup.initialize_database(seed=True, config_class=config)

    assert (tmp_path / "dev.db").exists()
    assert "Plot structure templates added: 8." in capsys.readouterr().out
