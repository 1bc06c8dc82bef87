# tests/core/settings/test_manager_settings.py
"""
Testes do carregamento de settings do gerenciador.

Os testes asseguram que:
- defaults derivam do diretório de plataforma (com override por ambiente)
- arquivos YAML e JSON são aceitos
- chaves desconhecidas e retenção inválida são rejeitadas
"""

from pathlib import Path

import pytest

from claude_config.core.errors import NotFoundError, ValidationFailedError
from claude_config.core.settings import ManagerSettings, load_settings


def test_defaults_follow_config_dir_env(tmp_path):
    settings = load_settings(env={"CLAUDE_CONFIG_DIR": str(tmp_path)})
    assert settings == ManagerSettings(
        global_config_path=tmp_path / "config.json",
        backup_dir=tmp_path / "backups",
        retention_count=10,
    )


def test_yaml_settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "global_config_path: /etc/claude/config.json\n"
        "backup_dir: ~/claude-backups\n"
        "retention_count: 3\n",
        encoding="utf-8",
    )

    settings = load_settings(path, env={})

    assert settings.global_config_path == Path("/etc/claude/config.json")
    assert settings.backup_dir == Path.home() / "claude-backups"
    assert settings.retention_count == 3


def test_json_settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{"retention_count": 0}', encoding="utf-8")
    assert load_settings(path, env={}).retention_count == 0


def test_env_retention_overrides_file(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text("retention_count: 3\n", encoding="utf-8")
    settings = load_settings(path, env={"CLAUDE_CONFIG_BACKUP_RETENTION": "7"})
    assert settings.retention_count == 7


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("retention: 3\n", encoding="utf-8")
    with pytest.raises(ValidationFailedError) as exc:
        load_settings(path, env={})
    assert "retention" in exc.value.detail
    assert "retention_count" in exc.value.suggestion


@pytest.mark.parametrize("value", ["-1", "true", "'abc'", "1.5"])
def test_invalid_retention_rejected(tmp_path, value):
    path = tmp_path / "settings.yaml"
    path.write_text(f"retention_count: {value}\n", encoding="utf-8")
    with pytest.raises(ValidationFailedError):
        load_settings(path, env={})


def test_invalid_env_retention_rejected():
    with pytest.raises(ValidationFailedError):
        load_settings(env={"CLAUDE_CONFIG_BACKUP_RETENTION": "many"})


def test_missing_settings_file(tmp_path):
    with pytest.raises(NotFoundError):
        load_settings(tmp_path / "absent.yaml", env={})


def test_empty_path_value_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("backup_dir: ''\n", encoding="utf-8")
    with pytest.raises(ValidationFailedError):
        load_settings(path, env={})
