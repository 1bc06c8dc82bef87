# tests/conftest.py
"""
Fixtures compartilhados para testes do claude_config.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de configuração mínimos e determinísticos
- um relógio controlado para nomes de backup previsíveis
- um ConfigManager isolado em `tmp_path` (global, backups e projeto)

Decisões arquiteturais:
    - Todo I/O acontece sob `tmp_path`; nenhum teste toca o HOME real
    - O relógio injetado avança 1 segundo por chamada, tornando a
      ordem dos backups independente da resolução do relógio do sistema
    - Imports do pacote são realizados de forma lazy dentro das fixtures
      para melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture acessa rede
    - Dados retornados são isolados por teste

Limites explícitos:
    - Não substitui testes de integração de plataforma (Windows/macOS)
"""

import json
from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """Relógio determinístico: cada chamada avança `step`."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2025, 1, 20, 12, 34, 56, 789000, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def sample_config_dict() -> dict:
    """
    Configuração global típica, com servidor MCP, caminhos e chave desconhecida.

    Returns:
        dict: projeção JSON de um documento válido.
    """
    return {
        "mcpServers": {
            "npx": {
                "enabled": True,
                "command": "npx",
                "args": ["-y", "@modelcontextprotocol/server-filesystem"],
                "env": {"NODE_ENV": "production"},
            }
        },
        "allowedPaths": ["~/projects"],
        "customInstructions": ["Seja conciso"],
        "futureField": {"nested": [1, 2, 3]},
    }


@pytest.fixture
def write_json():
    """Grava um objeto como JSON indentado e retorna o caminho."""

    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def workspace(tmp_path):
    """Layout isolado: diretório global, backups e raiz de projeto."""
    config_dir = tmp_path / "home" / ".config" / "claude"
    project_root = tmp_path / "work" / "demo"
    project_root.mkdir(parents=True)
    (project_root / ".git").mkdir()
    return {
        "config_dir": config_dir,
        "global_path": config_dir / "config.json",
        "backup_dir": config_dir / "backups",
        "project_root": project_root,
        "project_path": project_root / ".claude" / "config.json",
    }


@pytest.fixture
def manager(workspace, fake_clock):
    from claude_config.core.manager import ConfigManager

    return ConfigManager(
        global_config_path=workspace["global_path"],
        backup_dir=workspace["backup_dir"],
        retention_count=10,
        clock=fake_clock,
    )
