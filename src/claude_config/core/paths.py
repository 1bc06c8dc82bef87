# src/claude_config/core/paths.py
"""
Resolução de caminhos de plataforma e descoberta de configuração de projeto.

Todas as funções são puras em relação a estado do processo: recebem o
ambiente explicitamente (default `os.environ`) e nunca armazenam o
resultado em singletons.

Caminhos canônicos:
    - Windows: %APPDATA%\\claude
    - macOS:   ~/Library/Application Support/Claude
    - demais:  $XDG_CONFIG_HOME/claude ou ~/.config/claude
    - arquivo global:  <dir>/config.json
    - backups:         <dir>/backups
    - projeto:         <raiz>/.claude/config.json

A variável `CLAUDE_CONFIG_DIR` substitui o diretório de plataforma.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Union


CONFIG_DIR_ENV = "CLAUDE_CONFIG_DIR"
CONFIG_FILENAME = "config.json"
PROJECT_DIRNAME = ".claude"
BACKUP_DIRNAME = "backups"


def platform_config_dir(
    env: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> Path:
    """Diretório de configuração global para a plataforma informada (default: atual)."""
    env = os.environ if env is None else env
    platform = sys.platform if platform is None else platform

    override = env.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()

    if platform.startswith("win"):
        appdata = env.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / "claude"

    if platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "Claude"

    xdg = env.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "claude"


def global_config_path(config_dir: Optional[Path] = None) -> Path:
    return (config_dir or platform_config_dir()) / CONFIG_FILENAME


def default_backup_dir(config_dir: Optional[Path] = None) -> Path:
    return (config_dir or platform_config_dir()) / BACKUP_DIRNAME


def project_config_path(project_root: Union[str, Path]) -> Path:
    return Path(project_root) / PROJECT_DIRNAME / CONFIG_FILENAME


def find_project_config(start_dir: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Procura `.claude/config.json` subindo a partir de `start_dir` (default: cwd).

    A busca para na raiz de um repositório Git (diretório com `.git`) ou na
    raiz do filesystem.
    """
    current = Path(start_dir) if start_dir is not None else Path.cwd()
    current = current.resolve()

    while True:
        candidate = project_config_path(current)
        if candidate.exists():
            return candidate
        if (current / ".git").exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def expand_tilde(path: Union[str, Path]) -> Path:
    """Expande `~` inicial para o diretório home; demais caminhos inalterados."""
    return Path(path).expanduser()


__all__ = [
    "CONFIG_DIR_ENV",
    "CONFIG_FILENAME",
    "PROJECT_DIRNAME",
    "platform_config_dir",
    "global_config_path",
    "default_backup_dir",
    "project_config_path",
    "find_project_config",
    "expand_tilde",
]
