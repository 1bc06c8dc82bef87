# src/claude_config/core/settings.py
"""
Configuração do próprio gerenciador (não confundir com o documento gerenciado).

Um arquivo opcional YAML ou JSON define onde fica a configuração global,
onde ficam os backups e quantos backups manter:

    global_config_path: ~/.config/claude/config.json
    backup_dir: ~/.config/claude/backups
    retention_count: 10

Precedência (maior vence):
    1. variáveis de ambiente (`CLAUDE_CONFIG_BACKUP_RETENTION`;
       `CLAUDE_CONFIG_DIR` altera os defaults de diretório)
    2. arquivo de settings
    3. defaults de plataforma (core.paths)

Invariantes:
    - Chaves desconhecidas no arquivo são rejeitadas
    - `retention_count` é inteiro não negativo
    - Settings são imutáveis após o carregamento
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .backup import DEFAULT_RETENTION_COUNT
from .config.loader import load_mapping
from .errors import ValidationFailedError
from .paths import default_backup_dir, expand_tilde, global_config_path, platform_config_dir


RETENTION_ENV = "CLAUDE_CONFIG_BACKUP_RETENTION"

_ALLOWED_KEYS = ("global_config_path", "backup_dir", "retention_count")


@dataclass(frozen=True)
class ManagerSettings:
    global_config_path: Path
    backup_dir: Path
    retention_count: int = DEFAULT_RETENTION_COUNT

    @classmethod
    def defaults(cls, env: Optional[Mapping[str, str]] = None) -> "ManagerSettings":
        config_dir = platform_config_dir(env)
        return cls(
            global_config_path=global_config_path(config_dir),
            backup_dir=default_backup_dir(config_dir),
        )


def _settings_error(detail: str, suggestion: str) -> ValidationFailedError:
    return ValidationFailedError("ManagerSettings", detail, suggestion)


def _parse_retention(value: Any, origin: str) -> int:
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise _settings_error(
                f"{origin}: retention_count deve ser inteiro, recebido: {value!r}",
                "Use um número inteiro não negativo, ex.: 10",
            ) from None
    if isinstance(value, bool) or not isinstance(value, int):
        raise _settings_error(
            f"{origin}: retention_count deve ser inteiro, recebido: {type(value).__name__}",
            "Use um número inteiro não negativo, ex.: 10",
        )
    if value < 0:
        raise _settings_error(
            f"{origin}: retention_count não pode ser negativo ({value})",
            "Use 0 para desativar backups antigos ou um valor positivo",
        )
    return value


def _parse_path(value: Any, key: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise _settings_error(
            f"{key} deve ser um caminho não vazio",
            f"Informe {key} como string, ex.: ~/.config/claude",
        )
    return expand_tilde(value.strip())


def load_settings(
    path: Optional[Union[str, Path]] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> ManagerSettings:
    """
    Carrega settings a partir de `path` (opcional) e do ambiente.

    Raises:
        NotFoundError: `path` informado e inexistente.
        UnsupportedFormatError: extensão diferente de .yaml/.yml/.json.
        InvalidFormatError: conteúdo malformado.
        ValidationFailedError: chave desconhecida ou valor inválido.
    """
    env = os.environ if env is None else env
    base = ManagerSettings.defaults(env)

    data: Dict[str, Any] = load_mapping(path) if path is not None else {}

    unknown = sorted(set(data) - set(_ALLOWED_KEYS))
    if unknown:
        raise _settings_error(
            f"chaves desconhecidas em settings: {', '.join(unknown)}",
            f"Chaves aceitas: {', '.join(_ALLOWED_KEYS)}",
        )

    global_path = base.global_config_path
    backup_dir = base.backup_dir
    retention = base.retention_count

    if "global_config_path" in data:
        global_path = _parse_path(data["global_config_path"], "global_config_path")
    if "backup_dir" in data:
        backup_dir = _parse_path(data["backup_dir"], "backup_dir")
    if "retention_count" in data:
        retention = _parse_retention(data["retention_count"], str(path))

    env_retention = env.get(RETENTION_ENV)
    if env_retention:
        retention = _parse_retention(env_retention, RETENTION_ENV)

    return ManagerSettings(
        global_config_path=global_path,
        backup_dir=backup_dir,
        retention_count=retention,
    )


__all__ = ["ManagerSettings", "load_settings", "RETENTION_ENV"]
