# src/claude_config/core/types.py
"""
Tipos canônicos compartilhados pelo core do claude_config.

Este módulo define as estruturas fundamentais trocadas entre Document
Model, Merger, Differ, Backup Store e fachadas de mais alto nível.

Componentes principais:
    - ConfigScope  → enum de camadas (GLOBAL, PROJECT)
    - ServerEntry  → servidor MCP (nome derivado da chave do mapa)
    - SkillEntry   → skill (nome derivado da chave do mapa)
    - BackupRecord → snapshot imutável criado pelo Backup Store
    - ConfigDiff   → variante Added / Removed / Modified
    - SourceMap    → proveniência (dot-path → escopo) de cada chave

Princípios fundamentais:
    - Tipos são simples, serializáveis e sem I/O
    - O nome de uma entrada nunca é serializado como campo

Limites explícitos:
    - Não valida regras de negócio (ver core.config.validation)
    - Não realiza parsing de JSON (ver core.config.document)
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional


class ConfigScope(str, Enum):
    """
    Camada de configuração alvo de uma operação.

    Valores:
        - GLOBAL: configuração do usuário (válida para todos os projetos)
        - PROJECT: configuração local de um diretório de projeto
    """

    GLOBAL = "global"
    PROJECT = "project"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass
class ServerEntry:
    """
    Servidor MCP declarado em `mcpServers`.

    Campos:
        - name: chave do mapa `mcpServers` (nunca serializado)
        - enabled: obrigatório em disco
        - command: opcional (omitido quando None)
        - args: lista ordenada (default vazia)
        - env: mapa string → string (default vazio)
        - extra: campos não reconhecidos da entrada, preservados verbatim
    """

    name: str = ""
    enabled: bool = True
    command: Optional[str] = None
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, name: str, command: str, args: Optional[List[str]] = None) -> "ServerEntry":
        return cls(name=name, enabled=True, command=command, args=list(args or []))

    def with_env(self, key: str, value: str) -> "ServerEntry":
        self.env[key] = value
        return self

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"enabled": self.enabled}
        if self.command is not None:
            data["command"] = self.command
        data["args"] = list(self.args)
        data["env"] = dict(self.env)
        data.update(copy.deepcopy(self.extra))
        return data


@dataclass
class SkillEntry:
    """Skill declarada em `skills` (nome = chave do mapa)."""

    name: str = ""
    enabled: bool = True
    parameters: Optional[Any] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"enabled": self.enabled}
        if self.parameters is not None:
            data["parameters"] = copy.deepcopy(self.parameters)
        data.update(copy.deepcopy(self.extra))
        return data


@dataclass(frozen=True)
class BackupRecord:
    """
    Snapshot criado pelo Backup Store.

    Imutável após a criação; removido apenas por retenção ou limpeza
    explícita.
    """

    path: Path
    original_path: Path
    created_at: datetime
    size_bytes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "original_path": str(self.original_path),
            "created_at": self.created_at.isoformat(),
            "size_bytes": self.size_bytes,
        }


# ---------------------------------------------------------------------------
# Diff
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigDiff:
    """Base da variante de diff; `path` usa notação por pontos."""

    path: str

    @property
    def kind(self) -> str:
        return type(self).__name__.lower()


@dataclass(frozen=True)
class Added(ConfigDiff):
    """Chave presente apenas no projeto."""

    value: Any = None


@dataclass(frozen=True)
class Removed(ConfigDiff):
    """Chave presente apenas no global."""

    value: Any = None


@dataclass(frozen=True)
class Modified(ConfigDiff):
    """Chave presente em ambos com valores diferentes (old=global, new=projeto)."""

    old: Any = None
    new: Any = None


@dataclass
class SourceMap:
    """Proveniência de cada chave: dot-path → ConfigScope."""

    sources: Dict[str, ConfigScope] = field(default_factory=dict)

    def insert(self, key_path: str, scope: ConfigScope) -> None:
        self.sources[key_path] = scope

    def get(self, key_path: str) -> Optional[ConfigScope]:
        return self.sources.get(key_path)

    def is_global(self, key_path: str) -> bool:
        return self.get(key_path) is ConfigScope.GLOBAL

    def is_project(self, key_path: str) -> bool:
        return self.get(key_path) is ConfigScope.PROJECT

    def __contains__(self, key_path: object) -> bool:
        return key_path in self.sources

    def __len__(self) -> int:
        return len(self.sources)

    def __iter__(self) -> Iterator[str]:
        return iter(self.sources)


__all__ = [
    "ConfigScope",
    "ServerEntry",
    "SkillEntry",
    "BackupRecord",
    "ConfigDiff",
    "Added",
    "Removed",
    "Modified",
    "SourceMap",
]
