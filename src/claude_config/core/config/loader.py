# src/claude_config/core/config/loader.py
"""
Loader canônico de configuração.

Este módulo é responsável por ler arquivos do disco e convertê-los em
estruturas validadas estruturalmente:
    - `read_config`  → arquivo JSON de configuração → `ConfigDocument`
    - `load_mapping` → arquivo YAML ou JSON → dicionário puro (usado por
      settings e import)

Princípios fundamentais:
    - Toda leitura re-parseia o arquivo (nenhum cache entre chamadas)
    - Erros estruturais são tratados como falhas explícitas e tipadas
    - JSON malformado reporta linha e coluna quando o parser as fornece

Invariantes:
    - `read_config` sempre retorna um `ConfigDocument` ou levanta
      `NotFoundError` / `FilesystemError` / `InvalidFormatError`
    - `load_mapping` sempre retorna um dicionário (arquivo vazio → {})

Limites explícitos:
    - Não realiza merge de camadas (ver merge)
    - Não valida regras de negócio (ver validation)
    - Não escreve arquivos
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # PyYAML

from ..errors import (
    FilesystemError,
    InvalidFormatError,
    NotFoundError,
    UnsupportedFormatError,
)
from .document import ConfigDocument


logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def _read_text(path: Path, operation: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidFormatError(f"conteúdo não é UTF-8 válido: {exc.reason}", path=path) from exc
    except OSError as exc:
        raise FilesystemError(operation, path, exc) from exc


def read_config(path: Union[str, Path]) -> ConfigDocument:
    """
    Lê e desserializa um arquivo de configuração JSON.

    Args:
        path: caminho do arquivo.

    Returns:
        ConfigDocument: documento carregado.

    Raises:
        NotFoundError: se o arquivo não existir.
        FilesystemError: em falha de leitura.
        InvalidFormatError: JSON malformado ou forma incompatível.
    """
    path = Path(path)
    if not path.exists():
        raise NotFoundError(path)

    content = _read_text(path, "read config file")
    doc = ConfigDocument.from_json(content, source=path)
    logger.debug("Configuração carregada de %s", path)
    return doc


def parse_mapping(content: str, *, fmt: str, source: Union[str, Path, None] = None) -> Dict[str, Any]:
    """
    Decodifica texto YAML ou JSON em dicionário.

    YAML vazio vira dicionário vazio (defaults); JSON vazio é malformado,
    como em `read_config`.

    Raises:
        InvalidFormatError: sintaxe inválida ou raiz que não é dicionário.
        UnsupportedFormatError: formato desconhecido.
    """
    if fmt == "yaml":
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                raise InvalidFormatError(
                    str(getattr(exc, "problem", exc)),
                    path=source,
                    line=mark.line + 1,
                    column=mark.column + 1,
                ) from exc
            raise InvalidFormatError(str(exc), path=source) from exc
    elif fmt == "json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise InvalidFormatError(exc.msg, path=source, line=exc.lineno, column=exc.colno) from exc
    else:
        raise UnsupportedFormatError(fmt, source)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidFormatError(
            f"raiz deve ser um objeto, recebido: {type(data).__name__}",
            path=source,
            location="<raiz>",
        )
    return data


def load_mapping(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Carrega um arquivo YAML (.yaml, .yml) ou JSON (.json) como dicionário.

    Raises:
        NotFoundError: se o arquivo não existir.
        UnsupportedFormatError: extensão não suportada.
        InvalidFormatError: conteúdo inválido ou raiz não-dicionário.
    """
    path = Path(path)
    if not path.exists():
        raise NotFoundError(path)

    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        fmt = "yaml"
    elif suffix in JSON_SUFFIXES:
        fmt = "json"
    else:
        raise UnsupportedFormatError(suffix.lstrip(".") or "<sem extensão>", path)

    return parse_mapping(_read_text(path, "read file"), fmt=fmt, source=path)


__all__ = ["read_config", "load_mapping", "parse_mapping"]
