# src/claude_config/core/search.py
"""
Search Engine: busca recursiva por chaves e valores no documento.

Percorre a projeção JSON do documento e retorna um `SearchResult` para
cada chave (e, opcionalmente, cada valor escalar) que contenha a consulta.

Opções (`SearchOptions`):
    - search_keys (default True)
    - search_values (default False)
    - case_sensitive (default False)
    - regex (flag reservada; aceita e ignorada, a busca é sempre por substring)
    - max_depth (default ilimitado)

Decisões arquiteturais:
    - A raiz tem profundidade 0; um nó com profundidade > max_depth não é
      visitado, logo nós com profundidade == max_depth ainda são
      comparados e percorridos
    - Caminhos: chaves de objeto separadas por ponto, elementos de array
      com `[índice]` (ex.: `mcpServers.npx.args[0]`)
    - Valores `null` nunca casam
    - A ordem dos resultados é a ordem de travessia do documento

Limites explícitos:
    - Não lê arquivos (ver ConfigManager.search_config)
    - Não implementa expressões regulares
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

from .config.document import ConfigDocument
from .types import ConfigScope


class ValueType(str, Enum):
    """Classificação grosseira do valor encontrado."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"

    @property
    def label(self) -> str:
        return "bool" if self is ValueType.BOOLEAN else self.value


@dataclass(frozen=True)
class SearchResult:
    """Uma ocorrência da consulta: caminho, texto exibível, escopo e arquivo de origem."""

    key_path: str
    value: str
    source: ConfigScope
    config_path: Optional[Path]
    value_type: ValueType

    def format(self) -> str:
        return f"{self.source.value.upper()}: {self.key_path} = {self.value} ({self.value_type.label})"


@dataclass(frozen=True)
class SearchOptions:
    search_keys: bool = True
    search_values: bool = False
    case_sensitive: bool = False
    regex: bool = False
    max_depth: Optional[int] = None


def value_type_of(value: Any) -> ValueType:
    if value is None:
        return ValueType.NULL
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, list):
        return ValueType.ARRAY
    return ValueType.OBJECT


def _scalar_text(value: Any) -> str:
    # booleanos e números em notação JSON (true/false, 1.5)
    return json.dumps(value)


class ConfigSearcher:
    """Executa buscas com um conjunto fixo de opções."""

    def __init__(self, options: Optional[SearchOptions] = None) -> None:
        self.options = options or SearchOptions()

    def _matches(self, query: str, text: str) -> bool:
        if self.options.case_sensitive:
            return query in text
        return query.lower() in text.lower()

    def search(
        self,
        query: str,
        document: ConfigDocument,
        scope: ConfigScope = ConfigScope.GLOBAL,
        config_path: Optional[Union[str, Path]] = None,
    ) -> List[SearchResult]:
        results: List[SearchResult] = []
        path = Path(config_path) if config_path is not None else None
        self._walk(query, document.to_dict(), "", 0, scope, path, results)
        return results

    def _walk(
        self,
        query: str,
        value: Any,
        current: str,
        depth: int,
        scope: ConfigScope,
        config_path: Optional[Path],
        results: List[SearchResult],
    ) -> None:
        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            return

        if isinstance(value, dict):
            for key, child in value.items():
                child_path = f"{current}.{key}" if current else key
                if self.options.search_keys and self._matches(query, key):
                    results.append(
                        SearchResult(child_path, f"<key> {key}", scope, config_path, ValueType.STRING)
                    )
                self._walk(query, child, child_path, depth + 1, scope, config_path, results)
            return

        if isinstance(value, list):
            for idx, child in enumerate(value):
                self._walk(query, child, f"{current}[{idx}]", depth + 1, scope, config_path, results)
            return

        if value is None or not self.options.search_values:
            return

        text = value if isinstance(value, str) else _scalar_text(value)
        if self._matches(query, text):
            results.append(SearchResult(current, text, scope, config_path, value_type_of(value)))


def search(
    query: str,
    document: ConfigDocument,
    options: Optional[SearchOptions] = None,
    *,
    scope: ConfigScope = ConfigScope.GLOBAL,
    config_path: Optional[Union[str, Path]] = None,
) -> List[SearchResult]:
    """Atalho funcional para `ConfigSearcher(options).search(...)`."""
    return ConfigSearcher(options).search(query, document, scope, config_path)


__all__ = [
    "ValueType",
    "SearchResult",
    "SearchOptions",
    "ConfigSearcher",
    "search",
    "value_type_of",
]
