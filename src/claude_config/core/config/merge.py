# src/claude_config/core/config/merge.py
"""
Merge canônico entre camadas de configuração.

Este módulo implementa a política oficial de merge utilizada para resolver
a configuração efetiva a partir de uma camada base (global) e uma camada
de override (projeto, sessão, ...).

Política de merge por seção:
    - mcpServers, skills     → deep merge: união de chaves; em colisão, a
                               entrada inteira do override substitui a da base
                               (substituição por entrada, não por campo)
    - allowedPaths,
      customInstructions     → replace: se a seção do override estiver
                               presente (mesmo vazia), substitui a da base
    - unknown                → união por chave; override vence em colisão

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - N camadas são resolvidas por fold da esquerda para a direita

Invariantes:
    - A mesma entrada sempre produz a mesma saída
    - Chaves não sobrescritas são preservadas da base
    - Uma lista vazia explícita no override limpa a lista da base

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não valida o resultado (ver validation)
"""

from __future__ import annotations

import copy
from functools import reduce
from typing import Dict, Optional, TypeVar

from .document import ConfigDocument


_E = TypeVar("_E")


def _merge_entries(base: Optional[Dict[str, _E]], override: Optional[Dict[str, _E]]) -> Optional[Dict[str, _E]]:
    if override is None:
        return copy.deepcopy(base)
    merged: Dict[str, _E] = copy.deepcopy(base) if base is not None else {}
    for name, entry in override.items():
        merged[name] = copy.deepcopy(entry)
    return merged


def merge_configs(base: ConfigDocument, override: ConfigDocument) -> ConfigDocument:
    """
    Mescla duas camadas; `override` tem precedência.

    Args:
        base: camada de menor prioridade (ex.: global).
        override: camada de maior prioridade (ex.: projeto).

    Returns:
        ConfigDocument: novo documento resultante (inputs intactos).
    """
    unknown = copy.deepcopy(base.unknown)
    for key, value in override.unknown.items():
        unknown[key] = copy.deepcopy(value)

    return ConfigDocument(
        mcp_servers=_merge_entries(base.mcp_servers, override.mcp_servers),
        allowed_paths=(
            list(override.allowed_paths)
            if override.allowed_paths is not None
            else copy.deepcopy(base.allowed_paths)
        ),
        skills=_merge_entries(base.skills, override.skills),
        custom_instructions=(
            list(override.custom_instructions)
            if override.custom_instructions is not None
            else copy.deepcopy(base.custom_instructions)
        ),
        unknown=unknown,
    )


def merge_layers(*layers: ConfigDocument) -> ConfigDocument:
    """
    Resolve N camadas em ordem de prioridade crescente (global, projeto, sessão...).

    Sem camadas, retorna um documento vazio.
    """
    if not layers:
        return ConfigDocument()
    return reduce(merge_configs, layers[1:], layers[0].copy())


__all__ = ["merge_configs", "merge_layers"]
