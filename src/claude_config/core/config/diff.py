# src/claude_config/core/config/diff.py
"""
Diff estrutural entre as camadas global e projeto.

Percorre as projeções JSON dos dois documentos e produz registros
`Added` / `Removed` / `Modified`, além de um `SourceMap` que atribui cada
chave à camada que contribui com o valor efetivo.

Política (por chave do objeto raiz):
    - só no global          → Removed(global);     fonte = GLOBAL
    - em ambos, iguais      → sem diff;            fonte = GLOBAL
    - em ambos, diferentes  → Modified(old=global, new=projeto); fonte = PROJECT
    - só no projeto         → Added(projeto);      fonte = PROJECT, com recursão
                              em objetos aninhados gerando um Added por chave

Decisões arquiteturais:
    - Arrays são folhas opacas: comparados por igualdade total, nunca
      elemento a elemento
    - Caminhos usam notação por pontos; arrays não recebem índice
    - Ordem: chaves do global (na ordem do global), depois adições do
      projeto (na ordem do projeto); determinística para o mesmo par

Limites explícitos:
    - Não aplica merge nem escreve arquivos
    - Não ordena o resultado
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..types import Added, ConfigDiff, ConfigScope, Modified, Removed, SourceMap
from .document import ConfigDocument


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _compare(global_value: Any, project_value: Any, key_path: str, diffs: List[ConfigDiff], sources: SourceMap) -> None:
    if isinstance(global_value, dict) and isinstance(project_value, dict):
        for key, g_val in global_value.items():
            path = _join(key_path, key)
            if key in project_value:
                p_val = project_value[key]
                if g_val != p_val:
                    diffs.append(Modified(path=path, old=g_val, new=p_val))
                    sources.insert(path, ConfigScope.PROJECT)
                else:
                    sources.insert(path, ConfigScope.GLOBAL)
            else:
                diffs.append(Removed(path=path, value=g_val))
                sources.insert(path, ConfigScope.GLOBAL)
        return

    # tipos diferentes ou folhas (inclui arrays) na raiz
    if global_value != project_value:
        diffs.append(Modified(path=key_path, old=global_value, new=project_value))
        sources.insert(key_path, ConfigScope.PROJECT)


def _find_additions(global_value: Any, project_value: Any, key_path: str, diffs: List[ConfigDiff], sources: SourceMap) -> None:
    if not (isinstance(global_value, dict) and isinstance(project_value, dict)):
        return
    for key, p_val in project_value.items():
        if key in global_value:
            continue
        path = _join(key_path, key)
        diffs.append(Added(path=path, value=p_val))
        sources.insert(path, ConfigScope.PROJECT)
        if isinstance(p_val, dict):
            _find_additions({}, p_val, path, diffs, sources)


def diff_values(global_json: Any, project_json: Any) -> Tuple[List[ConfigDiff], SourceMap]:
    """Diff sobre projeções JSON já decodificadas (dicionários puros)."""
    diffs: List[ConfigDiff] = []
    sources = SourceMap()
    _compare(global_json, project_json, "", diffs, sources)
    _find_additions(global_json, project_json, "", diffs, sources)
    return diffs, sources


def diff_configs(
    global_doc: ConfigDocument,
    project_doc: Optional[ConfigDocument],
) -> Tuple[List[ConfigDiff], SourceMap]:
    """
    Compara a camada global com a de projeto.

    Um documento de projeto ausente (`None`) é comparado como documento
    vazio: todas as chaves globais aparecem como `Removed`.

    Returns:
        (diffs, source_map)
    """
    project_json = project_doc.to_dict() if project_doc is not None else {}
    return diff_values(global_doc.to_dict(), project_json)


__all__ = ["diff_configs", "diff_values"]
