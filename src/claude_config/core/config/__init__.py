# src/claude_config/core/config/__init__.py
"""
Camada de configuração do claude_config.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
modelar, validar, mesclar e comparar o documento de configuração.

A configuração é:
    - declarativa
    - determinística
    - compatível com campos futuros (chaves desconhecidas preservadas)

Responsabilidades do pacote:
    - Document Model tipado com round-trip sem perda
    - Leitura de arquivos com erros localizados (linha/coluna)
    - Validação por regras ordenadas
    - Merge determinístico entre camadas (global → projeto → ...)
    - Diff estrutural com atribuição de origem (SourceMap)
    - Mutação por key-path

Limites explícitos:
    - Não escreve arquivos (ver core.atomic_write)
    - Não cria backups (ver core.backup)
"""

from .diff import diff_configs, diff_values
from .document import ConfigDocument, KNOWN_SECTIONS
from .key_path import set_value_by_path
from .loader import load_mapping, read_config
from .merge import merge_configs, merge_layers
from .validation import VALIDATION_RULES, validate_config

__all__ = [
    "ConfigDocument",
    "KNOWN_SECTIONS",
    "diff_configs",
    "diff_values",
    "set_value_by_path",
    "load_mapping",
    "read_config",
    "merge_configs",
    "merge_layers",
    "VALIDATION_RULES",
    "validate_config",
]
