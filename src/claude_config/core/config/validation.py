# src/claude_config/core/config/validation.py
"""
Validator canônico da configuração.

Um documento é válido se, e somente se, todas as regras do conjunto
ordenado passam. A primeira regra que falha interrompe a validação e seu
erro é propagado; falhas não são agregadas em um único relatório.

Regras (ordem fixa):
    1. ServerNameRule → toda chave de `mcpServers` é não vazia
    2. PathEntryRule  → toda entrada de `allowedPaths` é não vazia e sem NUL
    3. SkillNameRule  → toda chave de `skills` é não vazia

Decisões arquiteturais:
    - Regras são funções com a mesma assinatura `(document) -> None`
    - O conjunto é fechado e pequeno; não há mecanismo de plugins
    - Seções ausentes ou vazias são puladas pela regra correspondente

Invariantes:
    - Validar nunca muta o documento
    - Validar duas vezes o mesmo documento produz o mesmo resultado
    - Toda falha carrega uma sugestão acionável (não vazia)
"""

from __future__ import annotations

from typing import Callable, Tuple

from ..errors import ValidationFailedError
from .document import ConfigDocument


ValidationRule = Callable[[ConfigDocument], None]


def server_name_rule(doc: ConfigDocument) -> None:
    """ServerNameRule: nomes de servidores MCP não podem ser vazios."""
    if not doc.mcp_servers:
        return
    for name in doc.mcp_servers:
        if not name:
            raise ValidationFailedError(
                "ServerNameRule",
                "Nome de servidor MCP vazio",
                "Todo servidor MCP deve ter um nome não vazio; renomeie ou remova a entrada com chave \"\".",
            )


def path_entry_rule(doc: ConfigDocument) -> None:
    """PathEntryRule: caminhos permitidos não vazios e sem caractere NUL."""
    if not doc.allowed_paths:
        return
    for idx, path in enumerate(doc.allowed_paths):
        if not path:
            raise ValidationFailedError(
                "PathEntryRule",
                f"Caminho no índice {idx} está vazio",
                "Todos os caminhos em allowedPaths devem ser strings não vazias.",
            )
        if "\0" in path:
            raise ValidationFailedError(
                "PathEntryRule",
                f"Caminho {path!r} contém caractere NUL",
                "Caminhos devem ser strings válidas, sem caracteres NUL.",
            )


def skill_name_rule(doc: ConfigDocument) -> None:
    """SkillNameRule: nomes de skills não podem ser vazios."""
    if not doc.skills:
        return
    for name in doc.skills:
        if not name:
            raise ValidationFailedError(
                "SkillNameRule",
                "Nome de skill vazio",
                "Toda skill deve ter um nome não vazio; renomeie ou remova a entrada com chave \"\".",
            )


VALIDATION_RULES: Tuple[Tuple[str, ValidationRule], ...] = (
    ("ServerNameRule", server_name_rule),
    ("PathEntryRule", path_entry_rule),
    ("SkillNameRule", skill_name_rule),
)


def validate_config(doc: ConfigDocument) -> None:
    """
    Executa as regras na ordem fixa.

    Raises:
        ValidationFailedError: primeira regra que rejeitar o documento.
    """
    for _name, rule in VALIDATION_RULES:
        rule(doc)


__all__ = [
    "ValidationRule",
    "VALIDATION_RULES",
    "validate_config",
    "server_name_rule",
    "path_entry_rule",
    "skill_name_rule",
]
