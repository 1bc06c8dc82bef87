# src/claude_config/core/config/key_path.py
"""
Mutação de documento por key-path (notação por pontos).

Usado pelos setters por escopo (`ConfigManager.set_value`) para aplicar
valores como `mcpServers.npx.enabled=false` diretamente no documento.

Política de valores:
    - O valor bruto é interpretado como JSON; se não for JSON válido,
      é tratado como string literal
    - Campos booleanos aceitam booleano JSON, os números JSON 1 / 0 e
      strings; "true" / "yes" / "1" (case-insensitive) são verdadeiro e
      qualquer outra string é falso. Demais valores são rejeitados
      (`UnsupportedPathError`)
    - Campos de lista aceitam array de strings ou uma string
      (dividida por espaços em `args`)

Caminhos suportados:
    - mcpServers.<nome>.enabled | command | args
    - skills.<nome>.enabled | parameters
    - allowedPaths            (array substitui; string vira lista unitária)
    - customInstructions      (array substitui; string é anexada)
    - <chave desconhecida>    (armazenada verbatim em `unknown`)

Limites explícitos:
    - Substituir uma entrada inteira em um passo não é suportado
    - Caminhos aninhados em seções de lista ou chaves desconhecidas
      não são suportados
"""

from __future__ import annotations

import json
from typing import Any, List

from ..errors import UnsupportedPathError
from ..types import ServerEntry, SkillEntry
from .document import (
    ALLOWED_PATHS,
    CUSTOM_INSTRUCTIONS,
    MCP_SERVERS,
    SKILLS,
    ConfigDocument,
)


_TRUTHY = ("true", "yes", "1")


def parse_value(raw: Any) -> Any:
    """Interpreta `raw` como JSON quando for string; senão devolve como está."""
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _coerce_bool(key_path: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in _TRUTHY
    # JSON `1` chega como int após parse_value
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    raise UnsupportedPathError(
        key_path,
        "'enabled' deve ser um valor booleano",
        hint="Use true/false (ou yes/no, 1/0).",
    )


def _coerce_string_list(key_path: str, value: Any, *, split: bool) -> List[str]:
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    if isinstance(value, str):
        return value.split() if split else [value]
    raise UnsupportedPathError(
        key_path,
        "esperado array de strings ou string",
        hint='Use um array JSON, ex.: ["-y", "pacote"], ou uma string separada por espaços.',
    )


def _set_server_field(doc: ConfigDocument, key_path: str, keys: List[str], value: Any) -> None:
    if not keys or not keys[0]:
        raise UnsupportedPathError(key_path, "nome do servidor MCP é obrigatório")
    if len(keys) == 1:
        raise UnsupportedPathError(
            key_path,
            "definir o objeto inteiro do servidor ainda não é suportado",
            hint="Defina campos individuais: enabled, command ou args.",
        )
    if len(keys) > 2:
        raise UnsupportedPathError(key_path, "profundidade não suportada para servidores MCP")

    name, field_name = keys
    if field_name not in ("enabled", "command", "args"):
        raise UnsupportedPathError(
            key_path,
            f"campo de servidor MCP desconhecido: '{field_name}'",
            hint="Campos suportados: enabled, command, args.",
        )

    if doc.mcp_servers is None:
        doc.mcp_servers = {}
    server = doc.mcp_servers.get(name)
    if server is None:
        server = ServerEntry(name=name)

    if field_name == "enabled":
        server.enabled = _coerce_bool(key_path, value)
    elif field_name == "command":
        if not isinstance(value, str):
            raise UnsupportedPathError(key_path, "'command' deve ser uma string")
        server.command = value
    else:
        server.args = _coerce_string_list(key_path, value, split=True)

    doc.mcp_servers[name] = server


def _set_skill_field(doc: ConfigDocument, key_path: str, keys: List[str], value: Any) -> None:
    if not keys or not keys[0]:
        raise UnsupportedPathError(key_path, "nome da skill é obrigatório")
    if len(keys) == 1:
        raise UnsupportedPathError(
            key_path,
            "definir o objeto inteiro da skill ainda não é suportado",
            hint="Defina campos individuais: enabled ou parameters.",
        )
    if len(keys) > 2:
        raise UnsupportedPathError(key_path, "profundidade não suportada para skills")

    name, field_name = keys
    if field_name not in ("enabled", "parameters"):
        raise UnsupportedPathError(
            key_path,
            f"campo de skill desconhecido: '{field_name}'",
            hint="Campos suportados: enabled, parameters.",
        )

    if doc.skills is None:
        doc.skills = {}
    skill = doc.skills.get(name)
    if skill is None:
        skill = SkillEntry(name=name)

    if field_name == "enabled":
        skill.enabled = _coerce_bool(key_path, value)
    else:
        skill.parameters = value

    doc.skills[name] = skill


def set_value_by_path(doc: ConfigDocument, key_path: str, raw_value: Any) -> None:
    """
    Aplica `raw_value` no campo indicado por `key_path`, criando seções e
    entradas intermediárias quando ausentes.

    Raises:
        UnsupportedPathError: caminho vazio, profundidade não suportada,
            campo desconhecido ou valor de tipo incompatível.
    """
    if not key_path or not key_path.strip():
        raise UnsupportedPathError(key_path, "key-path não pode ser vazio")

    keys = key_path.split(".")
    head, rest = keys[0], keys[1:]
    value = parse_value(raw_value)

    if head == MCP_SERVERS:
        _set_server_field(doc, key_path, rest, value)
    elif head == SKILLS:
        _set_skill_field(doc, key_path, rest, value)
    elif head == ALLOWED_PATHS:
        if rest:
            raise UnsupportedPathError(key_path, "caminhos aninhados em allowedPaths não são suportados")
        doc.allowed_paths = _coerce_string_list(key_path, value, split=False)
    elif head == CUSTOM_INSTRUCTIONS:
        if rest:
            raise UnsupportedPathError(key_path, "caminhos aninhados em customInstructions não são suportados")
        if isinstance(value, str):
            doc.with_custom_instruction(value)
        else:
            doc.custom_instructions = _coerce_string_list(key_path, value, split=False)
    else:
        if not head:
            raise UnsupportedPathError(key_path, "key-path não pode começar com '.'")
        if rest:
            raise UnsupportedPathError(
                key_path,
                "caminhos aninhados para campos desconhecidos não são suportados",
                hint=f"Defina o objeto inteiro em '{head}' com um valor JSON.",
            )
        doc.unknown[head] = value


__all__ = ["set_value_by_path", "parse_value"]
