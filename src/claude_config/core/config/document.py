# src/claude_config/core/config/document.py
"""
Document Model canônico da configuração.

Este módulo define `ConfigDocument`, a visão tipada do arquivo JSON de
configuração, e as operações de (de)serialização entre bytes/texto,
dicionário puro e documento.

Estrutura do documento:
    - mcpServers         → mapa nome → ServerEntry (seção opcional)
    - allowedPaths       → lista ordenada de caminhos (seção opcional)
    - skills             → mapa nome → SkillEntry (seção opcional)
    - customInstructions → lista ordenada de strings (seção opcional)
    - unknown            → qualquer outra chave do topo, preservada verbatim

Decisões arquiteturais:
    - Seções ausentes são `None` e não são emitidas na serialização
    - Chaves desconhecidas vivem em um mapa explícito (`unknown`),
      reintegrado ao objeto raiz na serialização
    - Campos extras dentro de uma entrada (servidor/skill) também são
      preservados em `extra`, pelo mesmo motivo de compatibilidade futura
    - A ordem de emissão das seções conhecidas é fixa; chaves desconhecidas
      seguem a ordem de inserção

Invariantes:
    - Documento vazio serializa para `{}`
    - `from_dict(to_dict(d)) == d` (round-trip sem perda)
    - Violações de forma (ex.: lista recebendo objeto) geram
      `InvalidFormatError` com o key-path do campo

Limites explícitos:
    - Não valida regras de negócio (nomes vazios etc.; ver validation)
    - Não lê nem escreve arquivos (ver loader e atomic_write)
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..errors import InvalidFormatError
from ..types import ServerEntry, SkillEntry


MCP_SERVERS = "mcpServers"
ALLOWED_PATHS = "allowedPaths"
SKILLS = "skills"
CUSTOM_INSTRUCTIONS = "customInstructions"

KNOWN_SECTIONS = (MCP_SERVERS, ALLOWED_PATHS, SKILLS, CUSTOM_INSTRUCTIONS)

_SERVER_FIELDS = ("enabled", "command", "args", "env")
_SKILL_FIELDS = ("enabled", "parameters")


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _shape_error(location: str, expected: str, value: Any, source: Optional[Path]) -> InvalidFormatError:
    return InvalidFormatError(
        f"esperado {expected}, recebido {_type_name(value)}",
        path=source,
        location=location,
    )


def _string_list(value: Any, location: str, source: Optional[Path]) -> List[str]:
    if not isinstance(value, list):
        raise _shape_error(location, "array de strings", value, source)
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise _shape_error(f"{location}[{idx}]", "string", item, source)
    return list(value)


def _parse_server(name: str, raw: Any, source: Optional[Path]) -> ServerEntry:
    location = f"{MCP_SERVERS}.{name}"
    if not isinstance(raw, dict):
        raise _shape_error(location, "object", raw, source)

    if "enabled" not in raw:
        raise InvalidFormatError("campo obrigatório 'enabled' ausente", path=source, location=location)
    enabled = raw["enabled"]
    if not isinstance(enabled, bool):
        raise _shape_error(f"{location}.enabled", "boolean", enabled, source)

    command = raw.get("command")
    if command is not None and not isinstance(command, str):
        raise _shape_error(f"{location}.command", "string", command, source)

    args = _string_list(raw.get("args", []), f"{location}.args", source)

    env_raw = raw.get("env", {})
    if not isinstance(env_raw, dict):
        raise _shape_error(f"{location}.env", "object", env_raw, source)
    for key, val in env_raw.items():
        if not isinstance(val, str):
            raise _shape_error(f"{location}.env.{key}", "string", val, source)

    extra = {k: copy.deepcopy(v) for k, v in raw.items() if k not in _SERVER_FIELDS}
    return ServerEntry(
        name=name,
        enabled=enabled,
        command=command,
        args=args,
        env=dict(env_raw),
        extra=extra,
    )


def _parse_skill(name: str, raw: Any, source: Optional[Path]) -> SkillEntry:
    location = f"{SKILLS}.{name}"
    if not isinstance(raw, dict):
        raise _shape_error(location, "object", raw, source)

    if "enabled" not in raw:
        raise InvalidFormatError("campo obrigatório 'enabled' ausente", path=source, location=location)
    enabled = raw["enabled"]
    if not isinstance(enabled, bool):
        raise _shape_error(f"{location}.enabled", "boolean", enabled, source)

    extra = {k: copy.deepcopy(v) for k, v in raw.items() if k not in _SKILL_FIELDS}
    return SkillEntry(
        name=name,
        enabled=enabled,
        parameters=copy.deepcopy(raw.get("parameters")),
        extra=extra,
    )


def _parse_entry_map(section: str, raw: Any, parser, source: Optional[Path]):
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise _shape_error(section, "object", raw, source)
    return {name: parser(name, entry, source) for name, entry in raw.items()}


@dataclass
class ConfigDocument:
    """
    Configuração em memória (global ou projeto).

    Seções `None` representam ausência (não emitidas). Documentos são
    criados vazios ou por desserialização e mutados in-place pelos
    chamadores; não existe cache entre chamadas.
    """

    mcp_servers: Optional[Dict[str, ServerEntry]] = None
    allowed_paths: Optional[List[str]] = None
    skills: Optional[Dict[str, SkillEntry]] = None
    custom_instructions: Optional[List[str]] = None
    unknown: Dict[str, Any] = field(default_factory=dict)

    # -----------------------------
    # Builders
    # -----------------------------
    def with_server(self, name: str, server: ServerEntry) -> "ConfigDocument":
        server.name = name
        if self.mcp_servers is None:
            self.mcp_servers = {}
        self.mcp_servers[name] = server
        return self

    def with_allowed_path(self, path: str) -> "ConfigDocument":
        if self.allowed_paths is None:
            self.allowed_paths = []
        self.allowed_paths.append(path)
        return self

    def with_skill(self, name: str, skill: SkillEntry) -> "ConfigDocument":
        skill.name = name
        if self.skills is None:
            self.skills = {}
        self.skills[name] = skill
        return self

    def with_custom_instruction(self, instruction: str) -> "ConfigDocument":
        if self.custom_instructions is None:
            self.custom_instructions = []
        self.custom_instructions.append(instruction)
        return self

    def is_empty(self) -> bool:
        return not self.to_dict()

    def copy(self) -> "ConfigDocument":
        return copy.deepcopy(self)

    # -----------------------------
    # dict <-> documento
    # -----------------------------
    def to_dict(self) -> Dict[str, Any]:
        """
        Projeção JSON do documento (dicionário puro, independente do estado interno).

        Ordem de emissão: mcpServers, allowedPaths, skills, customInstructions,
        depois chaves desconhecidas na ordem de inserção.
        """
        data: Dict[str, Any] = {}
        if self.mcp_servers is not None:
            data[MCP_SERVERS] = {name: s.to_dict() for name, s in self.mcp_servers.items()}
        if self.allowed_paths is not None:
            data[ALLOWED_PATHS] = list(self.allowed_paths)
        if self.skills is not None:
            data[SKILLS] = {name: s.to_dict() for name, s in self.skills.items()}
        if self.custom_instructions is not None:
            data[CUSTOM_INSTRUCTIONS] = list(self.custom_instructions)
        for key, value in self.unknown.items():
            data[key] = copy.deepcopy(value)
        return data

    @classmethod
    def from_dict(cls, data: Any, *, source: Optional[Union[str, Path]] = None) -> "ConfigDocument":
        """
        Reconstrói um documento a partir de sua projeção JSON.

        Args:
            data: objeto raiz já decodificado.
            source: caminho de origem (apenas para mensagens de erro).

        Raises:
            InvalidFormatError: raiz não-objeto ou seção com forma incompatível.
        """
        src = Path(source) if source is not None else None
        if not isinstance(data, dict):
            raise _shape_error("<raiz>", "object", data, src)

        allowed = data.get(ALLOWED_PATHS)
        instructions = data.get(CUSTOM_INSTRUCTIONS)

        return cls(
            mcp_servers=_parse_entry_map(MCP_SERVERS, data.get(MCP_SERVERS), _parse_server, src),
            allowed_paths=None if allowed is None else _string_list(allowed, ALLOWED_PATHS, src),
            skills=_parse_entry_map(SKILLS, data.get(SKILLS), _parse_skill, src),
            custom_instructions=(
                None if instructions is None else _string_list(instructions, CUSTOM_INSTRUCTIONS, src)
            ),
            unknown={k: copy.deepcopy(v) for k, v in data.items() if k not in KNOWN_SECTIONS},
        )

    # -----------------------------
    # texto/bytes <-> documento
    # -----------------------------
    def to_json(self, *, pretty: bool = True) -> str:
        if pretty:
            return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def to_bytes(self, *, pretty: bool = True) -> bytes:
        return self.to_json(pretty=pretty).encode("utf-8")

    @classmethod
    def from_json(
        cls,
        content: Union[str, bytes],
        *,
        source: Optional[Union[str, Path]] = None,
    ) -> "ConfigDocument":
        """
        Desserializa texto ou bytes UTF-8 em documento.

        Raises:
            InvalidFormatError: JSON malformado (com linha/coluna) ou forma inválida.
        """
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise InvalidFormatError(
                    f"conteúdo não é UTF-8 válido: {exc.reason}",
                    path=source,
                    location=f"byte {exc.start}",
                ) from exc

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise InvalidFormatError(exc.msg, path=source, line=exc.lineno, column=exc.colno) from exc

        return cls.from_dict(data, source=source)


__all__ = [
    "ConfigDocument",
    "KNOWN_SECTIONS",
    "MCP_SERVERS",
    "ALLOWED_PATHS",
    "SKILLS",
    "CUSTOM_INSTRUCTIONS",
]
