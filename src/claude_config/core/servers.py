# src/claude_config/core/servers.py
"""
ServerManager: CRUD de servidores MCP sobre uma camada de configuração.

Cada operação de escrita relê o documento do escopo, aplica a mudança e
grava via `ConfigManager.write_config_with_backup` (backup → validação →
rename atômico).

Invariantes:
    - Nomes são normalizados com `strip()`; nome vazio é rejeitado
    - Adicionar um nome existente falha (use remoção ou `set_value`)
    - Remover o último servidor remove a seção `mcpServers` do documento
    - Servidor inexistente gera `ServerError` listando os disponíveis
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import ServerError, ValidationFailedError
from .manager import ConfigManager
from .types import ConfigScope, ServerEntry


logger = logging.getLogger(__name__)

PathArg = Union[str, Path]


def _available(servers: Optional[Dict[str, ServerEntry]]) -> str:
    names = sorted(servers or {})
    return ", ".join(names) if names else "(nenhum)"


def _not_found(name: str, operation: str, servers: Optional[Dict[str, ServerEntry]]) -> ServerError:
    return ServerError(
        name,
        operation,
        f"servidor não encontrado. Disponíveis: {_available(servers)}",
        hint="Use list_servers para ver os nomes configurados",
    )


class ServerManager:
    """Gerencia a seção `mcpServers` de um escopo."""

    def __init__(self, config_manager: ConfigManager) -> None:
        self.config_manager = config_manager

    def list_servers(
        self,
        scope: ConfigScope = ConfigScope.GLOBAL,
        project_root: Optional[PathArg] = None,
    ) -> Dict[str, ServerEntry]:
        document = self.config_manager.load_scope(scope, project_root)
        return dict(document.mcp_servers or {})

    def get_server(
        self,
        name: str,
        scope: ConfigScope = ConfigScope.GLOBAL,
        project_root: Optional[PathArg] = None,
    ) -> ServerEntry:
        servers = self.list_servers(scope, project_root)
        if name not in servers:
            raise _not_found(name, "get", servers)
        return servers[name]

    def add_server(
        self,
        name: str,
        server: ServerEntry,
        scope: ConfigScope = ConfigScope.GLOBAL,
        project_root: Optional[PathArg] = None,
    ) -> ServerEntry:
        """
        Adiciona `server` sob `name`.

        Raises:
            ValidationFailedError: nome vazio.
            ServerError: nome já existente.
        """
        name = name.strip()
        if not name:
            raise ValidationFailedError(
                "ServerNameRule",
                "nome do servidor MCP não pode ser vazio",
                "Informe um nome não vazio, ex.: 'filesystem'",
            )

        document = self.config_manager.load_scope(scope, project_root)
        if document.mcp_servers and name in document.mcp_servers:
            raise ServerError(
                name,
                "add",
                "servidor já existe (already exists)",
                hint="Remova o servidor antes ou use set_value para alterá-lo",
            )

        document.with_server(name, server)
        self.config_manager.save_scope(scope, document, project_root)
        logger.info("Servidor MCP '%s' adicionado (%s)", name, ConfigScope(scope).value)
        return server

    def remove_server(
        self,
        name: str,
        scope: ConfigScope = ConfigScope.GLOBAL,
        project_root: Optional[PathArg] = None,
    ) -> None:
        document = self.config_manager.load_scope(scope, project_root)
        servers = document.mcp_servers
        if not servers or name not in servers:
            raise _not_found(name, "remove", servers)

        del servers[name]
        if not servers:
            document.mcp_servers = None

        self.config_manager.save_scope(scope, document, project_root)
        logger.info("Servidor MCP '%s' removido (%s)", name, ConfigScope(scope).value)

    def enable_server(
        self,
        name: str,
        scope: ConfigScope = ConfigScope.GLOBAL,
        project_root: Optional[PathArg] = None,
    ) -> None:
        self._set_enabled(name, True, scope, project_root)

    def disable_server(
        self,
        name: str,
        scope: ConfigScope = ConfigScope.GLOBAL,
        project_root: Optional[PathArg] = None,
    ) -> None:
        self._set_enabled(name, False, scope, project_root)

    def _set_enabled(
        self,
        name: str,
        enabled: bool,
        scope: ConfigScope,
        project_root: Optional[PathArg],
    ) -> None:
        operation = "enable" if enabled else "disable"
        document = self.config_manager.load_scope(scope, project_root)
        servers = document.mcp_servers
        if not servers or name not in servers:
            raise _not_found(name, operation, servers)

        if enabled:
            servers[name].enable()
        else:
            servers[name].disable()

        self.config_manager.save_scope(scope, document, project_root)
        logger.info("Servidor MCP '%s' %s (%s)", name, "habilitado" if enabled else "desabilitado", ConfigScope(scope).value)


__all__ = ["ServerManager"]
