# src/claude_config/core/errors.py
"""
Exceções canônicas do claude_config.

Este módulo define a hierarquia oficial de exceções utilizadas durante a
leitura, validação, merge, backup e escrita da configuração.

Toda exceção é tipada e semântica, carregando:
    - message: mensagem curta e humana (o que falhou e onde)
    - details: dados estruturados para diagnóstico (serializáveis)
    - hint: ação sugerida ao usuário (como corrigir)

Princípios fundamentais:
    - Nenhum erro é engolido silenciosamente
    - Erros de I/O do sistema operacional são encapsulados com contexto
      (operação + caminho) e encadeados via `raise ... from exc`
    - A falha de backup é a única condição que aborta deliberadamente
      uma escrita; não é um crash, é proteção de dados

Invariantes:
    - Todas as exceções herdam de `ConfigError`
    - `str(err)` sempre contém a mensagem e, quando existir, a sugestão
    - `to_payload()` produz uma estrutura serializável com `type` estável

Limites explícitos:
    - Não formata saída para CLI/GUI (responsabilidade dos chamadores)
    - Não realiza fallback ou recovery
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Dict, Optional, Union


PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao usuário (onde/como corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro
# ---------------------------------------------------------------------------

CONFIG_ERROR = "CONFIG_ERROR"
NOT_FOUND = "NOT_FOUND"
INVALID_FORMAT = "INVALID_FORMAT"
VALIDATION_FAILED = "VALIDATION_FAILED"
FILESYSTEM_ERROR = "FILESYSTEM_ERROR"
BACKUP_FAILED = "BACKUP_FAILED"
INVALID_BACKUP_NAME = "INVALID_BACKUP_NAME"
UNSUPPORTED_PATH = "UNSUPPORTED_PATH"
UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
SERVER_ERROR = "SERVER_ERROR"


# ---------------------------------------------------------------------------
# Hierarquia
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """
    Exceção base para todos os erros do claude_config.

    Esta hierarquia permite:
        - captura genérica de qualquer falha de configuração
        - distinção por categoria (subclasses) sem inspecionar mensagens
        - mapeamento determinístico para `ErrorPayload`
    """

    code: str = CONFIG_ERROR

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n\nSugestão: {self.hint}"
        return self.message

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


class NotFoundError(ConfigError):
    """Arquivo referenciado não existe onde sua existência era obrigatória."""

    code = NOT_FOUND

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        super().__init__(
            f"Arquivo de configuração não encontrado: {self.path}",
            details={"path": str(self.path)},
            hint="Crie um novo arquivo de configuração ou informe um caminho válido.",
        )


class InvalidFormatError(ConfigError):
    """
    JSON malformado ou documento estruturalmente inválido.

    A localização é `linha N, coluna M` quando o parser a fornece, ou o
    key-path do campo com formato incompatível (ex.: `mcpServers.npx.args`).
    """

    code = INVALID_FORMAT

    def __init__(
        self,
        detail: str,
        *,
        path: Optional[PathLike] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        location: Optional[str] = None,
    ) -> None:
        self.detail = detail
        self.path = Path(path) if path is not None else None
        self.line = line
        self.column = column
        if location is None and line is not None:
            location = f"linha {line}, coluna {column}"
        self.location = location

        where = f" em {self.path}" if self.path is not None else ""
        at = f" ({location})" if location else ""
        super().__init__(
            f"Formato inválido na configuração{where}{at}: {detail}",
            details={
                "path": str(self.path) if self.path is not None else None,
                "location": location,
                "line": line,
                "column": column,
                "detail": detail,
            },
            hint="Verifique a sintaxe JSON (aspas, vírgulas, chaves) e os tipos de cada seção.",
        )


class ValidationFailedError(ConfigError):
    """Uma regra nomeada do Validator rejeitou o documento."""

    code = VALIDATION_FAILED

    def __init__(self, rule: str, detail: str, suggestion: str) -> None:
        self.rule = rule
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(
            f"Validação da configuração falhou: {rule}\n\nDetalhes: {detail}",
            details={"rule": rule, "detail": detail},
            hint=suggestion,
        )


class FilesystemError(ConfigError):
    """Falha de I/O (permissão, disco cheio, etc.) com operação e caminho."""

    code = FILESYSTEM_ERROR

    def __init__(self, operation: str, path: PathLike, cause: Optional[BaseException] = None) -> None:
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        reason = f"\n\nErro do sistema: {cause}" if cause is not None else ""
        super().__init__(
            f"Erro de filesystem: '{operation}' falhou para {self.path}{reason}",
            details={
                "operation": operation,
                "path": str(self.path),
                "cause": str(cause) if cause is not None else None,
            },
            hint="Verifique as permissões do arquivo e o espaço disponível em disco.",
        )


class BackupFailedError(ConfigError):
    """
    Falha na criação do backup dentro do fluxo de escrita atômica.

    Distinto de `FilesystemError` porque dispara o aborto da escrita:
    nenhum dado pré-existente é sobrescrito sem cópia de segurança.
    """

    code = BACKUP_FAILED

    def __init__(self, path: PathLike, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = f"\n\nErro: {cause}" if cause is not None else ""
        super().__init__(
            f"Falha ao criar backup de {self.path}{reason}",
            details={"path": str(self.path), "cause": str(cause) if cause is not None else None},
            hint=(
                "Garanta espaço em disco e permissão de escrita no diretório de backups. "
                "Operação abortada para proteger seus dados."
            ),
        )


class InvalidBackupNameError(ConfigError):
    """O arquivo a restaurar não segue o padrão `<stem>_<timestamp>.<ext>`."""

    code = INVALID_BACKUP_NAME

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        super().__init__(
            f"Nome de backup inválido: {self.path.name}",
            details={"path": str(self.path)},
            hint="O arquivo de backup deve seguir o padrão <arquivo>_<YYYYMMDD_HHMMSS.mmm>.<ext>.",
        )


class UnsupportedPathError(ConfigError):
    """Key-path de mutação aponta para profundidade/forma não suportada."""

    code = UNSUPPORTED_PATH

    def __init__(self, key_path: str, detail: str, hint: Optional[str] = None) -> None:
        self.key_path = key_path
        self.detail = detail
        super().__init__(
            f"Key-path não suportado '{key_path}': {detail}",
            details={"key_path": key_path, "detail": detail},
            hint=hint or "Use um caminho de campo, ex.: mcpServers.<nome>.enabled.",
        )


class UnsupportedFormatError(ConfigError):
    """Formato de import/export reconhecido mas ainda não implementado."""

    code = UNSUPPORTED_FORMAT

    def __init__(self, fmt: str, path: Optional[PathLike] = None) -> None:
        self.format = fmt
        self.path = Path(path) if path is not None else None
        super().__init__(
            f"Formato {fmt.upper()} ainda não é suportado (not yet supported)",
            details={"format": fmt, "path": str(self.path) if self.path is not None else None},
            hint="Use o formato JSON (.json) ou YAML (.yaml/.yml).",
        )


class ServerError(ConfigError):
    """Operação sobre servidor MCP inválida (inexistente, duplicado, ...)."""

    code = SERVER_ERROR

    def __init__(self, server: str, operation: str, detail: str, hint: Optional[str] = None) -> None:
        self.server = server
        self.operation = operation
        self.detail = detail
        super().__init__(
            f"Servidor MCP '{server}' ({operation}): {detail}",
            details={"server": server, "operation": operation, "detail": detail},
            hint=hint or "Verifique a configuração do servidor e liste os servidores existentes.",
        )


__all__ = [
    "ErrorPayload",
    "ConfigError",
    "NotFoundError",
    "InvalidFormatError",
    "ValidationFailedError",
    "FilesystemError",
    "BackupFailedError",
    "InvalidBackupNameError",
    "UnsupportedPathError",
    "UnsupportedFormatError",
    "ServerError",
    "CONFIG_ERROR",
    "NOT_FOUND",
    "INVALID_FORMAT",
    "VALIDATION_FAILED",
    "FILESYSTEM_ERROR",
    "BACKUP_FAILED",
    "INVALID_BACKUP_NAME",
    "UNSUPPORTED_PATH",
    "UNSUPPORTED_FORMAT",
    "SERVER_ERROR",
]
