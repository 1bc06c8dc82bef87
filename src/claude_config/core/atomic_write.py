# src/claude_config/core/atomic_write.py
"""
Atomic Writer: escrita protegida por backup e validação.

Fluxo de `write_with_backup(path, document)`:
    1. Se `path` existe, cria backup; qualquer falha → `BackupFailedError`
       (a escrita é abortada: nunca se grava sem cópia dos dados existentes)
    2. Valida o documento; primeira regra que falha → `ValidationFailedError`
    3. Serializa em JSON indentado
    4. Garante o diretório pai
    5. Grava em arquivo temporário irmão (`<nome>.tmp`), com flush + fsync
    6. Renomeia o temporário sobre `path` (`os.replace`, atômico no mesmo volume)
    7. Falha no rename → remove o temporário e levanta `FilesystemError`
    8. Aplica a retenção de backups do arquivo

Garantia:
    Antes do passo 6 concluir, o alvo contém o conteúdo antigo ou não
    existe; uma queda no meio do processo não deixa documento truncado
    em `path`.

Limites explícitos:
    - Read-modify-write concorrente entre processos é last-writer-wins
    - Falha na retenção (passo 8) ocorre após a escrita já confirmada
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from .backup import BackupStore
from .config.document import ConfigDocument
from .config.validation import validate_config
from .errors import BackupFailedError, ConfigError, FilesystemError, InvalidFormatError
from .types import BackupRecord


logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def temp_path_for(target: Path) -> Path:
    """Caminho do arquivo temporário irmão usado na escrita atômica."""
    return target.with_name(target.name + TEMP_SUFFIX)


def _discard(temp: Path) -> None:
    try:
        temp.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Não foi possível remover o temporário %s: %s", temp, exc)


def atomic_write_bytes(target: Union[str, Path], data: bytes) -> None:
    """
    Grava `data` em `target` via arquivo temporário + rename.

    Raises:
        FilesystemError: falha ao criar diretório, gravar o temporário ou renomear.
    """
    target = Path(target)
    parent = target.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError("create config directory", parent, exc) from exc

    temp = temp_path_for(target)
    try:
        with open(temp, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
    except OSError as exc:
        _discard(temp)
        raise FilesystemError("write temp file", temp, exc) from exc

    try:
        os.replace(temp, target)
    except OSError as exc:
        _discard(temp)
        raise FilesystemError("atomic rename (temp to config)", target, exc) from exc


class AtomicWriter:
    """Escreve documentos de configuração com backup prévio e validação."""

    def __init__(
        self,
        backup_store: BackupStore,
        *,
        validator: Callable[[ConfigDocument], None] = validate_config,
        enforce_retention: bool = True,
    ) -> None:
        self.backup_store = backup_store
        self.validator = validator
        self.enforce_retention = enforce_retention

    def write_with_backup(self, path: Union[str, Path], document: ConfigDocument) -> Optional[BackupRecord]:
        """
        Persiste `document` em `path` de forma atômica.

        Returns:
            O backup criado para o conteúdo anterior, ou None quando `path`
            ainda não existia.

        Raises:
            BackupFailedError: backup do arquivo existente falhou (escrita abortada).
            ValidationFailedError: documento rejeitado por uma regra.
            InvalidFormatError: documento contém valores não serializáveis em JSON.
            FilesystemError: falha de I/O na escrita ou no rename.
        """
        path = Path(path)

        record: Optional[BackupRecord] = None
        if path.exists():
            logger.debug("Criando backup antes de gravar: %s", path)
            try:
                record = self.backup_store.create_backup(path)
            except (ConfigError, OSError) as exc:
                raise BackupFailedError(path, exc) from exc

        self.validator(document)

        try:
            payload = document.to_bytes(pretty=True)
        except (TypeError, ValueError) as exc:
            raise InvalidFormatError(f"documento não serializável em JSON: {exc}", path=path) from exc

        atomic_write_bytes(path, payload)
        logger.info("Configuração gravada em %s", path)

        if record is not None and self.enforce_retention:
            removed = self.backup_store.cleanup_old_backups(path)
            if removed:
                logger.debug("Retenção aplicada a %s: %d backup(s) removido(s)", path, removed)

        return record


__all__ = ["AtomicWriter", "atomic_write_bytes", "temp_path_for", "TEMP_SUFFIX"]
