# src/claude_config/core/backup.py
"""
Backup Store: snapshots com timestamp dos arquivos de configuração.

Este módulo cria, lista, poda (retenção) e restaura cópias de segurança
byte a byte de um arquivo de configuração.

Convenção de nomes:
    <stem>_<YYYYMMDD_HHMMSS.mmm>.<ext>    (timestamp UTC, milissegundos)
    ex.: config_20250120_123456.789.json

Decisões arquiteturais:
    - O Backup Store é dono exclusivo do conteúdo do diretório de backups
      para um arquivo original, identificado pelo prefixo `<stem>_`
    - O relógio é injetável (testes determinísticos); default UTC atual
    - A data de criação de um backup é lida do próprio nome; o mtime do
      arquivo é usado apenas quando o nome não traz timestamp parseável
    - Colisão de nome (mesmo milissegundo) avança o timestamp em 1 ms até
      encontrar um nome livre; um backup nunca sobrescreve outro

Invariantes:
    - A origem nunca é modificada
    - `list_backups` ordena do mais novo para o mais antigo
    - Falhas de remoção na poda são propagadas (`FilesystemError`)

Limites explícitos:
    - Não serializa chamadas concorrentes entre processos; chamadores que
      precisam de ordenação estrita devem serializar por arquivo
"""

from __future__ import annotations

import logging
import re
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List, Optional, Union

from .errors import FilesystemError, InvalidBackupNameError, NotFoundError
from .types import BackupRecord


logger = logging.getLogger(__name__)

DEFAULT_RETENTION_COUNT = 10

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# stem completo de um backup: <stem original>_<YYYYMMDD_HHMMSS.mmm>
_BACKUP_STEM_RE = re.compile(r"^(?P<stem>.+?)_(?P<ts>\d{8}_\d{6}\.\d{3})$")


Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """Formata `ts` (normalizado para UTC) como `YYYYMMDD_HHMMSS.mmm`."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return f"{ts.strftime(TIMESTAMP_FORMAT)}.{ts.microsecond // 1000:03d}"


def parse_timestamp(text: str) -> Optional[datetime]:
    """Inverso de `format_timestamp`; None quando o texto não segue o padrão."""
    try:
        base, millis = text.split(".")
        ts = datetime.strptime(base, TIMESTAMP_FORMAT)
        return ts.replace(microsecond=int(millis) * 1000, tzinfo=timezone.utc)
    except ValueError:
        return None


class BackupStore:
    """Store de backups para arquivos de configuração (retenção default: 10)."""

    def __init__(
        self,
        backup_dir: Union[str, Path],
        retention_count: int = DEFAULT_RETENTION_COUNT,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        if retention_count < 0:
            raise ValueError(f"retention_count deve ser >= 0, recebido: {retention_count}")
        self.backup_dir = Path(backup_dir)
        self.retention_count = retention_count
        self._clock: Clock = clock or _utc_now

    # ------------------------------------------------------------------
    # Criação
    # ------------------------------------------------------------------
    def _backup_path_for(self, file_path: Path) -> Path:
        stem = file_path.stem or "config"
        ext = file_path.suffix or ".json"
        ts = self._clock()
        candidate = self.backup_dir / f"{stem}_{format_timestamp(ts)}{ext}"
        while candidate.exists():
            ts = ts + timedelta(milliseconds=1)
            candidate = self.backup_dir / f"{stem}_{format_timestamp(ts)}{ext}"
        return candidate

    def create_backup(self, file_path: Union[str, Path]) -> BackupRecord:
        """
        Copia `file_path` para o diretório de backups.

        Raises:
            NotFoundError: se `file_path` não existir.
            FilesystemError: falha ao criar o diretório ou copiar.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise NotFoundError(file_path)

        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError("create backup directory", self.backup_dir, exc) from exc

        backup_path = self._backup_path_for(file_path)
        try:
            shutil.copyfile(file_path, backup_path)
            size = backup_path.stat().st_size
        except OSError as exc:
            raise FilesystemError("copy file to backup", file_path, exc) from exc

        created_at = parse_timestamp(_BACKUP_STEM_RE.match(backup_path.stem).group("ts"))
        logger.debug("Backup criado: %s -> %s", file_path, backup_path)

        return BackupRecord(
            path=backup_path,
            original_path=file_path,
            created_at=created_at,
            size_bytes=size,
        )

    # ------------------------------------------------------------------
    # Listagem / retenção
    # ------------------------------------------------------------------
    def list_backups(self, original_file: Union[str, Path]) -> List[BackupRecord]:
        """
        Lista backups de `original_file`, do mais novo para o mais antigo.

        Retorna lista vazia se o diretório ou os arquivos não existirem.
        """
        original_file = Path(original_file)
        if not self.backup_dir.exists():
            return []

        prefix = f"{original_file.stem or 'config'}_"
        records: List[BackupRecord] = []

        try:
            entries = sorted(self.backup_dir.iterdir())
        except OSError as exc:
            raise FilesystemError("read backup directory", self.backup_dir, exc) from exc

        for entry in entries:
            if not entry.name.startswith(prefix) or not entry.is_file():
                continue
            try:
                stat = entry.stat()
            except OSError as exc:
                raise FilesystemError("read backup entry", entry, exc) from exc

            match = _BACKUP_STEM_RE.match(entry.stem)
            created_at = parse_timestamp(match.group("ts")) if match else None
            if created_at is None:
                created_at = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)

            records.append(
                BackupRecord(
                    path=entry,
                    original_path=original_file,
                    created_at=created_at,
                    size_bytes=stat.st_size,
                )
            )

        records.sort(key=lambda r: (r.created_at, r.path.name), reverse=True)
        return records

    def cleanup_old_backups(
        self,
        original_file: Union[str, Path],
        retention_count: Optional[int] = None,
    ) -> int:
        """
        Mantém os `retention_count` backups mais recentes e remove o resto.

        Returns:
            int: quantidade removida (0 se dentro do limite).

        Raises:
            FilesystemError: falha ao remover um backup (poda parcial possível).
        """
        keep = self.retention_count if retention_count is None else retention_count
        backups = self.list_backups(original_file)
        if len(backups) <= keep:
            return 0

        removed = 0
        for record in backups[keep:]:
            try:
                record.path.unlink()
            except OSError as exc:
                raise FilesystemError("remove old backup", record.path, exc) from exc
            logger.debug("Backup antigo removido: %s", record.path)
            removed += 1
        return removed

    # ------------------------------------------------------------------
    # Restauração
    # ------------------------------------------------------------------
    def restore_backup(
        self,
        backup_path: Union[str, Path],
        *,
        target: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Restaura um backup para o caminho original derivado do nome.

        O stem original é a parte do nome antes do primeiro `_`; o diretório
        original é o pai do diretório de backups. Atenção: um original cujo
        stem já contém `_` não é reconstruído (backups de `my_config.json`
        voltam para `my.json`); nesses casos informe `target` explicitamente.

        Args:
            backup_path: arquivo de backup `<stem>_<timestamp>.<ext>`.
            target: destino da restauração; quando omitido, é derivado do nome.

        Raises:
            NotFoundError: se o backup não existir.
            InvalidBackupNameError: nome fora do padrão `<stem>_<timestamp>.<ext>`.
            FilesystemError: falha ao criar diretórios ou copiar.
        """
        backup_path = Path(backup_path)
        if not backup_path.exists():
            raise NotFoundError(backup_path)

        if not backup_path.suffix or not _BACKUP_STEM_RE.match(backup_path.stem):
            raise InvalidBackupNameError(backup_path)

        if target is not None:
            original_file = Path(target)
        else:
            original_stem = backup_path.name.split("_", 1)[0]
            original_file = self.backup_dir.parent / f"{original_stem}{backup_path.suffix}"

        try:
            original_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError("create parent directory", original_file.parent, exc) from exc

        try:
            shutil.copyfile(backup_path, original_file)
        except OSError as exc:
            raise FilesystemError("restore backup", original_file, exc) from exc

        logger.info("Backup restaurado: %s -> %s", backup_path, original_file)
        return original_file


__all__ = [
    "BackupStore",
    "DEFAULT_RETENTION_COUNT",
    "format_timestamp",
    "parse_timestamp",
]
