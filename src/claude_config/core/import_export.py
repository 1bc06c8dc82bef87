# src/claude_config/core/import_export.py
"""
Importação e exportação de documentos de configuração.

O formato é escolhido pela extensão do arquivo:
    - `.json`          → JSON (indentado por padrão)
    - `.yaml` / `.yml` → YAML (PyYAML `safe_dump` / `safe_load`)
    - `.toml`          → reservado; sempre `UnsupportedFormatError`
    - outra extensão   → formato declarado em `ImportExportOptions.format`

Invariantes:
    - O documento exportado e o importado têm a mesma forma em qualquer
      formato suportado (projeção JSON do ConfigDocument)
    - A importação valida o documento por padrão (`validate=True`)
    - A exportação grava de forma atômica (temporário + rename)

Limites explícitos:
    - Exportar não cria backup do arquivo de destino; o fluxo com backup
      é `ConfigManager.write_config_with_backup`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml  # PyYAML

from .atomic_write import atomic_write_bytes
from .config.document import ConfigDocument
from .config.loader import parse_mapping
from .config.validation import validate_config
from .errors import FilesystemError, InvalidFormatError, NotFoundError, UnsupportedFormatError


logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    TOML = "toml"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Optional["ExportFormat"]:
        """Formato correspondente à extensão de `path`, ou None se desconhecida."""
        suffix = Path(path).suffix.lower().lstrip(".")
        if suffix == "yml":
            return cls.YAML
        try:
            return cls(suffix)
        except ValueError:
            return None


@dataclass(frozen=True)
class ImportExportOptions:
    """
    Opções de importação/exportação.

    `backup` é mantido para os chamadores que gravam o documento importado
    via ConfigManager (que decide se cria backup); este módulo não o usa.
    """

    format: ExportFormat = ExportFormat.JSON
    validate: bool = True
    backup: bool = True
    pretty: bool = True


def _resolve_format(path: Path, options: ImportExportOptions) -> ExportFormat:
    fmt = ExportFormat.from_path(path) or options.format
    if fmt is ExportFormat.TOML:
        raise UnsupportedFormatError(fmt.value, path)
    return fmt


def _serialize(document: ConfigDocument, fmt: ExportFormat, pretty: bool) -> str:
    if fmt is ExportFormat.YAML:
        return yaml.safe_dump(
            document.to_dict(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    return document.to_json(pretty=pretty)


def export_config(
    document: ConfigDocument,
    path: Union[str, Path],
    options: Optional[ImportExportOptions] = None,
) -> Path:
    """
    Exporta `document` para `path`.

    Returns:
        Path: o caminho gravado.

    Raises:
        UnsupportedFormatError: formato TOML.
        InvalidFormatError: documento não serializável.
        FilesystemError: falha de I/O.
    """
    options = options or ImportExportOptions()
    path = Path(path)
    fmt = _resolve_format(path, options)

    try:
        content = _serialize(document, fmt, options.pretty)
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise InvalidFormatError(f"falha ao serializar documento: {exc}", path=path) from exc

    atomic_write_bytes(path, content.encode("utf-8"))
    logger.info("Configuração exportada para %s (%s)", path, fmt.value)
    return path


def import_config(
    path: Union[str, Path],
    options: Optional[ImportExportOptions] = None,
) -> ConfigDocument:
    """
    Importa um documento de `path`.

    Raises:
        NotFoundError: arquivo inexistente.
        UnsupportedFormatError: formato TOML.
        InvalidFormatError: conteúdo malformado ou com forma incompatível.
        ValidationFailedError: documento rejeitado (quando `validate=True`).
        FilesystemError: falha de leitura.
    """
    options = options or ImportExportOptions()
    path = Path(path)
    if not path.exists():
        raise NotFoundError(path)

    fmt = _resolve_format(path, options)

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidFormatError(f"conteúdo não é UTF-8 válido: {exc.reason}", path=path) from exc
    except OSError as exc:
        raise FilesystemError("read import file", path, exc) from exc

    data = parse_mapping(content, fmt=fmt.value, source=path)
    document = ConfigDocument.from_dict(data, source=path)

    if options.validate:
        validate_config(document)

    logger.info("Configuração importada de %s (%s)", path, fmt.value)
    return document


__all__ = ["ExportFormat", "ImportExportOptions", "export_config", "import_config"]
