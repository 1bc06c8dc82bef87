# src/claude_config/core/manager.py
"""
ConfigManager: fachada de alto nível sobre as camadas global e de projeto.

Combina loader, merge, diff, busca, mutação por key-path, import/export e
escrita atômica com backup em uma API orientada a escopo
(`ConfigScope.GLOBAL` / `ConfigScope.PROJECT`).

Resolução de caminhos:
    - global: `global_config_path` do construtor (default de plataforma)
    - projeto com `project_root`: `<project_root>/.claude/config.json`
    - projeto sem `project_root`: descoberta subindo a partir do cwd
      (`find_project_config`); na escrita, cai para o cwd quando nada é
      encontrado

Decisões arquiteturais:
    - Nenhum estado em cache: toda operação relê o disco
    - Toda escrita passa pelo AtomicWriter (backup → validação → rename)
    - Cada arquivo tem seu próprio Backup Store: o global usa `backup_dir`;
      o de projeto usa `<projeto>/.claude/backups`
    - Camada global ausente é tratada como documento vazio; camada de
      projeto ausente é `None`

Limites explícitos:
    - Read-modify-write concorrente entre processos é last-writer-wins
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from .atomic_write import AtomicWriter, atomic_write_bytes
from .backup import DEFAULT_RETENTION_COUNT, BackupStore
from .config.diff import diff_configs as _diff_configs
from .config.document import ConfigDocument
from .config.key_path import set_value_by_path
from .config.loader import read_config as _read_config
from .config.merge import merge_configs
from .import_export import ImportExportOptions, export_config as _export_config, import_config as _import_config
from . import paths
from .search import ConfigSearcher, SearchOptions, SearchResult
from .settings import ManagerSettings
from .types import BackupRecord, ConfigDiff, ConfigScope, SourceMap


logger = logging.getLogger(__name__)

PathArg = Union[str, Path]


class ConfigManager:
    """Operações de leitura, escrita e consulta sobre as camadas de configuração."""

    def __init__(
        self,
        global_config_path: Optional[PathArg] = None,
        backup_dir: Optional[PathArg] = None,
        retention_count: int = DEFAULT_RETENTION_COUNT,
        *,
        clock: Optional[Callable] = None,
    ) -> None:
        self.global_config_path = Path(global_config_path) if global_config_path else paths.global_config_path()
        self._clock = clock
        self.backup_store = BackupStore(
            Path(backup_dir) if backup_dir else paths.default_backup_dir(),
            retention_count,
            clock=clock,
        )
        self.writer = AtomicWriter(self.backup_store)

    @classmethod
    def from_settings(cls, settings: ManagerSettings, **kwargs) -> "ConfigManager":
        return cls(
            global_config_path=settings.global_config_path,
            backup_dir=settings.backup_dir,
            retention_count=settings.retention_count,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Caminhos
    # ------------------------------------------------------------------
    def config_path_for_scope(
        self,
        scope: ConfigScope,
        project_root: Optional[PathArg] = None,
        *,
        for_write: bool = False,
    ) -> Optional[Path]:
        """
        Caminho do arquivo de configuração de `scope`.

        Para PROJECT sem `project_root`, usa a descoberta a partir do cwd;
        retorna None se nada for encontrado, exceto com `for_write=True`,
        em que o projeto do cwd é assumido.
        """
        scope = ConfigScope(scope)
        if scope is ConfigScope.GLOBAL:
            return self.global_config_path
        if project_root is not None:
            return paths.project_config_path(project_root)
        found = paths.find_project_config()
        if found is None and for_write:
            return paths.project_config_path(Path.cwd())
        return found

    def backup_store_for(self, config_path: PathArg) -> BackupStore:
        """
        Backup Store dono dos backups de `config_path`.

        O arquivo global usa o diretório configurado no construtor; qualquer
        outro arquivo (ex.: configuração de projeto) usa `backups/` ao lado
        dele, de modo que a retenção e a restauração de um escopo nunca
        tocam os backups do outro.
        """
        config_path = Path(config_path)
        if config_path == self.global_config_path:
            return self.backup_store
        return BackupStore(
            config_path.parent / paths.BACKUP_DIRNAME,
            self.backup_store.retention_count,
            clock=self._clock,
        )

    def _writer_for(self, config_path: PathArg) -> AtomicWriter:
        store = self.backup_store_for(config_path)
        if store is self.backup_store:
            return self.writer
        return AtomicWriter(store, validator=self.writer.validator)

    # ------------------------------------------------------------------
    # Leitura / escrita
    # ------------------------------------------------------------------
    def read_config(self, path: PathArg) -> ConfigDocument:
        return _read_config(path)

    def write_config_with_backup(self, path: PathArg, document: ConfigDocument) -> Optional[BackupRecord]:
        return self._writer_for(path).write_with_backup(path, document)

    def get_global_config(self) -> ConfigDocument:
        if not self.global_config_path.exists():
            logger.debug("Configuração global ausente, usando documento vazio: %s", self.global_config_path)
            return ConfigDocument()
        return _read_config(self.global_config_path)

    def get_project_config(self, project_root: Optional[PathArg] = None) -> Optional[ConfigDocument]:
        path = self.config_path_for_scope(ConfigScope.PROJECT, project_root)
        if path is None or not path.exists():
            return None
        return _read_config(path)

    def get_merged_config(self, project_root: Optional[PathArg] = None) -> ConfigDocument:
        """Configuração efetiva: global sobreposta pelo projeto (quando existir)."""
        global_doc = self.get_global_config()
        project_doc = self.get_project_config(project_root)
        if project_doc is None:
            return global_doc
        return merge_configs(global_doc, project_doc)

    def update_global_config(self, document: ConfigDocument) -> Optional[BackupRecord]:
        return self.write_config_with_backup(self.global_config_path, document)

    def update_project_config(
        self,
        document: ConfigDocument,
        project_root: Optional[PathArg] = None,
    ) -> Optional[BackupRecord]:
        path = self.config_path_for_scope(ConfigScope.PROJECT, project_root, for_write=True)
        return self.write_config_with_backup(path, document)

    def load_scope(self, scope: ConfigScope, project_root: Optional[PathArg] = None) -> ConfigDocument:
        """Documento de `scope` para modificação (vazio quando o arquivo não existe)."""
        path = self.config_path_for_scope(scope, project_root, for_write=True)
        if not path.exists():
            return ConfigDocument()
        return _read_config(path)

    def save_scope(
        self,
        scope: ConfigScope,
        document: ConfigDocument,
        project_root: Optional[PathArg] = None,
    ) -> Optional[BackupRecord]:
        path = self.config_path_for_scope(scope, project_root, for_write=True)
        return self.write_config_with_backup(path, document)

    # ------------------------------------------------------------------
    # Consulta
    # ------------------------------------------------------------------
    def diff_configs(self, project_root: Optional[PathArg] = None) -> Tuple[List[ConfigDiff], SourceMap]:
        return _diff_configs(self.get_global_config(), self.get_project_config(project_root))

    def search_config(
        self,
        query: str,
        scope: Optional[ConfigScope] = None,
        options: Optional[SearchOptions] = None,
        project_root: Optional[PathArg] = None,
    ) -> List[SearchResult]:
        """
        Busca `query` no(s) arquivo(s) de `scope`.

        `scope=None` busca na camada global e depois na de projeto. Arquivos
        inexistentes não produzem resultados; arquivos malformados propagam
        `InvalidFormatError`.
        """
        scopes = [ConfigScope.GLOBAL, ConfigScope.PROJECT] if scope is None else [ConfigScope(scope)]
        searcher = ConfigSearcher(options)
        results: List[SearchResult] = []

        for current in scopes:
            path = self.config_path_for_scope(current, project_root)
            if path is None or not path.exists():
                continue
            results.extend(searcher.search(query, _read_config(path), current, path))

        return results

    # ------------------------------------------------------------------
    # Mutação
    # ------------------------------------------------------------------
    def set_value(
        self,
        scope: ConfigScope,
        key_path: str,
        raw_value,
        project_root: Optional[PathArg] = None,
    ) -> ConfigDocument:
        """
        Lê o documento de `scope`, aplica `key_path = raw_value` e grava com backup.

        Raises:
            UnsupportedPathError: key-path não suportado (nada é gravado).
            ValidationFailedError: documento resultante inválido (nada é gravado).
        """
        document = self.load_scope(scope, project_root)
        set_value_by_path(document, key_path, raw_value)
        self.save_scope(scope, document, project_root)
        logger.info("Valor definido em %s: %s", ConfigScope(scope).value, key_path)
        return document

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------
    def export_config(
        self,
        path: PathArg,
        scope: Optional[ConfigScope] = ConfigScope.GLOBAL,
        options: Optional[ImportExportOptions] = None,
        project_root: Optional[PathArg] = None,
    ) -> Path:
        """Exporta o documento de `scope` (ou o efetivo, com `scope=None`) para `path`."""
        if scope is None:
            document = self.get_merged_config(project_root)
        else:
            document = self.load_scope(scope, project_root)
        return _export_config(document, path, options)

    def import_config(
        self,
        path: PathArg,
        scope: ConfigScope = ConfigScope.GLOBAL,
        options: Optional[ImportExportOptions] = None,
        project_root: Optional[PathArg] = None,
    ) -> ConfigDocument:
        """
        Importa `path` e substitui o documento de `scope`.

        Com `options.backup` (default), a escrita cria backup do conteúdo
        anterior; sem ele, o documento é validado e gravado atomicamente.
        """
        options = options or ImportExportOptions()
        document = _import_config(path, options)
        target = self.config_path_for_scope(scope, project_root, for_write=True)

        if options.backup:
            self.write_config_with_backup(target, document)
        else:
            self.writer.validator(document)
            atomic_write_bytes(target, document.to_bytes(pretty=True))
        return document

    # ------------------------------------------------------------------
    # Histórico
    # ------------------------------------------------------------------
    def list_backups(self, scope: ConfigScope, project_root: Optional[PathArg] = None) -> List[BackupRecord]:
        path = self.config_path_for_scope(scope, project_root, for_write=True)
        return self.backup_store_for(path).list_backups(path)

    def restore_backup(
        self,
        backup_path: PathArg,
        scope: Optional[ConfigScope] = None,
        project_root: Optional[PathArg] = None,
    ) -> Path:
        """
        Restaura `backup_path` sobre o arquivo de configuração a que pertence.

        Com `scope`, o destino é o arquivo desse escopo. Sem `scope`, backups
        do diretório global voltam para o arquivo global; os demais voltam
        para `config.json` no pai do seu diretório de backups
        (`<projeto>/.claude/config.json`).
        """
        backup_path = Path(backup_path)
        if scope is not None:
            target = self.config_path_for_scope(scope, project_root, for_write=True)
            return self.backup_store_for(target).restore_backup(backup_path, target=target)
        if backup_path.parent == self.backup_store.backup_dir:
            return self.backup_store.restore_backup(backup_path, target=self.global_config_path)
        return BackupStore(backup_path.parent, clock=self._clock).restore_backup(backup_path)


__all__ = ["ConfigManager"]
