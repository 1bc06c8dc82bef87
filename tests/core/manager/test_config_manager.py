# tests/core/manager/test_config_manager.py
"""
Testes de integração do ConfigManager (camadas global e de projeto).

Este módulo valida o fluxo completo ler → mesclar/comparar/buscar →
modificar → gravar com backup, sempre sob `tmp_path`.

Decisões arquiteturais:
    - Caminhos globais e de backup são injetados (nunca o HOME real)
    - A descoberta de projeto é exercitada via `monkeypatch.chdir`
      dentro de um diretório com `.git` (limite da busca)

Invariantes:
    - Cada escrita sobre arquivo existente produz exatamente um backup
    - Documentos inválidos nunca chegam ao disco
"""

import json
from pathlib import Path

import pytest

try:
    from claude_config.core.config.document import ConfigDocument
    from claude_config.core.errors import InvalidFormatError, UnsupportedPathError, ValidationFailedError
    from claude_config.core.import_export import ImportExportOptions
    from claude_config.core.manager import ConfigManager
    from claude_config.core.search import SearchOptions
    from claude_config.core.settings import ManagerSettings
    from claude_config.core.types import ConfigScope, Modified
except Exception as e:  # noqa: BLE001
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o ConfigManager e suas dependências estejam disponíveis.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing manager modules. Implement:\n"
            "- src/claude_config/core/manager.py (ConfigManager)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_missing_global_is_empty_document(manager):
    _require_imports()
    assert manager.get_global_config() == ConfigDocument()


def test_missing_project_is_none(manager, workspace):
    _require_imports()
    assert manager.get_project_config(workspace["project_root"]) is None


def test_merged_config_project_overrides_global(manager, workspace, write_json):
    """
    Cenário de referência: o projeto desabilita o servidor `npx` do global.
    """
    _require_imports()
    write_json(
        workspace["global_path"],
        {"mcpServers": {"npx": {"enabled": True, "command": "npx"}}, "allowedPaths": ["~/projects"]},
    )
    write_json(workspace["project_path"], {"mcpServers": {"npx": {"enabled": False}}})

    merged = manager.get_merged_config(workspace["project_root"])

    assert merged.mcp_servers["npx"].enabled is False
    assert merged.mcp_servers["npx"].command is None
    assert merged.allowed_paths == ["~/projects"]


def test_merged_config_without_project_is_global(manager, workspace, write_json):
    _require_imports()
    write_json(workspace["global_path"], {"allowedPaths": ["/g"]})
    assert manager.get_merged_config(workspace["project_root"]).allowed_paths == ["/g"]


def test_diff_configs_attributes_sources(manager, workspace, write_json):
    _require_imports()
    write_json(workspace["global_path"], {"allowedPaths": ["/a"]})
    write_json(workspace["project_path"], {"allowedPaths": ["/a", "/b"], "customInstructions": ["x"]})

    diffs, sources = manager.diff_configs(workspace["project_root"])

    assert diffs[0] == Modified(path="allowedPaths", old=["/a"], new=["/a", "/b"])
    assert diffs[1].kind == "added"
    assert sources.is_project("customInstructions")


def test_project_discovery_from_cwd(manager, workspace, write_json, monkeypatch):
    _require_imports()
    write_json(workspace["project_path"], {"allowedPaths": ["/p"]})
    nested = workspace["project_root"] / "src"
    nested.mkdir()
    monkeypatch.chdir(nested)

    doc = manager.get_project_config()
    assert doc is not None
    assert doc.allowed_paths == ["/p"]


def test_update_global_creates_backup_on_second_write(manager, workspace):
    _require_imports()
    assert manager.update_global_config(ConfigDocument(allowed_paths=["/1"])) is None
    record = manager.update_global_config(ConfigDocument(allowed_paths=["/2"]))

    assert record is not None
    assert json.loads(record.path.read_text(encoding="utf-8")) == {"allowedPaths": ["/1"]}
    assert manager.get_global_config().allowed_paths == ["/2"]
    assert len(manager.list_backups(ConfigScope.GLOBAL)) == 1


def test_update_project_config_writes_under_dot_claude(manager, workspace):
    _require_imports()
    manager.update_project_config(ConfigDocument(allowed_paths=["/p"]), workspace["project_root"])
    assert json.loads(workspace["project_path"].read_text(encoding="utf-8")) == {"allowedPaths": ["/p"]}


def test_set_value_disables_server(manager, workspace):
    """
    Cenário de referência: `mcpServers.npx.enabled = false` em documento vazio.
    """
    _require_imports()
    doc = manager.set_value(ConfigScope.GLOBAL, "mcpServers.npx.enabled", "false")

    on_disk = json.loads(workspace["global_path"].read_text(encoding="utf-8"))
    assert on_disk["mcpServers"]["npx"]["enabled"] is False
    assert doc.mcp_servers["npx"].enabled is False


def test_set_value_unsupported_path_writes_nothing(manager, workspace):
    _require_imports()
    with pytest.raises(UnsupportedPathError):
        manager.set_value(ConfigScope.GLOBAL, "mcpServers.npx", "{}")
    assert not workspace["global_path"].exists()


def test_set_value_invalid_result_writes_nothing(manager, workspace, write_json):
    _require_imports()
    write_json(workspace["global_path"], {"allowedPaths": ["/ok"]})
    before = workspace["global_path"].read_bytes()

    with pytest.raises(ValidationFailedError):
        manager.set_value(ConfigScope.GLOBAL, "allowedPaths", '[""]')

    assert workspace["global_path"].read_bytes() == before


def test_search_config_covers_both_scopes(manager, workspace, write_json):
    _require_imports()
    write_json(workspace["global_path"], {"mcpServers": {"npx": {"enabled": True}}})
    write_json(workspace["project_path"], {"mcpServers": {"npx-local": {"enabled": True}}})

    results = manager.search_config("npx", project_root=workspace["project_root"])

    assert [(r.source, r.key_path) for r in results] == [
        (ConfigScope.GLOBAL, "mcpServers.npx"),
        (ConfigScope.PROJECT, "mcpServers.npx-local"),
    ]
    assert results[1].config_path == workspace["project_path"]

    only_global = manager.search_config("npx", ConfigScope.GLOBAL, SearchOptions())
    assert len(only_global) == 1


def test_search_config_propagates_malformed_file(manager, workspace):
    _require_imports()
    workspace["global_path"].parent.mkdir(parents=True)
    workspace["global_path"].write_text("{broken", encoding="utf-8")
    with pytest.raises(InvalidFormatError):
        manager.search_config("x", ConfigScope.GLOBAL)


def test_export_and_import_between_scopes(manager, workspace, write_json, tmp_path):
    _require_imports()
    write_json(workspace["global_path"], {"allowedPaths": ["/g"], "theme": "dark"})

    exported = manager.export_config(tmp_path / "export.yaml", ConfigScope.GLOBAL)
    imported = manager.import_config(exported, ConfigScope.PROJECT, project_root=workspace["project_root"])

    assert imported.unknown == {"theme": "dark"}
    assert manager.get_project_config(workspace["project_root"]) == manager.get_global_config()


def test_import_without_backup_option(manager, workspace, write_json, tmp_path):
    _require_imports()
    write_json(workspace["global_path"], {"allowedPaths": ["/old"]})
    source = write_json(tmp_path / "in.json", {"allowedPaths": ["/new"]})

    manager.import_config(source, ConfigScope.GLOBAL, ImportExportOptions(backup=False))

    assert manager.get_global_config().allowed_paths == ["/new"]
    assert manager.list_backups(ConfigScope.GLOBAL) == []


def test_restore_backup_returns_previous_global(manager, workspace):
    _require_imports()
    manager.update_global_config(ConfigDocument(allowed_paths=["/1"]))
    record = manager.update_global_config(ConfigDocument(allowed_paths=["/2"]))

    restored = manager.restore_backup(record.path)

    assert restored == workspace["global_path"]
    assert manager.get_global_config().allowed_paths == ["/1"]


def test_from_settings(workspace):
    _require_imports()
    settings = ManagerSettings(
        global_config_path=workspace["global_path"],
        backup_dir=workspace["backup_dir"],
        retention_count=3,
    )
    mgr = ConfigManager.from_settings(settings)
    assert mgr.global_config_path == workspace["global_path"]
    assert mgr.backup_store.retention_count == 3
    assert mgr.config_path_for_scope(ConfigScope.PROJECT, "/p") == Path("/p/.claude/config.json")


def test_project_backups_live_beside_project_config(manager, workspace):
    _require_imports()
    root = workspace["project_root"]
    manager.update_global_config(ConfigDocument(allowed_paths=["/g"]))
    manager.update_project_config(ConfigDocument(allowed_paths=["/p1"]), root)
    record = manager.update_project_config(ConfigDocument(allowed_paths=["/p2"]), root)

    assert record.path.parent == root / ".claude" / "backups"
    assert manager.list_backups(ConfigScope.GLOBAL) == []
    assert [r.path for r in manager.list_backups(ConfigScope.PROJECT, root)] == [record.path]


def test_restore_project_backup_keeps_global(manager, workspace):
    """
    Restaurar um backup de projeto grava no arquivo do projeto.

    Invariantes:
        - O arquivo global permanece intacto
        - Sem `scope`, o destino vem do diretório do backup
    """
    _require_imports()
    root = workspace["project_root"]
    manager.update_global_config(ConfigDocument(allowed_paths=["/g"]))
    manager.update_project_config(ConfigDocument(allowed_paths=["/p1"]), root)
    record = manager.update_project_config(ConfigDocument(allowed_paths=["/p2"]), root)

    restored = manager.restore_backup(record.path)

    assert restored == workspace["project_path"]
    assert manager.get_project_config(root).allowed_paths == ["/p1"]
    assert manager.get_global_config().allowed_paths == ["/g"]


def test_restore_with_explicit_scope(manager, workspace):
    _require_imports()
    root = workspace["project_root"]
    manager.update_project_config(ConfigDocument(allowed_paths=["/p1"]), root)
    record = manager.update_project_config(ConfigDocument(allowed_paths=["/p2"]), root)

    restored = manager.restore_backup(record.path, ConfigScope.PROJECT, root)

    assert restored == workspace["project_path"]
    assert manager.get_project_config(root).allowed_paths == ["/p1"]
    assert not workspace["global_path"].exists()


def test_project_writes_do_not_prune_global_backups(workspace, fake_clock):
    _require_imports()
    root = workspace["project_root"]
    mgr = ConfigManager(
        global_config_path=workspace["global_path"],
        backup_dir=workspace["backup_dir"],
        retention_count=2,
        clock=fake_clock,
    )
    for idx in range(3):
        mgr.update_global_config(ConfigDocument(allowed_paths=[f"/g{idx}"]))
    for idx in range(3):
        mgr.update_project_config(ConfigDocument(allowed_paths=[f"/p{idx}"]), root)

    global_backups = mgr.list_backups(ConfigScope.GLOBAL)
    contents = [json.loads(r.path.read_text(encoding="utf-8"))["allowedPaths"] for r in global_backups]
    assert contents == [["/g1"], ["/g0"]]
    assert len(mgr.list_backups(ConfigScope.PROJECT, root)) == 2


def test_import_blank_json_leaves_target_untouched(manager, workspace, write_json, tmp_path):
    _require_imports()
    write_json(workspace["global_path"], {"allowedPaths": ["/keep"]})
    blank = tmp_path / "blank.json"
    blank.write_text("", encoding="utf-8")

    with pytest.raises(InvalidFormatError):
        manager.import_config(blank, ConfigScope.GLOBAL)

    assert manager.get_global_config().allowed_paths == ["/keep"]
    assert manager.list_backups(ConfigScope.GLOBAL) == []
