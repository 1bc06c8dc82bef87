# tests/core/search/test_search_engine.py
"""
Testes do Search Engine.

Os testes asseguram que:
- chaves são encontradas por substring (sem diferenciar maiúsculas por padrão)
- valores só são comparados com `search_values=True`
- caminhos de array usam `[índice]`
- `max_depth` limita a travessia
- `format()` produz a linha exibível
"""

from pathlib import Path

from claude_config.core.config.document import ConfigDocument
from claude_config.core.search import ConfigSearcher, SearchOptions, ValueType, search
from claude_config.core.types import ConfigScope


def _doc(sample_config_dict):
    return ConfigDocument.from_dict(sample_config_dict)


def test_key_search_finds_server_name():
    doc = ConfigDocument.from_dict({"mcpServers": {"npx": {"enabled": True}}})

    results = search("npx", doc, SearchOptions(search_keys=True, search_values=False))

    assert len(results) == 1
    assert results[0].key_path == "mcpServers.npx"
    assert results[0].value == "<key> npx"
    assert results[0].value_type is ValueType.STRING


def test_key_search_is_case_insensitive_by_default():
    doc = ConfigDocument.from_dict({"mcpServers": {"NPX": {"enabled": True}}})
    assert [r.key_path for r in search("npx", doc)] == ["mcpServers.NPX"]
    assert search("npx", doc, SearchOptions(case_sensitive=True)) == []


def test_values_ignored_unless_enabled(sample_config_dict):
    doc = _doc(sample_config_dict)
    assert search("production", doc) == []

    results = search("production", doc, SearchOptions(search_keys=False, search_values=True))
    assert [r.key_path for r in results] == ["mcpServers.npx.env.NODE_ENV"]
    assert results[0].value == "production"


def test_array_elements_use_index_paths(sample_config_dict):
    doc = _doc(sample_config_dict)
    results = search("server-filesystem", doc, SearchOptions(search_keys=False, search_values=True))
    assert [r.key_path for r in results] == ["mcpServers.npx.args[1]"]


def test_booleans_and_numbers_match_json_text(sample_config_dict):
    doc = _doc(sample_config_dict)
    opts = SearchOptions(search_keys=False, search_values=True)

    bools = search("true", doc, opts)
    assert [(r.key_path, r.value_type) for r in bools] == [("mcpServers.npx.enabled", ValueType.BOOLEAN)]

    numbers = search("2", doc, opts)
    assert [r.key_path for r in numbers] == ["futureField.nested[1]"]
    assert numbers[0].value_type is ValueType.NUMBER


def test_null_is_never_matched():
    doc = ConfigDocument(unknown={"nothing": None})
    assert search("null", doc, SearchOptions(search_keys=False, search_values=True)) == []


def test_max_depth_limits_traversal():
    doc = ConfigDocument.from_dict({"mcpServers": {"npx": {"enabled": True, "command": "npx"}}})

    shallow = search("npx", doc, SearchOptions(search_values=True, max_depth=1))
    assert [r.key_path for r in shallow] == ["mcpServers.npx"]

    assert search("npx", doc, SearchOptions(search_values=True, max_depth=0)) == []
    root_only = search("mcp", doc, SearchOptions(max_depth=0))
    assert [r.key_path for r in root_only] == ["mcpServers"]

    two = search("npx", doc, SearchOptions(search_values=True, max_depth=2))
    assert [r.key_path for r in two] == ["mcpServers.npx"]

    deep = search("npx", doc, SearchOptions(search_values=True, max_depth=3))
    assert [r.key_path for r in deep] == ["mcpServers.npx", "mcpServers.npx.command"]


def test_regex_flag_is_accepted_and_substring_used():
    doc = ConfigDocument(unknown={"a.b": 1})
    results = search("a.b", doc, SearchOptions(regex=True))
    assert [r.key_path for r in results] == ["a.b"]
    assert search("a*", doc, SearchOptions(regex=True)) == []


def test_result_carries_scope_and_path_and_formats():
    doc = ConfigDocument.from_dict({"mcpServers": {"npx": {"enabled": True}}})
    searcher = ConfigSearcher(SearchOptions(search_keys=False, search_values=True))

    results = searcher.search("true", doc, ConfigScope.PROJECT, "/p/.claude/config.json")

    assert results[0].source is ConfigScope.PROJECT
    assert results[0].config_path == Path("/p/.claude/config.json")
    assert results[0].format() == "PROJECT: mcpServers.npx.enabled = true (bool)"
