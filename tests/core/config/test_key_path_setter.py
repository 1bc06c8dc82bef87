# tests/core/config/test_key_path_setter.py
"""
Testes da mutação por key-path (`set_value_by_path`).
"""

import pytest

from claude_config.core.config.document import ConfigDocument
from claude_config.core.config.key_path import parse_value, set_value_by_path
from claude_config.core.errors import UnsupportedPathError


def test_set_enabled_creates_server_entry():
    doc = ConfigDocument()
    set_value_by_path(doc, "mcpServers.npx.enabled", "false")

    server = doc.mcp_servers["npx"]
    assert server.enabled is False
    assert server.name == "npx"
    assert doc.to_dict()["mcpServers"]["npx"]["enabled"] is False


@pytest.mark.parametrize("raw,expected", [("yes", True), ("TRUE", True), ("1", True), ("no", False), ("0", False), (True, True)])
def test_bool_coercion(raw, expected):
    doc = ConfigDocument()
    set_value_by_path(doc, "mcpServers.x.enabled", raw)
    assert doc.mcp_servers["x"].enabled is expected


def test_args_from_string_are_split_on_whitespace():
    doc = ConfigDocument()
    set_value_by_path(doc, "mcpServers.x.args", "-y  @scope/pkg")
    assert doc.mcp_servers["x"].args == ["-y", "@scope/pkg"]


def test_args_from_json_array():
    doc = ConfigDocument()
    set_value_by_path(doc, "mcpServers.x.args", '["a b", "c"]')
    assert doc.mcp_servers["x"].args == ["a b", "c"]


def test_command_keeps_existing_fields():
    doc = ConfigDocument.from_dict({"mcpServers": {"x": {"enabled": False, "args": ["1"]}}})
    set_value_by_path(doc, "mcpServers.x.command", "node")
    server = doc.mcp_servers["x"]
    assert (server.enabled, server.command, server.args) == (False, "node", ["1"])


def test_allowed_paths_string_becomes_single_item_list():
    doc = ConfigDocument(allowed_paths=["/old"])
    set_value_by_path(doc, "allowedPaths", "/new")
    assert doc.allowed_paths == ["/new"]


def test_custom_instructions_string_is_appended():
    doc = ConfigDocument(custom_instructions=["a"])
    set_value_by_path(doc, "customInstructions", "b")
    assert doc.custom_instructions == ["a", "b"]
    set_value_by_path(doc, "customInstructions", '["z"]')
    assert doc.custom_instructions == ["z"]


def test_skill_parameters_accept_json():
    doc = ConfigDocument()
    set_value_by_path(doc, "skills.review.parameters", '{"depth": 2}')
    assert doc.skills["review"].parameters == {"depth": 2}
    assert doc.skills["review"].enabled is True


def test_unknown_top_level_key_stores_parsed_value():
    doc = ConfigDocument()
    set_value_by_path(doc, "theme", '{"mode": "dark"}')
    set_value_by_path(doc, "label", "plain text")
    assert doc.unknown == {"theme": {"mode": "dark"}, "label": "plain text"}


@pytest.mark.parametrize(
    "key_path",
    [
        "",
        "mcpServers",
        "mcpServers.x",
        "mcpServers.x.env",
        "mcpServers.x.enabled.deep",
        "skills.s",
        "allowedPaths.0",
        "theme.mode",
    ],
)
def test_unsupported_paths(key_path):
    doc = ConfigDocument()
    with pytest.raises(UnsupportedPathError):
        set_value_by_path(doc, key_path, "true")


def test_non_boolean_enabled_is_rejected():
    doc = ConfigDocument()
    with pytest.raises(UnsupportedPathError):
        set_value_by_path(doc, "mcpServers.x.enabled", "[1]")


def test_parse_value_falls_back_to_string():
    assert parse_value("42") == 42
    assert parse_value("not json") == "not json"
    assert parse_value(["already"]) == ["already"]
