"""
Tests for the ToolRegistry class.
"""

from gemini_collab.core.registry import ToolRegistry
from tests.fixtures import MockTool

EXPECTED_TOOLS = {
    "gemini-query",
    "gemini-brainstorm",
    "gemini-brainstorm-synthesis",
    "gemini-analyze",
    "gemini-summarize",
    "gemini-image-gen",
    "gemini-server-info",
}


class TestToolRegistry:
    """Test the ToolRegistry class."""

    def test_initialization(self):
        registry = ToolRegistry()

        assert registry.list_tools() == []
        assert registry.get_mcp_tool_definitions() == []

    def test_register_and_get_tool(self):
        registry = ToolRegistry()
        tool = MockTool("test-tool")

        assert registry.register_tool(tool) is True
        assert registry.get_tool("test-tool") is tool
        assert registry.get_tool("missing") is None

    def test_duplicate_registration(self, caplog):
        registry = ToolRegistry()
        first = MockTool("test-tool")

        registry.register_tool(first)
        assert registry.register_tool(MockTool("test-tool")) is False

        assert registry.get_tool("test-tool") is first
        assert "already registered" in caplog.text

    def test_mcp_tool_definitions(self):
        registry = ToolRegistry()
        registry.register_tool(MockTool("tool1"))
        registry.register_tool(MockTool("tool2"))

        definitions = registry.get_mcp_tool_definitions()

        assert [d["name"] for d in definitions] == ["tool1", "tool2"]
        assert definitions[0]["description"] == "Test tool tool1"
        assert definitions[0]["inputSchema"] == {"type": "object", "properties": {}}

    def test_discover_tools(self):
        registry = ToolRegistry()

        registry.discover_tools()

        assert set(registry.list_tools()) == EXPECTED_TOOLS
        for definition in registry.get_mcp_tool_definitions():
            assert definition["inputSchema"]["type"] == "object"
            assert definition["description"]

    def test_discover_skips_private_modules(self, tmp_path):
        (tmp_path / "_hidden.py").write_text("raise RuntimeError('should not import')\n")
        (tmp_path / "base.py").write_text("raise RuntimeError('should not import')\n")
        registry = ToolRegistry()

        registry.discover_tools(tmp_path)

        assert registry.list_tools() == []
