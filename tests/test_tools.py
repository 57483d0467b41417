"""Tests for the OpenAI and LangChain tool providers."""

from genfs import VirtualFileSystem, execute_openai_tool, get_openai_tools
from genfs.executor import CommandExecutor
from genfs.tools import LangChainToolProvider, OpenAIToolProvider
from genfs.tools.langchain_tools import execute_langchain_tool, get_langchain_tools


class TestOpenAITools:
    """Test OpenAI function definitions and execution."""

    def test_definitions(self, vfs):
        tools = get_openai_tools(vfs)

        names = [tool["function"]["name"] for tool in tools]
        assert names == ["str_replace_editor", "file_manager"]
        for tool in tools:
            assert tool["type"] == "function"
            assert tool["function"]["parameters"]["required"] == ["command", "path"]

    def test_command_enums(self, vfs):
        editor, manager = get_openai_tools(vfs)

        editor_commands = editor["function"]["parameters"]["properties"]["command"]["enum"]
        manager_commands = manager["function"]["parameters"]["properties"]["command"]["enum"]
        assert editor_commands == ["view", "create", "str_replace", "insert", "undo_edit"]
        assert manager_commands == ["rename", "delete"]

    def test_execute(self, vfs):
        output = execute_openai_tool(
            vfs,
            "str_replace_editor",
            {"command": "create", "path": "/App.jsx", "file_text": "<App/>"},
        )

        assert output == "File created: /App.jsx"
        assert vfs.read_file("/App.jsx") == "<App/>"

    def test_execute_error_text(self, vfs):
        output = execute_openai_tool(vfs, "file_manager", {"command": "delete", "path": "/x"})

        assert output == "Error: File not found: /x"

    def test_unknown_tool(self, vfs):
        output = execute_openai_tool(vfs, "web_search", {})

        assert output.startswith("Error: Unknown tool: web_search")

    def test_provider_shares_executor(self, executor, events):
        provider = OpenAIToolProvider(executor)

        provider.execute_tool(
            "str_replace_editor", {"command": "create", "path": "/a.txt", "file_text": ""}
        )

        assert provider.tool_names == ["str_replace_editor", "file_manager"]
        assert len(events) == 1


class TestLangChainTools:
    """Test LangChain StructuredTool wrappers."""

    def test_tool_names(self, vfs):
        tools = get_langchain_tools(vfs)

        assert [tool.name for tool in tools] == ["str_replace_editor", "file_manager"]
        assert all(tool.description for tool in tools)

    def test_invoke_editor(self, vfs):
        editor, _ = get_langchain_tools(vfs)

        output = editor.invoke({"command": "create", "path": "/a.txt", "file_text": "hi"})

        assert output == "File created: /a.txt"
        assert editor.invoke({"command": "view", "path": "/a.txt"}) == "hi"

    def test_invoke_manager(self, vfs):
        vfs.create_file("/a.txt", "x")
        _, manager = get_langchain_tools(vfs)

        output = manager.invoke({"command": "rename", "path": "/a.txt", "new_path": "/b/a.txt"})

        assert output == "Successfully renamed /a.txt to /b/a.txt"
        assert vfs.read_file("/b/a.txt") == "x"

    def test_missing_field_reported(self, vfs):
        editor, _ = get_langchain_tools(vfs)

        output = editor.invoke({"command": "create", "path": "/a.txt"})

        assert output.startswith("Error: Invalid arguments for str_replace_editor")
        assert "file_text" in output

    def test_insert_at_zero(self, vfs):
        vfs.create_file("/a.txt", "one")
        editor, _ = get_langchain_tools(vfs)

        editor.invoke({"command": "insert", "path": "/a.txt", "insert_line": 0, "new_str": "zero"})

        assert vfs.read_file("/a.txt") == "zero\none"

    def test_tool_definitions(self, executor):
        definitions = LangChainToolProvider(executor).get_tool_definitions()

        assert [d["name"] for d in definitions] == ["str_replace_editor", "file_manager"]

    def test_execute_langchain_tool(self):
        fs = VirtualFileSystem()

        output = execute_langchain_tool(
            fs, "str_replace_editor", {"command": "create", "path": "/x.js", "file_text": ""}
        )

        assert output == "File created: /x.js"


def test_provider_reports_executor_crash(vfs):
    class Exploding(CommandExecutor):
        def execute_text(self, tool_name, arguments):
            raise RuntimeError("boom")

    provider = OpenAIToolProvider(Exploding(vfs))

    assert provider.execute_tool("file_manager", {}) == "Error: Tool execution failed: boom"
