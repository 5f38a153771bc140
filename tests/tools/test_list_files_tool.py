#!/usr/bin/env python3
"""
Unit тесты для list_files_tool.py
"""

import os

import pytest

from sandbox_fs_mcp.models.session import NavigationContext
from sandbox_fs_mcp.tools.list_files_tool import ListFilesTool


class TestListFilesTool:
    """Тесты для ListFilesTool"""

    @pytest.fixture
    def list_tool(self):
        """Создает экземпляр ListFilesTool"""
        return ListFilesTool()

    @pytest.fixture
    def project_root(self, tmp_path):
        """Создает проект: .git/, src/app.ts, src/app.js, README.md"""
        root = tmp_path.resolve() / "proj"
        (root / ".git").mkdir(parents=True)
        (root / "src").mkdir()
        (root / "src" / "app.ts").write_text("let x = 1;")
        (root / "src" / "app.js").write_text("var x = 1;")
        (root / "README.md").write_text("# proj")
        return root

    @pytest.fixture
    def nav_context(self, project_root):
        """Создает NavigationContext с корнем в проекте"""
        return NavigationContext(root=project_root)

    @pytest.mark.asyncio
    async def test_non_recursive_listing(self, list_tool, nav_context):
        """list_files на корне: .git скрыт, 1 файл и 1 каталог"""
        result = await list_tool.execute({"_nav_context": nav_context, "path": "."})

        assert result.error is None
        assert result.output.splitlines()[:3] == [
            "📂 proj/",
            "├── 📂 src/",
            "└── 📄 README.md (6 B)",
        ]
        assert "Summary: 1 files, 1 directories" in result.output
        assert ".git" not in result.output

    @pytest.mark.asyncio
    async def test_absolute_root_path(self, list_tool, nav_context, project_root):
        result = await list_tool.execute({"_nav_context": nav_context, "path": str(project_root)})
        assert "Summary: 1 files, 1 directories" in result.output

    @pytest.mark.asyncio
    async def test_defaults_to_current_directory(self, list_tool, nav_context, project_root):
        nav_context.cwd = project_root / "src"

        result = await list_tool.execute({"_nav_context": nav_context})

        assert result.output.startswith("📂 src/")
        assert "app.ts" in result.output

    @pytest.mark.asyncio
    async def test_pattern_filter(self, list_tool, nav_context):
        result = await list_tool.execute(
            {"_nav_context": nav_context, "path": "src", "pattern": "*.ts"}
        )

        assert "app.ts" in result.output
        assert "app.js" not in result.output

    @pytest.mark.asyncio
    async def test_recursive_with_depth(self, list_tool, nav_context):
        result = await list_tool.execute(
            {"_nav_context": nav_context, "recursive": True, "max_depth": 0}
        )

        assert "│   ... (max depth reached)" in result.output
        assert "app.ts" not in result.output

    @pytest.mark.asyncio
    async def test_escape_is_security_error(self, list_tool, nav_context, project_root):
        result = await list_tool.execute({"_nav_context": nav_context, "path": "../.."})

        assert result.output is None
        assert result.error_code == -1
        assert "Security Error" in result.error
        assert f"Root: {project_root}" in result.error

    @pytest.mark.asyncio
    async def test_missing_path(self, list_tool, nav_context):
        result = await list_tool.execute({"_nav_context": nav_context, "path": "missing"})
        assert result.error == "Error: Path 'missing' does not exist."

    @pytest.mark.asyncio
    async def test_file_path_returns_metadata(self, list_tool, nav_context):
        result = await list_tool.execute({"_nav_context": nav_context, "path": "src/app.ts"})

        assert result.output.startswith("File: src/app.ts")
        assert "Type: .ts" in result.output

    @pytest.mark.asyncio
    async def test_invalid_pattern(self, list_tool, nav_context):
        result = await list_tool.execute(
            {"_nav_context": nav_context, "pattern": "src/*.ts"}
        )
        assert "Invalid pattern 'src/*.ts'" in result.error

    @pytest.mark.asyncio
    async def test_negative_max_depth(self, list_tool, nav_context):
        result = await list_tool.execute(
            {"_nav_context": nav_context, "recursive": True, "max_depth": -1}
        )
        assert "max_depth" in result.error

    @pytest.mark.asyncio
    async def test_custom_ignored_directories(self, nav_context):
        tool = ListFilesTool(ignored_directories={"src"})

        result = await tool.execute({"_nav_context": nav_context})

        assert "src" not in result.output
        assert "Summary: 1 files, 0 directories" in result.output

    @pytest.mark.asyncio
    async def test_symlink_loop_is_reported(self, list_tool, nav_context, project_root):
        os.symlink(project_root / "loop", project_root / "loop")

        result = await list_tool.execute({"_nav_context": nav_context, "path": "loop"})

        assert result.output is None
        assert result.error_code == -1
        assert result.error.startswith("Path cannot be resolved (symlink loop): loop")

    @pytest.mark.asyncio
    async def test_missing_context(self, list_tool):
        result = await list_tool.execute({"path": "."})
        assert "NavigationContext not found" in result.error

    def test_input_schema(self, list_tool):
        schema = list_tool.get_input_schema()

        assert set(schema["properties"]) == {"path", "recursive", "max_depth", "show_hidden", "pattern"}
        assert "required" not in schema


class TestListFilesProtectedPaths:
    """Тесты отказа list_files для защищенных каталогов и файлов с секретами"""

    @pytest.fixture
    def nav_context(self, tmp_path):
        """Корень с .ssh/id_rsa, .git/HEAD, .env и обычным src/"""
        root = tmp_path.resolve() / "proj"
        (root / ".ssh").mkdir(parents=True)
        (root / ".ssh" / "id_rsa").write_text("-----BEGIN KEY-----")
        (root / ".git").mkdir()
        (root / ".git" / "HEAD").write_text("ref: refs/heads/main")
        (root / "src").mkdir()
        (root / ".env").write_text("SECRET=1")
        return NavigationContext(root=root)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, message",
        [
            (".ssh", "protected directory '.ssh'"),
            (".git/HEAD", "protected directory '.git'"),
            (".env", "protected file '.env'"),
            ("src/../.ssh/id_rsa", "protected directory '.ssh'"),
        ],
    )
    async def test_protected_targets_are_refused(self, nav_context, path, message):
        result = await ListFilesTool().execute({"_nav_context": nav_context, "path": path})

        assert result.output is None
        assert result.error_code == -1
        assert result.error.startswith("Security Error:")
        assert message in result.error
        assert "BEGIN KEY" not in result.error

    @pytest.mark.asyncio
    async def test_current_directory_inside_protected_directory(self, nav_context):
        nav_context.cwd = nav_context.root / ".ssh"

        result = await ListFilesTool().execute({"_nav_context": nav_context})

        assert "protected directory '.ssh'" in result.error

    @pytest.mark.asyncio
    async def test_ordinary_paths_still_list(self, nav_context):
        result = await ListFilesTool().execute({"_nav_context": nav_context, "path": "src"})
        assert result.error is None

    @pytest.mark.asyncio
    async def test_protected_names_are_configurable(self, nav_context):
        tool = ListFilesTool(protected_directories={"src"}, protected_files=set())

        result = await tool.execute({"_nav_context": nav_context, "path": ".env"})
        assert result.error is None
        assert result.output.startswith("File: .env")

        result = await tool.execute({"_nav_context": nav_context, "path": "src"})
        assert "protected directory 'src'" in result.error
