#!/usr/bin/env python3
"""
Unit тесты для change_directory_tool.py и current_directory_tool.py
"""

import os

import pytest

from sandbox_fs_mcp.models.session import NavigationContext
from sandbox_fs_mcp.tools.change_directory_tool import ChangeDirectoryTool
from sandbox_fs_mcp.tools.current_directory_tool import CurrentDirectoryTool


class TestChangeDirectoryTool:
    """Тесты для ChangeDirectoryTool"""

    @pytest.fixture
    def cd_tool(self):
        """Создает экземпляр ChangeDirectoryTool"""
        return ChangeDirectoryTool()

    @pytest.fixture
    def project_root(self, tmp_path):
        root = tmp_path.resolve() / "proj"
        (root / "src" / "core").mkdir(parents=True)
        (root / "setup.cfg").write_text("")
        return root

    @pytest.fixture
    def nav_context(self, project_root):
        """Создает NavigationContext с cwd = proj/src"""
        state = NavigationContext(root=project_root)
        state.cwd = project_root / "src"
        return state

    @pytest.mark.asyncio
    async def test_go_up(self, cd_tool, nav_context, project_root):
        result = await cd_tool.execute({"_nav_context": nav_context, "path": ".."})

        assert result.error is None
        assert result.output == f"Changed directory: src -> .\n  Full path: {project_root}"
        assert nav_context.cwd == project_root

    @pytest.mark.asyncio
    async def test_go_down(self, cd_tool, nav_context, project_root):
        result = await cd_tool.execute({"_nav_context": nav_context, "path": "core"})

        assert result.output.startswith("Changed directory: src -> src/core")
        assert nav_context.cwd == project_root / "src" / "core"

    @pytest.mark.asyncio
    async def test_home_alias(self, cd_tool, nav_context, project_root):
        result = await cd_tool.execute({"_nav_context": nav_context, "path": "~"})

        assert result.output == f"Changed directory to: {project_root} (project root)"
        assert nav_context.cwd == project_root

    @pytest.mark.asyncio
    async def test_escape_is_rejected(self, cd_tool, nav_context, project_root):
        result = await cd_tool.execute({"_nav_context": nav_context, "path": "../../.."})

        assert result.error_code == -1
        assert "Security Error" in result.error
        assert f"Root: {project_root}" in result.error
        assert nav_context.cwd == project_root / "src"

    @pytest.mark.asyncio
    async def test_not_a_directory(self, cd_tool, nav_context):
        result = await cd_tool.execute({"_nav_context": nav_context, "path": "../setup.cfg"})
        assert result.error == "Path is not a directory: ../setup.cfg"

    @pytest.mark.asyncio
    async def test_missing_directory(self, cd_tool, nav_context):
        result = await cd_tool.execute({"_nav_context": nav_context, "path": "nowhere"})
        assert result.error.startswith("Directory does not exist: nowhere")

    @pytest.mark.asyncio
    async def test_symlink_loop_is_reported(self, cd_tool, nav_context, project_root):
        os.symlink(project_root / "src" / "loop", project_root / "src" / "loop")

        result = await cd_tool.execute({"_nav_context": nav_context, "path": "loop"})

        assert result.error_code == -1
        assert result.error.startswith("Path cannot be resolved (symlink loop): loop")
        assert nav_context.cwd == project_root / "src"

    @pytest.mark.asyncio
    async def test_missing_path_argument(self, cd_tool, nav_context):
        result = await cd_tool.execute({"_nav_context": nav_context})
        assert "'path' parameter is required" in result.error

    def test_input_schema_requires_path(self, cd_tool):
        schema = cd_tool.get_input_schema()

        assert schema["type"] == "object"
        assert list(schema["properties"]) == ["path"]
        assert schema["required"] == ["path"]


class TestCurrentDirectoryTool:
    """Тесты для CurrentDirectoryTool"""

    @pytest.mark.asyncio
    async def test_reports_cwd_and_root(self, tmp_path):
        (tmp_path / "pkg").mkdir()
        state = NavigationContext(root=tmp_path)
        state.cwd = tmp_path / "pkg"

        result = await CurrentDirectoryTool().execute({"_nav_context": state})

        assert result.output.splitlines() == [
            "Current directory: pkg",
            f"  Full path: {tmp_path / 'pkg'}",
            f"  Root: {tmp_path}",
        ]
