"""
Tests for external tool configuration and readiness
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from rawr_core.config import DEFAULT_TIMEOUT, ToolConfig

from conftest import make_stub_executable


class TestFromEnv:
    """Test building configuration from environment variables"""

    def test_reads_paths(self, env_for, tool_config):
        config = ToolConfig.from_env(env_for())

        assert config.exiv2_path == tool_config.exiv2_path
        assert config.exiftool_path == tool_config.exiftool_path
        assert config.scratch_dir == tool_config.scratch_dir
        assert config.timeout == DEFAULT_TIMEOUT

    def test_falls_back_to_path_lookup(self):
        found = {"exiv2": "/usr/bin/exiv2", "exiftool": None}

        with patch("rawr_core.config.shutil.which", side_effect=found.get):
            config = ToolConfig.from_env({})

        assert config.exiv2_path == Path("/usr/bin/exiv2")
        assert config.exiftool_path is None
        assert config.scratch_dir.is_dir()

    def test_timeout(self):
        with patch("rawr_core.config.shutil.which", return_value=None):
            config = ToolConfig.from_env({"RAWR_TOOL_TIMEOUT": "12.5"})

        assert config.timeout == 12.5

    @pytest.mark.parametrize("value", ["soon", "-3", "0"])
    def test_invalid_timeout_uses_default(self, value, caplog):
        with patch("rawr_core.config.shutil.which", return_value=None):
            config = ToolConfig.from_env({"RAWR_TOOL_TIMEOUT": value})

        assert config.timeout == DEFAULT_TIMEOUT
        assert "RAWR_TOOL_TIMEOUT" in caplog.text


class TestReadiness:
    """Test is_ready() against the live filesystem"""

    def test_ready(self, tool_config):
        assert tool_config.is_ready() is True
        assert tool_config.missing_tools() == []

    def test_exiftool_is_optional(self, tool_config):
        tool_config.exiftool_path = None

        assert tool_config.is_ready() is True
        assert tool_config.has_exiftool() is False
        assert tool_config.missing_tools() == ["exiftool"]

    def test_configured_exiftool_must_exist(self, tool_config, tools_dir):
        tool_config.exiftool_path = tools_dir / "no-such-exiftool"

        assert tool_config.is_ready() is False

    def test_exiv2_required(self, tool_config):
        tool_config.exiv2_path = None

        assert tool_config.is_ready() is False
        assert tool_config.missing_tools() == ["exiv2"]

    def test_exiv2_must_be_executable(self, tool_config, tools_dir):
        not_executable = tools_dir / "exiv2-plain"
        not_executable.write_text("")
        not_executable.chmod(0o644)
        tool_config.exiv2_path = not_executable

        if os.access(not_executable, os.X_OK):
            pytest.skip("running with privileges that ignore file modes")
        assert tool_config.is_ready() is False

    def test_exiv2_must_be_a_file(self, tool_config, tools_dir):
        tool_config.exiv2_path = tools_dir

        assert tool_config.is_ready() is False

    def test_scratch_dir_must_exist(self, tool_config, tmp_path):
        tool_config.scratch_dir = tmp_path / "gone"

        assert tool_config.is_ready() is False

    def test_scratch_dir_must_be_directory(self, tool_config, tmp_path):
        scratch_file = tmp_path / "scratch.txt"
        scratch_file.write_text("")
        tool_config.scratch_dir = scratch_file

        assert tool_config.is_ready() is False

    def test_readiness_is_not_cached(self, tool_config):
        assert tool_config.is_ready() is True

        tool_config.exiv2_path.unlink()
        assert tool_config.is_ready() is False

        make_stub_executable(tool_config.exiv2_path)
        assert tool_config.is_ready() is True
