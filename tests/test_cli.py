# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Tests for CLI interface.

These tests use Click's CliRunner and a canned query source, so no
database is required.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from sqlsmith.catalog.schema_cache import SchemaCache
from sqlsmith.cli import cli


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def schemaless_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("seed: 1\n")
    return str(config_path)


@pytest.fixture
def db_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("database:\n  uri: postgresql://root@localhost:26257/defaultdb\n")
    return str(config_path)


class TestCLIBasics:

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "schema" in result.output
        assert "catalog" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestSchemaCommand:

    def test_requires_config(self, runner):
        result = runner.invoke(cli, ["schema"])
        assert result.exit_code != 0

    def test_schemaless(self, runner, schemaless_config):
        result = runner.invoke(cli, ["schema", "-c", schemaless_config])
        assert result.exit_code == 0
        assert "No tables found" in result.output

    def test_bad_env_var(self, runner, tmp_path, monkeypatch):
        monkeypatch.delenv("SMITH_CLI_MISSING", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("database:\n  uri: ${SMITH_CLI_MISSING}\n")
        result = runner.invoke(cli, ["schema", "-c", str(path)])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_prints_tables_and_indexes(self, runner, db_config, two_table_source):
        cache = SchemaCache(source=two_table_source)
        with patch("sqlsmith.cli.SchemaCache.from_config", return_value=cache):
            result = runner.invoke(cli, ["schema", "-c", db_config])
        assert result.exit_code == 0, result.output
        assert "defaultdb.public.t1" in result.output
        assert "CREATE INDEX t1_b_idx" in result.output

    def test_refresh_failure(self, runner, db_config, two_table_source):
        two_table_source.columns = RuntimeError("connection refused")
        cache = SchemaCache(source=two_table_source)
        with patch("sqlsmith.cli.SchemaCache.from_config", return_value=cache):
            result = runner.invoke(cli, ["schema", "-c", db_config])
        assert result.exit_code == 1
        assert "connection refused" in result.output


class TestCatalogCommand:

    def test_prints_counts(self, runner):
        result = runner.invoke(cli, ["catalog"])
        assert result.exit_code == 0, result.output
        assert "DECIMAL" in result.output
        assert "Operators" in result.output
