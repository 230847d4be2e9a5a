"""Tests for the identity schema helpers and shared repository plumbing."""

import pytest

from neo_identity.config.options import RepositoryOptions
from neo_identity.core.exceptions import DatabaseError
from neo_identity.features.database import affected_rows, build_schema_statements, create_identity_schema


class TestSchemaStatements:
    """Test DDL generation."""

    def test_default_schema(self):
        """Test every identity table is created in the default schema."""
        statements = build_schema_statements()
        ddl = "\n".join(statements)

        assert statements[0] == "CREATE SCHEMA IF NOT EXISTS identity"
        for table in ("users", "roles", "user_claims", "role_claims", "user_roles"):
            assert f"CREATE TABLE IF NOT EXISTS identity.{table}" in ddl
        assert "id TEXT PRIMARY KEY" in ddl

    def test_unique_constraints(self):
        """Test names and memberships are unique in storage."""
        ddl = "\n".join(build_schema_statements())

        assert "UNIQUE INDEX IF NOT EXISTS users_normalized_user_name_idx" in ddl
        assert "UNIQUE INDEX IF NOT EXISTS roles_normalized_name_idx" in ddl
        assert "UNIQUE (user_id, role_id)" in ddl

    def test_key_length_and_schema_name(self):
        """Test options control the schema name and key column type."""
        options = RepositoryOptions(schema_name="tenant_identity", max_length_for_keys=128)

        ddl = "\n".join(build_schema_statements(options))

        assert "CREATE SCHEMA IF NOT EXISTS tenant_identity" in ddl
        assert "id VARCHAR(128) PRIMARY KEY" in ddl
        assert " identity." not in ddl

    def test_invalid_schema_name_rejected(self):
        """Test schema names must be plain identifiers."""
        with pytest.raises(ValueError):
            RepositoryOptions(schema_name="identity; DROP TABLE users")


class TestCreateIdentitySchema:
    """Test applying the DDL."""

    @pytest.mark.asyncio
    async def test_executes_every_statement(self, mock_database_repository):
        """Test every statement is executed in order."""
        await create_identity_schema(mock_database_repository)

        executed = [call[0][0] for call in mock_database_repository.execute.call_args_list]
        assert executed == build_schema_statements()

    @pytest.mark.asyncio
    async def test_failure_raises_database_error(self, mock_database_repository):
        """Test driver failures surface as DatabaseError."""
        mock_database_repository.execute.side_effect = OSError("connection refused")

        with pytest.raises(DatabaseError):
            await create_identity_schema(mock_database_repository)


@pytest.mark.parametrize(
    "status, expected",
    [("UPDATE 1", 1), ("DELETE 0", 0), ("INSERT 0 3", 3), (None, 0), ("", 0), ("SELECT", 0)],
)
def test_affected_rows(status, expected):
    """Test parsing command status strings."""
    assert affected_rows(status) == expected
