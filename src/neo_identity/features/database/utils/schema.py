"""Relational schema for the identity tables.

``create_identity_schema`` issues idempotent DDL, so hosts can call it at
startup or from their migration tooling.
"""

import logging
from typing import List, Optional

from ....config.options import RepositoryOptions
from ....core.exceptions import DatabaseError


logger = logging.getLogger(__name__)


def key_column_type(max_length_for_keys: int) -> str:
    """Column type used for entity keys."""
    if max_length_for_keys > 0:
        return f"VARCHAR({max_length_for_keys})"
    return "TEXT"


def build_schema_statements(options: Optional[RepositoryOptions] = None) -> List[str]:
    """Build the DDL statements for the identity tables."""
    options = options or RepositoryOptions()
    schema = options.schema_name
    key = key_column_type(options.max_length_for_keys)

    return [
        f"CREATE SCHEMA IF NOT EXISTS {schema}",
        f"""
        CREATE TABLE IF NOT EXISTS {schema}.users (
            id {key} PRIMARY KEY,
            user_name VARCHAR(256),
            normalized_user_name VARCHAR(256),
            password_hash TEXT,
            email VARCHAR(256),
            normalized_email VARCHAR(256),
            email_confirmed BOOLEAN NOT NULL DEFAULT FALSE,
            phone_number TEXT,
            phone_number_confirmed BOOLEAN NOT NULL DEFAULT FALSE,
            lockout_enabled BOOLEAN NOT NULL DEFAULT FALSE,
            lockout_end TIMESTAMPTZ,
            access_failed_count INTEGER NOT NULL DEFAULT 0,
            concurrency_stamp TEXT,
            security_stamp TEXT,
            two_factor_enabled BOOLEAN NOT NULL DEFAULT FALSE
        )
        """,
        f"CREATE UNIQUE INDEX IF NOT EXISTS users_normalized_user_name_idx "
        f"ON {schema}.users (normalized_user_name)",
        f"CREATE INDEX IF NOT EXISTS users_normalized_email_idx "
        f"ON {schema}.users (normalized_email)",
        f"""
        CREATE TABLE IF NOT EXISTS {schema}.roles (
            id {key} PRIMARY KEY,
            name VARCHAR(256),
            normalized_name VARCHAR(256),
            concurrency_stamp TEXT
        )
        """,
        f"CREATE UNIQUE INDEX IF NOT EXISTS roles_normalized_name_idx "
        f"ON {schema}.roles (normalized_name)",
        f"""
        CREATE TABLE IF NOT EXISTS {schema}.user_claims (
            id {key} PRIMARY KEY,
            user_id {key} NOT NULL REFERENCES {schema}.users (id) ON DELETE CASCADE,
            claim_type TEXT,
            claim_value TEXT
        )
        """,
        f"CREATE INDEX IF NOT EXISTS user_claims_user_id_idx ON {schema}.user_claims (user_id)",
        f"""
        CREATE TABLE IF NOT EXISTS {schema}.role_claims (
            id {key} PRIMARY KEY,
            role_id {key} NOT NULL REFERENCES {schema}.roles (id) ON DELETE CASCADE,
            claim_type TEXT,
            claim_value TEXT
        )
        """,
        f"CREATE INDEX IF NOT EXISTS role_claims_role_id_idx ON {schema}.role_claims (role_id)",
        f"""
        CREATE TABLE IF NOT EXISTS {schema}.user_roles (
            id {key} PRIMARY KEY,
            user_id {key} NOT NULL REFERENCES {schema}.users (id) ON DELETE CASCADE,
            role_id {key} NOT NULL REFERENCES {schema}.roles (id) ON DELETE CASCADE,
            CONSTRAINT user_roles_user_id_role_id_key UNIQUE (user_id, role_id)
        )
        """,
        f"CREATE INDEX IF NOT EXISTS user_roles_role_id_idx ON {schema}.user_roles (role_id)",
    ]


async def create_identity_schema(db, options: Optional[RepositoryOptions] = None) -> None:
    """Create the identity schema and tables if they do not exist.

    Args:
        db: asyncpg Pool or Connection
        options: Repository options controlling schema name and key length
    """
    options = options or RepositoryOptions()
    try:
        for statement in build_schema_statements(options):
            await db.execute(statement)
    except Exception as e:
        logger.error(f"Failed to create identity schema {options.schema_name}: {e}")
        raise DatabaseError(f"Failed to create identity schema: {e}") from e

    logger.info(f"Identity schema {options.schema_name} is ready")
