"""Identity SQL query constants.

This module centralizes the SQL used by the relational identity repositories.
All queries are parameterized by schema. Update and delete statements on
users and roles match on the concurrency stamp read by the caller so that a
lost update affects zero rows.
"""

# =====================================================================================
# USERS
# =====================================================================================

USER_COLUMNS = (
    "id", "user_name", "normalized_user_name", "password_hash", "email",
    "normalized_email", "email_confirmed", "phone_number", "phone_number_confirmed",
    "lockout_enabled", "lockout_end", "access_failed_count", "concurrency_stamp",
    "security_stamp", "two_factor_enabled",
)

# Columns written by USER_UPDATE as $3..$15, in this order
USER_UPDATE_COLUMNS = (
    "user_name", "normalized_user_name", "password_hash", "email",
    "normalized_email", "email_confirmed", "phone_number", "phone_number_confirmed",
    "lockout_enabled", "lockout_end", "access_failed_count", "security_stamp",
    "two_factor_enabled",
)

USER_INSERT = """
    INSERT INTO {schema}.users (
        id, user_name, normalized_user_name, password_hash, email,
        normalized_email, email_confirmed, phone_number, phone_number_confirmed,
        lockout_enabled, lockout_end, access_failed_count, concurrency_stamp,
        security_stamp, two_factor_enabled
    ) VALUES (
        $1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15
    )
"""

USER_UPDATE = """
    UPDATE {schema}.users SET
        user_name = $3,
        normalized_user_name = $4,
        password_hash = $5,
        email = $6,
        normalized_email = $7,
        email_confirmed = $8,
        phone_number = $9,
        phone_number_confirmed = $10,
        lockout_enabled = $11,
        lockout_end = $12,
        access_failed_count = $13,
        security_stamp = $14,
        two_factor_enabled = $15,
        concurrency_stamp = $16
    WHERE id = $1 AND concurrency_stamp = $2
"""

USER_DELETE = """
    DELETE FROM {schema}.users
    WHERE id = $1 AND concurrency_stamp = $2
"""

USER_GET_BY_ID = """
    SELECT * FROM {schema}.users
    WHERE id = $1
"""

USER_GET_BY_NORMALIZED_NAME = """
    SELECT * FROM {schema}.users
    WHERE normalized_user_name = $1
"""

USER_GET_BY_NORMALIZED_EMAIL = """
    SELECT * FROM {schema}.users
    WHERE normalized_email = $1
    ORDER BY normalized_user_name
"""

USER_LIST = """
    SELECT * FROM {schema}.users
    ORDER BY normalized_user_name
"""

USER_INCREMENT_ACCESS_FAILED = """
    UPDATE {schema}.users SET
        access_failed_count = access_failed_count + 1,
        concurrency_stamp = $2
    WHERE id = $1
    RETURNING access_failed_count, concurrency_stamp
"""

USER_LOCK_OUT = """
    UPDATE {schema}.users SET
        lockout_end = $2,
        access_failed_count = 0,
        concurrency_stamp = $3
    WHERE id = $1
    RETURNING lockout_end, access_failed_count, concurrency_stamp
"""

# =====================================================================================
# USER CLAIMS
# =====================================================================================

USER_CLAIM_COLUMNS = ("id", "user_id", "claim_type", "claim_value")

USER_CLAIM_INSERT = """
    INSERT INTO {schema}.user_claims (id, user_id, claim_type, claim_value)
    VALUES ($1, $2, $3, $4)
"""

USER_CLAIM_UPDATE = """
    UPDATE {schema}.user_claims SET
        user_id = $2,
        claim_type = $3,
        claim_value = $4
    WHERE id = $1
"""

USER_CLAIM_DELETE = """
    DELETE FROM {schema}.user_claims
    WHERE id = $1
"""

USER_CLAIM_GET_BY_ID = """
    SELECT * FROM {schema}.user_claims
    WHERE id = $1
"""

USER_CLAIM_GET_BY_USER_ID = """
    SELECT * FROM {schema}.user_claims
    WHERE user_id = $1
    ORDER BY id
"""

USER_CLAIM_GET_BY_CLAIM = """
    SELECT * FROM {schema}.user_claims
    WHERE claim_type = $1 AND claim_value = $2
    ORDER BY id
"""

# =====================================================================================
# USER ROLES
# =====================================================================================

USER_ROLE_COLUMNS = ("id", "user_id", "role_id")

USER_ROLE_INSERT = """
    INSERT INTO {schema}.user_roles (id, user_id, role_id)
    VALUES ($1, $2, $3)
"""

USER_ROLE_UPDATE = """
    UPDATE {schema}.user_roles SET
        user_id = $2,
        role_id = $3
    WHERE id = $1
"""

USER_ROLE_DELETE = """
    DELETE FROM {schema}.user_roles
    WHERE id = $1
"""

USER_ROLE_GET_BY_ID = """
    SELECT * FROM {schema}.user_roles
    WHERE id = $1
"""

USER_ROLE_GET_BY_USER_AND_ROLE = """
    SELECT * FROM {schema}.user_roles
    WHERE user_id = $1 AND role_id = $2
"""

USER_ROLE_GET_BY_USER_ID = """
    SELECT * FROM {schema}.user_roles
    WHERE user_id = $1
    ORDER BY id
"""

USER_ROLE_GET_BY_ROLE_ID = """
    SELECT * FROM {schema}.user_roles
    WHERE role_id = $1
    ORDER BY id
"""

# =====================================================================================
# ROLES
# =====================================================================================

ROLE_COLUMNS = ("id", "name", "normalized_name", "concurrency_stamp")

ROLE_INSERT = """
    INSERT INTO {schema}.roles (id, name, normalized_name, concurrency_stamp)
    VALUES ($1, $2, $3, $4)
"""

ROLE_UPDATE = """
    UPDATE {schema}.roles SET
        name = $3,
        normalized_name = $4,
        concurrency_stamp = $5
    WHERE id = $1 AND concurrency_stamp = $2
"""

ROLE_DELETE = """
    DELETE FROM {schema}.roles
    WHERE id = $1 AND concurrency_stamp = $2
"""

ROLE_GET_BY_ID = """
    SELECT * FROM {schema}.roles
    WHERE id = $1
"""

ROLE_GET_BY_NORMALIZED_NAME = """
    SELECT * FROM {schema}.roles
    WHERE normalized_name = $1
"""

ROLE_LIST = """
    SELECT * FROM {schema}.roles
    ORDER BY normalized_name
"""

# =====================================================================================
# ROLE CLAIMS
# =====================================================================================

ROLE_CLAIM_COLUMNS = ("id", "role_id", "claim_type", "claim_value")

ROLE_CLAIM_INSERT = """
    INSERT INTO {schema}.role_claims (id, role_id, claim_type, claim_value)
    VALUES ($1, $2, $3, $4)
"""

ROLE_CLAIM_UPDATE = """
    UPDATE {schema}.role_claims SET
        role_id = $2,
        claim_type = $3,
        claim_value = $4
    WHERE id = $1
"""

ROLE_CLAIM_DELETE = """
    DELETE FROM {schema}.role_claims
    WHERE id = $1
"""

ROLE_CLAIM_GET_BY_ID = """
    SELECT * FROM {schema}.role_claims
    WHERE id = $1
"""

ROLE_CLAIM_GET_BY_ROLE_ID = """
    SELECT * FROM {schema}.role_claims
    WHERE role_id = $1
    ORDER BY id
"""
