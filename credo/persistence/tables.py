"""SQLAlchemy table definitions for Credo.

Generic column types only, so the same metadata runs on SQLite and
PostgreSQL. They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=True),  # Local users only
    Column("is_verified", Boolean, nullable=False, default=False),
    Column("verification_code", String(6), nullable=True),
    Column("verification_expires", DateTime(timezone=True), nullable=True),
    # One slot per provider, each unique across users
    Column("google_id", String(255), nullable=True, unique=True),
    Column("microsoft_id", String(255), nullable=True, unique=True),
    Column("amazon_id", String(255), nullable=True, unique=True),
    Column("idme_id", String(255), nullable=True, unique=True),
    Column("display_name", String(255), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("idme_affiliation", String(255), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("last_login", DateTime(timezone=True), nullable=True),
)

# ============================================================================
# AUTH LOGS TABLE (append-only audit trail)
# ============================================================================
auth_logs_table = Table(
    "auth_logs",
    metadata,
    Column("id", Uuid, primary_key=True),
    # No FK: events for unknown users carry NULL, and rows outlive users
    Column("user_id", Uuid, nullable=True),
    Column("action", String(50), nullable=False),
    Column("status", String(50), nullable=False),
    Column("ip_address", String(45), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column("timestamp", DateTime(timezone=True), nullable=False),
)

Index("idx_auth_logs_user_id", auth_logs_table.c.user_id)
Index("idx_auth_logs_timestamp", auth_logs_table.c.timestamp)

# ============================================================================
# SESSIONS TABLE
# ============================================================================
sessions_table = Table(
    "sessions",
    metadata,
    Column("id", String(128), primary_key=True),
    Column(
        "user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("expires_at", DateTime(timezone=True), nullable=False),
)

Index("idx_sessions_expires_at", sessions_table.c.expires_at)
