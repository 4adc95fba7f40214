"""Initial schema: tools, tool_labels, tool_usage_logs, categories, discovery_queue.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18

Run from clean state: alembic upgrade head
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE IF NOT EXISTS tools (
            id UUID PRIMARY KEY,
            name VARCHAR(100) NOT NULL UNIQUE,
            description TEXT NOT NULL,
            category VARCHAR(50) NOT NULL,
            version VARCHAR(50) NOT NULL DEFAULT '1.0.0',
            source_type VARCHAR(20) NOT NULL DEFAULT 'manual',
            source_url TEXT,
            mcp_server_url TEXT,
            repository_url TEXT,
            input_schema JSONB NOT NULL,
            output_schema JSONB,
            requires_api_key BOOLEAN NOT NULL DEFAULT false,
            api_key_name VARCHAR(100),
            is_validated BOOLEAN NOT NULL DEFAULT false,
            is_claimed BOOLEAN NOT NULL DEFAULT false,
            has_tools BOOLEAN NOT NULL DEFAULT true,
            has_readme BOOLEAN NOT NULL DEFAULT false,
            has_license BOOLEAN NOT NULL DEFAULT false,
            has_deployment BOOLEAN NOT NULL DEFAULT false,
            has_deploy_more_than_manual BOOLEAN NOT NULL DEFAULT false,
            has_prompts BOOLEAN NOT NULL DEFAULT false,
            has_resources BOOLEAN NOT NULL DEFAULT false,
            score_data JSONB,
            total_score INTEGER NOT NULL DEFAULT 0,
            max_score INTEGER NOT NULL DEFAULT 100,
            percentage INTEGER NOT NULL DEFAULT 0,
            grade VARCHAR(1) NOT NULL DEFAULT 'f',
            download_count INTEGER NOT NULL DEFAULT 0,
            usage_count INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
            last_verified_at TIMESTAMP WITH TIME ZONE
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_tools_name ON tools (name)")
    op.execute("CREATE INDEX IF NOT EXISTS tools_category_idx ON tools (category)")
    op.execute("CREATE INDEX IF NOT EXISTS tools_grade_idx ON tools (grade)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS tool_labels (
            tool_id UUID NOT NULL REFERENCES tools(id) ON DELETE CASCADE,
            kind VARCHAR(20) NOT NULL,
            value VARCHAR(100) NOT NULL,
            PRIMARY KEY (tool_id, kind, value)
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS tool_labels_kind_value_idx ON tool_labels (kind, value)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS tool_usage_logs (
            id UUID PRIMARY KEY,
            tool_id UUID NOT NULL REFERENCES tools(id) ON DELETE CASCADE,
            action VARCHAR(20) NOT NULL,
            metadata JSONB,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_tool_usage_logs_tool_id ON tool_usage_logs (tool_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_tool_usage_logs_created_at ON tool_usage_logs (created_at)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS categories (
            id UUID PRIMARY KEY,
            name VARCHAR(50) NOT NULL UNIQUE,
            slug VARCHAR(50) NOT NULL UNIQUE,
            description TEXT,
            icon VARCHAR(100),
            tool_count INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW()
        )
    """)

    op.execute("""
        CREATE TABLE IF NOT EXISTS discovery_queue (
            id UUID PRIMARY KEY,
            name VARCHAR(100) NOT NULL,
            description TEXT,
            source_url TEXT NOT NULL UNIQUE,
            source_type VARCHAR(20) NOT NULL DEFAULT 'discovered',
            raw_data JSONB,
            security_score INTEGER,
            quality_score INTEGER,
            status VARCHAR(20) NOT NULL DEFAULT 'pending',
            review_notes TEXT,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
            reviewed_at TIMESTAMP WITH TIME ZONE
        )
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS discovery_queue")
    op.execute("DROP TABLE IF EXISTS categories")
    op.execute("DROP TABLE IF EXISTS tool_usage_logs")
    op.execute("DROP TABLE IF EXISTS tool_labels")
    op.execute("DROP TABLE IF EXISTS tools")
