"""Migration environment for the tool registry. DATABASE_URL comes from registry.config.Settings."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from logging.config import fileConfig  # noqa: E402

from alembic import context  # noqa: E402
from sqlalchemy import create_engine, pool  # noqa: E402

from registry.config import get_settings  # noqa: E402
from registry.models import Base  # noqa: E402

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

settings = get_settings()
if not settings.database_configured:
    raise RuntimeError("DATABASE_URL is not set; cannot run registry migrations.")
# Passed straight to the engine; percent-encoded passwords break alembic.ini interpolation
registry_url = settings.get_database_url()

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit the registry DDL as SQL without connecting."""
    context.configure(
        url=registry_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(
        registry_url,
        poolclass=pool.NullPool,
        connect_args={"connect_timeout": settings.database_connect_timeout},
    )
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
