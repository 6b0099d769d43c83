"""
Alembic environment for the grocery tables (item_knowledge, grocery_entries)

Migrations run on the sync psycopg2 driver; DATABASE_URL may use the app's
postgresql+asyncpg:// form and is rewritten here.
"""
import os
from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

config = context.config


def sync_url(database_url: str) -> str:
    return database_url.replace("postgresql+asyncpg://", "postgresql://", 1)


if os.getenv("DATABASE_URL"):
    config.set_main_option("sqlalchemy.url", sync_url(os.environ["DATABASE_URL"]))

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Tables are created with op.create_table; there is no ORM metadata
target_metadata = None


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection"""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
