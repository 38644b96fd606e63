from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from eventcal import models  # noqa: F401  registers the events table
from eventcal.db import Base, DB_URL, _normalize_db_url

# Alembic config object
config = context.config

# DATABASE_URL (or the sqlite default) unless the caller already set one
url = config.get_main_option("sqlalchemy.url")
config.set_main_option("sqlalchemy.url", _normalize_db_url(url) if url else DB_URL)

# Setup logging, unless the app drives Alembic and owns logging itself
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# Assign metadata for autogenerate support
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection, target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
