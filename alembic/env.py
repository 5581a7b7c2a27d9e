from logging.config import fileConfig
from sqlalchemy import pool, create_engine

from alembic import context

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from atlantic_cms.config import DATABASE_URL
from sqlmodel import SQLModel

# Import all models so Alembic can detect them
from atlantic_cms.apps.authentication.models import UserRole
from atlantic_cms.apps.cms.models import Page, Section
from atlantic_cms.apps.blog.models import BlogPost
from atlantic_cms.apps.portfolio.models import PortfolioItem
from atlantic_cms.apps.images.models import ImageAsset
from atlantic_cms.apps.forms.models import CreatorApplication

# this is the Alembic Config object
config = context.config

# Alembic runs synchronously: drop the asyncpg driver from the URL
sync_database_url = DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")
config.set_main_option("sqlalchemy.url", sync_database_url)

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = create_engine(sync_database_url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
