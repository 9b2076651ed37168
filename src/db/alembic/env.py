from logging.config import fileConfig

from alembic import context
from alembic.config import Config as AlembicConfig
from sqlalchemy import engine_from_config, pool

# noinspection PyUnresolvedReferences
from db.model.analytics_event import AnalyticsEventDB  # used by alembic  # noqa: F401
from db.model.base import BaseModel
# noinspection PyUnresolvedReferences
from db.model.order import OrderDB  # used by alembic  # noqa: F401
# noinspection PyUnresolvedReferences
from db.model.order_item import OrderItemDB  # used by alembic  # noqa: F401
from util.config import config as app_config

alembic_config: AlembicConfig = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

# the orders, their items and the analytics events
target_metadata = BaseModel.metadata

# '%' would be read as ini interpolation
alembic_config.set_main_option("sqlalchemy.url", app_config.db_url.get_secret_value().replace("%", "%%"))


def run_migrations_offline():
    """Renders the migration SQL to the output, no database connection needed."""
    context.configure(
        url = alembic_config.get_main_option("sqlalchemy.url"),
        target_metadata = target_metadata,
        literal_binds = True,
        compare_type = True,
        dialect_opts = {"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Applies the migrations to the configured database."""
    connectable = engine_from_config(
        alembic_config.get_section(alembic_config.config_ini_section, {}),
        prefix = "sqlalchemy.",
        poolclass = pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection = connection,
            target_metadata = target_metadata,
            compare_type = True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
