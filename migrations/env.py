# migrations/env.py
import os
from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool
from swimschool.db.base import Base
from swimschool.db.session import _normalize

# (1) carregar .env
load_dotenv()

config = context.config

# (2) mesma URL da aplicação
db_url = os.getenv("DATABASE_URL")
if not db_url or db_url.strip() == "":
    db_url = "sqlite:///./data/swimschool.db"  # fallback
db_url = _normalize(db_url)

# (3) Alembic usará esta URL
config.set_main_option("sqlalchemy.url", db_url)

target_metadata = Base.metadata

def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config(config.get_section(config.config_ini_section), prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        # render_as_batch: ALTER TABLE no SQLite
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
