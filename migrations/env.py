import re
import sys
from logging.config import fileConfig

from alembic import context
from alembic.autogenerate import render
from sqlalchemy import engine_from_config, pool

from app.database import engine, get_db_schema
from app.model.db import Base
from config import DATABASE_URL

config = context.config
fileConfig(config.config_file_name)

# Metadata of all BonzShop tables
target_metadata = Base.metadata

schema = get_db_schema()


def _include_name(name, type_, parent_names):
    if type_ == "schema":
        return name in [None, schema]
    else:
        return True


def run_migrations_offline():
    """Emit the migration SQL without connecting to the database"""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=DATABASE_URL.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Run the migrations against DATABASE_URL"""
    config_ini = config.get_section(config.config_ini_section)
    config_ini["sqlalchemy.url"] = DATABASE_URL
    connectable = engine_from_config(
        config_ini,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        include_schemas = False
        include_name = None
        if schema is not None:
            include_schemas = True
            include_name = _include_name
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            version_table_schema=schema,
            include_schemas=include_schemas,
            include_name=include_name,
            # SQLite cannot ALTER most table definitions in place
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


argv = sys.argv
if "--autogenerate" in argv:
    _render_op_org = getattr(render, "render_op")

    def render_op_wrapper(autogen_context, op):
        lines = _render_op_org(autogen_context, op)
        new_lines = []
        for line in lines:
            new_line = line
            if "get_db_schema())" not in new_line:
                # Generated operations always follow DATABASE_SCHEMA
                if "schema=" not in new_line:
                    new_line = re.sub(r"\)$", ", schema=get_db_schema())", line)
                else:
                    new_line = re.sub(
                        r"schema=(.|\s)*\)$", "schema=get_db_schema())", line
                    )
            new_lines.append(new_line)
        return new_lines

    setattr(render, "render_op", render_op_wrapper)

if "--sql" in argv:
    if schema is not None and engine.name == "postgresql":
        print(f"SET SEARCH_PATH TO {schema};")

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
