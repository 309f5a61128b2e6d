from __future__ import annotations

import sys

from alembic.autogenerate import api as ag_api
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Engine

from keno.db.engine import make_engine
from keno.models import Base


def _walk_ops(ops, depth: int = 0):
    for op in ops:
        yield depth, op
        yield from _walk_ops(getattr(op, "ops", None) or [], depth + 1)


def schema_differences(engine: Engine) -> list:
    """Return the Alembic operations needed to bring the database in line with the models."""
    with engine.connect() as connection:
        context = MigrationContext.configure(
            connection=connection,
            opts={
                "compare_type": True,
                "compare_server_default": True,
                "render_as_batch": connection.dialect.name == "sqlite",
            },
        )
        upgrade_ops = ag_api.produce_migrations(context, Base.metadata).upgrade_ops
    if upgrade_ops is None:
        raise RuntimeError("Alembic produced no upgrade operations")
    return list(upgrade_ops.ops or [])


def main() -> int:
    engine = make_engine()
    url_display = engine.url.render_as_string(hide_password=True)
    try:
        ops = schema_differences(engine)
    except Exception as exc:
        print(f"Schema drift check: ERROR for {url_display}: {exc}", file=sys.stderr)
        return 2
    finally:
        engine.dispose()

    if not ops:
        print(f"Schema drift check: OK (games schema matches) for {url_display}.")
        return 0
    print(f"Schema drift check: FAILED for {url_display}. Differences detected:")
    for depth, op in _walk_ops(ops):
        print(f"{'  ' * depth}- {op}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
