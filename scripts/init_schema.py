"""
Create the Homebase tables directly from the SQLAlchemy models.

For local SQLite or throwaway databases; shared PostgreSQL databases
are migrated with Alembic instead.

Run with: python scripts/init_schema.py
"""

import logging
import sys
from pathlib import Path

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

sys.path.insert(0, str(Path(__file__).parent.parent))

from homebase.models import Base  # noqa: E402

logger = logging.getLogger(__name__)


def init_schema(engine: Engine | None = None) -> list[str]:
    """Create any missing tables and return the table names now present."""
    if engine is None:
        from homebase.database import engine

    Base.metadata.create_all(bind=engine)
    tables = sorted(inspect(engine).get_table_names())
    logger.info(f"schema_initialized url={engine.url} tables={','.join(tables)}")
    return tables


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    init_schema()
