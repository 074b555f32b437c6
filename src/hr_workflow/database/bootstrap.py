from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from ..config import get_settings_module
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def split_statements(sql: str) -> list[str]:
    """Split a schema script on ';'. Full-line `--` comments are dropped.

    The schema holds DDL only, so semicolons never appear inside literals.
    """

    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def ensure_database_exists(conn_factory: DatabaseConnection, config: DBConfig) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> int:
    """Create the database and its tables if missing. Returns the statement count."""

    config = DBConfig.from_dict(db_config)
    conn_factory = DatabaseConnection(config)
    ensure_database_exists(conn_factory, config)

    statements = split_statements(Path(schema_path).read_text(encoding="utf-8"))
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    logger.info("schema applied to %s (%d statements)", config.database, len(statements))
    return len(statements)


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    count = apply_schema(db_config)
    print(
        f"OK: applied {count} statements -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
