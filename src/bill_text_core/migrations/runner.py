from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import psycopg

MIGRATIONS_TABLE = "bill_text_schema_migrations"


@dataclass(frozen=True)
class Migration:
    version: str
    path: Path

    def sql(self) -> str:
        return self.path.read_text(encoding="utf-8")


def discover_migrations(directory: Path | None = None) -> list[Migration]:
    directory = directory or Path(__file__).resolve().parent / "sql"
    return [Migration(version=p.stem, path=p) for p in sorted(directory.glob("*.sql"))]


def _prepare(conn: psycopg.Connection, schema: str) -> set[str]:
    conn.execute(f'create schema if not exists "{schema}"')
    conn.execute(f'set search_path to "{schema}"')
    conn.execute(
        f"""
        create table if not exists {MIGRATIONS_TABLE} (
          version text primary key,
          applied_at timestamptz not null default now()
        )
        """
    )
    rows = conn.execute(f"select version from {MIGRATIONS_TABLE}").fetchall()
    conn.commit()
    return {r[0] for r in rows}


def apply_migrations(
    dsn: str,
    *,
    schema: str = "public",
    migrations: Iterable[Migration] | None = None,
) -> list[str]:
    """
    Create the bills / bill_versions schema. Safe to run on every deploy:
    recorded versions are skipped and each migration commits with its record.
    """
    if migrations is None:
        migrations = discover_migrations()

    applied: list[str] = []
    with psycopg.connect(dsn) as conn:
        conn.execute("set timezone to 'UTC'")
        done = _prepare(conn, schema)
        for mig in migrations:
            if mig.version in done:
                continue
            with conn.transaction():
                conn.execute(mig.sql())
                conn.execute(
                    f"insert into {MIGRATIONS_TABLE}(version) values (%s)",
                    (mig.version,),
                )
            applied.append(mig.version)

    return applied
