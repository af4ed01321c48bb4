"""Command-line entrypoints for the bill text archiver."""

from __future__ import annotations

import logging

import click

from bill_text_core.archive import ArchiveOptions, run_archive
from bill_text_core.citations import CitationServiceClient, unavailable_extractor
from bill_text_core.config import load_settings
from bill_text_core.db import PostgresConfig, connect
from bill_text_core.migrations.runner import apply_migrations
from bill_text_core.nats_publisher import report_publisher
from bill_text_core.qdrant import QdrantClient
from bill_text_core.report import RunReporter
from bill_text_core.repositories import BillRepository, BillVersionRepository
from bill_text_core.sinks import DualSinkWriter
from bill_text_core.sources.gpo import GpoLayout
from bill_text_core.util import parse_bill_id

logger = logging.getLogger(__name__)


@click.group()
def main() -> None:
    """Bill text archive management commands."""


@main.command()
def migrate() -> None:
    """Create the bills and bill_versions tables if needed."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    dsn = PostgresConfig.from_settings(settings).build_dsn()
    applied = apply_migrations(dsn, schema=settings.pg_schema)
    logger.info("Applied migrations: %s", ", ".join(applied) or "none")


@main.command(name="run")
@click.option("--limit", type=int, default=None, help="Index at most this many bills.")
@click.option("--bill-id", default=None, help="Index only this bill, e.g. hr81-112.")
@click.option("--rearchive-session", type=int, default=None, help="Mark a session unindexed first.")
@click.option("--session", type=int, default=None, help="Session to index (default: CURRENT_SESSION).")
@click.option("--debug", is_flag=True, default=False)
def run_cmd(
    limit: int | None,
    bill_id: str | None,
    rearchive_session: int | None,
    session: int | None,
    debug: bool,
) -> None:
    """Index the full text of unindexed bill versions."""

    if bill_id:
        try:
            parse_bill_id(bill_id)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--bill-id") from e

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()

    qdrant = QdrantClient(base_url=settings.qdrant_url, api_key=settings.qdrant_api_key)
    qdrant.ensure_collection(name=settings.qdrant_bills_collection)
    qdrant.ensure_collection(name=settings.qdrant_versions_collection)

    if settings.citation_service_url:
        extract_citations = CitationServiceClient(base_url=settings.citation_service_url)
    else:
        logger.warning("CITATION_SERVICE_URL not set; versions will be stored without citations")
        extract_citations = unavailable_extractor

    publish = (
        report_publisher(settings.nats_url, settings.nats_report_subject) if settings.nats_url else None
    )

    options = ArchiveOptions(
        session=session,
        limit=limit,
        bill_id=bill_id,
        rearchive_session=rearchive_session,
        debug=debug,
        isolate_failures=settings.isolate_failures,
    )

    dsn = PostgresConfig.from_settings(settings).build_dsn()
    with connect(dsn, schema=settings.pg_schema) as conn:
        bills = BillRepository(conn)
        writer = DualSinkWriter(
            bills=bills,
            versions=BillVersionRepository(conn),
            index=qdrant,
            bills_collection=settings.qdrant_bills_collection,
            versions_collection=settings.qdrant_versions_collection,
        )
        report = run_archive(
            options,
            current_session=settings.current_session,
            bills=bills,
            writer=writer,
            gpo=GpoLayout(data_dir=settings.data_dir),
            extract_citations=extract_citations,
            reporter=RunReporter(publish=publish),
        )

    click.echo(report.summary)


if __name__ == "__main__":
    main()
