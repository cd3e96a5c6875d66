"""
Import a JSON file of FX deals from the command line.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import TypeAdapter, ValidationError

from app.config import get_deal_import_settings
from app.importer.worker_pool import ImportWorkerPool
from app.repositories.deal_repository import DealRepository
from app.schemas.deals import DealImportResponse, DealRequest
from app.services.deal_import_service import DealImportService
from db.session import SessionLocal, dispose_engine

_DEALS_ADAPTER = TypeAdapter(list[DealRequest])


def positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw!r}")
    return value


def main() -> int:
    parser = argparse.ArgumentParser(description="Import FX deals from a JSON array.")
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="JSON file holding an array of deals; '-' reads stdin.",
    )
    parser.add_argument(
        "--chunk-size",
        type=positive_int,
        default=None,
        help="Override DEAL_IMPORT_CHUNK_SIZE for this run.",
    )
    parser.add_argument(
        "--workers",
        type=positive_int,
        default=None,
        help="Override DEAL_IMPORT_MAX_WORKERS for this run.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if args.path == "-":
        raw = sys.stdin.read()
    else:
        with open(args.path, encoding="utf-8") as stream:
            raw = stream.read()

    try:
        deals = _DEALS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        print(exc, file=sys.stderr)
        return 2

    settings = get_deal_import_settings()
    chunk_size = settings.chunk_size if args.chunk_size is None else args.chunk_size
    workers = settings.max_workers if args.workers is None else args.workers

    try:
        with ImportWorkerPool(max_workers=workers) as pool:
            service = DealImportService(
                store=DealRepository(SessionLocal),
                pool=pool,
                chunk_size=chunk_size,
            )
            summary = service.import_deals([deal.to_record() for deal in deals])
    finally:
        dispose_engine()

    print(DealImportResponse.from_summary(summary).model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
