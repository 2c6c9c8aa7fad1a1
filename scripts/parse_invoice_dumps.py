#!/usr/bin/env python3
"""Parse a directory of invoice text dumps into invoice JSON.

Each *.txt file holds the plain text extracted from one auction invoice PDF.
Results are written in the persisted document shape (camelCase fields),
together with the diagnostics that flag fields for manual review.

Usage:
    python scripts/parse_invoice_dumps.py --input-dir data/dumps --output data/invoices.json

Enrichment uses the backend configured through APP_INVENTORY_BACKEND
(and APP_INVENTORY_SEED_PATH / APP_INVENTORY_BASE_URL).
"""

import argparse
import json
import logging
from pathlib import Path

from auction_invoices.batch.service import BatchParser
from auction_invoices.enrichment.factory import create_sold_item_lookup
from auction_invoices.shared.config import get_settings

logger = logging.getLogger(__name__)


def load_dumps(input_dir: Path, limit: int | None = None) -> dict[str, str]:
    """Read text dumps from a directory.

    Args:
        input_dir: Directory holding *.txt dumps
        limit: Maximum number of files to read

    Returns:
        Raw text per file name, sorted by name

    Raises:
        FileNotFoundError: If the directory doesn't exist
    """
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")

    paths = sorted(input_dir.glob("*.txt"))
    if limit:
        paths = paths[:limit]
    return {path.name: path.read_text(encoding="utf-8") for path in paths}


def main() -> None:
    """Parse dumps and write the results."""
    parser = argparse.ArgumentParser(description="Parse auction invoice text dumps")
    parser.add_argument(
        "--input-dir",
        type=Path,
        default=Path("data/dumps"),
        help="Directory of *.txt invoice dumps",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("data/invoices.json"),
        help="Output JSON file path",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Limit number of dumps to parse",
    )
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    documents = load_dumps(args.input_dir, limit=args.limit)
    lookup = create_sold_item_lookup(settings)
    try:
        batch = BatchParser(settings, lookup).parse_documents(documents)
    finally:
        lookup.close()

    output = {
        name: {
            "invoice": result.invoice.model_dump(mode="json", by_alias=True)
            if result.invoice
            else None,
            "error": result.error,
            "diagnostics": [d.model_dump(mode="json") for d in result.diagnostics],
        }
        for name, result in batch.results.items()
    }

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(output, f, indent=2)
    logger.info(
        f"Saved {len(output)} invoices to {args.output} "
        f"({len(batch.failed)} failed, {len(batch.needs_review)} need review)"
    )


if __name__ == "__main__":
    main()
