"""
Harvested link files.

Harvested links are saved as CSV so a commit run can be resumed from a
known list (--links-file) without walking the listing again.
"""

import logging
from pathlib import Path
from typing import List

from ..common.constants import LINK_FIELDNAMES
from ..common.csv_utils import read_csv, write_csv
from ..models import ProductLink

logger = logging.getLogger(__name__)


def save_links(links: List[ProductLink], file_path: str | Path) -> int:
    """Write links to CSV. Returns the number of rows written."""
    rows = [
        {"internal_ref": link.internal_ref, "external_ref": link.external_ref, "sku": link.sku or ""}
        for link in links
    ]
    count = write_csv(file_path, rows, fieldnames=LINK_FIELDNAMES)
    logger.info("Saved %d links to %s", count, file_path)
    return count


def load_links(file_path: str | Path) -> List[ProductLink]:
    """
    Read links from a CSV written by save_links.

    Rows missing either reference are skipped with a warning.
    """
    links = []
    for line_number, row in enumerate(read_csv(file_path), start=2):
        internal_ref = (row.get("internal_ref") or "").strip()
        external_ref = (row.get("external_ref") or "").strip()
        if not internal_ref or not external_ref:
            logger.warning("Skipping line %d of %s: missing reference", line_number, file_path)
            continue
        links.append(ProductLink(
            internal_ref=internal_ref,
            external_ref=external_ref,
            sku=(row.get("sku") or "").strip() or None,
        ))

    logger.info("Loaded %d links from %s", len(links), file_path)
    return links
