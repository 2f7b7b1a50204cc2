"""
CSV Utilities

Reading and writing the small CSV files the repricer exchanges with its
operators: harvested product links and failed-product reports.
"""

import csv
import os
from pathlib import Path
from typing import Dict, Iterator, List, Optional


def read_csv(file_path: str | Path, encoding: str = 'utf-8') -> Iterator[Dict[str, str]]:
    """
    Read CSV file and yield rows as dictionaries.

    Args:
        file_path: Path to CSV file
        encoding: File encoding (default: utf-8)

    Yields:
        Dictionary for each row with column names as keys
    """
    with open(file_path, 'r', encoding=encoding, newline='') as f:
        reader = csv.DictReader(f)
        for row in reader:
            yield row


def write_csv(
    file_path: str | Path,
    rows: List[Dict[str, str]],
    fieldnames: Optional[List[str]] = None,
    encoding: str = 'utf-8'
) -> int:
    """
    Write rows to CSV file, creating the parent directory if needed.

    With explicit fieldnames the header is written even when rows is empty,
    so an empty harvest still leaves a readable file behind.

    Args:
        file_path: Path to output CSV file
        rows: List of dictionaries to write
        fieldnames: Column names (if None, uses keys from first row)
        encoding: File encoding (default: utf-8)

    Returns:
        Number of rows written
    """
    if fieldnames is None:
        if not rows:
            return 0
        fieldnames = list(rows[0].keys())

    parent = os.path.dirname(str(file_path))
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(file_path, 'w', encoding=encoding, newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction='ignore')
        writer.writeheader()
        writer.writerows(rows)

    return len(rows)
