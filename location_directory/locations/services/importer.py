"""
Top-level location import.

Coordinates decoding, parsing, header mapping, validation and upserts for
one uploaded file and produces an ImportResult.
"""

import logging
from typing import Optional, Union

from .exceptions import RowSkipped
from .fields import map_row
from .normalizers import decode_upload
from .parsers import parse_delimited
from .report import FirstRowDebug, ImportResult
from .store import DjangoLocationStore, LocationStore
from .upsert import describe_store_error, upsert_location
from .validation import validate_row

logger = logging.getLogger(__name__)


def run_import(
    content: Union[bytes, str], store: Optional[LocationStore] = None
) -> ImportResult:
    """
    Import a delimited text file into the location store.

    Rows are processed one at a time. Rows that fail validation or that the
    store refuses are counted as skipped and do not stop the import.

    Args:
        content: Raw file content
        store: Record store to write to, the database by default

    Returns:
        ImportResult with counts and the first skip diagnostics

    Raises:
        ImportFileError: If the file cannot be decoded
    """
    if store is None:
        store = DjangoLocationStore()

    table = parse_delimited(decode_upload(content))

    result = ImportResult(
        rows=len(table.rows),
        delimiter=table.delimiter,
        first_row_keys=list(table.headers),
    )
    if table.rows:
        result.first_row_sample = dict(table.rows[0])
        result.first_row_debug = FirstRowDebug.from_fields(map_row(table.rows[0]))

    logger.info(
        f"Starting import of {result.rows} rows "
        f"(delimiter {table.delimiter!r}, headers {table.headers})"
    )

    for idx, row in enumerate(table.rows):
        fields = map_row(row)

        try:
            payload = validate_row(fields)
        except RowSkipped as e:
            logger.warning(f"Row {idx}: {e.reason}, skipping")
            result.record_skip(idx, e.reason, fields)
            continue

        try:
            _, created = upsert_location(payload, store)
        except Exception as e:
            reason = describe_store_error(e)
            logger.error(
                f"Row {idx}: store rejected {payload.source}/{payload.source_id} "
                f"({payload.name}): {e}"
            )
            result.record_skip(idx, reason, fields)
            continue

        if created:
            result.inserted += 1
        else:
            result.updated += 1

    logger.info(
        f"Import completed: {result.rows} rows, {result.inserted} inserted, "
        f"{result.updated} updated, {result.skipped} skipped"
    )

    return result
