"""
Word file import - turns CSV/Excel uploads and JSON arrays into
``RawWordImport`` records.

Invalid records are skipped and counted, they never abort an import.
"""
from __future__ import annotations

import io
import logging
from typing import Any, Dict, IO, Iterable, List, Tuple, Union

import pandas as pd
from openpyxl import load_workbook
from pydantic import ValidationError as PydanticValidationError

from ..schemas import RawWordImport

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = ('.csv', '.txt')
EXCEL_EXTENSIONS = ('.xlsx', '.xlsm')


def parse_word_records(records: Iterable[Any]) -> Tuple[List[RawWordImport], int]:
    """
    Validate raw records.

    Returns:
        (valid records, number of skipped records)
    """
    valid: List[RawWordImport] = []
    skipped = 0
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            skipped += 1
            continue
        try:
            valid.append(RawWordImport.model_validate(record))
        except PydanticValidationError as exc:
            skipped += 1
            logger.debug("Skipping import record %s: %s", index, exc.errors(include_url=False))
    return valid, skipped


def _read_excel(stream: IO[bytes]) -> pd.DataFrame:
    """Read the first sheet with cached formula values, header on the first row."""
    wb = load_workbook(stream, data_only=True, read_only=True)
    try:
        ws = wb.worksheets[0]
        data = [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    if not data:
        return pd.DataFrame()

    raw_headers = data[0]
    # Columns without a header cell are dropped.
    valid_indices = [i for i, h in enumerate(raw_headers) if h is not None]
    headers = [str(raw_headers[i]).strip() for i in valid_indices]
    rows = [
        [row[i] if i < len(row) else None for i in valid_indices]
        for row in data[1:]
    ]
    return pd.DataFrame(rows, columns=headers)


def _frame_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    df = df.dropna(how='all')
    df.columns = [str(c).strip() for c in df.columns]
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient='records')


def read_word_file(file: Union[str, IO[bytes]], filename: str) -> List[Dict[str, Any]]:
    """
    Read an uploaded word list into raw record dicts.

    Args:
        file: Path or binary stream
        filename: Original file name, used to pick the parser

    Raises:
        ValueError: Unsupported extension or unreadable file
    """
    name = (filename or '').lower()

    if isinstance(file, str):
        with open(file, 'rb') as fh:
            content = fh.read()
    else:
        content = file.read()
    stream = io.BytesIO(content)

    try:
        if name.endswith(CSV_EXTENSIONS):
            df = pd.read_csv(stream, dtype=str, encoding='utf-8-sig', skip_blank_lines=True)
        elif name.endswith(EXCEL_EXTENSIONS):
            df = _read_excel(stream)
        else:
            raise ValueError(f"Unsupported file type: {filename}")
    except ValueError:
        raise
    except Exception as exc:
        logger.warning("Failed to read word file %s: %s", filename, exc)
        raise ValueError(f"Could not read {filename}: {exc}") from exc

    records = _frame_to_records(df)
    logger.info("Read %s rows from %s", len(records), filename)
    return records
