"""
Decoding of uploaded todo CSV files.

Parsing is delegated to pandas. Every value is read as a string so nothing is
coerced to numbers or NaN, and rows are then projected onto the
``todo_name,note`` columns.
"""

import io
from typing import List

import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from csv_importer.logging_config import get_logger
from csv_importer.schemas.event import TodoCSV

logger = get_logger("services.csv_decoder")

TODO_COLUMNS = ["todo_name", "note"]


class CSVDecodeError(ValueError):
    """Raised when an upload is not well-formed CSV."""


def decode_todos(content: bytes) -> List[TodoCSV]:
    """
    Decode CSV content with a header row into todo records.

    Columns are matched by header name and other columns are ignored. A
    repeated header name maps to its first column, and a header lacking
    ``todo_name`` or ``note`` yields empty values for that field on every row.

    Args:
        content: Raw file bytes, UTF-8 encoded

    Returns:
        One TodoCSV per data row, in file order

    Raises:
        CSVDecodeError: On unterminated quotes, rows with the wrong number of
            fields, undecodable bytes or an input without a header row
    """
    try:
        # header=None makes the header row fix the width, so any longer row
        # is a ParserError instead of being folded into an index column
        df = pd.read_csv(
            io.BytesIO(content),
            header=None,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8",
        )
    except (ParserError, EmptyDataError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to decode CSV upload: {e}")
        raise CSVDecodeError(str(e)) from e

    header = list(df.iloc[0])
    rows = df.iloc[1:]

    # short rows are the only source of NaN once keep_default_na is off
    short = rows.isna().any(axis=1)
    if short.any():
        record = int(short.to_numpy().argmax()) + 1
        message = f"record {record}: wrong number of fields"
        logger.warning(f"Failed to decode CSV upload: {message}")
        raise CSVDecodeError(message)

    positions = {
        column: header.index(column) for column in TODO_COLUMNS if column in header
    }
    return [
        TodoCSV(**{column: values[position] for column, position in positions.items()})
        for values in rows.itertuples(index=False, name=None)
    ]
