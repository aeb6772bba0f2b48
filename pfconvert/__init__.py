"""
pfconvert - Convert PostFinance statement exports into FreeAgent import CSVs.

This package provides functionality to:
- Detect which PostFinance export layout a file uses (account or credit card)
- Parse its transactions into a common record
- Render the records as FreeAgent bank import lines

The output format has one line per transaction:
- Date: DD/MM/YYYY
- Amount: credit + debit as a plain decimal number
- Description: booking text
"""

from .errors import (
    ConversionError,
    MissingArgument,
    UnreadableFile,
    NoMatchingFormat,
    MalformedRow
)
from .formats import (
    Record,
    FormatDescriptor,
    StatementFormat,
    parse_amount
)
from .convert import (
    read_lines,
    detect_format,
    parse_rows,
    convert_lines,
    convert_file,
    format_amount,
    render_records,
    summarize_records,
    main
)

__all__ = [
    'ConversionError',
    'MissingArgument',
    'UnreadableFile',
    'NoMatchingFormat',
    'MalformedRow',
    'Record',
    'FormatDescriptor',
    'StatementFormat',
    'parse_amount',
    'read_lines',
    'detect_format',
    'parse_rows',
    'convert_lines',
    'convert_file',
    'format_amount',
    'render_records',
    'summarize_records',
    'main'
]
