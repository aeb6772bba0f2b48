"""
PostFinance to FreeAgent Conversion

This module converts PostFinance statement exports into the CSV layout that
FreeAgent's bank statement import accepts.

Output Format (one line per transaction, no header):
- Date: DD/MM/YYYY
- Amount: credit + debit as a plain decimal number
- Description: booking text, quoted only when it contains a comma, a double
  quote or a line break

Pipeline:
1. Read the file and split it on CRLF
2. Detect the export layout from its header line
3. Parse the data lines after the header into records
4. Render the records and print them to stdout

Input files with bare LF line endings are not supported; they read as a
single line and are reported as having no matching header.
"""

import argparse
import csv
import logging
import re
import sys
from decimal import Decimal

import pandas as pd

from pfconvert.errors import (
    ConversionError,
    MissingArgument,
    NoMatchingFormat,
    UnreadableFile,
)
from pfconvert.formats import StatementFormat
from pfconvert.utils import setup_logging

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\r\n"

# Tried in order when decoding an export
ENCODINGS = ['utf-8-sig', 'cp1252']

# Transactions are the lines that start with a digit
DATA_LINE_PATTERN = re.compile(r"[0-9][^\r\n]*")

OUTPUT_DATE_FORMAT = '%d/%m/%Y'

RENDER_COLUMNS = ['Date', 'Amount', 'Description']


def read_lines(file_path):
    """Read an export and split it into lines.

    Args:
        file_path (str or Path): Path to the export

    Returns:
        list: Lines of the file, split on CRLF only

    Raises:
        UnreadableFile: If the file is missing, unreadable or cannot be decoded
    """
    logger.debug(f"Reading file: {file_path}")
    try:
        with open(file_path, 'rb') as f:
            content = f.read()
    except OSError as e:
        raise UnreadableFile(file_path, e.strerror or str(e))

    for encoding in ENCODINGS:
        try:
            text = content.decode(encoding)
            logger.debug(f"Successfully decoded file with encoding: {encoding}")
            break
        except UnicodeDecodeError:
            continue
    else:
        raise UnreadableFile(file_path, "could not decode with any supported encoding")

    return text.split(LINE_SEPARATOR)


def detect_format(lines, registry=StatementFormat):
    """Identify the export layout from its header line.

    The first format in registry order whose header appears verbatim as one
    of the lines wins.

    Args:
        lines (list): Lines of the export
        registry (iterable): Formats to try, in priority order

    Returns:
        tuple: (StatementFormat, index of the header line)

    Raises:
        NoMatchingFormat: If no header is present
    """
    for statement_format in registry:
        header = statement_format.descriptor.header
        if header in lines:
            header_index = lines.index(header)
            logger.info(f"Identified format: {statement_format.descriptor.name} (header at line {header_index + 1})")
            return statement_format, header_index

    raise NoMatchingFormat()


def is_data_line(line):
    return DATA_LINE_PATTERN.fullmatch(line) is not None


def parse_rows(statement_format, lines, start=0):
    """Lazily parse the data lines of an export into records.

    Args:
        statement_format (StatementFormat): Detected layout
        lines (list): All lines of the export
        start (int): Index of the first line after the header

    Yields:
        Record: One per data line, in file order

    Raises:
        MalformedRow: On the first data line that cannot be mapped
    """
    descriptor = statement_format.descriptor
    for index in range(start, len(lines)):
        line = lines[index]
        if not is_data_line(line):
            continue
        yield descriptor.to_record(descriptor.split(line), line_number=index + 1, line=line)


def convert_lines(lines):
    """Detect the layout of an export and parse all of its records.

    Returns:
        list: Records in file order
    """
    statement_format, header_index = detect_format(lines)
    records = list(parse_rows(statement_format, lines, header_index + 1))
    logger.info(f"Parsed {len(records)} transactions with the {statement_format.descriptor.name}")
    return records


def format_amount(value: Decimal) -> str:
    """Format an amount as a plain decimal number without trailing zeros.

    Examples: 100.50 -> '100.5', 25 -> '25', 0.00 -> '0'
    """
    normalized = value.normalize()
    if normalized == 0:
        return '0'
    return format(normalized, 'f')


def records_to_frame(records) -> pd.DataFrame:
    """Build the output table for a sequence of records."""
    rows = [
        {
            'Date': record.date.strftime(OUTPUT_DATE_FORMAT),
            'Amount': format_amount(record.amount),
            'Description': record.description,
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=RENDER_COLUMNS)


def render_records(records) -> str:
    """Render records as FreeAgent CSV lines.

    Args:
        records (iterable): Records to render

    Returns:
        str: One line per record joined with newlines, no trailing newline
    """
    df = records_to_frame(records)
    if df.empty:
        return ""

    output = df.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator='\n'
    )
    if output.endswith('\n'):
        output = output[:-1]
    return output


def summarize_records(records):
    """Summarize converted records.

    Args:
        records (list): Records to summarize

    Returns:
        dict: count, total_credit, total_debit, first_date and last_date
    """
    total_credit = sum((record.credit for record in records), Decimal(0))
    total_debit = sum((record.debit for record in records), Decimal(0))
    dates = [record.date for record in records]

    return {
        'count': len(records),
        'total_credit': total_credit,
        'total_debit': total_debit,
        'first_date': min(dates) if dates else None,
        'last_date': max(dates) if dates else None,
    }


def convert_file(file_path):
    """Convert one export file.

    Returns:
        tuple: (rendered output, list of records)
    """
    if file_path is None or str(file_path).strip() == "":
        raise MissingArgument()

    lines = read_lines(file_path)
    records = convert_lines(lines)
    return render_records(records), records


def main(argv=None):
    """Main execution function.

    Returns:
        int: Process exit status
    """
    parser = argparse.ArgumentParser(
        prog='pfconvert',
        description='Convert a PostFinance CSV export into a FreeAgent bank import CSV'
    )
    parser.add_argument('filename', nargs='?', default=None,
                        help='Path to the PostFinance export')
    args = parser.parse_args(argv)

    setup_logging()

    try:
        output, records = convert_file(args.filename)
    except ConversionError as e:
        logger.debug(f"Conversion failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)

    summary = summarize_records(records)
    logger.info(
        f"Converted {summary['count']} transactions "
        f"({summary['first_date']} to {summary['last_date']}), "
        f"credit {format_amount(summary['total_credit'])}, "
        f"debit {format_amount(summary['total_debit'])}"
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
