"""
Known PostFinance export layouts.

Each layout is described by a FormatDescriptor: the header line that
identifies it, the field delimiter, the date pattern and the column positions
of the fields we keep. StatementFormat is the registry; its member order is
the order in which headers are looked for. Supporting a new export means
adding one member.

Layouts:
- Account: Date;Type of transaction;Notification text;Credit in CHF;Debit in CHF
  (dates as DD.MM.YYYY)
- Credit card: Date;Booking details;Credit in CHF;Debit in CHF
  (dates as YYYY-MM-DD)
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

from pfconvert.errors import MalformedRow

logger = logging.getLogger(__name__)

# Longest leading decimal number, the same prefix parseFloat-style readers accept
AMOUNT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Bounds that keep credit + debit exact under the default 28 digit context
MAX_INTEGER_DIGITS = 15
MAX_DECIMAL_PLACES = 10


@dataclass(frozen=True)
class Record:
    """One transaction, independent of the export it came from."""

    date: date
    credit: Decimal
    debit: Decimal
    description: str

    @property
    def amount(self) -> Decimal:
        return self.credit + self.debit


def parse_amount(value) -> Decimal:
    """Parse a credit or debit field.

    Args:
        value (str or None): Raw field content

    Returns:
        Decimal: Parsed amount, 0 when the field is empty or not numeric

    Notes:
        - Swiss thousands separators (') and spaces are removed
        - Only the leading number is used, e.g. '12.50 CHF' -> 12.50
        - Non-numeric content falls back to 0 with a warning
        - Amounts with more than MAX_INTEGER_DIGITS integer digits or more
          than MAX_DECIMAL_PLACES significant decimal places fall back to 0
          with a warning
    """
    if value is None:
        return Decimal(0)

    cleaned = re.sub(r"['\s]", "", value)
    if cleaned == "":
        return Decimal(0)

    match = AMOUNT_PATTERN.match(cleaned)
    if not match:
        logger.warning(f"Amount {value!r} is not numeric, using 0")
        return Decimal(0)

    if match.end() != len(cleaned):
        logger.warning(f"Ignoring trailing text in amount {value!r}")

    try:
        amount = Decimal(match.group(0))
    except InvalidOperation:
        logger.warning(f"Amount {value!r} is not numeric, using 0")
        return Decimal(0)

    if not is_representable(amount):
        logger.warning(f"Amount {value!r} is out of range, using 0")
        return Decimal(0)

    return Decimal(0) if amount.is_zero() else amount


def is_representable(amount: Decimal) -> bool:
    """Check that an amount fits MAX_INTEGER_DIGITS and MAX_DECIMAL_PLACES."""
    if not amount.is_finite():
        return False
    if amount.is_zero():
        return True
    if amount.adjusted() >= MAX_INTEGER_DIGITS:
        return False
    try:
        return amount == amount.quantize(Decimal(1).scaleb(-MAX_DECIMAL_PLACES))
    except InvalidOperation:
        return False


@dataclass(frozen=True)
class FormatDescriptor:
    """Rules for identifying and parsing one export layout."""

    name: str
    header: str
    date_format: str
    date_column: int
    description_column: int
    credit_column: int
    debit_column: int
    delimiter: str = ";"

    @property
    def field_count(self) -> int:
        """Number of fields a data row needs for the mapping to apply."""
        return max(self.date_column, self.description_column,
                   self.credit_column, self.debit_column) + 1

    def split(self, line):
        return line.split(self.delimiter)

    def to_record(self, columns, line_number=0, line=None) -> Record:
        """Map the fields of one data row to a Record.

        Raises:
            MalformedRow: If the row is too short or its date does not parse
        """
        if line is None:
            line = self.delimiter.join(columns)

        if len(columns) < self.field_count:
            raise MalformedRow(
                line_number, line,
                f"expected at least {self.field_count} fields, got {len(columns)}"
            )

        raw_date = columns[self.date_column].strip()
        try:
            parsed_date = datetime.strptime(raw_date, self.date_format).date()
        except ValueError:
            raise MalformedRow(line_number, line, f"invalid date {raw_date!r}")

        return Record(
            date=parsed_date,
            credit=parse_amount(columns[self.credit_column]),
            debit=parse_amount(columns[self.debit_column]),
            description=columns[self.description_column],
        )


class StatementFormat(Enum):
    ACCOUNT = FormatDescriptor(
        name="account parser",
        header="Date;Type of transaction;Notification text;Credit in CHF;Debit in CHF",
        date_format="%d.%m.%Y",
        date_column=0,
        description_column=2,
        credit_column=3,
        debit_column=4,
    )
    CREDIT_CARD = FormatDescriptor(
        name="credit card parser",
        header="Date;Booking details;Credit in CHF;Debit in CHF",
        date_format="%Y-%m-%d",
        date_column=0,
        description_column=1,
        credit_column=2,
        debit_column=3,
    )

    @property
    def descriptor(self) -> FormatDescriptor:
        return self.value
