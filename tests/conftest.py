import logging

import pytest

ACCOUNT_HEADER = 'Date;Type of transaction;Notification text;Credit in CHF;Debit in CHF'
CREDIT_CARD_HEADER = 'Date;Booking details;Credit in CHF;Debit in CHF'

# Sample exports, laid out the way PostFinance writes them
account_export_lines = [
    'Date from:;="01.01.2023"',
    'Date to:;="31.01.2023"',
    'Entry type:;="All bookings"',
    'Account:;="CH0000000000000000000"',
    'Currency:;="CHF"',
    '',
    ACCOUNT_HEADER,
    '19.01.2023;Payment;Invoice #1;100.50;',
    '20.01.2023;Debit;Rent January;;1500',
    '23.01.2023;e-finance;Transfer, savings;;250.25',
    '',
    'Disclaimer:',
    'This is not a document created by PostFinance Ltd.',
]

credit_card_export_lines = [
    'Card number:;XXXX XXXX XXXX 1234',
    '',
    CREDIT_CARD_HEADER,
    '2023-01-19;Coffee shop;;4.50',
    '2023-01-21;Refund online shop;12.00;',
    '',
    'Total;;12.00;4.50',
]


def to_crlf(lines):
    return '\r\n'.join(lines)


@pytest.fixture
def account_lines():
    """Lines of an account export, already split."""
    return list(account_export_lines)


@pytest.fixture
def credit_card_lines():
    """Lines of a credit card export, already split."""
    return list(credit_card_export_lines)


@pytest.fixture
def write_export(tmp_path):
    """Helper fixture to write export files with a given line separator"""
    def _write(lines, name='export.csv', separator='\r\n', encoding='utf-8'):
        file_path = tmp_path / name
        file_path.write_bytes(separator.join(lines).encode(encoding))
        return file_path
    return _write


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging: close the handlers it installed and restore the level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
