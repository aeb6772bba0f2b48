"""
Error kinds raised while converting a statement export.

All of them are terminal: the command line driver reports the message and
exits with a non-zero status.
"""


class ConversionError(ValueError):
    """Base class for every error the converter reports to the user."""


class MissingArgument(ConversionError):
    def __init__(self):
        super().__init__("no filename provided.")


class UnreadableFile(ConversionError):
    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class NoMatchingFormat(ConversionError):
    def __init__(self):
        super().__init__("no parser available (no matching header).")


class MalformedRow(ConversionError):
    """A data line that cannot be mapped to a record.

    Args:
        line_number (int): 1-based position of the line in the input file
        line (str): Offending line content
        reason (str): What was wrong with it
    """

    def __init__(self, line_number, line, reason):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"malformed row at line {line_number} ({reason}): {line}")
