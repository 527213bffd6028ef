class InvalidGrant(ValueError):
    """A grant whose terms cannot produce a vesting schedule."""


class GrantFileError(ValueError):
    """A grants file that could not be read or parsed.

    ``line_number`` is the 1-based CSV line that failed, or ``None`` when the
    failure concerns the file as a whole.
    """

    def __init__(self, message: str, line_number: int | None = None):
        super().__init__(message)
        self.line_number = line_number
