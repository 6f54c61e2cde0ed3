class InputValidationError(ValueError):
    """Malformed or missing top-level request fields."""


class TermRangeError(InputValidationError):
    """Target term precedes the starting term."""
