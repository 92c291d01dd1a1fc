""" Exceptions raised by the estimators.
"""



class DimensionMismatch(ValueError):
    """
    Raised when data or another estimate disagrees with the fixed number of features.

    Attributes
    ----------
    expected : int
        Number of features of the estimate.
    got : int
        Number of features received.
    """

    def __init__(self, expected: int, got: int, message: str|None = None):
        self.expected = expected
        """Number of features of the estimate."""
        self.got = got
        """Number of features received."""

        if message is None:
            message = f'Expected {expected} features, got {got}'
        super().__init__(message)
        return
