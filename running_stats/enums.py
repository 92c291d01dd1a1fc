""" Configuration enums.
"""
import numpy as np

from enum import Enum



class Precision(Enum):
    """
    Floating-point precision used by an estimate for storage and arithmetic.
    """

    FLOAT32 = 'float32'
    FLOAT64 = 'float64'


    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype of the precision."""
        return np.dtype(self.value)


    @classmethod
    def from_value(cls, value: 'Precision|str|np.dtype|type') -> 'Precision':
        """
        Resolve a precision from an enum member, a name or a NumPy dtype.

        Parameters
        ----------
        value : Precision or str or np.dtype or type
            Precision specification, e.g. `Precision.FLOAT32`, `'float32'` or `np.float32`.

        Returns
        -------
        : Precision
            The matching precision.

        Raises
        ------
        ValueError
            If `value` does not name a supported floating-point precision.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            raise ValueError('Precision cannot be None')
        try:
            name = np.dtype(value).name
        except TypeError:
            raise ValueError(f'Unknown precision {value!r}') from None

        for member in cls:
            if member.value == name:
                return member
        raise ValueError(f'Unsupported precision {name}, expected one of {[m.value for m in cls]}')
