"""
Birthday — A date that remembers which parts Graph actually returned.

The user "birthday" field comes back in one of three shapes depending on
the permissions granted:

    MM/DD/YYYY  full date
    MM/DD       no year (stored with placeholder year 2000)
    YYYY        year only (stored as January 1st)
"""

from datetime import date

PLACEHOLDER_YEAR = 2000


class Birthday(date):
    """A Graph birthday. See the module docstring for the accepted formats."""

    def __new__(cls, value: str):
        parts = str(value).split("/")

        if len(parts) == 3:
            month, day, year = (int(p) for p in parts)
        elif len(parts) == 2:
            month, day = (int(p) for p in parts)
            year = PLACEHOLDER_YEAR
        elif len(parts) == 1:
            year, month, day = int(parts[0]), 1, 1
        else:
            raise ValueError(f"Unrecognised birthday format: {value!r}")

        birthday = super().__new__(cls, year, month, day)
        birthday.raw = str(value)
        birthday._has_year = len(parts) in (1, 3)
        birthday._has_date = len(parts) in (2, 3)
        return birthday

    @property
    def has_date(self) -> bool:
        """Whether the birth month and day are known."""
        return self._has_date

    @property
    def has_year(self) -> bool:
        """Whether the birth year is known."""
        return self._has_year

    def __reduce__(self):
        return (Birthday, (self.raw,))

    def __repr__(self) -> str:
        return f"Birthday({self.raw!r})"
