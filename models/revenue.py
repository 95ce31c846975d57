"""
models/revenue.py
-----------------
Domain model for the monthly revenue fact table.
"""

from dataclasses import dataclass


@dataclass
class Revenue:
    """
    One month of revenue.

    Attributes:
        month: Unique month code, at most 4 characters (e.g. 'Jan').
        revenue: Revenue for that month in whole currency units.
    """
    month: str
    revenue: int

    def __post_init__(self) -> None:
        if not self.month or len(self.month) > 4:
            raise ValueError(f"Invalid revenue month code: {self.month!r}")
        if isinstance(self.revenue, bool) or not isinstance(self.revenue, int):
            raise ValueError(f"Revenue must be an integer, got {self.revenue!r}")
