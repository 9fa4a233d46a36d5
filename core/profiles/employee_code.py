"""
Employee code sequencing.

Codes look like GS000001: a fixed prefix followed by a zero-padded integer
of fixed width. The next code is derived from the maximum existing code
rather than from a counter, so profiles created outside this service are
taken into account. With a fixed width, string ordering equals numeric
ordering.

Two concurrent allocations can compute the same code. Storage enforces a
unique constraint and the caller re-invokes next_code() on conflict.
"""

import re
from typing import Iterable, List, Optional

from core.errors import EmployeeCodeExhausted

DEFAULT_PREFIX = "GS"
DEFAULT_WIDTH = 6


class EmployeeCodeSequencer:
    def __init__(self, prefix: str = DEFAULT_PREFIX, width: int = DEFAULT_WIDTH):
        if width < 1:
            raise ValueError(f"width must be positive, got {width}")
        self.prefix = prefix
        self.width = width
        self._pattern = re.compile(rf"{re.escape(prefix)}([0-9]{{{width}}})")

    def is_valid(self, code: Optional[str]) -> bool:
        return bool(code) and self._pattern.fullmatch(code) is not None

    def malformed(self, codes: Iterable[Optional[str]]) -> List[str]:
        """Non-empty codes that do not follow the prefix + digits format."""
        return [c for c in codes if c and not self.is_valid(c)]

    def next_code(self, existing_codes: Iterable[Optional[str]]) -> str:
        """
        Compute the code following the highest well-formed existing code.

        Malformed codes are ignored; with no well-formed code the sequence
        starts at 1.

        Raises:
            EmployeeCodeExhausted: If the next number does not fit the width.
        """
        valid = [c for c in existing_codes if self.is_valid(c)]

        number = 1
        if valid:
            latest = max(valid)
            number = int(self._pattern.fullmatch(latest).group(1)) + 1

        if number >= 10 ** self.width:
            raise EmployeeCodeExhausted(
                f"Employee code sequence {self.prefix} exhausted at width {self.width}"
            )

        return f"{self.prefix}{number:0{self.width}d}"


def next_code(
    existing_codes: Iterable[Optional[str]],
    prefix: str = DEFAULT_PREFIX,
    width: int = DEFAULT_WIDTH
) -> str:
    return EmployeeCodeSequencer(prefix, width).next_code(existing_codes)
