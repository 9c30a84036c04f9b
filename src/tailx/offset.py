"""Offset token parsing.

An offset token says where output starts:

- ``K`` or ``-K``  the last K units
- ``+K``           start at the K-th unit, counting from 1
- ``+0``           start at the first unit, if the source has any

``+0`` is kept apart from ``0``: ``0`` asks for zero units and yields nothing.
"""

import re
from dataclasses import dataclass

from tailx.errors import ConfigurationError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

PLUS_ZERO_TOKEN = '+0'

_INTEGER_TOKEN = re.compile(r'[+-]?[0-9]+')


@dataclass(frozen=True)
class ZeroFromStart:
    """The ``+0`` sentinel: begin at the first unit."""

    token: str = PLUS_ZERO_TOKEN


@dataclass(frozen=True)
class Signed:
    """A signed unit count.

    Positive values count from the start (1-based), negative values from the end.
    """

    value: int
    token: str = ''

    @property
    def from_start(self) -> bool:
        return self.value > 0


Offset = ZeroFromStart | Signed


def parse_offset(token: str) -> Offset:
    """Parse an offset token into ``ZeroFromStart`` or ``Signed``.

    Raises:
        ConfigurationError: token is not a signed 64-bit integer
    """
    if token == PLUS_ZERO_TOKEN:
        return ZeroFromStart()

    # int() alone would also accept whitespace, underscores and non-ASCII digits
    if not isinstance(token, str) or not _INTEGER_TOKEN.fullmatch(token):
        raise ConfigurationError(f'illegal offset -- {token}', token=token)

    number = int(token)
    if number < INT64_MIN or number > INT64_MAX:
        raise ConfigurationError(f'offset out of range -- {token}', token=token)

    if token.startswith('+') or number < 0:
        return Signed(number, token)
    return Signed(-number, token)
