"""Address and amount primitives shared by the router and the HTTP API.

Inside the router an address is a lowercase 0x-prefixed string and an
amount is a plain int in the uint256 range. The pydantic aliases below are
for the API boundary, where amounts travel as decimal strings.
"""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

UINT256_MAX = 2**256 - 1

ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_uint256(value: object) -> bool:
    """True for a non-bool int in [0, 2^256-1]."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= UINT256_MAX


def validate_uint256(value: Any) -> str:
    """Coerce an int or decimal string to a canonical uint256 decimal string.

    Raises:
        ValueError: For bools, floats, non-decimal strings and out-of-range values
    """
    if isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"Uint256 must be a decimal integer string: {value!r}")
        value = int(value)
    elif isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Uint256 must be str or int, got {type(value).__name__}")

    if not is_uint256(value):
        raise ValueError(f"Uint256 out of range: {value}")
    return str(value)


Address = Annotated[str, Field(pattern=_ADDRESS_RE.pattern)]

Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def is_valid_address(address: object) -> bool:
    return isinstance(address, str) and _ADDRESS_RE.match(address) is not None


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Lowercase an address and add the 0x prefix if missing.

    With validate=True a malformed result raises ValueError.
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = f"0x{addr}"
    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")
    return addr


def is_zero_address(address: str | None) -> bool:
    """True for None, the empty string, or the all-zero address."""
    return not address or normalize_address(address) == ZERO_ADDRESS
