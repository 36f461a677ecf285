from typing import Iterable
from Crypto.Util import number

from .errors import InvalidDataError


def encode_components(values: Iterable[int], width: int) -> bytes:
    """Encodes integers as concatenated fixed-width big-endian strings.

    Args:
        values: Non-negative integers, each fitting into `width` bytes.
        width: The number of bytes per integer.

    Returns:
        The concatenation of the encoded integers.
    """
    encoded = b""
    for value in values:
        if value < 0 or value.bit_length() > 8 * width:
            raise ValueError(f"{value}: Does not fit into {width} bytes.")
        encoded += number.long_to_bytes(value, width)
    return encoded


def decode_components(data: bytes, count: int) -> tuple[int, ...]:
    """Splits `data` into `count` equally long big-endian integers.

    Raises:
        InvalidDataError: `data` is empty or cannot be split evenly.
    """
    if len(data) == 0 or len(data) % count != 0:
        errmsg = f"The length of the data must be a positive multiple of {count}."
        raise InvalidDataError(errmsg)

    width = len(data) // count
    return tuple(
        number.bytes_to_long(data[i * width : (i + 1) * width])
        for i in range(count)
    )
