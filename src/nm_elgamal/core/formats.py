"""DER and PEM containers for ElGamal keys.

    GroupParams    ::= SEQUENCE { p INTEGER, q INTEGER OPTIONAL, g INTEGER }
    KeyInfo        ::= SEQUENCE { algorithm OBJECT IDENTIFIER,
                                  params GroupParams }
    PublicKeyInfo  ::= SEQUENCE { info KeyInfo, y BIT STRING }
    PrivateKeyInfo ::= SEQUENCE { version INTEGER, info KeyInfo,
                                  x OCTET STRING }

`y` and `x` are carried as big-endian magnitudes. If `q` is omitted,
it is taken to be `(p - 1) / 2`.
"""

from typing import Final
from Crypto.IO import PEM
from Crypto.Util import number
from Crypto.Util.asn1 import (
    DerBitString,
    DerObjectId,
    DerOctetString,
    DerSequence,
)

from .errors import (
    InvalidDataError,
    InvalidOIDError,
    PrivateKeyMalformedError,
    PublicKeyMalformedError,
)
from .group import Group
from .keys import PrivateKey, PublicKey


ELGAMAL_OID: Final = "1.3.14.7.2.1.1"
DSA_OID: Final = "1.2.840.10040.4.1"

_PUBLIC_KEY_MARKER: Final = "ELGAMAL PUBLIC KEY"
_PRIVATE_KEY_MARKER: Final = "ELGAMAL PRIVATE KEY"


def _encode_key_info(group: Group) -> bytes:
    params = DerSequence([group.p, group.q, group.g])
    return DerSequence([DerObjectId(ELGAMAL_OID), params]).encode()


def _decode_key_info(data: bytes) -> tuple[int, int, int]:
    try:
        info = DerSequence().decode(data, nr_elements=2)
        algorithm = DerObjectId().decode(info[0]).value
        params = DerSequence().decode(
            info[1], nr_elements=(2, 3), only_ints_expected=True
        )
    except (TypeError, ValueError) as e:
        raise InvalidDataError("Malformed algorithm information.") from e

    if algorithm not in (ELGAMAL_OID, DSA_OID):
        raise InvalidOIDError(f"{algorithm}: An unknown algorithm.")

    if len(params) == 3:
        p, q, g = params[0], params[1], params[2]
    else:
        p, g = params[0], params[1]
        q = (p - 1) // 2
    return p, q, g


def _armor(der: bytes, marker: str, format: str) -> bytes | str:
    if format == "DER":
        return der
    if format == "PEM":
        return PEM.encode(der, marker)
    raise ValueError(f"{format}: An unsupported format.")


def _unarmor(data: bytes | str, marker: str) -> bytes:
    if isinstance(data, bytes) and not data.startswith(b"-----"):
        return data

    try:
        if isinstance(data, bytes):
            data = data.decode("ascii")
        der, pem_marker, _ = PEM.decode(data)
    except ValueError as e:
        raise InvalidDataError("Malformed PEM data.") from e
    if pem_marker != marker:
        raise InvalidDataError(f"{pem_marker}: An unexpected PEM marker.")
    return der


def encode_public_key(public_key: PublicKey, format: str = "DER") -> bytes | str:
    """Encodes a public key.

    Args:
        public_key: The public key.
        format: Either "DER" (binary) or "PEM" (text).

    Returns:
        The encoded key; `bytes` for DER and `str` for PEM.
    """
    der = DerSequence(
        [
            _encode_key_info(public_key.group),
            DerBitString(number.long_to_bytes(public_key.y)),
        ]
    ).encode()
    return _armor(der, _PUBLIC_KEY_MARKER, format)


def decode_public_key(data: bytes | str) -> PublicKey:
    """Decodes a public key encoded by `encode_public_key`.

    Args:
        data: The DER or PEM encoded key.

    Returns:
        The public key.

    Raises:
        InvalidOIDError: The algorithm identifier is unknown.
        InvalidDataError: A field is malformed.
        PublicKeyMalformedError: The container is not a public key or
            its values do not form a valid key.
    """
    der = _unarmor(data, _PUBLIC_KEY_MARKER)
    try:
        key_info = DerSequence().decode(der, nr_elements=2)
    except ValueError as e:
        raise PublicKeyMalformedError("Not a public key.") from e

    p, q, g = _decode_key_info(key_info[0])
    try:
        y = number.bytes_to_long(DerBitString().decode(key_info[1]).value)
    except (TypeError, ValueError) as e:
        raise InvalidDataError("A malformed public value.") from e

    try:
        return PublicKey(Group(p, q, g), y)
    except ValueError as e:
        raise PublicKeyMalformedError("An invalid public key.") from e


def encode_private_key(private_key: PrivateKey, format: str = "DER") -> bytes | str:
    """Encodes a private key.

    Args:
        private_key: The private key.
        format: Either "DER" (binary) or "PEM" (text).

    Returns:
        The encoded key; `bytes` for DER and `str` for PEM.
    """
    der = DerSequence(
        [
            0,
            _encode_key_info(private_key.group),
            DerOctetString(number.long_to_bytes(private_key.x)),
        ]
    ).encode()
    return _armor(der, _PRIVATE_KEY_MARKER, format)


def decode_private_key(data: bytes | str) -> PrivateKey:
    """Decodes a private key encoded by `encode_private_key`.

    Args:
        data: The DER or PEM encoded key.

    Returns:
        The private key. Its public key is not cached.

    Raises:
        InvalidOIDError: The algorithm identifier is unknown.
        InvalidDataError: A field is malformed.
        PrivateKeyMalformedError: The container is not a private key,
            its version is not 0, or its values do not form a valid key.
    """
    der = _unarmor(data, _PRIVATE_KEY_MARKER)
    try:
        key_info = DerSequence().decode(der, nr_elements=3)
    except ValueError as e:
        raise PrivateKeyMalformedError("Not a private key.") from e

    p, q, g = _decode_key_info(key_info[1])
    version = key_info[0]
    if not isinstance(version, int) or version != 0:
        raise PrivateKeyMalformedError("An unsupported version.")
    try:
        x = number.bytes_to_long(DerOctetString().decode(key_info[2]).payload)
    except (TypeError, ValueError) as e:
        raise InvalidDataError("A malformed private value.") from e

    try:
        return PrivateKey(Group(p, q, g), x)
    except ValueError as e:
        raise PrivateKeyMalformedError("An invalid private key.") from e
