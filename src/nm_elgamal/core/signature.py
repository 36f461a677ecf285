import logging
from typing import TypeAlias
from Crypto.Util import number

from .encoding import decode_components, encode_components
from .errors import (
    InvalidInverseError,
    InvalidRangeError,
    MessageTooLongError,
    VerificationError,
)
from .group import RandFunc
from .keys import PrivateKey, PublicKey, random_exponent


Signature: TypeAlias = tuple[int, int]


def sign(
    private_key: PrivateKey,
    h: int,
    randfunc: RandFunc | None = None,
    nonce: int | None = None,
) -> Signature:
    """Signs a hash value using the ElGamal signature scheme.

    Args:
        private_key: The private key.
        h: The hash of the message, as a non-negative integer.
        randfunc: A function returning random bytes.
        nonce: The ephemeral exponent `k`. If `None`, a random exponent
            in [1, q) is used. It must never be reused.

    Returns:
        The signature `(r, s)` with `r = g^k mod p` and
        `s = k^(-1) * (h - x * r) mod q`.

    Raises:
        InvalidInverseError: `k` is not invertible modulo `q`. Signing
            again with a fresh `k` may succeed.
    """
    if h < 0:
        raise ValueError("The hash value must be non-negative.")

    p, q = private_key.p, private_key.q
    k = random_exponent(private_key, randfunc, nonce)
    r = pow(private_key.g, k, p)
    if number.GCD(k, q) != 1:
        raise InvalidInverseError("Failed to invert the ephemeral value.")
    k_inv = number.inverse(k, q)

    s = (k_inv * (h - private_key.x * r)) % q
    return r, s


def verify(public_key: PublicKey, h: int, signature: Signature) -> None:
    """Verifies an ElGamal signature.

    Args:
        public_key: The public key.
        h: The hash of the message.
        signature: The signature `(r, s)`.

    Raises:
        InvalidRangeError: `r > p` or `s > q`.
        VerificationError: The signature is invalid.
    """
    r, s = signature
    p = public_key.p
    if r < 0 or s < 0 or s > public_key.q or r > p:
        raise InvalidRangeError("A signature component is out of range.")

    lhs = pow(public_key.g, h, p)
    rhs = (pow(public_key.y, r, p) * pow(r, s, p)) % p
    if lhs != rhs:
        logging.debug("Rejected an ElGamal signature.")
        raise VerificationError("An invalid signature.")


def sign_message(
    private_key: PrivateKey, hashed: bytes, randfunc: RandFunc | None = None
) -> bytes:
    """Signs a big-endian encoded hash value.

    Returns:
        The fixed-width encodings of `r` and `s`, concatenated.

    Raises:
        MessageTooLongError: The hash value is longer than the modulus.
    """
    h = number.bytes_to_long(hashed)
    if h.bit_length() > private_key.p.bit_length():
        raise MessageTooLongError("The hash value is longer than the modulus.")

    signature = sign(private_key, h, randfunc)
    return encode_components(signature, private_key.byte_length)


def verify_message(public_key: PublicKey, hashed: bytes, signature: bytes) -> None:
    """Verifies the output of `sign_message`.

    Raises:
        InvalidDataError: The length of `signature` is odd.
        InvalidRangeError: A signature component is out of range.
        VerificationError: The signature is invalid.
    """
    r, s = decode_components(signature, 2)
    verify(public_key, number.bytes_to_long(hashed), (r, s))
