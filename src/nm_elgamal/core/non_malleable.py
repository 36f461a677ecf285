"""Non-malleable ElGamal encryption.

A ciphertext `(a, b)` is bound to a Schnorr-style proof of knowledge of
its ephemeral exponent `r`, made non-interactive by the Fiat-Shamir
heuristic:

    v = g^s mod p
    c = H(v || a || b) mod q
    d = s + c * r mod q

On decryption, `v` is recomputed as `g^d * a^(-c) mod p`. An honestly
generated tuple reproduces `c`; altering any of `a`, `b`, `c`, or `d`
breaks the identity except with negligible probability.
"""

import logging
from types import ModuleType
from typing import TypeAlias
from Crypto.Hash import SHA256
from Crypto.Util import number

from . import el_gamal
from .encoding import decode_components, encode_components
from .errors import InvalidPrivateKeyError, VerificationError
from .group import RandFunc
from .keys import GroupElements, PrivateKey, PublicKey, random_exponent


NonMalleableCiphertext: TypeAlias = tuple[int, int, int, int]


def _challenge(
    hash_algo: ModuleType, group: GroupElements, v: int, a: int, b: int
) -> int:
    # A fresh hash object per call; nothing is shared between calls.
    hasher = hash_algo.new()
    hasher.update(number.long_to_bytes(v))
    hasher.update(number.long_to_bytes(a))
    hasher.update(number.long_to_bytes(b))
    return number.bytes_to_long(hasher.digest()) % group.q


def encrypt(
    public_key: PublicKey,
    m: int,
    randfunc: RandFunc | None = None,
    hash_algo: ModuleType = SHA256,
) -> NonMalleableCiphertext:
    """Encrypts a plaintext with a proof of knowledge of the nonce.

    Args:
        public_key: The public key.
        m: The plaintext.
        randfunc: A function returning random bytes.
        hash_algo: The hash module used for the challenge, e.g.,
            `Crypto.Hash.SHA256`.

    Returns:
        The ciphertext `(a, b, c, d)`.
    """
    r = random_exponent(public_key, randfunc)
    s = random_exponent(public_key, randfunc)

    a, b = el_gamal.encrypt(public_key, m, nonce=r)
    v = pow(public_key.g, s, public_key.p)
    c = _challenge(hash_algo, public_key, v, a, b)
    d = (s + c * r) % public_key.q
    return a, b, c, d


def decrypt(
    private_key: PrivateKey,
    ciphertext: NonMalleableCiphertext,
    hash_algo: ModuleType = SHA256,
) -> int:
    """Verifies and decrypts a non-malleable ciphertext.

    Args:
        private_key: The private key.
        ciphertext: The ciphertext `(a, b, c, d)`.
        hash_algo: The hash module used on encryption.

    Returns:
        The plaintext.

    Raises:
        InvalidPrivateKeyError: `a^c mod p` is not invertible.
        VerificationError: A component is out of range, or the
            ciphertext has been tampered with.
    """
    a, b, c, d = ciphertext
    p, q = private_key.p, private_key.q
    if not (0 <= a < p and 0 <= b < p and 0 <= c < q and 0 <= d < q):
        logging.debug("Rejected a non-malleable ciphertext.")
        raise VerificationError("A ciphertext component is out of range.")

    a_c = pow(a, c, p)
    if number.GCD(a_c, p) != 1:
        raise InvalidPrivateKeyError("Failed to invert `a^c mod p'.")
    a_inv = number.inverse(a_c, p)

    v = (pow(private_key.g, d, p) * a_inv) % p
    if _challenge(hash_algo, private_key, v, a, b) != c:
        logging.debug("Rejected a non-malleable ciphertext.")
        raise VerificationError("The ciphertext failed the consistency check.")

    return el_gamal.decrypt(private_key, (a, b))


def encrypt_message(
    public_key: PublicKey,
    message: bytes,
    randfunc: RandFunc | None = None,
    hash_algo: ModuleType = SHA256,
) -> bytes:
    """Encrypts a big-endian encoded plaintext.

    Returns:
        The fixed-width encodings of `a`, `b`, `c`, and `d`,
        concatenated.
    """
    m = number.bytes_to_long(message)
    ciphertext = encrypt(public_key, m, randfunc, hash_algo)
    return encode_components(ciphertext, public_key.byte_length)


def decrypt_message(
    private_key: PrivateKey,
    ciphertext: bytes,
    hash_algo: ModuleType = SHA256,
) -> bytes:
    """Verifies and decrypts the output of `encrypt_message`.

    The plaintext is returned in its minimal big-endian form: leading
    zero bytes are dropped, and an empty message comes back as a single
    zero byte.

    Raises:
        InvalidDataError: The length of `ciphertext` is not a multiple
            of four.
        VerificationError: The ciphertext has been tampered with.
    """
    a, b, c, d = decode_components(ciphertext, 4)
    return number.long_to_bytes(decrypt(private_key, (a, b, c, d), hash_algo))
