class ElGamalError(Exception):
    """Base class of all errors raised by the ElGamal primitives."""


class InvalidPrivateKeyError(ElGamalError):
    """A modular inverse required for decryption does not exist.

    This only happens when the group is corrupted (e.g., `p` is not a
    prime) or the ciphertext carries a non-invertible component.
    """


class MessageTooLongError(ElGamalError):
    """The plaintext or hash does not fit into the modulus."""


class VerificationError(ElGamalError):
    """A signature or a non-malleable ciphertext was rejected."""


class InvalidInverseError(ElGamalError):
    """The ephemeral signing value has no inverse modulo `q`.

    Retrying with a fresh ephemeral value is the appropriate response.
    """


class InvalidRangeError(ElGamalError):
    """A signature component exceeds its expected bound."""


class InvalidDataError(ElGamalError):
    """A byte encoding is malformed."""


class InvalidOIDError(ElGamalError):
    """A key container carries an unknown algorithm identifier."""


class PrivateKeyMalformedError(ElGamalError):
    """A private key container cannot be decoded into a valid key."""


class PublicKeyMalformedError(ElGamalError):
    """A public key container cannot be decoded into a valid key."""


class GenerationFailedError(ElGamalError):
    """Group generation gave up after too many restarts."""
