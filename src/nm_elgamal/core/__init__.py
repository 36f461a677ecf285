from .errors import (
    ElGamalError,
    InvalidPrivateKeyError,
    MessageTooLongError,
    VerificationError,
    InvalidInverseError,
    InvalidRangeError,
    InvalidDataError,
    InvalidOIDError,
    PrivateKeyMalformedError,
    PublicKeyMalformedError,
    GenerationFailedError,
)  # noqa: F401
from .group import Group, generate_group  # noqa: F401
from .keys import (
    GroupElements,
    PublicKey,
    PrivateKey,
    generate_exponents,
    generate_key_pair,
)  # noqa: F401
from .el_gamal import (
    Ciphertext as ElGamalCiphertext,
    encrypt,
    decrypt,
    reencrypt,
    encrypt_message,
    decrypt_message,
)  # noqa: F401
from .signature import (
    Signature as ElGamalSignature,
    sign,
    verify,
    sign_message,
    verify_message,
)  # noqa: F401
from .non_malleable import (
    NonMalleableCiphertext,
    encrypt as non_malleable_encrypt,
    decrypt as non_malleable_decrypt,
    encrypt_message as non_malleable_encrypt_message,
    decrypt_message as non_malleable_decrypt_message,
)  # noqa: F401
from .formats import (
    encode_public_key,
    decode_public_key,
    encode_private_key,
    decode_private_key,
)  # noqa: F401
