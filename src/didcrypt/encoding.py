"""Binary to text conversion for everything that crosses the didcrypt boundary.

Keys, ciphertexts and signatures are held as thin immutable wrappers over bytes and travel as RFC 4648 base-64
(standard alphabet, `=` padding). Only canonical encodings are accepted, so a string that decodes always re-encodes
to itself.

Typical usage example:

    txt = encode(b"\x00\xff")
    raw = decode(txt)
    sig = Signature.from_text(txt)
    str(sig) == txt
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
import typing

from didcrypt.errors import MalformedEncoding
from didcrypt.errors import MalformedSignature

_E = typing.TypeVar("_E", bound="Encoded")


def encode(data: bytes) -> str:
    """Encodes bytes into standard base-64 text.

    Args:
        data: Any byte string, including the empty one.

    Returns:
        The padded base-64 text.
    """
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """Decodes standard base-64 text into bytes.

    Args:
        text: Padded base-64 text using the standard alphabet.

    Returns:
        The decoded bytes.

    Raises:
        MalformedEncoding: If the text holds characters outside the alphabet, has a bad length or padding, or is not
            the canonical encoding of its bytes.
    """
    if not isinstance(text, str):
        raise MalformedEncoding(f"Expected text, got {type(text).__name__}.")
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as err:
        raise MalformedEncoding("Invalid base-64 text.") from err
    # Non-zero trailing bits decode fine but would not survive re-encoding.
    if encode(data) != text:
        raise MalformedEncoding("Non-canonical base-64 text.")
    return data


class Encoded:
    """Immutable typed wrapper over a byte string.

    Subclasses only differ by their type, which keeps a signature from being passed where a ciphertext (or a signing
    key where an encryption key) is expected. Two wrappers are equal only if they share both type and bytes.

    Attributes:
        raw: The wrapped bytes.
    """
    __slots__ = ("raw",)
    malformed: typing.ClassVar[type[MalformedEncoding]] = MalformedEncoding

    def __init__(self, raw: bytes | bytearray | memoryview) -> None:
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise TypeError(f"{type(self).__name__} wraps bytes, got {type(raw).__name__}.")
        object.__setattr__(self, "raw", bytes(raw))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self.raw,))

    @classmethod
    def from_text(cls: type[_E], text: str) -> _E:
        """Parses the base-64 text form.

        Args:
            text: The text produced by `str()` on a wrapper of the same type.

        Returns:
            A wrapper of the calling type.

        Raises:
            MalformedEncoding: Or the subclass-specific variant, if the text is not valid base-64.
        """
        try:
            return cls(decode(text))
        except MalformedEncoding as err:
            if cls.malformed is MalformedEncoding:
                raise
            raise cls.malformed(str(err)) from err

    @classmethod
    def coerce(cls: type[_E], value: "_E | str") -> _E:
        """Accepts either a wrapper of this exact kind or its text form."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_text(value)
        raise TypeError(f"Expected {cls.__name__} or str, got {type(value).__name__}.")

    def __str__(self) -> str:
        return encode(self.raw)

    def __bytes__(self) -> bytes:
        return self.raw

    def __len__(self) -> int:
        return len(self.raw)

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.raw))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.raw)} bytes)"


class EncodedKey(Encoded):
    """DER key material. Concrete keys are one of the four scheme-and-kind subclasses below."""
    __slots__ = ()


class EncryptionPublicKey(EncodedKey):
    """SubjectPublicKeyInfo of an RSAES-OAEP recipient key."""
    __slots__ = ()


class EncryptionPrivateKey(EncodedKey):
    """PKCS#8 PrivateKeyInfo of an RSAES-OAEP holder key."""
    __slots__ = ()


class SigningPublicKey(EncodedKey):
    """SubjectPublicKeyInfo of an RSASSA-PKCS1-v1_5 verification key."""
    __slots__ = ()


class SigningPrivateKey(EncodedKey):
    """PKCS#8 PrivateKeyInfo of an RSASSA-PKCS1-v1_5 signing key."""
    __slots__ = ()


class Ciphertext(Encoded):
    """One RSAES-OAEP block, exactly as long as the recipient modulus."""
    __slots__ = ()


class Signature(Encoded):
    """One RSASSA-PKCS1-v1_5 signature, exactly as long as the signer modulus."""
    __slots__ = ()
    malformed = MalformedSignature
