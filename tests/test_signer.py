# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
import pytest

import didcrypt
from didcrypt.errors import KeyUsageError
from didcrypt.errors import MalformedEncoding
from didcrypt.errors import MalformedSignature

MESSAGE = "Authenticate this DID transaction"


def test_sign_verify(sig_pair):
    signature = didcrypt.sign(MESSAGE, sig_pair.private_key)
    assert isinstance(signature, didcrypt.Signature)
    assert len(signature) == 256
    assert didcrypt.verify(MESSAGE, signature, sig_pair.public_key) is True


def test_sign_is_deterministic(sig_pair):
    assert didcrypt.sign(MESSAGE, sig_pair.private_key) == didcrypt.sign(MESSAGE, sig_pair.private_key)


def test_verify_text_signature(sig_pair):
    signature = str(didcrypt.sign(MESSAGE, sig_pair.private_key))
    assert didcrypt.verify(MESSAGE, signature, sig_pair.public_key)


@pytest.mark.parametrize("message", ["", "Grüße, 世界", "x" * 10000])
def test_any_message_length(sig_pair, message):
    signature = didcrypt.sign(message, sig_pair.private_key)
    assert didcrypt.verify(message, signature, sig_pair.public_key)


def test_tampered_message(sig_pair):
    signature = didcrypt.sign(MESSAGE, sig_pair.private_key)
    assert didcrypt.verify(MESSAGE + ".", signature, sig_pair.public_key) is False
    assert didcrypt.verify(MESSAGE.lower(), signature, sig_pair.public_key) is False


def test_other_key(sig_pair, other_sig_pair):
    signature = didcrypt.sign(MESSAGE, sig_pair.private_key)
    assert didcrypt.verify(MESSAGE, signature, other_sig_pair.public_key) is False


@pytest.mark.parametrize("raw", [b"", b"\x00" * 255, b"\x00" * 256, b"\xff" * 256, b"\x01" * 512])
def test_shape_defects_are_false(sig_pair, raw):
    assert didcrypt.verify(MESSAGE, didcrypt.Signature(raw), sig_pair.public_key) is False


def test_truncated_signature(sig_pair):
    signature = didcrypt.sign(MESSAGE, sig_pair.private_key)
    assert didcrypt.verify(MESSAGE, didcrypt.Signature(signature.raw[:-1]), sig_pair.public_key) is False
    assert didcrypt.verify(MESSAGE, "", sig_pair.public_key) is False


@pytest.mark.parametrize("text", ["###", "AAA", "not base64!"])
def test_malformed_signature_text(sig_pair, text):
    with pytest.raises(MalformedSignature):
        didcrypt.verify(MESSAGE, text, sig_pair.public_key)


def test_malformed_signature_is_malformed_encoding(sig_pair):
    with pytest.raises(MalformedEncoding):
        didcrypt.verify(MESSAGE, "###", sig_pair.public_key)


def test_reference_verifies(crypto_keys, sig_pair):
    signature = didcrypt.sign(MESSAGE, sig_pair.private_key)
    crypto_keys[2].public_key().verify(signature.raw, MESSAGE.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
    with pytest.raises(InvalidSignature):
        crypto_keys[2].public_key().verify(signature.raw, b"other", padding.PKCS1v15(), hashes.SHA256())


def test_verifies_reference(crypto_keys, sig_pair):
    raw = crypto_keys[2].sign(MESSAGE.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
    assert didcrypt.verify(MESSAGE, didcrypt.Signature(raw), sig_pair.public_key)
    assert didcrypt.sign(MESSAGE, sig_pair.private_key).raw == raw


def test_key_usage(enc_pair, sig_pair):
    with pytest.raises(KeyUsageError):
        didcrypt.sign(MESSAGE, enc_pair.private_key)
    with pytest.raises(KeyUsageError):
        didcrypt.sign(MESSAGE, sig_pair.public_key)
    signature = didcrypt.sign(MESSAGE, sig_pair.private_key)
    with pytest.raises(KeyUsageError):
        didcrypt.verify(MESSAGE, signature, enc_pair.public_key)
    with pytest.raises(KeyUsageError):
        didcrypt.verify(MESSAGE, signature, sig_pair.private_key)


def test_ciphertext_is_not_a_signature(sig_pair):
    with pytest.raises(TypeError):
        didcrypt.verify(MESSAGE, didcrypt.Ciphertext(b"\x00" * 256), sig_pair.public_key)


def test_signer_hash_is_configurable(crypto_keys, sig_pair):
    signer = didcrypt.MessageSigner(hashf="sha512")
    signature = signer.sign(MESSAGE, sig_pair.private_key)
    crypto_keys[2].public_key().verify(signature.raw, MESSAGE.encode("utf-8"), padding.PKCS1v15(), hashes.SHA512())
    assert signer.verify(MESSAGE, signature, sig_pair.public_key)
    assert not didcrypt.verify(MESSAGE, signature, sig_pair.public_key)


def test_signing_draws_no_randomness(mocker, sig_pair):
    mocker.patch.object(didcrypt.RSAProvider, "random_bytes", side_effect=AssertionError("randomness drawn"))
    mocker.patch.object(didcrypt.RSAProvider, "random_bits", side_effect=AssertionError("randomness drawn"))
    signer = didcrypt.MessageSigner()
    signature = signer.sign(MESSAGE, sig_pair.private_key)
    assert signer.verify(MESSAGE, signature, sig_pair.public_key)
    assert not hasattr(signer, "provider")
