# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

import pytest

import didcrypt
from didcrypt import config


@pytest.mark.parametrize("level,env,expected", [
    ("debug", None, logging.DEBUG),
    ("ERROR", "info", logging.ERROR),
    (None, "info", logging.INFO),
    (None, None, logging.WARNING),
    ("nonsense", None, logging.WARNING),
])
def test_configure_logging(mocker, monkeypatch, level, env, expected):
    if env is None:
        monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    else:
        monkeypatch.setenv(config.LOG_LEVEL_ENV, env)
    basic = mocker.patch("didcrypt.config.logging.basicConfig")
    config.configure_logging(level)
    basic.assert_called_once_with(level=expected, format=config.LOG_FORMAT, datefmt=config.LOG_DATEFMT)


def test_scheme_constants():
    assert config.KEY_SIZE == 2048
    assert config.PUBLIC_EXPONENT == 65537
    assert config.HASH == "sha256"
    assert str(config.KEY_SIZE) in config.KEY_SIZE_CHOICES


def test_library_logs_without_secrets(caplog, enc_pair, sig_pair):
    with caplog.at_level(logging.DEBUG, logger="didcrypt"):
        ciphertext = didcrypt.encrypt("top secret payload", enc_pair.public_key)
        didcrypt.decrypt(ciphertext, enc_pair.private_key)
        didcrypt.sign("top secret payload", sig_pair.private_key)
    assert caplog.records
    assert all(record.name.startswith("didcrypt") for record in caplog.records)
    assert "top secret payload" not in caplog.text
    assert str(enc_pair.private_key) not in caplog.text
