# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64

from pyasn1.codec.der import decoder
from pyasn1_modules import rfc8017
import pytest

from minirsa import keyfile
from minirsa import keygen

key_cases = [
    (3233, 17, 2753),
    (4294049777, 65537, 1234567),
    (2**255 + 51, 3, 2**254 + 7),
]


@pytest.mark.parametrize("n,e,d", key_cases)
def test_public_round(tmp_path, n, e, d):  # pylint: disable=unused-argument
    target = tmp_path / "key.pub"
    keyfile.export_public_key(target, n, e)
    assert keyfile.import_public_key(target) == (n, e)


@pytest.mark.parametrize("n,e,d", key_cases)
def test_private_round(tmp_path, n, e, d):  # pylint: disable=unused-argument
    target = tmp_path / "key"
    keyfile.export_private_key(target, n, d)
    assert keyfile.import_private_key(target) == (n, d)


def test_generated_round(tmp_path):
    keys = keygen.generate_key_pair()
    keyfile.export_public_key(tmp_path / "key.pub", *keys.public)
    keyfile.export_private_key(tmp_path / "key", *keys.private)
    assert keyfile.import_public_key(tmp_path / "key.pub") == keys.public
    assert keyfile.import_private_key(tmp_path / "key") == keys.private


def test_public_is_pkcs1(tmp_path):
    target = tmp_path / "key.pub"
    keyfile.export_public_key(target, 4294049777, 65537)
    lines = target.read_text(encoding="ascii").splitlines()
    assert lines[0] == "-----BEGIN RSA PUBLIC KEY-----"
    assert lines[-1] == "-----END RSA PUBLIC KEY-----"
    der = base64.b64decode("".join(lines[1:-1]))
    keydata, rest = decoder.decode(der, asn1Spec=rfc8017.RSAPublicKey())
    assert not rest
    assert int(keydata["modulus"]) == 4294049777
    assert int(keydata["publicExponent"]) == 65537


def test_pem_body_wrapping(tmp_path):
    target = tmp_path / "blob"
    data = bytes(range(256)) * 2
    keyfile.write_pem(target, "PRIVATE", data)
    lines = target.read_text(encoding="ascii").split("\n")
    assert lines[0] == keyfile.PEM_TYPES["PRIVATE"][0]
    assert lines[-2] == keyfile.PEM_TYPES["PRIVATE"][1]
    assert lines[-1] == ""
    body = lines[1:-2]
    assert all(len(line) == 64 for line in body[:-1])
    assert "".join(body) == base64.b64encode(data).decode("ascii")
    assert keyfile.read_pem(target, "PRIVATE") == data


@pytest.mark.parametrize("size", [0, 1, 2, 3, 47, 48, 49])
def test_pem_payload_sizes(tmp_path, size):
    target = tmp_path / "blob"
    data = bytes(range(1, size + 1))
    keyfile.write_pem(target, "PUBLIC", data)
    assert keyfile.read_pem(target, "PUBLIC") == data


def test_import_wrong_type(tmp_path):
    target = tmp_path / "key"
    keyfile.export_private_key(target, 3233, 2753)
    with pytest.raises(IOError):
        keyfile.import_public_key(target)


@pytest.mark.parametrize("content", [
    "-----BEGIN RSA PUBLIC KEY-----\nAAAA\n",
    "-----BEGIN RSA PUBLIC KEY-----\n",
    "",
    "-----BEGIN RSA PUBLIC KEY-----\nA*AA\n-----END RSA PUBLIC KEY-----\n",
    "-----BEGIN RSA PUBLIC KEY-----\nAgEB\n-----END RSA PUBLIC KEY-----\n",
])
def test_import_malformed(tmp_path, content):
    target = tmp_path / "key.pub"
    target.write_text(content, encoding="ascii")
    with pytest.raises(IOError):
        keyfile.import_public_key(target)


def test_import_missing(tmp_path):
    with pytest.raises(IOError):
        keyfile.import_private_key(tmp_path / "missing")


@pytest.mark.parametrize("body", ["TWFuTQ=", "TWFuT", "TWF"])
def test_read_pem_partial_group(tmp_path, body):
    target = tmp_path / "blob"
    header, footer = keyfile.PEM_TYPES["PUBLIC"]
    target.write_text(f"{header}\n{body}\n{footer}\n", encoding="ascii")
    with pytest.raises(IOError):
        keyfile.read_pem(target, "PUBLIC")


def test_read_pem_padding_from_last_group(tmp_path):
    target = tmp_path / "blob"
    header, footer = keyfile.PEM_TYPES["PUBLIC"]
    target.write_text(f"{header}\nTWFu\nTWE=\n{footer}\n", encoding="ascii")
    assert keyfile.read_pem(target, "PUBLIC") == b"ManMa"
