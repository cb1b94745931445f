from hashlib import sha256

import pytest
from Crypto.Hash import SHA256
from Crypto.PublicKey import ECC
from Crypto.Signature import DSS
from ecdsa import BadSignatureError, NIST256p, SigningKey
from ecdsa.util import sigdecode_string, sigencode_string

from signature_algorithm import KeyGenerationError, PrivateKey, PublicKey, SigningError

from ..ecdsa import ECDSA, ECPrivateKey, ECPublicKey
from ..elliptic_curve import NormalPoint, Point, p256


def test_key_types() -> None:
    ecdsa = ECDSA(p256)
    with pytest.raises(SigningError):
        ecdsa.sign_message(b'', PrivateKey())
    with pytest.raises(TypeError):
        ecdsa.verify_signature(b'', PublicKey(), b'')


def test_private_key_range() -> None:
    ecdsa = ECDSA(p256)
    with pytest.raises(SigningError):
        ecdsa.sign_message(b'', ECPrivateKey(0))
    with pytest.raises(SigningError):
        ecdsa.sign_message(b'', ECPrivateKey(p256.n))


def test_curve_by_name() -> None:
    assert ECDSA('prime256v1').curve is p256
    assert ECDSA().signature_length == 64  # noqa: PLR2004

    ecdsa = ECDSA('secp521r1')
    with pytest.raises(KeyGenerationError):
        ecdsa.generate_key_pair()


def test_custom_ecdsa() -> None:
    ecdsa = ECDSA(p256)
    sk, pk = ecdsa.generate_key_pair()
    assert p256.is_valid(p256.multiply(p256.G, sk.k))

    message = b'test message'

    signature = ecdsa.sign_message(message, sk)
    assert len(signature) == ecdsa.signature_length
    assert ecdsa.verify_signature(message, pk, signature)
    assert not ecdsa.verify_signature(message, pk, b'')  # dummy
    assert not ecdsa.verify_signature(message, pk, b'\x00' * 64)  # r = s = 0

    message2 = b'test message2'
    signature2 = ecdsa.sign_message(message2, sk)
    assert not ecdsa.verify_signature(message, pk, signature2)  # different message

    sk2, _ = ecdsa.generate_key_pair()
    signature3 = ecdsa.sign_message(message, sk2)
    assert not ecdsa.verify_signature(message, pk, signature3)  # different private key

    assert not ecdsa.verify_signature(message, ECPublicKey(pk.x, pk.y + 1), signature)  # not on the curve


def test_with_library() -> None:
    ecdsa = ECDSA(p256)
    message = b'test message'

    lib_sk = SigningKey.generate(NIST256p, hashfunc=sha256)
    lib_pk = lib_sk.get_verifying_key()
    assert lib_sk.privkey is not None
    assert lib_pk is not None

    sk = ECPrivateKey(lib_sk.privkey.secret_multiplier)
    pk = ECPublicKey(lib_pk.pubkey.point.x(), lib_pk.pubkey.point.y())

    # Verify signature
    signature = lib_sk.sign(message, sigencode=sigencode_string)
    assert ecdsa.verify_signature(message, pk, signature)

    my_signature = ecdsa.sign_message(message, sk)
    assert lib_pk.verify(my_signature, message, sigdecode=sigdecode_string)

    # Do not verify wrong signature
    message2 = b'test message2'
    signature2 = lib_sk.sign(message2, hashfunc=sha256, sigencode=sigencode_string)
    assert not ecdsa.verify_signature(message, pk, signature2)

    my_signature2 = ecdsa.sign_message(message2, sk)
    with pytest.raises(BadSignatureError):
        lib_pk.verify(my_signature2, message, sigdecode=sigdecode_string)


def test_with_pycryptodome() -> None:
    ecdsa = ECDSA(p256)
    sk, pk = ecdsa.generate_key_pair()
    message = 'Sign this message'.encode()

    verifier = DSS.new(ECC.construct(curve='P-256', point_x=pk.x, point_y=pk.y), 'fips-186-3')
    verifier.verify(SHA256.new(message), ecdsa.sign_message(message, sk))

    with pytest.raises(ValueError):  # noqa: PT011
        verifier.verify(SHA256.new(b'Sign this message!'), ecdsa.sign_message(message, sk))

    signer = DSS.new(ECC.construct(curve='P-256', d=sk.k), 'fips-186-3')
    assert ecdsa.verify_signature(message, pk, signer.sign(SHA256.new(message)))


# https://datatracker.ietf.org/doc/html/rfc6979#appendix-A.2.5
def test_rfc6979_vector() -> None:
    ecdsa = ECDSA(p256, deterministic=True)
    sk = ECPrivateKey(0xC9AFA9D845BA75166B5C215767B1D6934E50C3DB36E89B127B8A622B120F6721)
    point = p256.multiply(p256.G, sk.k)
    assert point == NormalPoint(
        0x60FED4BA255A9D31C961EB74C6356D68C049B8923B61FA6CE669622E60F29FB6, 0x7903FE1008B8BC99A41AE9E95628BC64F2F1B20C2D7E9F5177A3C294D4462299
    )

    signature = ecdsa.sign_message(b'sample', sk)
    assert signature.hex() == (
        'efd48b2aacb6a8fd1140dd9cd45e81d69d2c877b56aaf991c34d0ea84eaf3716'
        'f7cb1c942d657c41d436c7a1b6e29f65f3e900dbb9aff4064dc4ab2f843acda8'
    )
    assert ecdsa.verify_signature(b'sample', ECPublicKey(point.x, point.y), signature)


def test_deterministic_signatures() -> None:
    sk, pk = ECDSA(p256).generate_key_pair()
    message = b'test message'

    deterministic = ECDSA(p256, deterministic=True)
    assert deterministic.sign_message(message, sk) == deterministic.sign_message(message, sk)
    assert deterministic.sign_message(message, sk) != deterministic.sign_message(b'test message2', sk)

    lib_sk = SigningKey.from_secret_exponent(sk.k, curve=NIST256p, hashfunc=sha256)
    assert deterministic.sign_message(message, sk) == lib_sk.sign_deterministic(message, sigencode=sigencode_string)

    randomized = ECDSA(p256)
    assert randomized.sign_message(message, sk) != randomized.sign_message(message, sk)
    assert deterministic.verify_signature(message, pk, randomized.sign_message(message, sk))


def test_verify_multiplications(monkeypatch: pytest.MonkeyPatch) -> None:
    ecdsa = ECDSA(p256)
    sk, pk = ecdsa.generate_key_pair()
    signature = ecdsa.sign_message(b'test message', sk)

    calls: list[int] = []
    multiply = p256.multiply

    def counting_multiply(p: Point, k: int) -> Point:
        calls.append(k)
        return multiply(p, k)

    monkeypatch.setattr(p256, 'multiply', counting_multiply)

    # u_1 * G and u_2 * Q_A only
    assert ecdsa.verify_signature(b'test message', pk, signature)
    assert len(calls) == 2  # noqa: PLR2004

    # keys off the curve are rejected before any multiplication
    calls.clear()
    assert not ecdsa.verify_signature(b'test message', ECPublicKey(pk.x, (pk.y + 1) % p256.p), signature)
    assert not ecdsa.verify_signature(b'test message', ECPublicKey(pk.x + p256.p, pk.y), signature)
    assert calls == []
