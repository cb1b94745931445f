import hmac
import logging
import secrets
from collections.abc import Iterator
from dataclasses import dataclass
from functools import cached_property
from hashlib import sha256
from typing import override

from signature_algorithm import KeyGenerationError, PrivateKey, PublicKey, SignatureAlgorithm, SigningError

from .elliptic_curve import CURVES, EllipticCurve, NormalPoint, PointAtInfinity, p256

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ECPrivateKey(PrivateKey):
    k: int


@dataclass(frozen=True)
class ECPublicKey(PublicKey):
    x: int
    y: int


class ECDSA(SignatureAlgorithm):
    deterministic: bool

    def __init__(self, curve: EllipticCurve | str = p256, *, deterministic: bool = False):
        self._curve = curve
        self.deterministic = deterministic

    @cached_property
    def curve(self) -> EllipticCurve:
        if isinstance(self._curve, EllipticCurve):
            return self._curve

        try:
            return CURVES[self._curve]
        except KeyError as e:
            msg = f'Curve {self._curve!r} is not supported, known curves: {sorted(CURVES)}'
            raise KeyGenerationError(msg) from e

    @property
    @override
    def signature_length(self) -> int:
        return 2 * self.curve.order_length

    # https://datatracker.ietf.org/doc/html/rfc6979#section-2.3.2
    def _bits2int(self, data: bytes) -> int:
        # keep the qlen leftmost bits, where qlen is the bit length of the group order n
        return int.from_bytes(data) >> max(0, 8 * len(data) - self.curve.n.bit_length())

    def _hash_to_int(self, message: bytes) -> int:
        # Calculate e = HASH(m) and let z be the L_n leftmost bits of e
        return self._bits2int(sha256(message).digest())

    def _random_nonces(self) -> Iterator[int]:
        while True:
            yield 1 + secrets.randbelow(self.curve.n - 1)  # [1, n - 1]

    # https://datatracker.ietf.org/doc/html/rfc6979#section-3.2
    def _rfc6979_nonces(self, message: bytes, secret: int) -> Iterator[int]:
        n = self.curve.n
        length = self.curve.order_length

        def mac(key: bytes, data: bytes) -> bytes:
            return hmac.new(key, data, sha256).digest()

        # a.  h1 = H(m)
        h1 = sha256(message).digest()

        # b.  V = 0x01 0x01 0x01 ... 0x01
        # c.  K = 0x00 0x00 0x00 ... 0x00
        v = b'\x01' * 32
        k = b'\x00' * 32

        # d.  K = HMAC_K(V || 0x00 || int2octets(x) || bits2octets(h1))
        # e.  V = HMAC_K(V)
        # f.  K = HMAC_K(V || 0x01 || int2octets(x) || bits2octets(h1))
        # g.  V = HMAC_K(V)
        seed = secret.to_bytes(length) + (self._bits2int(h1) % n).to_bytes(length)
        k = mac(k, v + b'\x00' + seed)
        v = mac(k, v)
        k = mac(k, v + b'\x01' + seed)
        v = mac(k, v)

        # h.  Generate candidates until one is in [1, n - 1]; the caller asks
        #     for the next one when r or s turns out to be 0
        while True:
            t = b''
            while len(t) < length:
                v = mac(k, v)
                t += v

            candidate = self._bits2int(t[:length])
            if 1 <= candidate < n:
                yield candidate

            k = mac(k, v + b'\x00')
            v = mac(k, v)

    @override
    def generate_key_pair(self) -> tuple[ECPrivateKey, ECPublicKey]:
        curve = self.curve
        k = 1 + secrets.randbelow(curve.n - 1)  # [1, n - 1]
        point = curve.multiply(curve.G, k)
        assert isinstance(point, NormalPoint)  # noqa: S101

        logger.debug('Generated key pair on %s', curve.name)
        return ECPrivateKey(k), ECPublicKey(point.x, point.y)

    @override
    # https://en.wikipedia.org/wiki/Elliptic_Curve_Digital_Signature_Algorithm#Signature_generation_algorithm
    def sign_message(self, message: bytes, private_key: PrivateKey) -> bytes:
        if not isinstance(private_key, ECPrivateKey):
            msg = f'Expected ECPrivateKey, but got: {type(private_key)}'
            raise SigningError(msg)

        curve = self.curve
        if not 1 <= private_key.k < curve.n:
            msg = f'Private scalar is out of range for {curve.name}'
            raise SigningError(msg)

        z = self._hash_to_int(message)
        nonces = self._rfc6979_nonces(message, private_key.k) if self.deterministic else self._random_nonces()

        # loop, because of coming back to the selection of k
        for k in nonces:
            # k is an integer from [1, n - 1], random or derived per RFC 6979
            # Calculate the curve point (x1, y1) = k * G.
            point = curve.multiply(curve.G, k)
            assert isinstance(point, NormalPoint)  # noqa: S101

            # Calculate r = x1 mod n. If r = 0, select another k.
            r = point.x % curve.n
            if r == 0:
                continue

            # Calculate s = k^{-1} (z + r d_A) mod n. If s = 0, select another k.
            s = pow(k, -1, curve.n) * (z + r * private_key.k) % curve.n
            if s == 0:
                continue

            # The signature is the pair (r, s), both aligned to the length of n
            length = curve.order_length
            return int.to_bytes(r, length) + int.to_bytes(s, length)

        msg = 'Nonce generator stopped before producing a signature'
        raise SigningError(msg)

    @override
    # https://en.wikipedia.org/wiki/Elliptic_Curve_Digital_Signature_Algorithm#Signature_verification_algorithm
    def verify_signature(self, message: bytes, public_key: PublicKey, signature: bytes) -> bool:
        if not isinstance(public_key, ECPublicKey):
            msg = f'Expected ECPublicKey, but got: {type(public_key)}'
            raise TypeError(msg)

        curve = self.curve
        length = curve.order_length
        if len(signature) != 2 * length:
            return False

        r, s = int.from_bytes(signature[:length]), int.from_bytes(signature[length:])

        # Check that Q_A lies on the curve (so it is not the identity element either).
        # The named curves have cofactor 1, so such a point also satisfies n * Q_A = O.
        Q = NormalPoint(public_key.x, public_key.y)  # noqa: N806
        if not curve.is_valid(Q):
            return False

        # Verify that r and s are integers in [1, n - 1]. If not, the signature is invalid.
        if not (1 <= r < curve.n and 1 <= s < curve.n):
            return False

        z = self._hash_to_int(message)

        # Calculate u_1 = z * s^{-1} mod n and u_2 = r * s^{-1} mod n.
        s_inv = pow(s, -1, curve.n)
        u1 = z * s_inv % curve.n
        u2 = r * s_inv % curve.n

        # Calculate the curve point (x1, y1) = u_1 * G + u_2 * Q_A. If (x1, y1) = O then the signature is invalid.
        point = curve.add(curve.multiply(curve.G, u1), curve.multiply(Q, u2))
        if isinstance(point, PointAtInfinity):
            return False

        # The signature is valid if r = x1 (mod n), invalid otherwise.
        return (r - point.x) % curve.n == 0
