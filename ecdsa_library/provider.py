import logging
from dataclasses import dataclass
from functools import cached_property
from hashlib import sha256
from typing import override

from ecdsa import BadSignatureError, NIST256p, SigningKey, VerifyingKey
from ecdsa.curves import Curve
from ecdsa.util import MalformedSignature, sigdecode_string, sigencode_string

from signature_algorithm import KeyGenerationError, PrivateKey, PublicKey, SignatureAlgorithm, SigningError

logger = logging.getLogger(__name__)

# ECDSA over P-256 only, under the names OpenSSL, WebCrypto and python-ecdsa use
CURVES: dict[str, Curve] = {
    'NIST256p': NIST256p,
    'prime256v1': NIST256p,
    'secp256r1': NIST256p,
    'P-256': NIST256p,
}


@dataclass(frozen=True)
class EcdsaPrivateKey(PrivateKey):
    signing_key: SigningKey


@dataclass(frozen=True)
class EcdsaPublicKey(PublicKey):
    verifying_key: VerifyingKey


# Signatures are the raw r || s string, the same layout WebCrypto produces
class EcdsaLibrary(SignatureAlgorithm):
    curve_name: str
    deterministic: bool

    def __init__(self, curve_name: str = 'NIST256p', *, deterministic: bool = False):
        self.curve_name = curve_name
        self.deterministic = deterministic

    @cached_property
    def curve(self) -> Curve:
        try:
            return CURVES[self.curve_name]
        except KeyError as e:
            msg = f'Curve {self.curve_name!r} is not supported, known curves: {sorted(CURVES)}'
            raise KeyGenerationError(msg) from e

    @property
    @override
    def signature_length(self) -> int:
        return 2 * self.curve.baselen

    @override
    def generate_key_pair(self) -> tuple[EcdsaPrivateKey, EcdsaPublicKey]:
        curve = self.curve
        try:
            sk = SigningKey.generate(curve=curve, hashfunc=sha256)
        except (ValueError, TypeError) as e:
            msg = f'Unable to generate a key pair on {curve.name}: {e}'
            raise KeyGenerationError(msg) from e

        logger.debug('Generated key pair on %s', curve.name)
        return EcdsaPrivateKey(sk), EcdsaPublicKey(sk.get_verifying_key())

    @override
    def sign_message(self, message: bytes, private_key: PrivateKey) -> bytes:
        if not isinstance(private_key, EcdsaPrivateKey):
            msg = f'Expected EcdsaPrivateKey, but got: {type(private_key)}'
            raise SigningError(msg)

        sk = private_key.signing_key
        if sk.curve.name != self.curve.name:
            msg = f'Key belongs to {sk.curve.name}, but the algorithm is configured for {self.curve.name}'
            raise SigningError(msg)

        if self.deterministic:
            # https://datatracker.ietf.org/doc/html/rfc6979
            return sk.sign_deterministic(message, hashfunc=sha256, sigencode=sigencode_string)
        return sk.sign(message, hashfunc=sha256, sigencode=sigencode_string)

    @override
    def verify_signature(self, message: bytes, public_key: PublicKey, signature: bytes) -> bool:
        if not isinstance(public_key, EcdsaPublicKey):
            msg = f'Expected EcdsaPublicKey, but got: {type(public_key)}'
            raise TypeError(msg)

        vk = public_key.verifying_key
        if vk.curve.name != self.curve.name:
            return False

        try:
            return vk.verify(signature, message, hashfunc=sha256, sigdecode=sigdecode_string)
        except (BadSignatureError, MalformedSignature):
            return False
