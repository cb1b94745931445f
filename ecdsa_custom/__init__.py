from .ecdsa import ECDSA, ECPrivateKey, ECPublicKey
from .elliptic_curve import CURVES, EllipticCurve, p256

__all__ = [
    'CURVES',
    'ECDSA',
    'ECPrivateKey',
    'ECPublicKey',
    'EllipticCurve',
    'p256',
]
