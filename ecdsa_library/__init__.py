from .provider import CURVES, EcdsaLibrary, EcdsaPrivateKey, EcdsaPublicKey

__all__ = [
    'CURVES',
    'EcdsaLibrary',
    'EcdsaPrivateKey',
    'EcdsaPublicKey',
]
