"""Settings shared by the signature and avalanche demos."""

from collections.abc import Mapping

import msgspec

BACKENDS = frozenset({'library', 'custom'})


class DemoConfig(msgspec.Struct, frozen=True):
    # Signature provider: the ecdsa package or the in-repo curve arithmetic
    backend: str = 'library'
    curve: str = 'NIST256p'
    deterministic_signatures: bool = False

    # Any hashlib name producing a 256-bit digest
    digest: str = 'sha256'

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            msg = f'backend must be one of {sorted(BACKENDS)}, got {self.backend!r}'
            raise ValueError(msg)

        if not self.curve:
            msg = 'curve must not be empty'
            raise ValueError(msg)

        if not self.digest:
            msg = 'digest must not be empty'
            raise ValueError(msg)


def load_config(values: Mapping[str, object] | None = None) -> DemoConfig:
    try:
        return msgspec.convert(dict(values or {}), DemoConfig)
    except msgspec.ValidationError as e:
        msg = f'Configuration validation error: {e}'
        raise ValueError(msg) from e
