"""SHA-256 avalanche demo.

The input text is mutated in small, fixed ways and every variant is digested.
Each digest is compared bit by bit with the digest of the unmodified input;
for a good hash function roughly half of the 256 bits flip.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from demo_config import DemoConfig
from digest_algorithm import DigestAlgorithm, HashlibDigest
from hex_encoding import bytes_to_hex, hex_to_bits

logger = logging.getLogger(__name__)

ORIGINAL = 'original'


@dataclass(frozen=True)
class Variant:
    name: str
    data: bytes


@dataclass(frozen=True)
class DigestResult:
    name: str
    hex: str
    bits: str
    data: bytes


@dataclass(frozen=True)
class Comparison:
    distance: int
    percentage: float
    total_bits: int = 256

    def describe(self) -> str:
        return f'{self.distance}/{self.total_bits} bits changed ({self.percentage:.1f}%)'


@dataclass(frozen=True)
class AvalancheReport:
    results: tuple[DigestResult, ...]
    # aligned with results; None for the original row
    comparisons: tuple[Comparison | None, ...]

    def __iter__(self) -> Iterator[DigestResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def rows(self) -> Iterator[tuple[DigestResult, Comparison | None]]:
        return zip(self.results, self.comparisons, strict=True)


def hamming_distance(a: str, b: str) -> int:
    # Compares only over the shorter string. Digests of one algorithm always
    # have equal length, so the truncation never kicks in for the demo.
    return sum(x != y for x, y in zip(a, b))  # noqa: B905


def _replace_byte(data: bytes, index: int, char: str) -> bytes:
    if not data:
        return data
    arr = bytearray(data)
    arr[index % len(arr)] = char.encode()[0]
    return bytes(arr)


def _flip_bits(data: bytes, index: int, mask: int) -> bytes:
    if not data:
        return data
    arr = bytearray(data)
    arr[index % len(arr)] ^= mask
    return bytes(arr)


def build_variants(text: str) -> list[Variant]:
    base = text.encode()
    if not base:
        # nothing to mutate: every variant is the empty input
        appended = base
    else:
        appended = (text + ' ').encode()

    return [
        Variant(ORIGINAL, base),
        Variant('append space', appended),
        Variant('change first char', _replace_byte(base, 0, 'Z')),
        Variant('flip one bit in first byte', _flip_bits(base, 0, 0x01)),
        Variant('flip 0x80 bit in first byte', _flip_bits(base, 0, 0x80)),
        Variant('change last char', _replace_byte(base, -1, 'z')),
    ]


class AvalancheAnalyzer:
    algorithm: DigestAlgorithm

    def __init__(self, algorithm: DigestAlgorithm | None = None):
        self.algorithm = algorithm if algorithm is not None else HashlibDigest()

    @classmethod
    def from_config(cls, config: DemoConfig) -> 'AvalancheAnalyzer':
        return cls(HashlibDigest(config.digest))

    @property
    def total_bits(self) -> int:
        return 8 * self.algorithm.digest_size

    def digest(self, data: bytes) -> bytes:
        return self.algorithm.digest(data)

    def digest_variant(self, variant: Variant) -> DigestResult:
        hex_digest = bytes_to_hex(self.digest(variant.data))
        return DigestResult(variant.name, hex_digest, hex_to_bits(hex_digest), variant.data)

    def compare(self, base_bits: str, bits: str) -> Comparison:
        distance = hamming_distance(base_bits, bits)
        # half-up rounding to one decimal, 6.25 -> 6.3
        percentage = (Decimal(distance * 100) / Decimal(self.total_bits)).quantize(Decimal('0.1'), ROUND_HALF_UP)
        return Comparison(distance, float(percentage), self.total_bits)

    def run(self, text: str) -> AvalancheReport:
        results = tuple(self.digest_variant(v) for v in build_variants(text))

        base_bits = results[0].bits
        comparisons = (None, *(self.compare(base_bits, r.bits) for r in results[1:]))

        logger.debug('Avalanche run over %d variants: %s', len(results), [c.distance for c in comparisons if c is not None])
        return AvalancheReport(results, comparisons)


_default_analyzer = AvalancheAnalyzer()


def run_avalanche(text: str) -> AvalancheReport:
    return _default_analyzer.run(text)
