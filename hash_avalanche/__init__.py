from hex_encoding import hex_to_bits

from .analyzer import (
    AvalancheAnalyzer,
    AvalancheReport,
    Comparison,
    DigestResult,
    Variant,
    build_variants,
    hamming_distance,
    run_avalanche,
)

__all__ = [
    'AvalancheAnalyzer',
    'AvalancheReport',
    'Comparison',
    'DigestResult',
    'Variant',
    'build_variants',
    'hamming_distance',
    'hex_to_bits',
    'run_avalanche',
]
