"""Proof engines.

Importing this package registers every engine with the registry:
- HashChainZKP: hash chains anchored in a Merkle tree
- LatticeZKP: LWE commitments
- MultivariateZKP: polynomial-system commitments
- HybridZKP: composition of the three
"""

from .base import BaseZKP
from .hash_chain import (
    HashChainZKP,
    create_optimized_hash_chain,
    create_multi_algorithm_hash_chain,
    create_entropy_hash_chain,
)
from .lattice import LatticeZKP
from .multivariate import MultivariateZKP
from .hybrid import HybridZKP, format_weight
from .registry import register_engine, get_engine, list_engines

__all__ = [
    'BaseZKP',
    'HashChainZKP',
    'LatticeZKP',
    'MultivariateZKP',
    'HybridZKP',
    'create_optimized_hash_chain',
    'create_multi_algorithm_hash_chain',
    'create_entropy_hash_chain',
    'format_weight',
    'register_engine',
    'get_engine',
    'list_engines',
]
