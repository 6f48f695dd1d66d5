"""quantum_zkp: commitment-challenge-response proofs over post-quantum style primitives.

This package provides four proof engines and the primitives they share:

- Hash-chain proofs anchored in a Merkle tree
- Lattice (LWE) proofs
- Multivariate polynomial-system proofs
- Hybrid proofs composing the three

Main modules:
- crypto: Hashing, big-integer arithmetic, lattice and polynomial primitives
- algorithms: Proof engines and the engine registry
- config: Immutable engine configuration and logging setup
- types: Proof dataclasses and verification outcomes
- errors: Exception hierarchy
"""

from quantum_zkp.types import (
    Algorithm,
    Proof,
    HashProof,
    LatticeProof,
    MultivariateProof,
    HybridProof,
    VerificationResult,
    VerifyFailureReason,
)
from quantum_zkp.errors import ZKPError, InvalidParameters
from quantum_zkp.config import ZKPConfig, load_config
from quantum_zkp.algorithms import (
    HashChainZKP,
    LatticeZKP,
    MultivariateZKP,
    HybridZKP,
    get_engine,
    list_engines,
)

__version__ = "1.0.0"

__all__ = [
    'Algorithm',
    'Proof',
    'HashProof',
    'LatticeProof',
    'MultivariateProof',
    'HybridProof',
    'VerificationResult',
    'VerifyFailureReason',
    'ZKPError',
    'InvalidParameters',
    'ZKPConfig',
    'load_config',
    'HashChainZKP',
    'LatticeZKP',
    'MultivariateZKP',
    'HybridZKP',
    'get_engine',
    'list_engines',
]
