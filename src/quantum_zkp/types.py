"""Core proof types.

Every proof shares one envelope (commitment, challenge, response,
parameters) and each algorithm adds its own auxiliary fields. Proofs are
frozen dataclasses: verification only ever reads them.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

from quantum_zkp.errors import InvalidParameters

PROOF_VERSION = "1.0.0"


class Algorithm(str, Enum):
    """Supported proof algorithms"""
    LATTICE = "lattice"
    HASH = "hash"
    MULTIVARIATE = "multivariate"
    HYBRID = "hybrid"

    @classmethod
    def base(cls) -> Tuple['Algorithm', ...]:
        """Algorithms that can be used as hybrid components."""
        return (cls.LATTICE, cls.HASH, cls.MULTIVARIATE)

    @classmethod
    def parse(cls, value: Union['Algorithm', str]) -> 'Algorithm':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameters(
                f"Unsupported algorithm: {value}",
                suggestion=f"Use one of {[a.value for a in cls]}",
            ) from None


class VerifyFailureReason(Enum):
    """Why a proof was rejected"""
    WRONG_TYPE = "wrong_type"
    MALFORMED = "malformed"
    CORRUPTED = "corrupted"
    CHALLENGE_LENGTH = "challenge_length"
    RESPONSE_LENGTH = "response_length"
    EMPTY_CHAIN = "empty_chain"
    MERKLE_MISMATCH = "merkle_mismatch"
    CHAIN_BROKEN = "chain_broken"
    COMMITMENT_MISMATCH = "commitment_mismatch"
    OUT_OF_RANGE = "out_of_range"
    DEGENERATE_RESPONSE = "degenerate_response"
    POLYNOMIAL_COMMITMENT = "polynomial_commitment"
    COMMITMENT_LENGTH = "commitment_length"
    SOLUTION_INVALID = "solution_invalid"
    RESPONSE_EQUALS_CHALLENGE = "response_equals_challenge"
    NO_COMPONENTS = "no_components"
    COMPONENT_INVALID = "component_invalid"
    COMBINED_INVALID = "combined_invalid"
    INTERNAL_ERROR = "internal_error"


def freeze(value: Any) -> Any:
    """Read-only copy of nested mappings and sequences.

    Mappings become MappingProxyType and lists/tuples become tuples, all the
    way down; other values are returned as is.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return freeze(mapping or {})


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Proof:
    """Envelope shared by every proof type."""
    algorithm: Algorithm
    commitment: bytes
    challenge: bytes
    response: bytes
    parameters: Mapping[str, Any] = field(default_factory=dict)
    quantum_safe: bool = True
    timestamp: int = field(default_factory=_now_ms)
    version: str = PROOF_VERSION

    def __post_init__(self):
        object.__setattr__(self, 'parameters', _freeze(self.parameters))

    @property
    def proof_size(self) -> int:
        return len(self.commitment) + len(self.challenge) + len(self.response)


@dataclass(frozen=True)
class HashProof(Proof):
    """Hash-chain proof with a Merkle inclusion proof for the first link."""
    chain_length: int = 0
    hash_chain: Tuple[bytes, ...] = ()
    merkle_root: bytes = b''
    merkle_proof: Tuple[bytes, ...] = ()

    @property
    def proof_size(self) -> int:
        return (super().proof_size + sum(len(h) for h in self.hash_chain)
                + len(self.merkle_root) + sum(len(h) for h in self.merkle_proof))


@dataclass(frozen=True)
class LatticeProof(Proof):
    """LWE proof."""
    dimension: int = 0
    modulus: int = 0
    polynomial_commitment: bytes = b''

    @property
    def proof_size(self) -> int:
        return super().proof_size + len(self.polynomial_commitment)


@dataclass(frozen=True)
class MultivariateProof(Proof):
    """Polynomial-system proof."""
    variables: int = 0
    equations: int = 0
    polynomial_system: bytes = b''
    solution: bytes = b''

    @property
    def proof_size(self) -> int:
        return super().proof_size + len(self.polynomial_system) + len(self.solution)


@dataclass(frozen=True)
class HybridProof(Proof):
    """Composition of base-algorithm proofs under per-algorithm weights."""
    proofs: Tuple[Proof, ...] = ()
    combined: bytes = b''
    algorithm_weights: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, 'proofs', tuple(self.proofs))
        object.__setattr__(self, 'algorithm_weights', _freeze(self.algorithm_weights))

    @property
    def proof_size(self) -> int:
        return (super().proof_size + len(self.combined)
                + sum(p.proof_size for p in self.proofs))


@dataclass
class VerificationResult:
    """Outcome of a detailed verification"""
    is_valid: bool
    algorithm: Optional[Algorithm]
    verification_time_ms: float
    reason: Optional[VerifyFailureReason] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'is_valid': self.is_valid,
            'algorithm': self.algorithm.value if self.algorithm else None,
            'verification_time_ms': self.verification_time_ms,
            'reason': self.reason.value if self.reason else None,
            'error': self.error,
        }
