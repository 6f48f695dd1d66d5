"""Hybrid proofs composed from the base algorithms.

Each requested base algorithm contributes a full component proof. The hybrid
envelope commits to the component commitments and the secret, and a
weighted digest over every component is carried as ``combined``.
"""

from typing import Any, List, Mapping, Optional, Sequence

from quantum_zkp.algorithms.base import CHALLENGE_SIZE, BaseZKP, Secret
from quantum_zkp.algorithms.registry import get_engine, register_engine
from quantum_zkp.crypto.utils import combine_hashes, compute_hmac, contains_sentinel, hash_data
from quantum_zkp.errors import InvalidParameters
from quantum_zkp.types import Algorithm, HybridProof, Proof, VerifyFailureReason


def _tag(value: Any) -> Any:
    return getattr(value, 'value', value)


def _unique(algorithms: Sequence[Any]) -> List[Any]:
    """Drop repeated algorithms, keeping first-occurrence order."""
    result: List[Any] = []
    for algorithm in algorithms:
        tag = _tag(algorithm)
        if tag not in result:
            result.append(tag)
    return result


def format_weight(weight: float) -> str:
    """Render a weight the way it is hashed: 0.4 -> '0.4', 1.0 -> '1'."""
    text = repr(float(weight))
    return text[:-2] if text.endswith('.0') else text


@register_engine(Algorithm.HYBRID)
class HybridZKP(BaseZKP):
    """Hybrid proof engine."""

    algorithm = Algorithm.HYBRID
    proof_type = HybridProof

    def create_proof(self, secret: Secret,
                     parameters: Optional[Mapping[str, Any]] = None) -> HybridProof:
        """Create a hybrid proof.

        Args:
            secret: Secret to prove knowledge of
            parameters: Optional ``algorithms`` (at least two distinct base
                algorithms), ``weights`` (algorithm -> float) and
                ``component_parameters`` (algorithm -> parameters for that
                component engine)

        Returns:
            HybridProof
        """
        params = self._resolve_parameters(
            parameters, 'algorithms', 'weights', 'component_parameters'
        )
        if isinstance(params['algorithms'], (list, tuple)):
            params['algorithms'] = _unique(params['algorithms'])
        self._require_valid(params)

        weights = params['weights'] or {}
        component_parameters = params.pop('component_parameters') or {}
        if not isinstance(weights, Mapping) or not isinstance(component_parameters, Mapping):
            raise InvalidParameters(
                "weights and component_parameters must be mappings",
                algorithm=self.algorithm.value,
            )
        weights = {_tag(key): value for key, value in weights.items()}
        params['weights'] = weights

        secret_bytes = self._secret_bytes(secret)
        proofs = self.generate_component_proofs(
            secret_bytes, params['algorithms'], component_parameters
        )
        witness = self._new_witness()

        commitment = self.create_commitment(secret_bytes, proofs)
        challenge = self.generate_challenge(commitment, witness, proofs)
        response = self.create_response(secret_bytes, witness, challenge, proofs)
        combined = self.combine_proofs(proofs, weights, self.defaults['fallback_weight'])

        proof = HybridProof(
            algorithm=self.algorithm,
            commitment=commitment,
            challenge=challenge,
            response=response,
            parameters=params,
            version=self.version,
            proofs=tuple(proofs),
            combined=combined,
            algorithm_weights=weights,
        )
        self._log_created(proof)
        return proof

    def generate_component_proofs(self, secret: bytes, algorithms: Sequence[str],
                                  component_parameters: Mapping[Any, Any]) -> List[Proof]:
        proofs = []
        for tag in algorithms:
            engine = get_engine(tag, self.config)
            proofs.append(engine.create_proof(secret, _lookup(component_parameters, tag)))
        return proofs

    @staticmethod
    def create_commitment(secret: bytes, proofs: Sequence[Proof]) -> bytes:
        """H(combine(H(c_i)) || H(secret))."""
        combined = combine_hashes([hash_data(p.commitment) for p in proofs])
        return hash_data(combined + hash_data(secret))

    @staticmethod
    def generate_challenge(commitment: bytes, witness: bytes, proofs: Sequence[Proof]) -> bytes:
        """Fiat-Shamir challenge H(commitment || witness || combine(c_i))."""
        combined = combine_hashes([p.commitment for p in proofs])
        return hash_data(commitment + witness + combined)

    @staticmethod
    def create_response(secret: bytes, witness: bytes, challenge: bytes,
                        proofs: Sequence[Proof]) -> bytes:
        challenge_response = compute_hmac(challenge, hash_data(secret))
        combined = combine_hashes([p.response for p in proofs])
        return hash_data(witness + challenge_response + combined)

    @staticmethod
    def combine_proofs(proofs: Sequence[Proof], weights: Mapping[str, float],
                       fallback_weight: float = 0.25) -> bytes:
        """Fold H(c_i || r_i || weight_i) over the components.

        A missing or zero weight is replaced by ``fallback_weight``.
        """
        digests = []
        for p in proofs:
            weight = weights.get(_tag(p.algorithm)) or fallback_weight
            digests.append(hash_data(p.commitment + p.response + format_weight(weight).encode()))
        return combine_hashes(digests)

    def create_optimized_proof(self, secret: Secret,
                               algorithms: Sequence[Any] = (Algorithm.LATTICE, Algorithm.HASH),
                               component_parameters: Optional[Mapping[Any, Any]] = None
                               ) -> HybridProof:
        """Two-component proof over the first two ``algorithms`` with equal weights."""
        return self.create_proof(secret, {
            'algorithms': list(algorithms)[:2],
            'weights': {'lattice': 0.5, 'hash': 0.5, 'multivariate': 0, 'hybrid': 0},
            'component_parameters': component_parameters,
        })

    def create_maximum_security_proof(self, secret: Secret,
                                      component_parameters: Optional[Mapping[Any, Any]] = None
                                      ) -> HybridProof:
        """Proof over every base algorithm with weight 0.25 each."""
        return self.create_proof(secret, {
            'algorithms': [a.value for a in Algorithm.base()],
            'weights': {a.value: 0.25 for a in Algorithm},
            'component_parameters': component_parameters,
        })

    def check(self, proof: HybridProof) -> Optional[VerifyFailureReason]:
        reason = self._check_envelope(proof)
        if reason:
            return reason
        if not isinstance(proof.combined, (bytes, bytearray)):
            return VerifyFailureReason.MALFORMED

        if len(proof.challenge) != CHALLENGE_SIZE:
            return VerifyFailureReason.CHALLENGE_LENGTH
        if self._has_sentinel(proof):
            return VerifyFailureReason.CORRUPTED

        if not proof.proofs:
            return VerifyFailureReason.NO_COMPONENTS
        for component in proof.proofs:
            if not self._verify_component(component):
                return VerifyFailureReason.COMPONENT_INVALID

        if len(proof.commitment) != 32:
            return VerifyFailureReason.COMMITMENT_LENGTH
        reason = self._check_zero_knowledge(proof)
        if reason:
            return reason

        if not proof.combined or contains_sentinel(proof.combined):
            return VerifyFailureReason.COMBINED_INVALID
        return None

    def _verify_component(self, component: Any) -> bool:
        algorithm = getattr(component, 'algorithm', None)
        if algorithm not in Algorithm.base():
            return False
        return get_engine(algorithm, self.config).verify_proof(component)


def _lookup(component_parameters: Mapping[Any, Any], tag: str) -> Optional[Mapping[str, Any]]:
    """Parameters for one component, keyed by tag or Algorithm member."""
    for key, value in component_parameters.items():
        if _tag(key) == tag:
            return value
    return None
