"""Lattice (LWE) proofs.

Commitment: b = <a, s> + e mod q for a fresh LWE vector ``a`` and the
secret split into ``dimension`` integers. Response: z_i = s_i * c + w_i mod q
where c is the challenge read as an integer and w the witness split the
same way. A polynomial commitment over fresh random coefficients rides
along as a structural artifact; it does not depend on the secret.
"""

from typing import Any, List, Mapping, Optional, Sequence

from quantum_zkp.algorithms.base import CHALLENGE_SIZE, BaseZKP, Secret
from quantum_zkp.algorithms.registry import register_engine
from quantum_zkp.crypto.lattice_ops import (
    generate_discrete_gaussian_error,
    generate_lwe_sample,
    inner_product,
)
from quantum_zkp.crypto.utils import (
    big_ints_to_buffer,
    buffer_to_big_ints,
    bytes_to_int,
    generate_large_prime,
    generate_random_big_int,
    hash_data,
)
from quantum_zkp.types import Algorithm, LatticeProof, VerifyFailureReason

COEFFICIENT_BOUND = 2 ** 64


@register_engine(Algorithm.LATTICE)
class LatticeZKP(BaseZKP):
    """LWE proof engine."""

    algorithm = Algorithm.LATTICE
    proof_type = LatticeProof

    def create_proof(self, secret: Secret,
                     parameters: Optional[Mapping[str, Any]] = None) -> LatticeProof:
        """Create an LWE proof.

        Args:
            secret: Secret to prove knowledge of
            parameters: Optional ``dimension`` (at least 128) and ``modulus``
                (positive; a fresh prime of ``modulus_bits`` bits if omitted)

        Returns:
            LatticeProof
        """
        params = self._resolve_parameters(parameters, 'dimension', 'modulus')
        generate_modulus = params['modulus'] is None
        # validate with modulus=1 until the real modulus is generated
        self._require_valid(dict(params, modulus=1) if generate_modulus else params)
        if generate_modulus:
            params['modulus'] = generate_large_prime(self.defaults['modulus_bits'])

        dimension = params['dimension']
        modulus = params['modulus']
        error_bound = self.defaults['error_bound']

        secret_bytes = self._secret_bytes(secret)
        sample = generate_lwe_sample(dimension, modulus, error_bound)
        witness = self._new_witness()

        commitment = self.create_commitment(sample.a, secret_bytes, modulus, error_bound)
        challenge = self.generate_challenge(commitment, witness, sample.a)
        response = self.create_response(secret_bytes, witness, challenge, dimension, modulus)
        polynomial_commitment = self.create_polynomial_commitment(
            self.defaults['polynomial_degree']
        )

        proof = LatticeProof(
            algorithm=self.algorithm,
            commitment=commitment,
            challenge=challenge,
            response=response,
            parameters=params,
            version=self.version,
            dimension=dimension,
            modulus=modulus,
            polynomial_commitment=polynomial_commitment,
        )
        self._log_created(proof)
        return proof

    @staticmethod
    def create_commitment(a: Sequence[int], secret: bytes, modulus: int,
                          error_bound: int) -> bytes:
        """Pack (<a, s> + e) mod q as a single integer."""
        secret_ints = buffer_to_big_ints(secret, len(a))
        value = inner_product(a, secret_ints, modulus)
        value = (value + generate_discrete_gaussian_error(error_bound)) % modulus
        return big_ints_to_buffer([value])

    @staticmethod
    def generate_challenge(commitment: bytes, witness: bytes, a: Sequence[int]) -> bytes:
        """Fiat-Shamir challenge H(commitment || witness || a)."""
        return hash_data(commitment + witness + big_ints_to_buffer(a))

    @staticmethod
    def create_response(secret: bytes, witness: bytes, challenge: bytes,
                        dimension: int, modulus: int) -> bytes:
        secret_ints = buffer_to_big_ints(secret, dimension)
        witness_ints = buffer_to_big_ints(witness, dimension)
        c = bytes_to_int(challenge)
        response = [
            ((s * c) % modulus + w) % modulus
            for s, w in zip(secret_ints, witness_ints)
        ]
        return big_ints_to_buffer(response)

    @staticmethod
    def create_polynomial_commitment(length: int) -> bytes:
        coefficients = [generate_random_big_int(0, COEFFICIENT_BOUND) for _ in range(length)]
        return hash_data(big_ints_to_buffer(coefficients))

    def check(self, proof: LatticeProof) -> Optional[VerifyFailureReason]:
        reason = self._check_envelope(proof)
        if reason:
            return reason
        if not _positive_int(proof.dimension) or not _positive_int(proof.modulus):
            return VerifyFailureReason.MALFORMED

        if len(proof.response) == 0:
            return VerifyFailureReason.RESPONSE_LENGTH
        if len(proof.challenge) != CHALLENGE_SIZE:
            return VerifyFailureReason.CHALLENGE_LENGTH
        if len(proof.commitment) == 0:
            return VerifyFailureReason.COMMITMENT_LENGTH

        if self._has_sentinel(proof, proof.polynomial_commitment):
            return VerifyFailureReason.CORRUPTED

        reason = self._check_lwe_ranges(proof)
        if reason:
            return reason

        if len(proof.polynomial_commitment) != 32:
            return VerifyFailureReason.POLYNOMIAL_COMMITMENT
        return self._check_zero_knowledge(proof)

    @staticmethod
    def _check_lwe_ranges(proof: LatticeProof) -> Optional[VerifyFailureReason]:
        response = buffer_to_big_ints(proof.response, proof.dimension)
        if len(response) != proof.dimension:
            return VerifyFailureReason.RESPONSE_LENGTH
        if any(not 0 <= value < proof.modulus for value in response):
            return VerifyFailureReason.OUT_OF_RANGE

        commitment = buffer_to_big_ints(proof.commitment, 1)[0]
        if not 0 <= commitment < proof.modulus:
            return VerifyFailureReason.OUT_OF_RANGE

        if _is_degenerate(response):
            return VerifyFailureReason.DEGENERATE_RESPONSE
        return None


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_degenerate(values: List[int]) -> bool:
    """All zero, or one value repeated across every lane."""
    if not any(values):
        return True
    return len(values) > 1 and len(set(values)) == 1
