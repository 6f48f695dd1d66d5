"""Multivariate polynomial-system proofs.

The prover samples a random system, commits to H(H(secret) || H(system)),
and publishes the system evaluated at secret-derived inputs as the
solution. Arithmetic is modulo 2^64.
"""

from typing import Any, Mapping, Optional

from quantum_zkp.algorithms.base import CHALLENGE_SIZE, BaseZKP, Secret
from quantum_zkp.algorithms.registry import register_engine
from quantum_zkp.crypto.polynomial import (
    FIELD_MODULUS,
    PolynomialSystem,
    SparsePolynomialSystem,
    deserialize_polynomial_system,
    evaluate_multivariate_polynomial,
    generate_multivariate_system,
    serialize_polynomial_system,
)
from quantum_zkp.crypto.utils import (
    big_ints_to_buffer,
    buffer_to_big_ints,
    bytes_to_int,
    contains_sentinel,
    generate_random_big_int,
    hash_data,
)
from quantum_zkp.errors import MalformedPolynomialSystem
from quantum_zkp.types import Algorithm, MultivariateProof, VerifyFailureReason

COEFFICIENT_BOUND = 2 ** 32
SPARSE_DENSITY = 70


@register_engine(Algorithm.MULTIVARIATE)
class MultivariateZKP(BaseZKP):
    """Multivariate polynomial proof engine."""

    algorithm = Algorithm.MULTIVARIATE
    proof_type = MultivariateProof

    def create_proof(self, secret: Secret,
                     parameters: Optional[Mapping[str, Any]] = None) -> MultivariateProof:
        """Create a multivariate proof.

        Args:
            secret: Secret to prove knowledge of
            parameters: Optional ``variables`` (at least 8) and ``equations``
                (at least ``variables``)

        Returns:
            MultivariateProof
        """
        params = self._resolve_parameters(parameters, 'variables', 'equations')
        self._require_valid(params)
        variables = params['variables']
        equations = params['equations']
        lanes = self.defaults['response_lanes']

        secret_bytes = self._secret_bytes(secret)
        system = self.generate_system(variables, equations, self.defaults['degree'])
        system_bytes = serialize_polynomial_system(system)
        witness = self._new_witness()

        commitment = self.create_commitment(secret_bytes, system_bytes)
        challenge = self.generate_challenge(commitment, witness, system_bytes)
        response = self.create_response(secret_bytes, witness, challenge, lanes)
        solution = self.solve_system(secret_bytes, system, lanes)

        proof = MultivariateProof(
            algorithm=self.algorithm,
            commitment=commitment,
            challenge=challenge,
            response=response,
            parameters=params,
            version=self.version,
            variables=variables,
            equations=equations,
            polynomial_system=system_bytes,
            solution=solution,
        )
        self._log_created(proof)
        return proof

    @staticmethod
    def generate_system(variables: int, equations: int, degree: int) -> PolynomialSystem:
        """Random system with max(degree, 1) coefficients per variable in [1, 2^32)."""
        terms = max(degree, 1)
        return generate_multivariate_system(
            variables, equations, terms - 1, low=1, high=COEFFICIENT_BOUND
        )

    @staticmethod
    def create_commitment(secret: bytes, system_bytes: bytes) -> bytes:
        return hash_data(hash_data(secret) + hash_data(system_bytes))

    @staticmethod
    def generate_challenge(commitment: bytes, witness: bytes, system_bytes: bytes) -> bytes:
        """Fiat-Shamir challenge H(commitment || witness || system)."""
        return hash_data(commitment + witness + system_bytes)

    @staticmethod
    def create_response(secret: bytes, witness: bytes, challenge: bytes, lanes: int) -> bytes:
        secret_ints = buffer_to_big_ints(secret, lanes)
        witness_ints = buffer_to_big_ints(witness, lanes)
        c = bytes_to_int(challenge)
        response = [
            ((s * c) % FIELD_MODULUS + w) % FIELD_MODULUS
            for s, w in zip(secret_ints, witness_ints)
        ]
        return big_ints_to_buffer(response)

    @staticmethod
    def solve_system(secret: bytes, system: PolynomialSystem, lanes: int) -> bytes:
        """Evaluate every equation at the secret split into min(variables, lanes) ints."""
        values = buffer_to_big_ints(secret, min(len(system[0]), lanes))
        return big_ints_to_buffer(
            evaluate_multivariate_polynomial(equation, values) for equation in system
        )

    def create_optimized_system(self, secret: Secret, variables: int,
                                equations: int) -> SparsePolynomialSystem:
        """Build a sparse system whose support is derived from the secret.

        About 70% of (equation, variable) pairs get a constant term; of
        those, about 70% also get a linear term.
        """
        secret_bytes = self._secret_bytes(secret)
        sparse = SparsePolynomialSystem()
        for e in range(equations):
            for v in range(variables):
                if not _include_coefficient(secret_bytes, e, v):
                    continue
                sparse.add(e, v, 0, generate_random_big_int(0, FIELD_MODULUS))
                if _include_coefficient(secret_bytes, e, v + 1000):
                    sparse.add(e, v, 1, generate_random_big_int(0, COEFFICIENT_BOUND))
        return sparse

    def check(self, proof: MultivariateProof) -> Optional[VerifyFailureReason]:
        reason = self._check_envelope(proof)
        if reason:
            return reason
        if not isinstance(proof.polynomial_system, bytes) or not isinstance(proof.solution, bytes):
            return VerifyFailureReason.MALFORMED
        if not _positive_int(proof.variables) or not _positive_int(proof.equations):
            return VerifyFailureReason.MALFORMED

        if len(proof.response) == 0:
            return VerifyFailureReason.RESPONSE_LENGTH
        if len(proof.challenge) != CHALLENGE_SIZE:
            return VerifyFailureReason.CHALLENGE_LENGTH

        if self._has_sentinel(proof) or contains_sentinel(proof.solution):
            return VerifyFailureReason.CORRUPTED

        if len(proof.commitment) != 32:
            return VerifyFailureReason.COMMITMENT_LENGTH

        reason = self._check_system(proof)
        if reason:
            return reason

        if not proof.solution:
            return VerifyFailureReason.SOLUTION_INVALID
        solution = buffer_to_big_ints(proof.solution, proof.equations)
        if any(not 0 <= value <= FIELD_MODULUS for value in solution):
            return VerifyFailureReason.SOLUTION_INVALID

        return self._check_zero_knowledge(proof)

    @staticmethod
    def _check_system(proof: MultivariateProof) -> Optional[VerifyFailureReason]:
        try:
            system = deserialize_polynomial_system(
                proof.polynomial_system, max_dimension=None, strict=True
            )
        except MalformedPolynomialSystem:
            return VerifyFailureReason.MALFORMED
        if len(system) != proof.equations or len(system[0]) != proof.variables:
            return VerifyFailureReason.MALFORMED
        return None


def _include_coefficient(secret: bytes, equation: int, variable: int) -> bool:
    digest = hash_data(secret + str(equation).encode() + str(variable).encode())
    return digest[0] % 100 < SPARSE_DENSITY


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
