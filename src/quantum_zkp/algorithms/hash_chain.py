"""Hash-chain proofs.

The prover hashes ``secret || seed`` into a chain, commits to its first link,
and anchors the whole chain in a Merkle tree. The response binds a random
witness to an HMAC of the challenge keyed by H(secret).
"""

from typing import Any, List, Mapping, Optional

from quantum_zkp.algorithms.base import CHALLENGE_SIZE, WITNESS_SIZE, BaseZKP, Secret
from quantum_zkp.algorithms.registry import register_engine
from quantum_zkp.crypto.merkle import MerkleTree, verify_merkle_proof
from quantum_zkp.crypto.utils import (
    compute_hmac,
    contains_sentinel,
    create_hash_chain,
    hash_data,
    random_bytes,
    verify_hash_chain,
)
from quantum_zkp.errors import InvalidLength
from quantum_zkp.types import Algorithm, HashProof, VerifyFailureReason

SEED_SIZE = 16
RESPONSE_SIZE = 64


def _fit(data: bytes, size: int) -> bytes:
    """Truncate or zero-pad to exactly ``size`` bytes."""
    return data[:size].ljust(size, b'\x00')


def create_optimized_hash_chain(seed: bytes, length: int, batch_size: int = 100) -> List[bytes]:
    """Build the same chain as create_hash_chain in fixed-size batches."""
    if length <= 0:
        raise InvalidLength("Chain length must be positive", algorithm='hash')
    chain: List[bytes] = []
    current = seed
    for start in range(0, length, batch_size):
        batch = create_hash_chain(current, min(batch_size, length - start))
        chain.extend(batch)
        current = batch[-1]
    return chain


def create_multi_algorithm_hash_chain(seed: bytes, length: int) -> List[bytes]:
    """Chain that rotates through SHA-256, SHA-384 and SHA-512."""
    if length <= 0:
        raise InvalidLength("Chain length must be positive", algorithm='hash')
    variants = ('sha256', 'sha384', 'sha512')
    chain = []
    current = seed
    for i in range(length):
        current = hash_data(current, variants[i % 3])
        chain.append(current)
    return chain


def create_entropy_hash_chain(seed: bytes, length: int) -> List[bytes]:
    """SHA-512 chain that mixes 16 fresh random bytes into every link.

    Not reproducible, so it cannot be re-walked by a verifier.
    """
    if length <= 0:
        raise InvalidLength("Chain length must be positive", algorithm='hash')
    chain = []
    current = seed
    for _ in range(length):
        current = hash_data(current + random_bytes(16), 'sha512')
        chain.append(current)
    return chain


@register_engine(Algorithm.HASH)
class HashChainZKP(BaseZKP):
    """Hash-chain proof engine."""

    algorithm = Algorithm.HASH
    proof_type = HashProof

    def create_proof(self, secret: Secret,
                     parameters: Optional[Mapping[str, Any]] = None) -> HashProof:
        """Create a hash-chain proof.

        Args:
            secret: Secret to prove knowledge of
            parameters: Optional ``chain_length`` (at least 100)

        Returns:
            HashProof
        """
        params = self._resolve_parameters(parameters, 'chain_length')
        self._require_valid(params)
        chain_length = params['chain_length']

        secret_bytes = self._secret_bytes(secret)
        witness = self._new_witness()
        seed = random_bytes(SEED_SIZE)

        chain = create_hash_chain(secret_bytes + seed, chain_length)
        commitment = chain[0]
        challenge = self.generate_challenge(commitment, witness)
        response = self.create_response(secret_bytes, witness, challenge)

        tree = MerkleTree(chain)

        proof = HashProof(
            algorithm=self.algorithm,
            commitment=commitment,
            challenge=challenge,
            response=response,
            parameters=params,
            version=self.version,
            chain_length=chain_length,
            hash_chain=tuple(chain),
            merkle_root=tree.root,
            merkle_proof=tuple(tree.get_proof(0)),
        )
        self._log_created(proof)
        return proof

    @staticmethod
    def generate_challenge(commitment: bytes, witness: bytes) -> bytes:
        """Fiat-Shamir challenge H(commitment || witness)."""
        return hash_data(commitment + witness)

    @staticmethod
    def create_response(secret: bytes, witness: bytes, challenge: bytes) -> bytes:
        """witness[0:32] || HMAC_{H(secret)}(challenge)[0:32], zero-padded."""
        challenge_response = compute_hmac(challenge, hash_data(secret))
        return _fit(witness, WITNESS_SIZE) + _fit(challenge_response, 32)

    def check(self, proof: HashProof) -> Optional[VerifyFailureReason]:
        reason = self._check_envelope(proof)
        if reason:
            return reason

        if len(proof.response) != RESPONSE_SIZE:
            return VerifyFailureReason.RESPONSE_LENGTH
        if len(proof.challenge) != CHALLENGE_SIZE:
            return VerifyFailureReason.CHALLENGE_LENGTH

        chain = proof.hash_chain
        if not chain:
            return VerifyFailureReason.EMPTY_CHAIN
        if proof.chain_length != len(chain):
            return VerifyFailureReason.MALFORMED

        if self._has_sentinel(proof, proof.merkle_root) or contains_sentinel(*chain):
            return VerifyFailureReason.CORRUPTED

        if not verify_merkle_proof(chain[0], proof.merkle_proof, proof.merkle_root, 0):
            return VerifyFailureReason.MERKLE_MISMATCH
        if not verify_hash_chain(chain):
            return VerifyFailureReason.CHAIN_BROKEN
        if chain[0] != proof.commitment:
            return VerifyFailureReason.COMMITMENT_MISMATCH
        return None
