"""Tests for the hash-chain engine.

Tests cover:
- Proof structure and round trip verification
- Parameter validation
- Every rejection path
- Supplementary chain builders
"""

import hashlib
from dataclasses import replace

import pytest

from quantum_zkp.algorithms.hash_chain import (
    HashChainZKP,
    create_entropy_hash_chain,
    create_multi_algorithm_hash_chain,
    create_optimized_hash_chain,
)
from quantum_zkp.crypto.merkle import verify_merkle_proof
from quantum_zkp.crypto.utils import create_hash_chain, hash_data
from quantum_zkp.errors import InvalidLength, InvalidParameters
from quantum_zkp.types import Algorithm, HashProof, LatticeProof, VerifyFailureReason


@pytest.fixture
def engine():
    return HashChainZKP()


@pytest.fixture
def proof(engine):
    return engine.create_proof(b"hash secret", {'chain_length': 100})


class TestHashProofCreation:
    """Tests for proof construction."""

    def test_structure(self, proof):
        assert isinstance(proof, HashProof)
        assert proof.algorithm == Algorithm.HASH
        assert proof.chain_length == 100
        assert len(proof.hash_chain) == 100
        assert proof.commitment == proof.hash_chain[0]
        assert len(proof.challenge) == 32
        assert len(proof.response) == 64
        assert proof.quantum_safe
        assert proof.version == "1.0.0"

    def test_merkle_anchor(self, proof):
        """The first link is included under the published root."""
        assert verify_merkle_proof(proof.hash_chain[0], proof.merkle_proof, proof.merkle_root, 0)

    def test_challenge_binds_commitment_and_witness(self, proof):
        witness = proof.response[:32]
        assert proof.challenge == hashlib.sha256(proof.commitment + witness).digest()

    def test_default_chain_length(self, engine):
        """Without parameters the configured length of 1000 is used."""
        proof = engine.create_proof("secret")
        assert proof.chain_length == 1000
        assert engine.verify_proof(proof)

    def test_camel_case_alias(self, engine):
        proof = engine.create_proof(b"secret", {'chainLength': 500})
        assert len(proof.hash_chain) == 500

    def test_fresh_proofs(self, engine):
        """Repeated proofs of the same secret share nothing and both verify."""
        p1 = engine.create_proof(b"same", {'chain_length': 100})
        p2 = engine.create_proof(b"same", {'chain_length': 100})
        assert p1.commitment != p2.commitment
        assert p1.challenge != p2.challenge
        assert p1.response != p2.response
        assert engine.verify_proof(p1) and engine.verify_proof(p2)

    @pytest.mark.parametrize("params", [
        {'chain_length': 50},
        {'chain_length': 0},
        {'chain_length': "1000"},
    ])
    def test_invalid_parameters(self, engine, params):
        with pytest.raises(InvalidParameters) as exc_info:
            engine.create_proof(b"secret", params)
        assert exc_info.value.algorithm == 'hash'

    def test_parameters_must_be_mapping(self, engine):
        with pytest.raises(InvalidParameters):
            engine.create_proof(b"secret", [('chain_length', 100)])

    def test_parameters_read_only(self, proof):
        with pytest.raises(TypeError):
            proof.parameters['chain_length'] = 5


class TestHashProofVerification:
    """Tests for every rejection reason."""

    def test_valid(self, engine, proof):
        assert engine.verify_proof(proof)
        assert engine.explain(proof) is None

    def test_wrong_type(self, engine, proof):
        other = LatticeProof(
            algorithm=Algorithm.LATTICE,
            commitment=proof.commitment,
            challenge=proof.challenge,
            response=proof.response,
        )
        assert engine.explain(other) is VerifyFailureReason.WRONG_TYPE
        assert engine.explain(replace(proof, algorithm=Algorithm.LATTICE)) is VerifyFailureReason.WRONG_TYPE
        assert not engine.verify_proof("not a proof")

    def test_malformed_envelope(self, engine, proof):
        assert engine.explain(replace(proof, commitment="text")) is VerifyFailureReason.MALFORMED

    @pytest.mark.parametrize("field", ['commitment', 'challenge', 'response'])
    def test_corrupted_sentinel(self, engine, proof, field):
        """Replacing any envelope field with the sentinel fails."""
        assert not engine.verify_proof(replace(proof, **{field: b"corrupted"}))

    def test_corrupted_root(self, engine, proof):
        corrupted = replace(proof, merkle_root=b"corrupted" + proof.merkle_root)
        assert engine.explain(corrupted) is VerifyFailureReason.CORRUPTED

    def test_corrupted_chain_link(self, engine, proof):
        chain = (proof.hash_chain[0], b"xxcorruptedxx") + proof.hash_chain[2:]
        assert engine.explain(replace(proof, hash_chain=chain)) is VerifyFailureReason.CORRUPTED

    def test_response_length(self, engine, proof):
        bad = replace(proof, response=proof.response[:63])
        assert engine.explain(bad) is VerifyFailureReason.RESPONSE_LENGTH

    def test_challenge_length(self, engine, proof):
        bad = replace(proof, challenge=proof.challenge + b"\x00")
        assert engine.explain(bad) is VerifyFailureReason.CHALLENGE_LENGTH

    def test_empty_chain(self, engine, proof):
        bad = replace(proof, hash_chain=(), chain_length=0)
        assert engine.explain(bad) is VerifyFailureReason.EMPTY_CHAIN

    def test_chain_length_mismatch(self, engine, proof):
        bad = replace(proof, chain_length=99)
        assert engine.explain(bad) is VerifyFailureReason.MALFORMED

    def test_merkle_mismatch(self, engine, proof):
        bad = replace(proof, merkle_root=hash_data(b"other root"))
        assert engine.explain(bad) is VerifyFailureReason.MERKLE_MISMATCH

    def test_chain_broken(self, engine, proof):
        chain = list(proof.hash_chain)
        chain[50] = hash_data(b"tampered")
        assert engine.explain(replace(proof, hash_chain=tuple(chain))) is VerifyFailureReason.CHAIN_BROKEN

    def test_commitment_mismatch(self, engine, proof):
        bad = replace(proof, commitment=hash_data(b"other"))
        assert engine.explain(bad) is VerifyFailureReason.COMMITMENT_MISMATCH

    def test_detailed_result(self, engine, proof):
        result = engine.verify_detailed(replace(proof, chain_length=99))
        assert not result.is_valid
        assert result.reason is VerifyFailureReason.MALFORMED
        assert result.verification_time_ms > 0
        assert result.to_dict()['reason'] == 'malformed'
        assert result.error is None


class TestChainBuilders:
    """Tests for the supplementary chain builders."""

    def test_optimized_matches_plain(self):
        """Batching does not change the chain."""
        assert create_optimized_hash_chain(b"seed", 250, batch_size=100) == create_hash_chain(b"seed", 250)

    def test_multi_algorithm_rotation(self):
        chain = create_multi_algorithm_hash_chain(b"seed", 4)
        assert [len(link) for link in chain] == [32, 48, 64, 32]
        assert chain[1] == hashlib.sha384(chain[0]).digest()

    def test_entropy_chain_not_reproducible(self):
        c1 = create_entropy_hash_chain(b"seed", 3)
        c2 = create_entropy_hash_chain(b"seed", 3)
        assert all(len(link) == 64 for link in c1)
        assert c1 != c2

    @pytest.mark.parametrize("builder", [
        create_optimized_hash_chain,
        create_multi_algorithm_hash_chain,
        create_entropy_hash_chain,
    ])
    def test_zero_length(self, builder):
        with pytest.raises(InvalidLength):
            builder(b"seed", 0)
