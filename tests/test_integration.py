"""End-to-end tests across every engine through the registry."""

from dataclasses import replace

import pytest

import quantum_zkp
from quantum_zkp.algorithms import get_engine, list_engines
from quantum_zkp.algorithms.registry import register_engine
from quantum_zkp.errors import InvalidParameters
from quantum_zkp.types import Algorithm, Proof


@pytest.fixture
def fast_parameters(lattice_params, component_parameters):
    return {
        Algorithm.LATTICE: lattice_params,
        Algorithm.HASH: {'chain_length': 100},
        Algorithm.MULTIVARIATE: {'variables': 8, 'equations': 8},
        Algorithm.HYBRID: {'component_parameters': component_parameters},
    }


class TestRegistry:

    def test_all_engines_registered(self):
        assert set(list_engines()) == set(Algorithm)

    def test_lookup_by_tag(self):
        assert isinstance(get_engine('hash'), quantum_zkp.HashChainZKP)
        assert isinstance(get_engine(Algorithm.HYBRID), quantum_zkp.HybridZKP)

    def test_unknown_algorithm(self):
        with pytest.raises(InvalidParameters):
            get_engine('quantum')

    def test_register_rejects_unknown_tag(self):
        with pytest.raises(InvalidParameters):
            register_engine('quantum')(type('QuantumZKP', (), {}))

    def test_package_exports(self):
        assert quantum_zkp.__version__ == "1.0.0"
        assert quantum_zkp.Algorithm is Algorithm


@pytest.mark.parametrize("algorithm", list(Algorithm))
class TestRoundTrip:
    """Properties every engine shares."""

    def test_create_then_verify(self, algorithm, fast_parameters):
        engine = get_engine(algorithm)
        proof = engine.create_proof("integration secret", fast_parameters[algorithm])
        assert proof.algorithm == algorithm
        assert engine.verify_proof(proof)
        assert engine.verify_detailed(proof).is_valid

    @pytest.mark.parametrize("field", ['commitment', 'challenge', 'response'])
    def test_sentinel_rejected(self, algorithm, fast_parameters, field):
        engine = get_engine(algorithm)
        proof = engine.create_proof(b"integration secret", fast_parameters[algorithm])
        assert not engine.verify_proof(replace(proof, **{field: b"corrupted"}))

    def test_foreign_proof_rejected(self, algorithm):
        engine = get_engine(algorithm)
        foreign = Proof(algorithm=algorithm, commitment=b"c" * 32, challenge=b"x" * 32, response=b"r")
        assert not engine.verify_proof(foreign)

    def test_garbage_never_raises(self, algorithm):
        engine = get_engine(algorithm)
        for garbage in (None, 42, b"bytes", {"algorithm": algorithm.value}):
            assert engine.verify_proof(garbage) is False

    def test_bad_parameter_container(self, algorithm):
        with pytest.raises(InvalidParameters):
            get_engine(algorithm).create_proof(b"secret", "dimension=128")

    def test_bad_secret(self, algorithm, fast_parameters):
        with pytest.raises(InvalidParameters):
            get_engine(algorithm).create_proof(12345, fast_parameters[algorithm])


class TestDefaults:

    def test_hybrid_with_defaults(self):
        """All defaults, including a freshly generated lattice modulus."""
        engine = quantum_zkp.HybridZKP()
        proof = engine.create_proof("default secret")
        assert len(proof.proofs) == 3
        assert proof.proofs[0].modulus.bit_length() == 1024
        assert engine.verify_proof(proof)
