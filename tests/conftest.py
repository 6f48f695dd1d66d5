"""Shared fixtures for the test suite."""

import pytest

from quantum_zkp.crypto.utils import generate_large_prime


@pytest.fixture(scope="session")
def prime():
    """A 1024-bit probable prime, generated once per session."""
    return generate_large_prime(1024)


@pytest.fixture
def lattice_params(prime):
    """Smallest valid lattice parameters over the session prime."""
    return {'dimension': 128, 'modulus': prime}


@pytest.fixture
def component_parameters(lattice_params):
    """Fast per-component parameters for hybrid proofs."""
    return {
        'lattice': lattice_params,
        'hash': {'chain_length': 100},
    }
