"""Unit tests for parameter validation."""

import pytest

from quantum_zkp.crypto.params import get_param, validate_parameters
from quantum_zkp.types import Algorithm


class TestLatticeParameters:

    def test_valid(self):
        assert validate_parameters('lattice', {'dimension': 128, 'modulus': 97})

    @pytest.mark.parametrize("params", [
        {'dimension': 127, 'modulus': 97},
        {'dimension': 256, 'modulus': 0},
        {'dimension': 256},
        {'dimension': True, 'modulus': 97},
        {'dimension': 256.0, 'modulus': 97},
    ])
    def test_invalid(self, params):
        assert not validate_parameters('lattice', params)


class TestHashParameters:

    def test_valid(self):
        assert validate_parameters('hash', {'chain_length': 100})

    def test_camel_case_alias(self):
        assert validate_parameters(Algorithm.HASH, {'chainLength': 500})

    def test_too_short(self):
        assert not validate_parameters('hash', {'chain_length': 50})


class TestMultivariateParameters:

    def test_valid(self):
        assert validate_parameters('multivariate', {'variables': 8, 'equations': 8})

    @pytest.mark.parametrize("params", [
        {'variables': 7, 'equations': 12},
        {'variables': 10, 'equations': 9},
        {'variables': 8},
    ])
    def test_invalid(self, params):
        assert not validate_parameters('multivariate', params)


class TestHybridParameters:

    def test_valid(self):
        assert validate_parameters('hybrid', {'algorithms': ['lattice', Algorithm.HASH]})

    @pytest.mark.parametrize("algorithms", [
        ['lattice'],
        ['lattice', 'hybrid'],
        ['lattice', 'unknown'],
        'lattice,hash',
        None,
    ])
    def test_invalid(self, algorithms):
        assert not validate_parameters('hybrid', {'algorithms': algorithms})


class TestValidatorBoundary:
    """validate_parameters never raises."""

    @pytest.mark.parametrize("algorithm", ['unknown', None, 42, ['hash']])
    def test_unknown_algorithm(self, algorithm):
        assert not validate_parameters(algorithm, {'chain_length': 1000})

    def test_non_mapping_params(self):
        assert not validate_parameters('hash', [('chain_length', 1000)])

    def test_get_param_skips_none(self):
        """A None value falls back to the default."""
        assert get_param({'chain_length': None}, 'chain_length', 7) == 7
        assert get_param({'chainLength': 9}, 'chain_length', 7) == 9
