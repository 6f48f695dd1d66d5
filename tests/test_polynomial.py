"""Unit tests for multivariate polynomial systems."""

import json

import pytest

from quantum_zkp.crypto.polynomial import (
    FIELD_MODULUS,
    SparsePolynomialSystem,
    deserialize_polynomial_system,
    evaluate_multivariate_polynomial,
    generate_multivariate_system,
    serialize_polynomial_system,
)
from quantum_zkp.crypto.utils import big_ints_to_buffer
from quantum_zkp.errors import InvalidLength, MalformedPolynomialSystem


class TestSystemGeneration:
    """Tests for random system generation."""

    def test_shape(self):
        system = generate_multivariate_system(4, 6, 2)
        assert len(system) == 6
        assert all(len(equation) == 4 for equation in system)
        assert all(len(poly) == 3 for equation in system for poly in equation)

    def test_coefficient_bounds(self):
        system = generate_multivariate_system(3, 3, 1, low=1, high=10)
        assert all(1 <= c < 10 for eq in system for poly in eq for c in poly)

    def test_invalid_dimensions(self):
        with pytest.raises(InvalidLength):
            generate_multivariate_system(0, 3, 1)


class TestEvaluation:
    """Tests for polynomial evaluation."""

    def test_known_value(self):
        # (1 + 2x + 3x^2) at x=2 plus (4 + 5y) at y=3
        poly = [[1, 2, 3], [4, 5]]
        assert evaluate_multivariate_polynomial(poly, [2, 3]) == 17 + 19

    def test_reduced_modulo(self):
        poly = [[FIELD_MODULUS - 1, 1]]
        assert evaluate_multivariate_polynomial(poly, [2]) == 1
        assert evaluate_multivariate_polynomial([[5, 5]], [1], modulus=7) == 3

    def test_missing_values_skipped(self):
        """Variables beyond the supplied point contribute nothing."""
        assert evaluate_multivariate_polynomial([[1, 1], [100, 100]], [1]) == 2


class TestSerialization:
    """Tests for JSON encoding of systems."""

    def test_compact_format(self):
        data = serialize_polynomial_system([[[1, 2]], [[3, 4]]])
        assert data == b'{"equations":2,"variables":1,"polynomials":[[["1","2"]],[["3","4"]]]}'

    def test_decode(self):
        system = generate_multivariate_system(8, 12, 1)
        assert deserialize_polynomial_system(serialize_polynomial_system(system)) == system

    def test_missing_vectors_default(self):
        """Absent per-variable vectors decode as [1]."""
        data = json.dumps({'equations': 1, 'variables': 2, 'polynomials': [[["7"]]]}).encode()
        assert deserialize_polynomial_system(data) == [[[7], [1]]]

    @pytest.mark.parametrize("data", [
        b"not json",
        b'{"equations": 1}',
        b'{"equations": 0, "variables": 1, "polynomials": []}',
        b'{"equations": 51, "variables": 1, "polynomials": []}',
        b'{"equations": 1, "variables": 1, "polynomials": [[["x"]]]}',
        b'\xff\xfe',
    ])
    def test_malformed(self, data):
        with pytest.raises(MalformedPolynomialSystem):
            deserialize_polynomial_system(data)

    @pytest.mark.parametrize("polynomials", [
        [[["1"]]],
        [[["1"], ["2"]]],
        [[["1"], []], [["2"], ["3"]]],
        [[["1"], ["2"]], "row"],
        {"0": []},
    ])
    def test_strict_shape(self, polynomials):
        """Strict decoding needs every row and vector of the declared system."""
        data = json.dumps({'equations': 2, 'variables': 2, 'polynomials': polynomials}).encode()
        with pytest.raises(MalformedPolynomialSystem):
            deserialize_polynomial_system(data, strict=True)

    def test_strict_rejects_before_expanding(self):
        """Large declared dimensions with a short payload fail the shape check."""
        data = b'{"equations":2500,"variables":2500,"polynomials":[[["1"]]]}'
        with pytest.raises(MalformedPolynomialSystem, match="does not match"):
            deserialize_polynomial_system(data, max_dimension=None, strict=True)

    def test_strict_accepts_serialized(self):
        system = generate_multivariate_system(8, 12, 1)
        data = serialize_polynomial_system(system)
        assert deserialize_polynomial_system(data, strict=True) == system

    def test_unbounded_dimension(self):
        """max_dimension=None lifts the size cap."""
        system = generate_multivariate_system(1, 60, 0)
        data = serialize_polynomial_system(system)
        with pytest.raises(MalformedPolynomialSystem):
            deserialize_polynomial_system(data)
        assert len(deserialize_polynomial_system(data, max_dimension=None)) == 60


class TestSparseSystem:
    """Tests for the sparse coefficient store."""

    def test_add_and_get(self):
        sparse = SparsePolynomialSystem()
        sparse.add(0, 1, 2, 99)
        assert sparse.get(0, 1, 2) == 99
        assert sparse.get(5, 5, 5) == 0
        assert len(sparse) == 1

    def test_dimensions(self):
        sparse = SparsePolynomialSystem()
        sparse.add(0, 0, 0, 1)
        sparse.add(0, 3, 1, 2)
        sparse.add(2, 3, 0, 3)
        assert sparse.equations == 2
        assert sparse.variables == 2

    def test_iteration_sorted(self):
        sparse = SparsePolynomialSystem()
        sparse.add(1, 0, 0, 5)
        sparse.add(0, 1, 0, 6)
        assert [key for key, _ in sparse] == [(0, 1, 0), (1, 0, 0)]

    def test_to_bytes(self):
        sparse = SparsePolynomialSystem()
        sparse.add(0, 1, 1, 300)
        assert sparse.to_bytes() == big_ints_to_buffer([1, 1, 0, 1, 1, 300])
