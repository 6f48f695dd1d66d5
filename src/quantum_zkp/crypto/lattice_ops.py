"""Lattice primitives: LWE/RLWE sampling and ring arithmetic.

Coefficients are Python ints because moduli are far wider than any numpy
dtype; numpy is only used for the floating-point error sampling.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from quantum_zkp.crypto.utils import generate_random_big_int
from quantum_zkp.errors import InvalidDegree, InvalidLength


@dataclass(frozen=True)
class LWESample:
    """One LWE pair: coefficient vector ``a`` and scalar ``b``."""
    a: Tuple[int, ...]
    b: int

    @property
    def dimension(self) -> int:
        return len(self.a)


def _uniform_unit() -> float:
    # thousandths drawn from the secure source
    return generate_random_big_int(0, 1000) / 1000


def generate_discrete_gaussian_error(sigma: int) -> int:
    """Sample a rounded Gaussian error via Box-Muller.

    Args:
        sigma: Standard deviation (error stays within ~3*sigma in practice)

    Returns:
        Integer error, possibly negative
    """
    u1 = max(0.0001, _uniform_unit())
    u2 = _uniform_unit()
    z0 = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    return int(np.floor(float(sigma) * z0 + 0.5))


def generate_error_vector(length: int, sigma: int) -> List[int]:
    """Sample ``length`` independent Gaussian errors."""
    u1 = np.maximum(0.0001, np.array([_uniform_unit() for _ in range(length)]))
    u2 = np.array([_uniform_unit() for _ in range(length)])
    z0 = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    return [int(v) for v in np.floor(float(sigma) * z0 + 0.5)]


def generate_lwe_sample(dimension: int, modulus: int, error_bound: int) -> LWESample:
    """Generate an LWE sample.

    Args:
        dimension: Length of the coefficient vector
        modulus: Lattice modulus q
        error_bound: Gaussian sigma for the error term

    Returns:
        LWESample with a uniform in [0, q) and b = (r + e) mod q
    """
    if dimension <= 0:
        raise InvalidLength("Dimension must be positive", algorithm='lattice')
    a = tuple(generate_random_big_int(0, modulus) for _ in range(dimension))
    error = generate_discrete_gaussian_error(error_bound)
    b = (generate_random_big_int(0, modulus) + error) % modulus
    return LWESample(a=a, b=b)


def inner_product(a: Sequence[int], s: Sequence[int], modulus: int) -> int:
    """Compute sum(a_i * s_i) mod modulus over the common length."""
    total = 0
    for a_i, s_i in zip(a, s):
        total = (total + a_i * s_i) % modulus
    return total


def generate_rlwe_polynomial(degree: int, modulus: int, error_bound: int) -> List[int]:
    """Generate RLWE polynomial coefficients (uniform plus Gaussian error).

    Args:
        degree: Ring degree, must be a power of two
        modulus: Ring modulus
        error_bound: Gaussian sigma

    Returns:
        ``degree`` coefficients in [0, modulus)
    """
    if degree <= 0 or degree & (degree - 1) != 0:
        raise InvalidDegree("Degree must be a power of 2 for RLWE", algorithm='lattice')
    coefficients = [generate_random_big_int(0, modulus) for _ in range(degree)]
    errors = generate_error_vector(degree, error_bound)
    return [(c + e) % modulus for c, e in zip(coefficients, errors)]


def polynomial_multiply(a: Sequence[int], b: Sequence[int], modulus: int) -> List[int]:
    """Multiply in Z_q[x] / (x^n - 1) (cyclic convolution).

    Args:
        a: First polynomial, n coefficients
        b: Second polynomial, n coefficients
        modulus: Coefficient modulus

    Returns:
        Product coefficients
    """
    degree = len(a)
    result = [0] * degree
    for i in range(degree):
        for j in range(min(degree, len(b))):
            k = (i + j) % degree
            result[k] = (result[k] + a[i] * b[j]) % modulus
    return result
