"""Multivariate polynomial systems.

A system is a list of equations; each equation is a list of per-variable
coefficient vectors indexed by degree, so ``system[e][v][d]`` is the
coefficient of ``x_v ** d`` in equation ``e``.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from quantum_zkp.crypto.utils import big_ints_to_buffer, generate_random_big_int
from quantum_zkp.errors import InvalidLength, MalformedPolynomialSystem

PolynomialSystem = List[List[List[int]]]

FIELD_MODULUS = 2 ** 64
MAX_SYSTEM_DIMENSION = 50


def generate_multivariate_system(variables: int, equations: int, degree: int,
                                 low: int = 0, high: int = FIELD_MODULUS) -> PolynomialSystem:
    """Generate a random polynomial system.

    Args:
        variables: Number of unknowns
        equations: Number of equations
        degree: Maximum degree; each variable gets degree + 1 coefficients
        low: Inclusive lower bound for coefficients
        high: Exclusive upper bound for coefficients

    Returns:
        equations x variables x (degree + 1) coefficients
    """
    if variables <= 0 or equations <= 0:
        raise InvalidLength("Variables and equations must be positive", algorithm='multivariate')
    return [
        [
            [generate_random_big_int(low, high) for _ in range(degree + 1)]
            for _ in range(variables)
        ]
        for _ in range(equations)
    ]


def evaluate_multivariate_polynomial(polynomial: Sequence[Sequence[int]], values: Sequence[int],
                                     modulus: int = FIELD_MODULUS) -> int:
    """Evaluate one equation at a point.

    Computes sum over variables v and degrees d of c[v][d] * x_v ** d, reduced
    modulo ``modulus`` after every term. Variables without a value are skipped.

    Args:
        polynomial: Per-variable coefficient vectors
        values: Point to evaluate at
        modulus: Reduction bound

    Returns:
        Evaluation in [0, modulus)
    """
    result = 0
    for coefficients, value in zip(polynomial, values):
        poly_result = 0
        for d, coefficient in enumerate(coefficients):
            poly_result = (poly_result + coefficient * pow(value, d)) % modulus
        result = (result + poly_result) % modulus
    return result


def serialize_polynomial_system(system: PolynomialSystem) -> bytes:
    """Serialize a system to compact JSON with decimal-string coefficients."""
    data = {
        'equations': len(system),
        'variables': len(system[0]) if system else 0,
        'polynomials': [
            [[str(coefficient) for coefficient in poly] for poly in equation]
            for equation in system
        ],
    }
    return json.dumps(data, separators=(',', ':')).encode('utf-8')


def deserialize_polynomial_system(data: bytes,
                                  max_dimension: Optional[int] = MAX_SYSTEM_DIMENSION,
                                  strict: bool = False) -> PolynomialSystem:
    """Decode a system produced by serialize_polynomial_system.

    Args:
        data: Serialized system
        max_dimension: Upper bound on equations and variables (None for no bound)
        strict: Require ``polynomials`` to hold exactly ``equations`` rows of
            ``variables`` non-empty vectors, checked before any decoding

    Returns:
        Polynomial system; when not strict, missing per-variable vectors
        decode as [1]
    """
    try:
        parsed = json.loads(data.decode('utf-8'))
        equations = int(parsed['equations'])
        variables = int(parsed['variables'])
        polynomials = parsed['polynomials']
    except (UnicodeDecodeError, ValueError, KeyError, TypeError) as e:
        raise MalformedPolynomialSystem(
            f"Invalid polynomial system format: {e}", algorithm='multivariate'
        ) from e

    limit = max_dimension if max_dimension is not None else max(equations, variables)
    if not (0 < equations <= limit and 0 < variables <= limit):
        raise MalformedPolynomialSystem(
            f"Invalid polynomial system dimensions: equations={equations}, variables={variables}",
            algorithm='multivariate',
        )
    if strict and not _has_shape(polynomials, equations, variables):
        raise MalformedPolynomialSystem(
            f"Polynomial data does not match {equations}x{variables} system",
            algorithm='multivariate',
        )

    system = []
    for e in range(equations):
        equation = []
        for v in range(variables):
            try:
                raw = polynomials[e][v]
            except (IndexError, TypeError):
                raw = []
            try:
                poly = [int(coefficient) for coefficient in raw]
            except (ValueError, TypeError) as exc:
                raise MalformedPolynomialSystem(
                    f"Bad coefficient in equation {e}, variable {v}", algorithm='multivariate'
                ) from exc
            equation.append(poly or [1])
        system.append(equation)
    return system


def _has_shape(polynomials, equations: int, variables: int) -> bool:
    if not isinstance(polynomials, list) or len(polynomials) != equations:
        return False
    for equation in polynomials:
        if not isinstance(equation, list) or len(equation) != variables:
            return False
        if not all(isinstance(poly, list) and poly for poly in equation):
            return False
    return True


@dataclass
class SparsePolynomialSystem:
    """Sparse coefficient store keyed by (equation, variable, degree)."""

    coefficients: Dict[Tuple[int, int, int], int] = field(default_factory=dict)

    def add(self, equation: int, variable: int, degree: int, value: int) -> None:
        self.coefficients[(equation, variable, degree)] = value

    def get(self, equation: int, variable: int, degree: int, default: int = 0) -> int:
        return self.coefficients.get((equation, variable, degree), default)

    def __len__(self) -> int:
        return len(self.coefficients)

    def __iter__(self) -> Iterator[Tuple[Tuple[int, int, int], int]]:
        return iter(sorted(self.coefficients.items()))

    @property
    def equations(self) -> int:
        return len({key[0] for key in self.coefficients})

    @property
    def variables(self) -> int:
        return len({key[1] for key in self.coefficients})

    def to_bytes(self) -> bytes:
        """Pack as [#equations, #variables, (eq, var, degree, coeff)...]."""
        packed = [self.equations, self.variables]
        for (e, v, d), value in self:
            packed.extend((e, v, d, value))
        return big_ints_to_buffer(packed)
