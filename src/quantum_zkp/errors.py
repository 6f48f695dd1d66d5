"""Exception types raised while constructing proofs.

Verification never raises; these only surface from ``create_proof`` and
from the primitive layer.
"""

from typing import Optional


class ZKPError(ValueError):
    """Base error carrying a machine-readable code and a hint for the caller."""

    default_code = "ZKP_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        algorithm: Optional[str] = None,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code or self.default_code
        self.algorithm = algorithm or "hybrid"
        self.suggestion = suggestion or "Check parameters and try again"

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'message': str(self),
            'algorithm': self.algorithm,
            'suggestion': self.suggestion,
        }


class InvalidParameters(ZKPError):
    """Proof parameters failed validation."""
    default_code = "INVALID_PARAMETERS"


class InvalidLength(ZKPError):
    """A length or count argument was not positive."""
    default_code = "INVALID_LENGTH"


class ParameterTooSmall(ZKPError):
    """A size parameter is below its security floor."""
    default_code = "PARAMETER_TOO_SMALL"


class InvalidDegree(ZKPError):
    """Ring polynomial degree is not a power of two."""
    default_code = "INVALID_DEGREE"


class EmptyInput(ZKPError):
    """An operation that needs at least one element received none."""
    default_code = "EMPTY_INPUT"


class MalformedPolynomialSystem(ZKPError):
    """Serialized polynomial system could not be decoded."""
    default_code = "MALFORMED_POLYNOMIAL_SYSTEM"
