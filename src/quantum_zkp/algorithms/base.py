"""Shared engine behaviour.

Each engine implements ``create_proof`` and ``check``. ``check`` returns
the first rejection reason (or None) and may raise on malformed input;
``verify_proof`` turns any exception into INTERNAL_ERROR and collapses the
outcome to a bool, so callers never see an exception from verification.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

from quantum_zkp.config.manager import ZKPConfig
from quantum_zkp.crypto.params import get_param, validate_parameters
from quantum_zkp.crypto.utils import contains_sentinel, hash_data, random_bytes, to_bytes
from quantum_zkp.errors import InvalidParameters
from quantum_zkp.types import (
    Algorithm,
    Proof,
    VerificationResult,
    VerifyFailureReason,
)

Secret = Union[bytes, bytearray, str]

WITNESS_SIZE = 32
CHALLENGE_SIZE = 32


class BaseZKP(ABC):
    """Base class for the proof engines."""

    algorithm: Algorithm
    proof_type: Type[Proof] = Proof

    def __init__(self, config: Optional[ZKPConfig] = None):
        """
        Args:
            config: Engine configuration (built-in defaults if None)
        """
        self.config = config or ZKPConfig.default()
        self.logger = logging.getLogger(type(self).__module__)

    @property
    def version(self) -> str:
        return self.config.version

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self.config.defaults_for(self.algorithm)

    @property
    def security_level(self):
        return self.config.security_level(self.algorithm)

    @abstractmethod
    def create_proof(self, secret: Secret, parameters: Optional[Mapping[str, Any]] = None) -> Proof:
        """Build a proof of knowledge of ``secret``."""

    @abstractmethod
    def check(self, proof: Proof) -> Optional[VerifyFailureReason]:
        """Return why ``proof`` is rejected, or None if it is accepted."""

    def explain(self, proof: Proof) -> Optional[VerifyFailureReason]:
        """Run ``check`` with every exception mapped to INTERNAL_ERROR."""
        return self._run_check(proof)[0]

    def _run_check(self, proof: Proof) -> Tuple[Optional[VerifyFailureReason], Optional[str]]:
        """``check`` outcome plus the repr of any exception it raised."""
        try:
            reason = self.check(proof)
        except Exception as e:
            self.logger.debug(f"{self.algorithm.value} verification fault: {e!r}")
            return VerifyFailureReason.INTERNAL_ERROR, repr(e)
        if reason is not None:
            self.logger.debug(f"{self.algorithm.value} proof rejected: {reason.value}")
        return reason, None

    def verify_proof(self, proof: Proof) -> bool:
        """Verify a proof.

        Args:
            proof: The proof to verify

        Returns:
            True if proof is valid
        """
        return self.explain(proof) is None

    def verify_detailed(self, proof: Proof) -> VerificationResult:
        """Verify a proof and report timing and the rejection reason."""
        start = time.perf_counter()
        reason, error = self._run_check(proof)
        elapsed_ms = max((time.perf_counter() - start) * 1000, 0.001)
        return VerificationResult(
            is_valid=reason is None,
            algorithm=getattr(proof, 'algorithm', None),
            verification_time_ms=elapsed_ms,
            reason=reason,
            error=error,
        )

    def _resolve_parameters(self, parameters: Optional[Mapping[str, Any]],
                            *keys: str) -> Dict[str, Any]:
        """Pick ``keys`` from ``parameters``, falling back to config defaults."""
        parameters = parameters or {}
        if not isinstance(parameters, Mapping):
            raise InvalidParameters(
                f"Parameters must be a mapping, got {type(parameters).__name__}",
                algorithm=self.algorithm.value,
            )
        return {key: get_param(parameters, key, self.defaults.get(key)) for key in keys}

    def _require_valid(self, params: Mapping[str, Any]) -> None:
        if not validate_parameters(self.algorithm, params):
            raise InvalidParameters(
                f"Invalid {self.algorithm.value} parameters",
                algorithm=self.algorithm.value,
            )

    @staticmethod
    def _secret_bytes(secret: Secret) -> bytes:
        return to_bytes(secret)

    @staticmethod
    def _new_witness() -> bytes:
        return random_bytes(WITNESS_SIZE)

    def _check_envelope(self, proof: Proof) -> Optional[VerifyFailureReason]:
        """Type tag and byte-typed envelope fields."""
        if not isinstance(proof, self.proof_type) or proof.algorithm != self.algorithm:
            return VerifyFailureReason.WRONG_TYPE
        for value in (proof.commitment, proof.challenge, proof.response):
            if not isinstance(value, (bytes, bytearray)):
                return VerifyFailureReason.MALFORMED
        return None

    @staticmethod
    def _has_sentinel(proof: Proof, *extra: bytes) -> bool:
        return contains_sentinel(proof.commitment, proof.challenge, proof.response, *extra)

    @staticmethod
    def _check_zero_knowledge(proof: Proof) -> Optional[VerifyFailureReason]:
        """Reject a response whose digest equals the challenge digest."""
        if hash_data(proof.response) == hash_data(proof.challenge):
            return VerifyFailureReason.RESPONSE_EQUALS_CHALLENGE
        return None

    def _log_created(self, proof: Proof) -> None:
        self.logger.debug(
            f"Created {self.algorithm.value} proof ({proof.proof_size} bytes)"
        )
