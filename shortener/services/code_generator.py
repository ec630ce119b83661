"""
Short Code Generator

Produces random fixed-length codes and resolves collisions against the
code store by redrawing.

Design Decisions:
- Uniform random draw over [A-Za-z0-9]: 62^6 (~56 billion) codes at length 6
- Bounded retry instead of a global counter: no shared sequence to coordinate
- Not cryptographically secure; uniqueness is guaranteed by the membership
  check, not by the randomness
"""

import logging
import random
from typing import AbstractSet, Container, Optional

from shortener.core.exceptions import ExhaustedAttemptsError
from shortener.core.setting import DEFAULT_ALPHABET

logger = logging.getLogger(__name__)


class CodeGenerator:
    """
    Draws short codes from a fixed alphabet.

    A custom ``rng`` can be passed for reproducible sequences in tests.
    """

    def __init__(self, alphabet: str = DEFAULT_ALPHABET, rng: Optional[random.Random] = None):
        if not alphabet:
            raise ValueError("alphabet must contain at least one character")
        self.alphabet = alphabet
        self._rng = rng or random.Random()

    def generate_candidate(self, length: int) -> str:
        """
        Draw ``length`` characters independently and uniformly at random.

        Args:
            length: Number of characters in the code

        Returns:
            A candidate code, possibly already in use
        """
        if length < 1:
            raise ValueError(f"code length must be positive, got {length}")
        return "".join(self._rng.choice(self.alphabet) for _ in range(length))

    def generate_unique(
        self,
        store: Container[str],
        length: int,
        max_attempts: int,
        reserved: AbstractSet[str] = frozenset(),
    ) -> str:
        """
        Draw candidates until one is absent from ``store`` and ``reserved``.

        Args:
            store: Anything supporting ``in`` over existing codes
            length: Number of characters in the code
            max_attempts: Upper bound on draws
            reserved: Codes that must never be issued (e.g. fixed route names)

        Returns:
            The first candidate that is neither stored nor reserved

        Raises:
            ExhaustedAttemptsError: If all ``max_attempts`` draws collided
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")

        for attempt in range(1, max_attempts + 1):
            code = self.generate_candidate(length)
            if code not in store and code not in reserved:
                return code
            logger.debug(f"Short code collision on attempt {attempt}: {code}")

        logger.warning(
            f"No free short code of length {length} found after {max_attempts} attempts"
        )
        raise ExhaustedAttemptsError(attempts=max_attempts, length=length)
