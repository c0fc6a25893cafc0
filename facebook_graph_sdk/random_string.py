"""
Random strings — Cryptographically secure hex strings for CSRF state and batch file names.
"""

import secrets
from abc import ABC, abstractmethod
from typing import Any


def generate_pseudo_random_string(length: int) -> str:
    """Return a random hex string of exactly `length` characters.

    Raises:
        ValueError: If length is less than 1.
    """
    if not isinstance(length, int) or length < 1:
        raise ValueError("generate_pseudo_random_string() expects a length of at least 1")

    return secrets.token_hex((length + 1) // 2)[:length]


class PseudoRandomStringGeneratorInterface(ABC):
    @abstractmethod
    def get_pseudo_random_string(self, length: int) -> str:
        ...


class SecretsPseudoRandomStringGenerator(PseudoRandomStringGeneratorInterface):
    """Default generator backed by the secrets module."""

    def get_pseudo_random_string(self, length: int) -> str:
        return generate_pseudo_random_string(length)


def create_pseudo_random_string_generator(generator: Any = None) -> PseudoRandomStringGeneratorInterface:
    """Resolve the "pseudo_random_string_generator" config value.

    Raises:
        ValueError: If the generator is not a supported value.
    """
    if generator is None or generator == "secrets":
        return SecretsPseudoRandomStringGenerator()

    if isinstance(generator, PseudoRandomStringGeneratorInterface):
        return generator

    raise ValueError(
        'The pseudo random string generator must be set to "secrets" or be an '
        "instance of PseudoRandomStringGeneratorInterface"
    )
