"""
Secrets-based code generator adapter - Implements CodeGenerator protocol.

Codes end up in activation links, so the alphabet is limited to
URL-safe ASCII letters and digits.
"""

import secrets
import string

ALPHABET = string.ascii_letters + string.digits


class SecretsCodeGenerator:
    """
    Implements CodeGenerator protocol via the secrets module.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, alphabet: str = ALPHABET) -> None:
        if not alphabet:
            raise ValueError("Code alphabet must not be empty")
        self._alphabet = alphabet

    def generate(self, length: int) -> str:
        """
        Generate a cryptographically random code.

        Args:
            length: Number of characters (must be positive)

        Returns:
            Code of exactly `length` characters drawn from the alphabet
        """
        if length < 1:
            raise ValueError(f"Code length must be positive, got {length}")
        return "".join(secrets.choice(self._alphabet) for _ in range(length))
