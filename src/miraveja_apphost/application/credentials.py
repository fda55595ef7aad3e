"""Application layer - Credential generation."""

import random
import uuid
from typing import Optional

from miraveja_apphost.domain import ICredentialGenerator


class CredentialGenerator(ICredentialGenerator):
    """Generates credentials for resources that were not given one.

    Credentials are 32 lowercase hexadecimal characters (a UUID4 without
    dashes). A seeded generator produces the same sequence on every run,
    which keeps published manifests reproducible in tests.

    Attributes:
        _random: Seeded random source, or None for a cryptographic source.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """Initialize the generator.

        Args:
            seed: Optional seed. When None, credentials come from ``uuid.uuid4``.
        """
        self._random = random.Random(seed) if seed is not None else None

    def generate(self) -> str:
        """Return a new credential.

        Example:
            >>> CredentialGenerator(seed=7).generate() == CredentialGenerator(seed=7).generate()
            True
        """
        if self._random is None:
            return uuid.uuid4().hex
        return uuid.UUID(int=self._random.getrandbits(128), version=4).hex
