"""
Exception types raised by the chain services.
"""
from __future__ import annotations


class ChainError(Exception):
    """Base class for every error raised by the chain services."""


class SanitizeError(ChainError):
    """Raw input could not be coerced into text at all (e.g. ``None``)."""


# Batch drivers skip the offending sample and keep going
RecoverableSanitizeError = SanitizeError


class DeserializationError(ChainError):
    """Serialized data is not a mapping of string keys to lists of strings."""


class GenerationError(ChainError):
    """
    A random walk failed to reach the END token.

    Retrying starts a fresh, independent walk from START.
    """

    code = "GENERATION_ERROR"


class DeadEndError(GenerationError):
    """The walk reached a token with no recorded successors."""

    code = "DEAD_END"

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"token {token!r} has no successors")


class MaxLengthExceededError(GenerationError):
    """The walk chose ``max_steps`` tokens without reaching END."""

    code = "MAX_LENGTH_EXCEEDED"

    def __init__(self, max_steps: int):
        self.max_steps = max_steps
        super().__init__(f"no END token within {max_steps} steps")
