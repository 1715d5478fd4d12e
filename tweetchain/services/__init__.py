"""
Chain services package.
Sanitization, the Markov chain model, its error types and the on-disk cache.
"""

from .errors import (
    ChainError,
    SanitizeError,
    RecoverableSanitizeError,
    DeserializationError,
    GenerationError,
    DeadEndError,
    MaxLengthExceededError,
)
from .sanitizer import sanitize, sanitize_text
from .markov import START_TOKEN, END_TOKEN, ChainModel, ChainStats, train_from_corpus
from .chain_cache import ChainCache, cache_key

__all__ = [
    "ChainError",
    "SanitizeError",
    "RecoverableSanitizeError",
    "DeserializationError",
    "GenerationError",
    "DeadEndError",
    "MaxLengthExceededError",
    "sanitize",
    "sanitize_text",
    "START_TOKEN",
    "END_TOKEN",
    "ChainModel",
    "ChainStats",
    "train_from_corpus",
    "ChainCache",
    "cache_key",
]
