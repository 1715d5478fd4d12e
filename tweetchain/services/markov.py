"""
First-order Markov chain over whitespace tokens.

The table maps each token to the list of tokens observed right after it.
Lists are not deduplicated: a successor seen N times is N times as likely to
be picked, so a uniform draw over the list is the weighted draw.

Example, after ingesting "The fox jumped over the dog.":

    "**START**" -> ["The"]
    "The"       -> ["fox"]
    "fox"       -> ["jumped"]
    "jumped"    -> ["over"]
    "over"      -> ["the"]
    "the"       -> ["dog."]
    "dog."      -> ["**END**"]

Generation starts at START and keeps sampling successors until END.
Persistence: JSON object of token -> list of tokens.
"""
from __future__ import annotations

import json
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pydantic import StrictStr, TypeAdapter, ValidationError

from tweetchain.config import settings
from tweetchain.utils.logger import setup_logger

from .errors import (
    DeadEndError,
    DeserializationError,
    MaxLengthExceededError,
    SanitizeError,
)
from .sanitizer import sanitize

logger = setup_logger(__name__)

START_TOKEN = "**START**"
END_TOKEN = "**END**"
RESERVED_TOKENS = frozenset((START_TOKEN, END_TOKEN))

_TABLE_ADAPTER = TypeAdapter(Dict[StrictStr, List[StrictStr]])


@dataclass
class ChainStats:
    """Summary of a transition table."""
    samples_ingested: int = 0
    unique_tokens: int = 0
    total_transitions: int = 0
    start_successors: int = 0


class ChainModel:
    """
    Transition table plus the operations that grow and walk it.

    Not thread-safe: callers must not ingest into a model while another
    caller is ingesting into or generating from it.
    """

    def __init__(self, transitions: Optional[Dict[str, List[str]]] = None):
        # The model owns its table; never share the caller's lists
        self.transitions: Dict[str, List[str]] = {
            token: list(followers) for token, followers in (transitions or {}).items()
        }
        self.samples_ingested = 0

    # --- construction ---
    @classmethod
    def restore(cls, serialized: Union[str, bytes]) -> "ChainModel":
        """
        Rebuild a model from ``serialize()`` output.

        Raises:
            DeserializationError: input is not a JSON object of string keys
                mapped to arrays of strings
        """
        try:
            table = _TABLE_ADAPTER.validate_json(serialized)
        except ValidationError as e:
            raise DeserializationError(f"invalid chain data: {e.error_count()} error(s)") from e
        return cls(table)

    # --- ingestion ---
    def ingest(self, sample: Union[str, bytes]) -> int:
        """
        Record every adjacent token pair of one sample.

        The sample is wrapped as [START, t1, ..., tn, END]. A sample that
        sanitizes to nothing is a no-op.

        Args:
            sample: Raw tweet text

        Returns:
            Number of real tokens recorded

        Raises:
            SanitizeError: sample cannot be coerced to text; nothing is recorded
        """
        raw_tokens = sanitize(sample)
        tokens = [t for t in raw_tokens if t not in RESERVED_TOKENS]
        if len(tokens) != len(raw_tokens):
            logger.debug(f"[MARKOV] Dropped {len(raw_tokens) - len(tokens)} reserved token(s)")
        if not tokens:
            return 0

        sequence = [START_TOKEN] + tokens + [END_TOKEN]
        pairs = list(zip(sequence, sequence[1:]))

        for token, follower in pairs:
            self.transitions.setdefault(token, []).append(follower)

        self.samples_ingested += 1
        return len(tokens)

    def train(self, samples: Iterable[Union[str, bytes]]) -> int:
        """
        Ingest a batch of samples, skipping the ones that fail to sanitize.

        Returns:
            Number of samples that contributed at least one token
        """
        used = 0
        for i, sample in enumerate(samples):
            try:
                if self.ingest(sample):
                    used += 1
            except SanitizeError as e:
                logger.warning(f"[MARKOV] Skipping sample #{i}: {e}")
        logger.debug(f"[MARKOV] Trained on {used} samples, {len(self.transitions)} keys")
        return used

    # --- lookup ---
    def successors(self, token: str) -> Tuple[str, ...]:
        """Successors of ``token``; empty for unknown tokens. Never adds keys."""
        return tuple(self.transitions.get(token, ()))

    # --- generation ---
    def generate(
        self,
        max_steps: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> str:
        """
        Random walk from START to END.

        Args:
            max_steps: Maximum number of successor draws before giving up.
                None uses ``settings.MAX_GENERATION_STEPS``; 0 walks
                without a cap.
            rng: Random source, defaults to the ``random`` module

        Returns:
            Space-joined chosen tokens, sentinels excluded

        Raises:
            ValueError: max_steps is negative
            DeadEndError: a token on the walk has no successors
            MaxLengthExceededError: the cap was reached before END
        """
        if max_steps is None:
            max_steps = settings.MAX_GENERATION_STEPS
        if max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {max_steps}")
        chooser = rng if rng is not None else random

        current = START_TOKEN
        words: List[str] = []
        steps = 0

        while True:
            followers = self.transitions.get(current)
            if not followers:
                raise DeadEndError(current)

            if max_steps and steps >= max_steps:
                raise MaxLengthExceededError(max_steps)

            current = chooser.choice(followers)
            steps += 1
            if current == END_TOKEN:
                return self._detokenize(words)
            words.append(current)

    def generate_many(
        self,
        count: int,
        max_steps: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> List[str]:
        """Generate ``count`` independent sentences."""
        return [self.generate(max_steps=max_steps, rng=rng) for _ in range(count)]

    # --- persistence ---
    def serialize(self) -> bytes:
        """UTF-8 JSON of the table; key and list order are preserved."""
        return self.to_json().encode("utf-8")

    def to_json(self) -> str:
        return json.dumps(self.transitions)

    # --- stats ---
    def get_stats(self) -> ChainStats:
        """Compute table statistics."""
        vocab = set(self.transitions)
        total = 0
        for followers in self.transitions.values():
            vocab.update(followers)
            total += len(followers)
        vocab -= RESERVED_TOKENS

        return ChainStats(
            samples_ingested=self.samples_ingested,
            unique_tokens=len(vocab),
            total_transitions=total,
            start_successors=len(self.successors(START_TOKEN)),
        )

    def is_empty(self) -> bool:
        return not self.transitions.get(START_TOKEN)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainModel):
            return NotImplemented
        return self.transitions == other.transitions

    # --- helpers ---
    def _detokenize(self, tokens: List[str]) -> str:
        return " ".join(tokens)


def train_from_corpus(samples: Iterable[Union[str, bytes]]) -> ChainModel:
    model = ChainModel()
    model.train(samples)
    return model
