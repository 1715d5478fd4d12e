"""
On-disk cache of serialized chains, one JSON file per seed user.

File names are an MD5 digest of the seed so no user names end up on disk.
"""
from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from tweetchain.utils.logger import setup_logger

from .errors import DeserializationError
from .markov import ChainModel

logger = setup_logger(__name__)


def cache_key(seed: str) -> str:
    """Stable file stem for a seed user."""
    return hashlib.md5(f"{seed}_markov_chain".encode("utf-8")).hexdigest()


class ChainCache:
    """Stores and restores ChainModel blobs under a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, seed: str) -> Path:
        return self.directory / f"{cache_key(seed)}.json"

    def exists(self, seed: str) -> bool:
        return self.path_for(seed).exists()

    def find(self, seed: str) -> Optional[ChainModel]:
        """
        Load the cached chain for a seed.

        Returns:
            Restored model, or None when nothing is cached

        Raises:
            DeserializationError: cached file is corrupt
        """
        path = self.path_for(seed)
        if not path.exists():
            return None
        return ChainModel.restore(path.read_bytes())

    def store(self, seed: str, model: ChainModel) -> Path:
        """Write the serialized chain, creating the directory if needed."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(seed)
        path.write_bytes(model.serialize())
        logger.info(f"[CACHE] Stored chain for seed at {path.name}")
        return path

    def discard(self, seed: str) -> bool:
        """Remove the cached chain. Returns False when there was none."""
        path = self.path_for(seed)
        if not path.exists():
            return False
        path.unlink()
        return True

    def find_or_build(
        self, seed: str, samples: Iterable[Union[str, bytes]]
    ) -> Tuple[ChainModel, bool]:
        """
        Cached chain for the seed, or a fresh one trained on ``samples``.

        A corrupt cache entry counts as a miss and gets overwritten.

        Returns:
            (model, cache_hit)
        """
        try:
            model = self.find(seed)
        except DeserializationError as e:
            logger.warning(f"[CACHE] Ignoring corrupt cache entry {self.path_for(seed).name}: {e}")
            model = None

        if model is not None:
            logger.info("[CACHE] Cache hit")
            return model, True

        logger.info("[CACHE] No cache hit, building chain")
        model = ChainModel()
        model.train(samples)
        if not model.is_empty():
            self.store(seed, model)
        return model, False
