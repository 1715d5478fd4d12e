"""
Shared pytest fixtures for chain tests.
"""
import random
from pathlib import Path
from typing import List

import pytest
from fastapi.testclient import TestClient

from tweetchain.app import app
from tweetchain.services.chain_cache import ChainCache
from tweetchain.services.markov import ChainModel


# Sample timeline for tests
SAMPLE_TWEETS = [
    "The fox jumped over the dog.",
    "Check https://example.com/x now &amp; go",
    "Big news today from @nasa about #space exploration",
    "I love the stars at night",
    "The stars are beautiful tonight http://t.co/abc123",
    "Coffee first, then the world",
    "Café time with friends \U0001F600",
    "   ",
]


@pytest.fixture
def sample_tweets() -> List[str]:
    """Raw tweets, including URLs, escapes, non-ASCII and a blank one."""
    return SAMPLE_TWEETS.copy()


@pytest.fixture
def trained_model(sample_tweets) -> ChainModel:
    """Model trained on the sample tweets."""
    model = ChainModel()
    model.train(sample_tweets)
    return model


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible walks."""
    return random.Random(1234)


@pytest.fixture
def chain_cache(tmp_path) -> ChainCache:
    """Chain cache under a temporary directory."""
    return ChainCache(tmp_path / "chains")


@pytest.fixture
def tweets_file(sample_tweets, tmp_path) -> Path:
    """Text file with one tweet per line."""
    file_path = tmp_path / "tweets.txt"
    file_path.write_text("\n".join(sample_tweets) + "\n", encoding="utf-8")
    return file_path


@pytest.fixture
def client(chain_cache):
    """Test client with the lifespan run and the cache pointed at tmp_path."""
    with TestClient(app) as test_client:
        app.state.chain_cache = chain_cache
        yield test_client
