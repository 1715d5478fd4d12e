"""
Tests for the HTTP service and the Markov router.
"""
from tweetchain.services.markov import START_TOKEN, ChainModel
from tweetchain.app import app


class TestServiceEndpoints:
    """Test suite for root and health endpoints."""

    def test_health(self, client):
        """Test health reports loaded chains."""
        resp = client.get("/health")

        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] == True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["chains_loaded"] == 0

    def test_root_lists_markov(self, client):
        """Test root advertises the markov endpoints."""
        resp = client.get("/")

        assert resp.status_code == 200
        assert resp.json()["endpoints"]["markov"] == "/markov/*"


class TestTrainEndpoint:
    """Test suite for POST /markov/train."""

    def test_train_without_cache(self, client, sample_tweets, chain_cache):
        """Test training builds a chain and skips the cache."""
        resp = client.post(
            "/markov/train",
            json={"seed": "someone", "samples": sample_tweets, "use_cache": False},
        )

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["cached"] == False
        assert data["ingested"] == len(sample_tweets) - 1
        assert data["stats"]["start_successors"] > 0
        assert chain_cache.exists("someone") == False

    def test_train_with_cache_miss_then_hit(self, client, sample_tweets, chain_cache):
        """Test the first cached train stores, the second hits."""
        first = client.post(
            "/markov/train",
            json={"seed": "someone", "samples": sample_tweets, "use_cache": True},
        )
        second = client.post(
            "/markov/train",
            json={"seed": "someone", "samples": [], "use_cache": True},
        )

        assert first.json()["data"]["cached"] == False
        assert chain_cache.exists("someone") == True
        assert second.status_code == 200
        assert second.json()["data"]["cached"] == True

    def test_cache_hit_omits_ingested(self, client, sample_tweets):
        """Test a cache hit does not report a misleading ingested count."""
        payload = {"seed": "someone", "samples": sample_tweets, "use_cache": True}
        first = client.post("/markov/train", json=payload).json()["data"]
        second = client.post("/markov/train", json=payload).json()["data"]

        assert first["ingested"] == len(sample_tweets) - 1
        assert "ingested" not in second
        assert second["stats"]["total_transitions"] == first["stats"]["total_transitions"]

    def test_train_empty_samples(self, client):
        """Test an empty corpus without a cache entry is rejected."""
        resp = client.post("/markov/train", json={"seed": "someone", "samples": []})

        assert resp.status_code == 400

    def test_train_no_usable_tokens(self, client):
        """Test a corpus of noise is rejected."""
        resp = client.post(
            "/markov/train",
            json={"seed": "someone", "samples": ["https://a.b/c", "&amp;"], "use_cache": False},
        )

        assert resp.status_code == 400

    def test_train_missing_seed(self, client):
        """Test the seed is required."""
        resp = client.post("/markov/train", json={"samples": ["hello"]})

        assert resp.status_code == 422


class TestGenerateEndpoint:
    """Test suite for POST /markov/generate."""

    def _train(self, client, samples, seed="someone"):
        return client.post(
            "/markov/train",
            json={"seed": seed, "samples": samples, "use_cache": False},
        )

    def test_generate_sentences(self, client, sample_tweets):
        """Test generating several sentences."""
        self._train(client, sample_tweets)

        resp = client.post("/markov/generate", json={"seed": "someone", "count": 3})

        assert resp.status_code == 200
        sentences = resp.json()["data"]["sentences"]
        assert len(sentences) == 3
        assert all(isinstance(s, str) for s in sentences)

    def test_generate_single_path(self, client):
        """Test a one-sample chain reproduces the sample."""
        self._train(client, ["hello from the other side"])

        resp = client.post("/markov/generate", json={"seed": "someone"})

        assert resp.json()["data"]["sentences"] == ["hello from the other side"]

    def test_generate_unknown_seed(self, client):
        """Test generating before training is a 404."""
        resp = client.post("/markov/generate", json={"seed": "nobody"})

        assert resp.status_code == 404

    def test_generate_count_bounds(self, client, sample_tweets):
        """Test count is validated."""
        self._train(client, sample_tweets)

        resp = client.post("/markov/generate", json={"seed": "someone", "count": 0})

        assert resp.status_code == 422

    def test_generate_dead_end(self, client):
        """Test a dead-end table maps to a 422 envelope."""
        app.state.chains["broken"] = ChainModel({START_TOKEN: ["a"]})

        resp = client.post("/markov/generate", json={"seed": "broken"})

        assert resp.status_code == 422
        body = resp.json()
        assert body["ok"] == False
        assert body["error"]["code"] == "DEAD_END"

    def test_generate_step_cap(self, client):
        """Test the step cap maps to a 422 envelope."""
        app.state.chains["loop"] = ChainModel({START_TOKEN: ["a"], "a": ["a"]})

        resp = client.post("/markov/generate", json={"seed": "loop", "max_steps": 25})

        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "MAX_LENGTH_EXCEEDED"

    def test_generate_uncapped_rejected(self, client):
        """Test the HTTP surface refuses to disable the step cap."""
        app.state.chains["loop"] = ChainModel({START_TOKEN: ["a"], "a": ["a"]})

        resp = client.post("/markov/generate", json={"seed": "loop", "max_steps": 0})

        assert resp.status_code == 422


class TestStatsAndDrop:
    """Test suite for stats and delete endpoints."""

    def test_stats(self, client):
        """Test stats for a loaded chain."""
        client.post(
            "/markov/train",
            json={"seed": "someone", "samples": ["The fox jumped over the dog."], "use_cache": False},
        )

        resp = client.get("/markov/someone/stats")

        assert resp.status_code == 200
        stats = resp.json()["data"]["stats"]
        assert stats["unique_tokens"] == 6
        assert stats["total_transitions"] == 7

    def test_stats_unknown(self, client):
        """Test stats for a missing chain is a 404."""
        assert client.get("/markov/nobody/stats").status_code == 404

    def test_drop_and_purge(self, client, sample_tweets, chain_cache):
        """Test dropping a chain and purging its cache file."""
        client.post(
            "/markov/train",
            json={"seed": "someone", "samples": sample_tweets, "use_cache": True},
        )

        resp = client.delete("/markov/someone", params={"purge_cache": True})

        assert resp.status_code == 200
        assert resp.json()["data"] == {"seed": "someone", "removed": True, "purged": True}
        assert chain_cache.exists("someone") == False
        assert client.post("/markov/generate", json={"seed": "someone"}).status_code == 404

    def test_drop_unknown(self, client):
        """Test dropping a missing chain is a 404."""
        assert client.delete("/markov/nobody").status_code == 404
