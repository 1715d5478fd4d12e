"""
Markov chain endpoints: build a chain for a seed user, generate sentences,
inspect and drop loaded chains.
"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from tweetchain.config import settings
from tweetchain.services.chain_cache import ChainCache
from tweetchain.services.markov import ChainModel
from tweetchain.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/markov", tags=["markov"])


class TrainRequest(BaseModel):
    seed: str = Field(..., min_length=1, description="Seed user the samples belong to")
    samples: List[str] = Field(default_factory=list, description="Raw tweets, one per item")
    use_cache: bool = Field(default=settings.CHAIN_CACHE_ENABLED)


class GenerateRequest(BaseModel):
    seed: str = Field(..., min_length=1)
    count: int = Field(default=1, ge=1, le=settings.MAX_SENTENCES_PER_REQUEST)
    # Uncapped walks stay library/CLI only; a cycle would block the event loop
    max_steps: Optional[int] = Field(default=None, ge=1, description="Step cap per sentence")


def _chains(request: Request) -> dict:
    return request.app.state.chains


def _cache(request: Request) -> ChainCache:
    return request.app.state.chain_cache


def _get_chain(request: Request, seed: str) -> ChainModel:
    model = _chains(request).get(seed)
    if model is None:
        raise HTTPException(status_code=404, detail="chain not found, train first")
    return model


@router.post("/train")
async def train(req: TrainRequest, request: Request):
    cache = _cache(request)

    if not req.samples and not (req.use_cache and cache.exists(req.seed)):
        raise HTTPException(status_code=400, detail="samples is empty")

    if req.use_cache:
        model, cached = cache.find_or_build(req.seed, req.samples)
    else:
        model, cached = ChainModel(), False
        model.train(req.samples)

    if model.is_empty():
        raise HTTPException(status_code=400, detail="no usable tokens in samples")

    _chains(request)[req.seed] = model
    stats = model.get_stats()
    logger.info(
        f"[MARKOV] Chain ready for seed ({'cached' if cached else 'built'}): "
        f"{stats.unique_tokens} tokens, {stats.total_transitions} transitions"
    )
    data = {"seed": req.seed, "cached": cached, "stats": asdict(stats)}
    # A restored chain does not know how many samples built it
    if not cached:
        data["ingested"] = stats.samples_ingested
    return {"ok": True, "data": data}


@router.post("/generate")
async def generate(req: GenerateRequest, request: Request):
    model = _get_chain(request, req.seed)
    # GenerationError is turned into a 422 envelope by the app handler
    sentences = model.generate_many(req.count, max_steps=req.max_steps)
    return {"ok": True, "data": {"seed": req.seed, "sentences": sentences}}


@router.get("/{seed}/stats")
async def stats(seed: str, request: Request):
    model = _get_chain(request, seed)
    return {"ok": True, "data": {"seed": seed, "stats": asdict(model.get_stats())}}


@router.delete("/{seed}")
async def drop(seed: str, request: Request, purge_cache: bool = False):
    removed = _chains(request).pop(seed, None) is not None
    purged = _cache(request).discard(seed) if purge_cache else False
    if not removed and not purged:
        raise HTTPException(status_code=404, detail="chain not found")
    return {"ok": True, "data": {"seed": seed, "removed": removed, "purged": purged}}
