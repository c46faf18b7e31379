"""
FastAPI server for reply chunking.

Exposes the marker resolver and the chunk splitter to delivery services
written in other languages.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from src.delivery import ReplyPayload, split_reply_payloads
from src.processing import (
    ChunkingConfig,
    ChunkingError,
    load_chunking_config,
    load_chunking_config_from_env,
    parse_chunk_markers,
    split_by_chunk_markers
)

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title="Chunked Replies API",
    description="Split LLM replies into separate messages on inline markers",
    version=VERSION
)

# Server-wide default, loaded from CHUNKING_* environment variables on first use
_default_config: Optional[ChunkingConfig] = None


def get_default_config() -> ChunkingConfig:
    global _default_config
    if _default_config is None:
        _default_config = load_chunking_config_from_env()
        logger.info(f"Default chunking config: {_default_config}")
    return _default_config


class ChunkingSettings(BaseModel):
    """Chunking configuration as sent by clients."""
    enabled: bool = False
    markers: Optional[List[str]] = None
    min_chunk_size: Optional[int] = Field(None, ge=0)


class MarkersResponse(BaseModel):
    markers: List[str]


class SplitRequest(BaseModel):
    """Request model for /split endpoint."""
    text: str = Field(..., description="Reply text possibly containing markers")
    chunking: Optional[ChunkingSettings] = Field(
        None, description="Chunking config; server default when omitted"
    )


class SplitResponse(BaseModel):
    chunks: List[str]
    count: int


class PayloadModel(BaseModel):
    text: Optional[str] = None
    media_url: Optional[str] = None
    media_urls: Optional[List[str]] = None
    reply_to_id: Optional[str] = None
    audio_as_voice: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PayloadSplitRequest(BaseModel):
    payloads: List[PayloadModel]
    chunking: Optional[ChunkingSettings] = None


class PayloadSplitResponse(BaseModel):
    payloads: List[PayloadModel]


def _to_config(settings: Optional[ChunkingSettings]) -> ChunkingConfig:
    if settings is None:
        try:
            return get_default_config()
        except ChunkingError as e:
            logger.error(f"Invalid server chunking configuration: {e}")
            raise HTTPException(
                status_code=500,
                detail=f"Invalid server chunking configuration: {e}"
            ) from e
    try:
        return load_chunking_config(settings.model_dump(exclude_none=True))
    except ChunkingError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e)
        ) from e


@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.post("/markers", response_model=MarkersResponse, tags=["chunking"])
async def resolve_markers(settings: ChunkingSettings):
    """Resolve the markers that are active for a configuration."""
    return MarkersResponse(markers=parse_chunk_markers(_to_config(settings)))


@app.post("/split", response_model=SplitResponse, tags=["chunking"])
async def split_text(request: SplitRequest):
    """Split one reply text into message chunks."""
    config = _to_config(request.chunking)
    chunks = split_by_chunk_markers(
        request.text,
        parse_chunk_markers(config),
        config.min_chunk_size
    )
    return SplitResponse(chunks=chunks, count=len(chunks))


@app.post("/payloads/split", response_model=PayloadSplitResponse, tags=["chunking"])
async def split_payloads(request: PayloadSplitRequest):
    """Split outbound payloads, keeping every attribute but the text."""
    config = _to_config(request.chunking)
    payloads = [ReplyPayload(**p.model_dump()) for p in request.payloads]
    result = split_reply_payloads(payloads, config)
    return PayloadSplitResponse(payloads=[PayloadModel(**asdict(p)) for p in result])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.server:app",
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
