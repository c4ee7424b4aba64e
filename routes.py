"""FastAPI routes exposing image, video, and chat generation to the UI."""

import asyncio
import json
import logging
from typing import AsyncIterator, Literal, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from generators.chat import stream_chat_response
from generators.image import generate_images
from generators.keys import validate_api_key
from generators.prompts import enhance_prompt, image_concepts, surprise_prompt
from generators.video import generate_video
from providers.chat.base import ChatMessage
from providers.errors import (
    GenerationError,
    InvalidInput,
    MalformedDataUrl,
    MissingCredential,
    UnknownProvider,
)
from providers.registry import providers_for, requires_credential

logger = logging.getLogger(__name__)
router = APIRouter()


def error_status(exc: GenerationError) -> int:
    """HTTP status for a generation failure."""
    if isinstance(exc, MissingCredential):
        return 401
    if isinstance(exc, (InvalidInput, MalformedDataUrl, UnknownProvider)):
        return 400
    return 502


# ── Pydantic models ─────────────────────────────────────

class KeyValidationRequest(BaseModel):
    provider: str
    api_key: str = ""


class ImageGenerationRequest(BaseModel):
    provider: str = "gemini"
    api_key: str = ""
    prompt: str
    count: int = Field(default=1, ge=1, le=8)
    negative_prompt: str = ""
    aspect_ratio: str = "1:1"


class VideoGenerationRequest(BaseModel):
    provider: str = "demo_video"
    api_key: str = ""
    mode: Optional[Literal["text-to-video", "image-to-video"]] = None
    prompt: str = ""
    input_image: Optional[str] = None


class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    text: str


class ChatRequest(BaseModel):
    provider: str = "gemini_chat"
    api_key: str = ""
    history: list[ChatTurn]


class EnhanceRequest(BaseModel):
    prompt: str
    level: Literal["Subtle", "Artistic", "Extreme"] = "Subtle"


class ConceptsRequest(BaseModel):
    song_title: str


# ── Providers & keys ────────────────────────────────────

@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/providers/{modality}")
async def list_providers(modality: str):
    """Providers for a modality, in display order."""
    try:
        infos = providers_for(modality)
    except ValueError:
        raise HTTPException(404, f"Unknown modality '{modality}'")

    return {
        "modality": modality,
        "providers": [
            {
                "id": info.id,
                "name": info.display_name,
                "description": info.description,
                "requires_credential": requires_credential(info.id),
            }
            for info in infos
        ],
    }


@router.post("/keys/validate")
async def validate_key(body: KeyValidationRequest):
    return {"valid": await validate_api_key(body.provider, body.api_key)}


# ── Generation ──────────────────────────────────────────

@router.post("/images")
async def create_images(body: ImageGenerationRequest):
    images = await generate_images(
        body.provider,
        body.api_key,
        body.prompt,
        count=body.count,
        negative_prompt=body.negative_prompt,
        aspect_ratio=body.aspect_ratio,
    )
    return {"provider": body.provider, "images": images}


def _discard_result(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.warning("Abandoned video job failed: %s", task.exception())


async def _video_events(body: VideoGenerationRequest) -> AsyncIterator[str]:
    """NDJSON: status lines while the job runs, then one url or error line."""
    queue: asyncio.Queue = asyncio.Queue()

    async def run() -> str:
        try:
            return await generate_video(
                body.provider,
                body.api_key,
                body.prompt,
                input_image=body.input_image,
                on_status=queue.put_nowait,
                mode=body.mode,
            )
        finally:
            queue.put_nowait(None)

    task = asyncio.create_task(run())
    collected = False
    try:
        while True:
            message = await queue.get()
            if message is None:
                break
            yield json.dumps({"status": message}) + "\n"

        collected = True
        try:
            url = await task
        except GenerationError as e:
            logger.error("Video generation with %s failed: %s", body.provider, e.message)
            yield json.dumps({"error": e.message, "kind": e.kind}) + "\n"
            return
        yield json.dumps({"url": url}) + "\n"
    finally:
        if not collected:
            logger.info("Client left before %s video finished, cancelling", body.provider)
            task.cancel()
            task.add_done_callback(_discard_result)


@router.post("/video")
async def create_video(body: VideoGenerationRequest):
    return StreamingResponse(_video_events(body), media_type="application/x-ndjson")


async def _chat_fragments(first: str | None, fragments: AsyncIterator[str], provider: str) -> AsyncIterator[str]:
    try:
        if first is None:
            return
        yield first
        async for fragment in fragments:
            yield fragment
    except GenerationError as e:
        logger.error("Chat stream from %s failed mid-reply: %s", provider, e.message)
    finally:
        await fragments.aclose()


@router.post("/chat")
async def chat(body: ChatRequest):
    history = [ChatMessage(role=turn.role, text=turn.text) for turn in body.history]
    fragments = stream_chat_response(body.provider, body.api_key, history)
    # Failures before the first fragment still get a proper error status
    try:
        first = await anext(fragments)
    except StopAsyncIteration:
        first = None
    except GenerationError:
        await fragments.aclose()
        raise
    return StreamingResponse(
        _chat_fragments(first, fragments, body.provider), media_type="text/plain; charset=utf-8"
    )


# ── Prompt helpers ──────────────────────────────────────

@router.post("/prompts/enhance")
async def enhance(body: EnhanceRequest):
    return {"prompt": await enhance_prompt(body.prompt, body.level)}


@router.post("/prompts/surprise")
async def surprise():
    return {"prompt": await surprise_prompt()}


@router.post("/prompts/concepts")
async def concepts(body: ConceptsRequest):
    result = await image_concepts(body.song_title)
    return {"concepts": [{"name": c.name, "prompt": c.prompt} for c in result]}
