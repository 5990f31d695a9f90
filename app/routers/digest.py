import logging
import time

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.core.config import get_settings
from app.schemas.digest import SummaryResponse, Timings, TokenCheckResponse, TokenCounts
from app.services.digest import build_digest, build_prompt, prepare_chat
from app.services.llm import SummarizerNotConfiguredError, summarize_chat
from app.services.parsing import TranscriptError
from app.services.storage import read_upload_text
from app.services.tokens import count_tokens

router = APIRouter(prefix="/api", tags=["digest"])
logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


async def _read_chat(file: UploadFile) -> str:
    try:
        return await read_upload_text(file)
    except ValueError as exc:
        logger.warning("chat_upload_unreadable", extra={"upload_name": file.filename, "error": str(exc)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _prepare_chat(text: str) -> tuple[str, int]:
    try:
        return prepare_chat(text)
    except TranscriptError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _too_long(prompt_tokens: int, limit: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=(
            f"Content is too long ({prompt_tokens} tokens). Please upload a smaller chat file. "
            f"Maximum allowed is {limit:,} tokens."
        ),
    )


@router.post("/check-tokens", response_model=TokenCheckResponse)
async def check_tokens(file: UploadFile = File(...)) -> TokenCheckResponse:
    settings = get_settings()
    text = await _read_chat(file)
    try:
        digest = await run_in_threadpool(build_digest, text)
    except TranscriptError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TokenCheckResponse(
        tokens=TokenCounts(chat_tokens=digest.chat_tokens, prompt_tokens=digest.prompt_tokens),
        date_range=digest.date_range,
        within_budget=digest.within_budget(settings.max_prompt_tokens),
    )


@router.post("/upload", response_model=SummaryResponse)
async def upload_chat(file: UploadFile = File(...)) -> SummaryResponse:
    settings = get_settings()
    timings = Timings()
    logger.info("chat_upload_received", extra={"upload_name": file.filename, "content_type": file.content_type})

    started = time.perf_counter()
    text = await _read_chat(file)
    timings.file_read = _elapsed_ms(started)

    started = time.perf_counter()
    processed_chat, message_count = await run_in_threadpool(_prepare_chat, text)
    timings.processing = _elapsed_ms(started)

    started = time.perf_counter()
    prompt, date_range = build_prompt(processed_chat)
    timings.prompt_prep = _elapsed_ms(started)

    started = time.perf_counter()
    chat_tokens = await run_in_threadpool(count_tokens, processed_chat)
    prompt_tokens = await run_in_threadpool(count_tokens, prompt)
    timings.token_count = _elapsed_ms(started)
    logger.info(
        "chat_prompt_measured",
        extra={"message_count": message_count, "chat_tokens": chat_tokens, "prompt_tokens": prompt_tokens},
    )
    if prompt_tokens > settings.max_prompt_tokens:
        raise _too_long(prompt_tokens, settings.max_prompt_tokens)

    started = time.perf_counter()
    try:
        summary = await run_in_threadpool(summarize_chat, prompt)
    except SummarizerNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("chat_summary_failed", extra={"timings": timings.model_dump()})
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Summarization failed. Please retry.") from exc
    timings.ai_generation = _elapsed_ms(started)

    logger.info("chat_summary_completed", extra={"timings": timings.model_dump()})
    return SummaryResponse(summary=summary, date_range=date_range, timings=timings)
