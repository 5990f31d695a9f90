import logging
import re

from app.services.parsing.errors import NoMessagesFoundError
from app.services.parsing.types import ChatMessage, ParsedTranscript

logger = logging.getLogger(__name__)

WHATSAPP_HEADER_RE = re.compile(
    r"^\[?(\d{2}/\d{2}/\d{2}),\s*\d{1,2}:\d{2}:\d{2}\s*(AM|PM)?\]?\s*([^:]+):\s*(.*)$"
)

# Directional embeddings/isolates, zero-width joiners and the BOM that exports scatter around names.
INVISIBLE_MARKS_RE = re.compile("[\u200b-\u200f\u202a-\u202e\u2060-\u2064\u2066-\u2069\ufeff]")
LEADING_TILDE_RE = re.compile(r"^~\s*")
UNKNOWN_SENDER = "Unknown"

NOISE_MARKERS = (
    "\u200eimage omitted",
    "security code",
    "added you",
    "This message was deleted",
)


def clean_sender(raw: str) -> str:
    sender = INVISIBLE_MARKS_RE.sub("", raw).strip()
    return LEADING_TILDE_RE.sub("", sender).strip() or UNKNOWN_SENDER


def is_noise(line: str) -> bool:
    return any(marker in line for marker in NOISE_MARKERS)


def _match_header(line: str) -> ChatMessage | None:
    match = WHATSAPP_HEADER_RE.match(line)
    if not match:
        return None
    date_key, _ampm, sender, content = match.groups()
    return ChatMessage(date=date_key, sender=clean_sender(sender), content=content.strip())


def _finalize(pending: ChatMessage, continuation: list[str]) -> ChatMessage:
    if not continuation:
        return pending
    return ChatMessage(
        date=pending.date,
        sender=pending.sender,
        content=" ".join([pending.content, *continuation]),
    )


def parse_whatsapp_text(text: str) -> ParsedTranscript:
    """Parse an exported WhatsApp transcript into messages in file order.

    A header line starts a new message. Non-blank lines that follow are joined onto
    the pending message with single spaces unless they carry a noise marker
    (omitted media, security code notices, membership notices, deleted messages),
    in which case they are dropped. Lines seen before the first header are ignored.
    """
    lines = text.split("\n")
    result = ParsedTranscript(total_lines=len(lines))
    pending: ChatMessage | None = None
    continuation: list[str] = []

    for line in lines:
        header = _match_header(line)
        if header is not None:
            result.matched_lines += 1
            if pending is not None:
                result.messages.append(_finalize(pending, continuation))
            pending, continuation = header, []
            continue

        if pending is None or not line.strip():
            continue
        if is_noise(line):
            result.skipped_noise_lines += 1
            continue
        continuation.append(line.strip())

    if pending is not None:
        result.messages.append(_finalize(pending, continuation))

    logger.info(
        "whatsapp_transcript_parsed",
        extra={
            "total_lines": result.total_lines,
            "matched_lines": result.matched_lines,
            "skipped_noise_lines": result.skipped_noise_lines,
            "message_count": len(result.messages),
        },
    )
    if not result.messages:
        raise NoMessagesFoundError()
    return result
