from app.services.parsing.errors import EmptyWindowError, NoMessagesFoundError, TranscriptError
from app.services.parsing.grouping import describe_date_range, group_recent
from app.services.parsing.types import ChatMessage, ParsedTranscript, parse_date_key
from app.services.parsing.whatsapp import parse_whatsapp_text

__all__ = [
    "ChatMessage",
    "EmptyWindowError",
    "NoMessagesFoundError",
    "ParsedTranscript",
    "TranscriptError",
    "describe_date_range",
    "group_recent",
    "parse_date_key",
    "parse_whatsapp_text",
]
