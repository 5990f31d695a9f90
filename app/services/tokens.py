import logging
import math
import re
from functools import lru_cache

import tiktoken

from app.core.config import get_settings

logger = logging.getLogger(__name__)

WORD_SPLIT_RE = re.compile(r"""[\s.,!?;:'"()\[\]{}|\\/<>+=\-_~`@#$%^&*]+""")

TOKENS_PER_WORD = 1.5
SAFETY_MARGIN = 1.1


def estimate_tokens(text: str) -> int:
    """Cheap token estimate that needs no tokenizer.

    Word-ish chunks count as 1.5 tokens, every non-ASCII character as one more,
    and the total gets a 10% margin so budget checks err on the high side.
    """
    words = sum(1 for word in WORD_SPLIT_RE.split(text.strip()) if word)
    non_ascii = sum(1 for ch in text if ord(ch) > 127)
    return math.ceil((words * TOKENS_PER_WORD + non_ascii) * SAFETY_MARGIN)


@lru_cache(maxsize=8)
def _encoding_for(model: str) -> tiktoken.Encoding:
    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str) -> int:
    settings = get_settings()
    if settings.token_counter != "tiktoken":
        return estimate_tokens(text)
    try:
        encoding = _encoding_for(settings.tokenizer_model)
    except Exception as exc:  # noqa: BLE001
        # tiktoken fetches encodings over the network on first use.
        logger.warning("tokenizer_unavailable", extra={"model": settings.tokenizer_model, "error": str(exc)})
        return estimate_tokens(text)
    return len(encoding.encode(text, disallowed_special=()))
