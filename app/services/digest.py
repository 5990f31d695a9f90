import logging
from dataclasses import dataclass

from app.core.config import get_settings
from app.services.llm import build_summary_prompt
from app.services.parsing import describe_date_range, group_recent, parse_whatsapp_text
from app.services.tokens import count_tokens

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ChatDigest:
    processed_chat: str
    date_range: str
    prompt: str
    chat_tokens: int
    prompt_tokens: int
    message_count: int

    def within_budget(self, max_prompt_tokens: int) -> bool:
        return self.prompt_tokens <= max_prompt_tokens


def prepare_chat(text: str) -> tuple[str, int]:
    settings = get_settings()
    parsed = parse_whatsapp_text(text)
    return group_recent(parsed.messages, window_days=settings.recency_window_days), len(parsed)


def build_prompt(processed_chat: str) -> tuple[str, str]:
    settings = get_settings()
    date_range = describe_date_range(processed_chat, fallback=f"for the last {settings.recency_window_days} days")
    return build_summary_prompt(processed_chat, date_range), date_range


def build_digest(text: str) -> ChatDigest:
    processed_chat, message_count = prepare_chat(text)
    prompt, date_range = build_prompt(processed_chat)
    digest = ChatDigest(
        processed_chat=processed_chat,
        date_range=date_range,
        prompt=prompt,
        chat_tokens=count_tokens(processed_chat),
        prompt_tokens=count_tokens(prompt),
        message_count=message_count,
    )
    logger.info(
        "chat_digest_built",
        extra={
            "message_count": message_count,
            "chat_tokens": digest.chat_tokens,
            "prompt_tokens": digest.prompt_tokens,
        },
    )
    return digest
