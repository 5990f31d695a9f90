import logging

from openai import OpenAI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class SummarizerNotConfiguredError(ValueError):
    pass


def summarize_chat(prompt: str) -> str:
    settings = get_settings()
    if not settings.openai_api_key:
        raise SummarizerNotConfiguredError("OPENAI_API_KEY is not configured.")

    client = OpenAI(api_key=settings.openai_api_key)
    completion = client.chat.completions.create(
        model=settings.openai_model,
        messages=[{"role": "user", "content": prompt}],
        temperature=1,
        top_p=1,
        max_tokens=settings.summary_max_tokens,
        presence_penalty=0,
        frequency_penalty=0,
    )
    usage = completion.usage
    logger.info(
        "chat_summary_generated",
        extra={
            "model": settings.openai_model,
            "prompt_tokens": usage.prompt_tokens if usage else None,
            "completion_tokens": usage.completion_tokens if usage else None,
        },
    )
    return completion.choices[0].message.content or ""
