from app.services.llm.openai_client import SummarizerNotConfiguredError, summarize_chat
from app.services.llm.prompts import build_summary_prompt

__all__ = ["SummarizerNotConfiguredError", "build_summary_prompt", "summarize_chat"]
