from dataclasses import dataclass, field
from datetime import date, timedelta


def parse_date_key(value: str) -> date:
    """Turn a ``DD/MM/YY`` key into a date, reading two-digit years as 20YY.

    Out-of-range parts roll over into the next month or year (``31/02/24`` is
    2 March 2024, ``01/13/24`` is 1 January 2025), so no header is ever rejected.
    """
    day, month, year = (int(part) for part in value.split("/"))
    first_of_month = date(2000 + year + (month - 1) // 12, (month - 1) % 12 + 1, 1)
    return first_of_month + timedelta(days=day - 1)


@dataclass(frozen=True, slots=True)
class ChatMessage:
    date: str
    sender: str
    content: str

    @property
    def day(self) -> date:
        return parse_date_key(self.date)

    def render(self) -> str:
        return f"{self.sender}: {self.content}"


@dataclass(slots=True)
class ParsedTranscript:
    messages: list[ChatMessage] = field(default_factory=list)
    total_lines: int = 0
    matched_lines: int = 0
    skipped_noise_lines: int = 0

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)
