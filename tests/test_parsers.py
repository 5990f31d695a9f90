from datetime import date

import pytest

from app.services.parsing import ChatMessage, NoMessagesFoundError, parse_date_key, parse_whatsapp_text
from app.services.parsing.whatsapp import clean_sender

LRM = "\u200e"


def test_parse_whatsapp_fixture(chat_text):
    parsed = parse_whatsapp_text(chat_text)
    assert len(parsed) == 7
    assert parsed.matched_lines == 7
    assert parsed.skipped_noise_lines == 2
    assert [m.sender for m in parsed] == ["Weekend Hikers", "Priya", "Marco", "Priya", "Marco", "Sam", "Jo"]
    assert parsed.messages[3].content == "Count me in"
    assert parsed.messages[4].content == "Route options: 1. Ridge loop 2. Lake trail"
    assert parsed.messages[5].content == "Lake trail it is \U0001f97e"


def test_continuation_lines_join_with_single_spaces():
    text = "[01/02/24, 9:05:00 AM] Alice: Hello\nworld\n[01/02/24, 9:06:00 AM] Bob: Hi Alice"
    parsed = parse_whatsapp_text(text)
    assert parsed.messages == [
        ChatMessage(date="01/02/24", sender="Alice", content="Hello world"),
        ChatMessage(date="01/02/24", sender="Bob", content="Hi Alice"),
    ]


def test_continuations_keep_order_and_trim():
    text = "01/02/24, 21:00:00 Dana: first\n   second  \n\n\tthird\n"
    parsed = parse_whatsapp_text(text)
    assert parsed.messages[0].content == "first second third"


@pytest.mark.parametrize(
    "noise",
    [
        f"{LRM}image omitted",
        "Your security code with Bob changed. Tap to learn more.",
        "Carol added you",
        "This message was deleted",
    ],
)
def test_noise_continuation_lines_are_dropped(noise):
    text = f"[01/02/24, 9:05:00 AM] Alice: Look at this\n{noise}\n"
    parsed = parse_whatsapp_text(text)
    assert parsed.messages[0].content == "Look at this"
    assert parsed.skipped_noise_lines == 1


def test_noise_on_header_line_is_kept():
    parsed = parse_whatsapp_text("[01/02/24, 9:05:00 AM] Alice: This message was deleted")
    assert parsed.messages[0].content == "This message was deleted"


def test_header_without_brackets_and_single_digit_hour():
    parsed = parse_whatsapp_text("05/03/24, 7:01:09 PM - ignored\n05/03/24, 7:01:09 PM Eve 2.0 (work) \U0001f680: ship it")
    assert parsed.messages[-1].sender == "Eve 2.0 (work) \U0001f680"
    assert parsed.messages[-1].content == "ship it"


def test_header_with_empty_content():
    parsed = parse_whatsapp_text("[05/03/24, 10:00:00] Eve: \n[05/03/24, 10:01:00] Eve: hi")
    assert [m.content for m in parsed] == ["", "hi"]


def test_lines_before_first_header_are_discarded():
    text = "Chat export\nsome preamble\n[05/03/24, 10:00:00] Eve: hi"
    parsed = parse_whatsapp_text(text)
    assert len(parsed) == 1
    assert parsed.messages[0].content == "hi"
    assert parsed.total_lines == 3


def test_out_of_range_date_still_starts_a_message():
    text = "[01/12/24, 9:05:00 AM] Alice: hi\n[01/13/24, 9:06:00 AM] Bob: yo"
    parsed = parse_whatsapp_text(text)
    assert [m.sender for m in parsed] == ["Alice", "Bob"]
    assert [m.content for m in parsed] == ["hi", "yo"]
    assert parsed.messages[1].day == date(2025, 1, 1)


def test_single_out_of_range_header_is_parsed():
    parsed = parse_whatsapp_text("[13/13/24, 9:05:00 AM] Alice: hi")
    assert parsed.messages == [ChatMessage(date="13/13/24", sender="Alice", content="hi")]


def test_every_message_has_a_sender(chat_text):
    edge_cases = "\n".join(
        [
            "[01/02/24, 9:05:00] \u202a: marks only",
            "[01/02/24, 9:06:00] ~ : tilde only",
            "[01/02/24, 9:07:00] \u202a~\u202c\u200e: both",
        ]
    )
    for text in (chat_text, edge_cases):
        parsed = parse_whatsapp_text(text)
        assert all(m.sender.strip() for m in parsed)
        assert all(m.content for m in parsed)
    assert [m.sender for m in parse_whatsapp_text(edge_cases)] == ["Unknown", "Unknown", "Unknown"]


def test_crlf_line_endings():
    parsed = parse_whatsapp_text("[01/02/24, 9:05:00 AM] Alice: Hello\r\nworld\r\n")
    assert parsed.messages[0].content == "Hello world"


def test_no_header_lines_raises():
    with pytest.raises(NoMessagesFoundError):
        parse_whatsapp_text("hello\nworld")


def test_empty_input_raises():
    with pytest.raises(NoMessagesFoundError):
        parse_whatsapp_text("")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("~ Priya", "Priya"),
        ("~\u202fPriya", "Priya"),
        ("\u202a~ Jo\u202c", "Jo"),
        ("\u202a+44 7700 900123\u202c", "+44 7700 900123"),
        ("  Bob  ", "Bob"),
        ("Mr ~ Tilde", "Mr ~ Tilde"),
    ],
)
def test_clean_sender(raw, expected):
    assert clean_sender(raw) == expected


def test_parse_date_key_uses_21st_century():
    assert parse_date_key("01/02/24") == date(2024, 2, 1)
    assert parse_date_key("31/12/99") == date(2099, 12, 31)
    assert ChatMessage(date="09/10/05", sender="a", content="b").day == date(2005, 10, 9)


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("31/02/24", date(2024, 3, 2)),
        ("29/02/23", date(2023, 3, 1)),
        ("01/13/24", date(2025, 1, 1)),
        ("00/01/24", date(2023, 12, 31)),
        ("15/00/24", date(2023, 12, 15)),
    ],
)
def test_parse_date_key_rolls_over_out_of_range_parts(key, expected):
    assert parse_date_key(key) == expected
