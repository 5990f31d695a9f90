class TranscriptError(ValueError):
    """Base for transcript problems that should be reported back to the uploader."""


class NoMessagesFoundError(TranscriptError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "No valid WhatsApp messages found in the file. Please ensure this is a WhatsApp chat export file."
        )


class EmptyWindowError(TranscriptError):
    def __init__(self, window_days: int = 7) -> None:
        self.window_days = window_days
        super().__init__(f"No messages found in the last {window_days} days")
