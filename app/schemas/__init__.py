from app.schemas.digest import SummaryResponse, Timings, TokenCheckResponse, TokenCounts

__all__ = [
    "SummaryResponse",
    "Timings",
    "TokenCheckResponse",
    "TokenCounts",
]
