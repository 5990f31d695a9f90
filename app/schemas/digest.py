from pydantic import BaseModel, ConfigDict, Field


class TokenCounts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chat_tokens: int = Field(alias="chatTokens")
    prompt_tokens: int = Field(alias="promptTokens")


class TokenCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tokens: TokenCounts
    date_range: str = Field(alias="dateRange")
    within_budget: bool = Field(alias="withinBudget")


class Timings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_read: float = Field(default=0.0, alias="fileRead")
    processing: float = 0.0
    prompt_prep: float = Field(default=0.0, alias="promptPrep")
    token_count: float = Field(default=0.0, alias="tokenCount")
    ai_generation: float = Field(default=0.0, alias="aiGeneration")


class SummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    date_range: str = Field(alias="dateRange")
    timings: Timings
