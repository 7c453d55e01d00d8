from pydantic import BaseModel, Field


class ImageOut(BaseModel):
    name: str
    url: str
    size: int
    date: str = Field(..., description="YYYY-MM-DD (UTC) the pick belongs to")


class QuoteOut(BaseModel):
    quote: str
    date: str
    dayOfMonth: int
    totalQuotes: int
    matchedByDate: bool = Field(..., description="True when the sheet has a row for today's day-of-month")


class DailyOut(BaseModel):
    date: str
    image: ImageOut
    quote: QuoteOut


class ErrorOut(BaseModel):
    error: str


ERROR_RESPONSES = {
    404: {"model": ErrorOut, "description": "Nothing to choose from"},
    500: {"model": ErrorOut, "description": "Upstream unreachable or unexpected failure"},
}
