from pydantic import BaseModel, Field, StrictStr


class ShortenRequest(BaseModel):
    url: StrictStr = Field(..., min_length=1)


class ShortenResponse(BaseModel):
    short_url: str


class URLMapping(BaseModel):
    code: str
    original_url: str
