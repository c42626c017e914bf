from typing import Any

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    keyword: Any = Field(default=None, description="Keyword to write a blog post about.")


class SeoAnalysis(BaseModel):
    keywordDensity: str
    titleOptimization: str
    contentLength: str
    readability: str
    ctaPresence: str


class GenerationResult(BaseModel):
    titles: list[str] = Field(..., min_length=3, max_length=3)
    body: str
    tags: list[str] = Field(..., min_length=10, max_length=10)
    seoScore: int
    seoAnalysis: SeoAnalysis


class ErrorResponse(BaseModel):
    error: str
