from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Movie(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    id: int
    title: str
    poster_path: Optional[str] = None
    vote_average: Optional[float] = None
    release_date: Optional[str] = None
    overview: Optional[str] = None


class CatalogPage(BaseModel):
    model_config = ConfigDict(extra='ignore')

    results: List[Movie] = Field(default_factory=list)

    @field_validator('results', mode='before')
    @classmethod
    def null_results_to_empty(cls, value):
        return [] if value is None else value


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    movies: List[Movie] = Field(default_factory=list)
    loading: bool = True
    error: str = ""


class MovieCard(BaseModel):
    id: int
    title: str
    poster_url: Optional[str]
    rating_label: str
    release_label: str
    overview_label: str


class BrowserView(BaseModel):
    loading: bool
    error: str
    cards: List[MovieCard]
    skeletons: int
    empty_message: Optional[str]


class ErrorResponse(BaseModel):
    code: int
    message: str
