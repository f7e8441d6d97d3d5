"""OMDb API data types."""

from typing import NotRequired, TypedDict


class OMDbRatingEntry(TypedDict):
    """One entry of the OMDb "Ratings" array."""

    Source: str
    Value: str


class OMDbResponse(TypedDict, total=False):
    """Title lookup response (only the fields we read)."""

    Response: str
    Error: NotRequired[str]
    Title: str
    Year: str
    Type: str
    imdbID: str
    imdbRating: str
    imdbVotes: str
    Metascore: str
    Ratings: list[OMDbRatingEntry]
