from pydantic import BaseModel, Field


class RadarProfile(BaseModel):
    originality: float = Field(0.0, ge=0.0, le=1.0)
    clarity: float = Field(0.0, ge=0.0, le=1.0)
    audience_appeal: float = Field(0.0, ge=0.0, le=1.0)
    budget_feasibility: float = Field(0.0, ge=0.0, le=1.0)
    production_risk: float = Field(0.0, ge=0.0, le=1.0)  # lower is better


class Driver(BaseModel):
    feature: str
    impact: float  # signed contribution to success_probability


class NearestItem(BaseModel):
    title: str
    year: int
    similarity: float = Field(ge=0.0, le=1.0)
    roi: float | None = None  # return multiple, e.g. 3.7 for 3.7x


class ScoreResponse(BaseModel):
    success_probability: float = Field(ge=0.05, le=0.95)
    radar: RadarProfile = RadarProfile()
    drivers: list[Driver] = Field(default_factory=list, min_length=5, max_length=5)
    nearest_items: list[NearestItem] = Field(default_factory=list, min_length=5, max_length=5)
    inferred_genres: list[str] = Field(default_factory=list, min_length=1)
    scorer: str = "heuristic"


class OptionsResponse(BaseModel):
    genres: list[str] = []
    tones: list[str] = []
    ratings: list[str] = []
    default_rating: str = "PG-13"
