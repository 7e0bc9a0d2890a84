"""View model consumed by the results panel (gauge, radar, bars, table)."""

from pydantic import BaseModel

NO_RESULT_MESSAGE = 'Fill in the form and press "Score" to see results.'
EMPTY_MARK = "—"


class GaugeView(BaseModel):
    value: float = 0.0
    angle: float = 0.0  # degrees of a half-circle sweep, 0-180
    percent: int = 0


class RadarPoint(BaseModel):
    axis: str
    label: str
    value: float  # 0-1, higher is better on every axis


class DriverBar(BaseModel):
    feature: str
    impact: float


class DriverChart(BaseModel):
    bars: list[DriverBar] = []
    y_min: float = -0.2
    y_max: float = 0.2


class SimilarRow(BaseModel):
    title: str
    year: int
    similarity_pct: int
    roi: str = EMPTY_MARK  # "7.1x" or EMPTY_MARK


class ReportView(BaseModel):
    has_result: bool = False
    message: str = NO_RESULT_MESSAGE
    gauge: GaugeView = GaugeView()
    radar: list[RadarPoint] = []
    drivers: DriverChart = DriverChart()
    similar: list[SimilarRow] = []
    strengths: str = EMPTY_MARK
    weaknesses: str = EMPTY_MARK
    inferred_genres: list[str] = []
    error: str = ""
