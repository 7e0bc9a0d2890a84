"""Build the results-panel view model from a score outcome.

Pure formatting: no scoring happens here. Rendering widgets consume the
ReportView as-is.
"""

import math

from models.responses import Driver, NearestItem, RadarProfile, ScoreResponse
from models.schemas.report_view import (
    EMPTY_MARK,
    DriverBar,
    DriverChart,
    GaugeView,
    RadarPoint,
    ReportView,
    SimilarRow,
)
from models.schemas.score_outcome import ScoreOutcome

# Symmetric minimum for the driver chart's y-axis
DRIVER_DOMAIN_FLOOR = 0.2

RADAR_AXES: list[tuple[str, str]] = [
    ("originality", "Originality"),
    ("clarity", "Clarity"),
    ("audience_appeal", "Audience appeal"),
    ("budget_feasibility", "Budget feasibility"),
    ("production_risk", "Production risk (inverted)"),
]


def percent(value: float) -> int:
    """0.456 -> 46, rounding halves up."""
    return math.floor(value * 100 + 0.5)


def gauge(success_probability: float) -> GaugeView:
    return GaugeView(
        value=success_probability,
        angle=180 * success_probability,
        percent=percent(success_probability),
    )


def radar_points(radar: RadarProfile) -> list[RadarPoint]:
    """Radar series where higher is better on every axis (risk is inverted)."""
    points = []
    for axis, label in RADAR_AXES:
        value = getattr(radar, axis)
        if axis == "production_risk":
            value = 1 - value
        points.append(RadarPoint(axis=axis, label=label, value=value))
    return points


def driver_chart(drivers: list[Driver]) -> DriverChart:
    impacts = [d.impact for d in drivers]
    return DriverChart(
        bars=[DriverBar(feature=d.feature, impact=d.impact) for d in drivers],
        y_min=min([-DRIVER_DOMAIN_FLOOR, *impacts]),
        y_max=max([DRIVER_DOMAIN_FLOOR, *impacts]),
    )


def format_roi(roi: float | None) -> str:
    if not roi:
        return EMPTY_MARK
    return f"{roi:.1f}x"


def similar_rows(items: list[NearestItem]) -> list[SimilarRow]:
    return [
        SimilarRow(
            title=item.title,
            year=item.year,
            similarity_pct=percent(item.similarity),
            roi=format_roi(item.roi),
        )
        for item in items
    ]


def _top_features(drivers: list[Driver], positive: bool, limit: int = 2) -> str:
    picked = [d.feature for d in drivers if (d.impact > 0 if positive else d.impact < 0)]
    return ", ".join(picked[:limit]) or EMPTY_MARK


def build_view(response: ScoreResponse | None) -> ReportView:
    """Render a response, or the neutral "no result yet" view for None."""
    if response is None:
        return ReportView()

    p = response.success_probability
    return ReportView(
        has_result=True,
        message=(
            f"Your pitch sits at the {percent(p)}th percentile of estimated success. "
            "Treat it as guidance, not a guarantee."
        ),
        gauge=gauge(p),
        radar=radar_points(response.radar),
        drivers=driver_chart(response.drivers),
        similar=similar_rows(response.nearest_items),
        strengths=_top_features(response.drivers, positive=True),
        weaknesses=_top_features(response.drivers, positive=False),
        inferred_genres=list(response.inferred_genres),
    )


def build_report(outcome: ScoreOutcome | None) -> ReportView:
    """View for a scoring outcome; failures keep the empty view plus the error."""
    if outcome is None:
        return ReportView()
    if not outcome.ok:
        return ReportView(error=outcome.error)
    return build_view(outcome.response)
