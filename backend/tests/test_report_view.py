import pytest

from models.requests import ScoreRequest
from models.responses import Driver, NearestItem, RadarProfile
from models.schemas.report_view import EMPTY_MARK, NO_RESULT_MESSAGE
from models.schemas.score_outcome import ScoreOutcome
from services.report_view import (
    build_report,
    build_view,
    driver_chart,
    format_roi,
    gauge,
    percent,
    radar_points,
    similar_rows,
)
from services.scoring_engine import derive_score


def test_percent_rounds_half_up():
    assert percent(0.456) == 46
    assert percent(0.125) == 13
    assert percent(0.05) == 5


def test_gauge_half_circle():
    view = gauge(0.5)
    assert view.angle == pytest.approx(90.0)
    assert view.percent == 50
    assert gauge(0.95).angle == pytest.approx(171.0)


def test_radar_inverts_production_risk():
    radar = RadarProfile(
        originality=0.7,
        clarity=0.6,
        audience_appeal=0.5,
        budget_feasibility=0.9,
        production_risk=0.2,
    )
    points = {p.axis: p.value for p in radar_points(radar)}
    assert points["production_risk"] == pytest.approx(0.8)
    assert points["originality"] == 0.7
    assert len(points) == 5


def test_driver_chart_symmetric_floor():
    chart = driver_chart([Driver(feature="a", impact=0.05), Driver(feature="b", impact=-0.01)])
    assert chart.y_min == -0.2
    assert chart.y_max == 0.2


def test_driver_chart_expands_for_large_impacts():
    chart = driver_chart([Driver(feature="a", impact=0.31), Driver(feature="b", impact=-0.25)])
    assert chart.y_min == -0.25
    assert chart.y_max == 0.31


def test_format_roi():
    assert format_roi(7.1) == "7.1x"
    assert format_roi(20.0) == "20.0x"
    assert format_roi(None) == EMPTY_MARK
    assert format_roi(0) == EMPTY_MARK


def test_similar_rows():
    rows = similar_rows([NearestItem(title="Her", year=2013, similarity=0.92, roi=2.9)])
    assert rows[0].similarity_pct == 92
    assert rows[0].roi == "2.9x"


def test_empty_view():
    view = build_view(None)
    assert view.has_result is False
    assert view.message == NO_RESULT_MESSAGE
    assert view.radar == []
    assert view.similar == []
    assert view.drivers.bars == []


def test_full_view():
    response = derive_score(ScoreRequest(text="Una comedia torpe de situaciones absurdas"))
    view = build_view(response)
    assert view.has_result is True
    assert view.gauge.percent == percent(response.success_probability)
    assert len(view.radar) == 5
    assert len(view.drivers.bars) == 5
    assert len(view.similar) == 5
    assert view.inferred_genres == response.inferred_genres


def test_strengths_and_weaknesses():
    response = derive_score(ScoreRequest(text="x"))
    drivers = [
        Driver(feature="budget_vs_peers", impact=0.09),
        Driver(feature="production_risk", impact=-0.04),
        Driver(feature="originality_index", impact=0.02),
        Driver(feature="Drama", impact=-0.01),
        Driver(feature="audience_appeal", impact=0.005),
    ]
    view = build_view(response.model_copy(update={"drivers": drivers}))
    assert view.strengths == "budget_vs_peers, originality_index"
    assert view.weaknesses == "production_risk, Drama"


def test_no_weaknesses_marker():
    response = derive_score(ScoreRequest(text="x"))
    drivers = [Driver(feature=f"f{i}", impact=0.01) for i in range(5)]
    view = build_view(response.model_copy(update={"drivers": drivers}))
    assert view.weaknesses == EMPTY_MARK


def test_failed_outcome_renders_empty_state():
    view = build_report(ScoreOutcome(ok=False, error_kind="transport_error", error="down"))
    assert view.has_result is False
    assert view.error == "down"
    assert view.message == NO_RESULT_MESSAGE


def test_missing_outcome_renders_empty_state():
    assert build_report(None).has_result is False
