"""
Tests for intent classification and the query router.
"""
import pytest

from academy_analytics.data.schemas import Field, TimeSeries
from academy_analytics.reports import narrative
from academy_analytics.reports.intents import IntentType, classify, extract_horizon
from academy_analytics.reports.router import answer, route

from conftest import series_of


class TestClassify:
    def test_prediction_beats_trend(self):
        intent = classify("Predict the enrollment trend for the next 6 months")
        assert intent.kind == IntentType.PREDICT
        assert intent.field == Field.TOTAL_STUDENTS
        assert intent.horizon == 6

    @pytest.mark.parametrize("text, field", [
        ("forecast students", Field.TOTAL_STUDENTS),
        ("forecast revenue", Field.TOTAL_PAID),
        ("predict placements", Field.OFFERED),
        ("forecast the java batch", Field.JAVA_FS),
        ("what should we expect from python?", Field.PYTHON_FS),
    ])
    def test_named_field_predictions(self, text, field):
        intent = classify(text)
        assert intent.kind == IntentType.PREDICT
        assert intent.field == field

    def test_students_checked_before_courses(self):
        assert classify("forecast python enrollments").field == Field.TOTAL_STUDENTS

    def test_prediction_without_field_falls_through(self):
        assert classify("predict the trend").kind == IntentType.GROWTH

    @pytest.mark.parametrize("text, kind", [
        ("show me the growth", IntentType.GROWTH),
        ("is revenue on the decline?", IntentType.GROWTH),
        ("any unusual months or outliers?", IntentType.ANOMALY),
        ("which is the peak month", IntentType.SEASONAL),
        ("any seasonal pattern?", IntentType.SEASONAL),
        ("how are students and revenue related", IntentType.CORRELATION),
        ("give me an overview", IntentType.SUMMARY),
        ("hello there", IntentType.UNKNOWN),
    ])
    def test_intent_priority(self, text, kind):
        assert classify(text).kind == kind

    def test_anomaly_before_seasonal(self):
        assert classify("unusual seasonal spike").kind == IntentType.ANOMALY


class TestHorizon:
    @pytest.mark.parametrize("text, horizon", [
        ("forecast revenue", 3),
        ("forecast revenue for 2025", 3),
        ("next 12 months", 12),
        ("next 1 month", 1),
        ("next 30 months", 3),
        ("predict 0 months", 3),
        ("grow by 2.5 or 4 months", 4),
    ])
    def test_extract(self, text, horizon):
        assert extract_horizon(text) == horizon


class TestRoute:
    def test_forecast_report(self, year_series):
        report = route("predict students for 2 months", year_series)
        assert "Total Students forecast" in report
        assert "2025-Jan" in report
        assert "2025-Feb" in report
        assert "2025-Mar" not in report

    def test_revenue_forecast_uses_currency(self):
        ts = series_of([1000, 2000, 3000, 4000], field=Field.TOTAL_PAID)
        report = route("forecast revenue", ts)
        assert "₹" in report

    def test_short_series_forecast_degrades(self):
        report = route("predict students", series_of([10]))
        assert "not enough data" in report
        assert "defaults to 0" in report

    def test_growth_report(self, year_series):
        assert "Strong Growth" in route("what is the student growth?", year_series)

    def test_anomaly_report_without_anomalies(self, year_series):
        assert "No unusual months" in route("any anomalies?", year_series)

    def test_seasonal_report_insufficient(self):
        assert "not enough data" in route("seasonal pattern", series_of([1, 2, 3]))

    def test_correlation_report(self, year_series):
        assert "Pearson" in route("correlation", year_series)

    def test_summary_report(self, year_series):
        report = route("summary", year_series)
        assert "24 month(s)" in report
        assert "2023" in report and "2024" in report

    def test_unknown_returns_capabilities(self, year_series):
        assert route("hello", year_series) == narrative.CAPABILITIES

    def test_empty_series_never_raises(self):
        for text in ["predict students", "growth", "anomalies", "seasonal", "correlation", "summary"]:
            assert route(text, TimeSeries()) == narrative.NO_DATA

    def test_answer_matches_route_for_classified_intent(self, year_series):
        text = "predict revenue for the next 4 months"
        assert answer(classify(text), year_series) == route(text, year_series)

    def test_capability_examples_forecast_the_advertised_field(self):
        assert "forecast the python batch" in narrative.CAPABILITIES
        intent = classify("forecast the python batch")
        assert intent.kind == IntentType.PREDICT
        assert intent.field == Field.PYTHON_FS
