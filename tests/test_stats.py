"""
Unit tests for overview and chart aggregates.
"""
from exposure_risk.datasets import CITIES, get_city
from exposure_risk.stats import (
    aqi_distribution,
    city_comparison,
    city_risk_profile,
    risk_overview,
    water_quality_distribution,
)


class TestRiskOverview:
    def test_totals(self):
        overview = risk_overview()
        assert overview["total"] == 12
        assert overview["severity_counts"] == {"Mild": 1, "Moderate": 2, "Severe": 5, "Critical": 4}

    def test_combined_counts_towards_both(self):
        counts = risk_overview()["exposure_counts"]
        assert counts == {"air": 7, "water": 7, "combined": 2}


class TestCityCharts:
    def test_comparison_sorted_by_aqi(self):
        rows = city_comparison()
        assert rows[0]["id"] == "delhi"
        assert rows[0]["risk_score"] == 7.8
        assert rows[0]["population_millions"] == 33
        aqis = [r["aqi"] for r in rows]
        assert aqis == sorted(aqis, reverse=True)

    def test_aqi_distribution_covers_every_city(self):
        buckets = aqi_distribution()
        assert sum(b["count"] for b in buckets) == len(CITIES)
        hazardous = next(b for b in buckets if b["band"] == "hazardous")
        assert hazardous["count"] == 1

    def test_water_quality_distribution(self):
        buckets = {b["name"]: b["count"] for b in water_quality_distribution()}
        assert buckets["Very Poor"] == 1
        assert sum(buckets.values()) == len(CITIES)

    def test_risk_profile_scaled(self):
        profile = city_risk_profile(get_city("delhi"))
        assert profile["AQI Level"] == 6.84
        assert profile["Population Density"] == 6.58
        assert profile["Air Pollution"] == 9
