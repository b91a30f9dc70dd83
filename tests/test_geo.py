"""
Unit tests for nearest-city matching.
"""
import pytest
from dataclasses import replace

from exposure_risk.datasets import CITIES, get_city
from exposure_risk.geo import (
    DEFAULT_MATCH_RADIUS_KM,
    find_nearest_city,
    group_cities_by_state,
    haversine_km,
)


class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine_km(28.6139, 77.2090, 28.6139, 77.2090) == 0

    def test_delhi_to_mumbai(self):
        """Roughly 1150 km as the crow flies."""
        distance = haversine_km(28.6139, 77.2090, 19.0760, 72.8777)
        assert 1100 < distance < 1200

    def test_symmetric(self):
        a = haversine_km(12.9716, 77.5946, 13.0827, 80.2707)
        b = haversine_km(13.0827, 80.2707, 12.9716, 77.5946)
        assert a == pytest.approx(b)

    def test_one_degree_of_latitude(self):
        assert haversine_km(0, 0, 1, 0) == pytest.approx(111.19, abs=0.01)


class TestFindNearestCity:
    def test_delhi_coordinates_match_delhi(self):
        match = find_nearest_city(28.6139, 77.2090)
        assert match.matched
        assert match.city.id == "delhi"
        assert match.distance_km == pytest.approx(0, abs=1e-6)

    def test_nearby_point_matches(self):
        """A point in Noida is well inside the radius of Delhi."""
        match = find_nearest_city(28.5355, 77.3910)
        assert match.city.id == "delhi"
        assert 0 < match.distance_km < 25

    def test_mid_ocean_has_no_match(self):
        match = find_nearest_city(0.0, 65.0)
        assert not match.matched
        assert match.city is None
        assert match.distance_km > DEFAULT_MATCH_RADIUS_KM

    def test_radius_is_inclusive(self):
        """A point exactly at the radius still matches."""
        delhi = get_city("delhi")
        match = find_nearest_city(0.0, 65.0, cities=[delhi], max_distance_km=1e9)
        exact = find_nearest_city(0.0, 65.0, cities=[delhi], max_distance_km=match.distance_km)
        assert exact.city is delhi

    def test_custom_radius(self):
        match = find_nearest_city(28.5355, 77.3910, max_distance_km=5)
        assert not match.matched

    def test_tie_goes_to_first_in_table_order(self):
        delhi = get_city("delhi")
        twin = replace(delhi, id="delhi-twin", name="Twin")
        match = find_nearest_city(delhi.lat, delhi.lng, cities=[twin, delhi])
        assert match.city.id == "delhi-twin"

    def test_empty_table(self):
        match = find_nearest_city(28.6, 77.2, cities=[])
        assert not match.matched


class TestGroupCitiesByState:
    def test_states_sorted(self):
        groups = group_cities_by_state()
        assert list(groups) == sorted(groups)

    def test_every_city_grouped_once(self):
        groups = group_cities_by_state()
        assert sum(len(cities) for cities in groups.values()) == len(CITIES)

    def test_uttar_pradesh(self):
        groups = group_cities_by_state()
        assert [c.id for c in groups["Uttar Pradesh"]] == ["kanpur", "lucknow"]


class TestGetCity:
    def test_unknown_city_raises_key_error(self):
        with pytest.raises(KeyError):
            get_city("atlantis")

    def test_city_ids_are_unique(self):
        assert len({city.id for city in CITIES}) == len(CITIES) == 30
