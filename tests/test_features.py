"""Tests for pure scoring feature functions."""

from gymmatch.matching.features import (
    distance_between,
    distance_points,
    haversine_miles,
    jaccard,
    level_gap,
    level_points,
    normalize_tags,
    overlap_points,
    round_half_up,
    schedule_overlap_minutes,
    schedule_points,
    shared_tags,
    slot_overlap_minutes,
)
from gymmatch.matching.models import Coordinate, FitnessLevel
from gymmatch.matching.scoring_config import DISTANCE_TIERS

from tests.conftest import BOSTON, NYC, slot


def _north_of_nyc(miles: float) -> Coordinate:
    # One degree of latitude is ~69.09 miles
    return Coordinate(lat=NYC.lat + miles / 69.09, lng=NYC.lng)


class TestRoundHalfUp:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(7.5) == 8

    def test_below_half_rounds_down(self):
        assert round_half_up(6.4) == 6

    def test_integers_unchanged(self):
        assert round_half_up(10.0) == 10


class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine_miles(NYC, NYC) == 0.0

    def test_nyc_to_boston(self):
        assert 180 < haversine_miles(NYC, BOSTON) < 195

    def test_symmetric(self):
        assert abs(haversine_miles(NYC, BOSTON) - haversine_miles(BOSTON, NYC)) < 1e-9

    def test_one_degree_latitude(self):
        d = haversine_miles(Coordinate(lat=0.0, lng=0.0), Coordinate(lat=1.0, lng=0.0))
        assert abs(d - 69.09) < 0.05

    def test_antipodal_points(self):
        d = haversine_miles(Coordinate(lat=0.0, lng=0.0), Coordinate(lat=0.0, lng=180.0))
        assert abs(d - 12436.9) < 1.0

    def test_missing_coordinate(self):
        assert distance_between(NYC, None) is None
        assert distance_between(None, NYC) is None


class TestDistancePoints:
    def test_tiers(self):
        assert distance_points(0.0, DISTANCE_TIERS) == 30
        assert distance_points(1.0, DISTANCE_TIERS) == 30
        assert distance_points(2.0, DISTANCE_TIERS) == 20
        assert distance_points(4.0, DISTANCE_TIERS) == 10
        assert distance_points(7.5, DISTANCE_TIERS) == 5

    def test_at_max_radius_still_in_last_tier(self):
        assert distance_points(10.0, DISTANCE_TIERS) == 5

    def test_beyond_max_radius(self):
        assert distance_points(10.01, DISTANCE_TIERS) == 0
        assert distance_points(500.0, DISTANCE_TIERS) == 0

    def test_unknown_distance(self):
        assert distance_points(None, DISTANCE_TIERS) == 0

    def test_no_tiers(self):
        assert distance_points(0.0, ()) == 0

    def test_monotonic_non_increasing(self):
        points = [
            distance_points(haversine_miles(NYC, _north_of_nyc(miles)), DISTANCE_TIERS)
            for miles in (0, 0.5, 1.5, 2.9, 3.5, 4.9, 6, 9.9, 11, 40)
        ]
        assert points == sorted(points, reverse=True)
        assert points[0] == 30
        assert points[-1] == 0


class TestScheduleOverlap:
    def test_identical_slots(self):
        assert slot_overlap_minutes(slot(), slot()) == 180

    def test_partial_overlap(self):
        assert slot_overlap_minutes(slot(start="06:00", end="09:00"), slot(start="07:30", end="10:00")) == 90

    def test_touching_slots_do_not_overlap(self):
        assert slot_overlap_minutes(slot(start="06:00", end="09:00"), slot(start="09:00", end="10:00")) == 0

    def test_different_days(self):
        assert slot_overlap_minutes(slot("monday"), slot("tuesday")) == 0

    def test_inverted_slot_contributes_nothing(self):
        assert slot_overlap_minutes(slot(start="09:00", end="06:00"), slot()) == 0

    def test_sums_across_days(self):
        a = [slot("monday", "06:00", "07:30"), slot("wednesday", "17:00", "20:00")]
        b = [slot("monday", "06:00", "09:00"), slot("wednesday", "18:00", "19:00")]
        assert schedule_overlap_minutes(a, b) == 90 + 60

    def test_empty_schedules(self):
        assert schedule_overlap_minutes([], [slot()]) == 0
        assert schedule_overlap_minutes([slot()], []) == 0


class TestSchedulePoints:
    def test_full_reference_overlap(self):
        assert schedule_points(180, 180, 25) == 25

    def test_capped_at_weight(self):
        assert schedule_points(600, 180, 25) == 25

    def test_half_overlap(self):
        # 12.5 rounds half-up
        assert schedule_points(90, 180, 25) == 13

    def test_no_overlap(self):
        assert schedule_points(0, 180, 25) == 0


class TestTagOverlap:
    def test_normalize(self):
        assert normalize_tags([" Yoga", "CARDIO", "", None]) == {"yoga", "cardio"}
        assert normalize_tags(None) == set()

    def test_jaccard_half(self):
        assert jaccard({"weightlifting"}, {"weightlifting", "cardio"}) == 0.5

    def test_jaccard_empty_union(self):
        assert jaccard(set(), set()) == 0.0

    def test_jaccard_case_insensitive(self):
        assert jaccard({"Yoga"}, {"yoga "}) == 1.0

    def test_overlap_points_third(self):
        # 20 * 1/3 = 6.67
        assert overlap_points({"a", "b"}, {"b", "c"}, 20) == 7

    def test_overlap_points_one_side_empty(self):
        assert overlap_points(set(), {"yoga"}, 20) == 0

    def test_shared_tags_sorted(self):
        assert shared_tags({"yoga", "cardio", "boxing"}, {"cardio", "yoga"}) == ["cardio", "yoga"]


class TestLevelPoints:
    def test_identical(self):
        assert level_points(FitnessLevel.advanced, FitnessLevel.advanced, 15, 0.5) == 15

    def test_adjacent(self):
        assert level_points(FitnessLevel.beginner, FitnessLevel.intermediate, 15, 0.5) == 8
        assert level_points(FitnessLevel.advanced, FitnessLevel.intermediate, 15, 0.5) == 8

    def test_two_apart(self):
        assert level_points(FitnessLevel.beginner, FitnessLevel.advanced, 15, 0.5) == 0

    def test_missing_level(self):
        assert level_points(None, FitnessLevel.advanced, 15, 0.5) == 0
        assert level_gap(FitnessLevel.beginner, None) is None

    def test_adjacent_ratio_zero(self):
        assert level_points(FitnessLevel.beginner, FitnessLevel.intermediate, 15, 0.0) == 0
