import pytest

from motra.tracking import metrics


class TestPace:
    def test_zero_distance_is_undefined(self):
        assert metrics.pace(0, 600) == 0
        assert metrics.pace(-5, 600) == 0

    def test_seconds_per_km(self):
        # 5 km in 25 minutes -> 5:00/km
        assert metrics.pace(5000, 1500) == pytest.approx(300.0)

    def test_never_negative(self):
        for d in [0, 1, 250.5, 1000, 42195]:
            for t in [1, 60, 3600]:
                assert metrics.pace(d, t) >= 0

    def test_same_inputs_same_output(self):
        assert metrics.pace(1234.5, 432.1) == metrics.pace(1234.5, 432.1)


class TestCalories:
    def test_default_weight_linear_model(self):
        for d in [0, 500, 1000, 10_000, 42_195]:
            assert metrics.calories(d) == pytest.approx((d / 1000) * 70.0)

    def test_custom_weight(self):
        assert metrics.calories(10_000, body_weight_kg=55.0) == pytest.approx(550.0)

    def test_monotonic_in_distance(self):
        values = [metrics.calories(d) for d in range(0, 20_000, 750)]
        assert values == sorted(values)


def test_speed_kmh_treats_unknown_as_zero():
    assert metrics.speed_kmh(-1.0) == 0.0
    assert metrics.speed_kmh(2.5) == pytest.approx(9.0)
