import pytest

from desk_planner.core.errors import InvalidConfigurationError, InvalidRecordError
from desk_planner.simulation import ProgressSnapshot, SimulationConfig, SimulationResult


class TestSimulationConfig:

    def test_valid_config(self):
        config = SimulationConfig(employee_count=10, absenteeism_rate=0.2, trial_count=5, days_in_office=3)
        assert config.absenteeism_percent == 20

    @pytest.mark.parametrize("field,value", [
        ("employee_count", 0),
        ("employee_count", -3),
        ("employee_count", 2.5),
        ("trial_count", 0),
        ("trial_count", True),
        ("days_in_office", 6),
        ("days_in_office", -1),
        ("absenteeism_rate", 1.0),
        ("absenteeism_rate", -0.1),
        ("absenteeism_rate", float("nan")),
    ])
    def test_invalid_values_rejected(self, field, value):
        kwargs = dict(employee_count=10, absenteeism_rate=0.2, trial_count=5, days_in_office=3)
        kwargs[field] = value
        with pytest.raises(InvalidConfigurationError) as exc:
            SimulationConfig(**kwargs)
        assert any(field in msg for msg in exc.value.errors)

    def test_all_errors_reported_together(self):
        with pytest.raises(InvalidConfigurationError) as exc:
            SimulationConfig(employee_count=0, absenteeism_rate=2, trial_count=0, days_in_office=9)
        assert len(exc.value.errors) == 4

    def test_invalid_config_is_a_value_error(self):
        with pytest.raises(ValueError):
            SimulationConfig(employee_count=0, absenteeism_rate=0, trial_count=1, days_in_office=1)

    def test_immutable(self):
        config = SimulationConfig(employee_count=10, absenteeism_rate=0.2, trial_count=5, days_in_office=3)
        with pytest.raises(AttributeError):
            config.employee_count = 11

    def test_from_percentage(self):
        config = SimulationConfig.from_percentage(
            employee_count=1000, absenteeism_percent=15, trial_count=10, days_in_office=4
        )
        assert config.absenteeism_rate == pytest.approx(0.15)
        assert config.absenteeism_percent == 15

    def test_from_percentage_rejects_hundred(self):
        with pytest.raises(InvalidConfigurationError):
            SimulationConfig.from_percentage(
                employee_count=10, absenteeism_percent=100, trial_count=10, days_in_office=4
            )


class TestProgressSnapshot:

    def test_fraction(self):
        assert ProgressSnapshot(completed=250, total=1000).fraction_complete == 0.25
        assert ProgressSnapshot(completed=1000, total=1000).is_complete

    def test_estimate_absent_before_first_trial(self):
        assert ProgressSnapshot(completed=0, total=10).estimated_remaining_ms is None


class TestResultSerialization:

    def test_round_trip(self):
        result = SimulationResult(
            distribution=(4, 5, 5, 7), avg_daily_occupancy=3.2, avg_peak=5.25, max_observed=7, p95=7
        )
        assert SimulationResult.from_dict(result.to_dict()) == result

    def test_missing_distribution_rejected(self):
        with pytest.raises(InvalidRecordError):
            SimulationResult.from_dict({"avg_daily_occupancy": 1.0, "avg_peak": 2.0})

    def test_empty_distribution_rejected(self):
        with pytest.raises(InvalidRecordError):
            SimulationResult.from_dict({"distribution": [], "avg_daily_occupancy": 1.0, "avg_peak": 2.0})

    def test_non_integer_values_rejected(self):
        with pytest.raises(InvalidRecordError):
            SimulationResult.from_dict({"distribution": [1, "x"], "avg_daily_occupancy": 1.0, "avg_peak": 2.0})

    def test_unsorted_distribution_is_sorted_and_summary_derived(self):
        result = SimulationResult.from_dict({
            "distribution": [9, 2, 5],
            "avg_daily_occupancy": 3.0,
            "avg_peak": 5.33
        })
        assert result.distribution == (2, 5, 9)
        assert result.max_observed == 9
        assert result.p95 == 9

    def test_stored_summary_recomputed_from_distribution(self):
        result = SimulationResult.from_dict({
            "distribution": [1, 2, 9],
            "avg_daily_occupancy": 2.0,
            "avg_peak": 4.0,
            "max_observed": 2,
            "p95": 1
        })
        assert result.max_observed == 9
        assert result.p95 == result.percentile(95) == 9

    @pytest.mark.parametrize("field,value", [
        ("avg_daily_occupancy", "x"),
        ("avg_peak", [1]),
        ("avg_peak", None),
    ])
    def test_bad_averages_rejected(self, field, value):
        data = {"distribution": [1, 2, 3], "avg_daily_occupancy": 2.0, "avg_peak": 2.5}
        data[field] = value
        with pytest.raises(InvalidRecordError):
            SimulationResult.from_dict(data)
