import pytest

from drift_reco.algo.drift_config import DriftAlgoConfig
from drift_reco.algo.drift_model import compute_drift, in_time_window
from drift_reco.algo.types import LocalPoint

WIRE_AT_ZERO = LocalPoint(0.0, 0.0, 0.0)


def test_accepted_hit_example(config):
    ok, result = compute_drift(700.0, 500.0, WIRE_AT_ZERO, config)

    assert ok
    assert result.left.x == pytest.approx(-1.086)
    assert result.right.x == pytest.approx(1.086)
    assert result.left[1:] == (0.0, 0.0)
    assert result.right[1:] == (0.0, 0.0)
    assert result.error.xx == pytest.approx(0.0004)
    assert result.error.xy == 0.0
    assert result.error.yy == 0.0
    assert result.drift_distance == pytest.approx(1.086)


def test_late_hit_rejected(config):
    ok, result = compute_drift(1000.0, 500.0, WIRE_AT_ZERO, config)
    assert not ok
    assert result is None


def test_early_hit_rejected(config):
    ok, result = compute_drift(496.9, 500.0, WIRE_AT_ZERO, config)
    assert not ok
    assert result is None


def test_window_edges_accepted(config):
    assert compute_drift(-3.0, 0.0, WIRE_AT_ZERO, config)[0]
    assert compute_drift(415.0, 0.0, WIRE_AT_ZERO, config)[0]
    assert in_time_window(-3.0, config)
    assert not in_time_window(415.0001, config)


def test_small_negative_time_clamped_to_wire(config):
    wire = LocalPoint(12.6, 0.5, -1.0)
    ok, result = compute_drift(-1.0, 0.0, wire, config)

    assert ok
    assert result.left == wire
    assert result.right == wire
    assert result.drift_distance == 0.0


def test_candidates_symmetric_about_wire(config):
    wire = LocalPoint(-33.6, 0.0, 0.0)
    for t in [0.0, 12.5, 100.0, 250.0, 414.0]:
        ok, result = compute_drift(t, 0.0, wire, config)
        assert ok
        assert result.left.x + result.right.x == pytest.approx(2 * wire.x)
        assert wire.x - result.left.x == pytest.approx(result.right.x - wire.x)
        assert result.left.x <= wire.x <= result.right.x


def test_symmetry_exact_at_origin(config):
    for t in [1.0, 37.7, 200.0, 399.9]:
        _, result = compute_drift(t, 0.0, WIRE_AT_ZERO, config)
        assert result.left.x + result.right.x == 0.0


def test_idempotent(config):
    first = compute_drift(321.5, 17.25, LocalPoint(4.2, 0.0, 0.0), config)
    second = compute_drift(321.5, 17.25, LocalPoint(4.2, 0.0, 0.0), config)
    assert first == second


def test_separation_increases_with_time(config):
    separations = []
    for t in [5.0, 50.0, 150.0, 300.0, 410.0]:
        _, result = compute_drift(t, 0.0, WIRE_AT_ZERO, config)
        separations.append(result.right.x - result.left.x)
    assert separations == sorted(separations)
    assert len(set(separations)) == len(separations)


def test_error_independent_of_time(config):
    errors = [compute_drift(t, 0.0, WIRE_AT_ZERO, config)[1].error for t in [-2.0, 0.0, 100.0, 415.0]]
    assert len(set(errors)) == 1
    assert errors[0].xx == pytest.approx(0.02 ** 2)


def test_debug_trace(capsys):
    config = DriftAlgoConfig(0.00543, -3.0, 415.0, 0.02, debug=True)
    compute_drift(200.0, 0.0, WIRE_AT_ZERO, config, wire_id=(1, 5), step=2)
    out = capsys.readouterr().out
    assert "[LinearDriftAlgo]" in out
    assert "Drift distance" in out
    assert "Step:           2" in out

    compute_drift(900.0, 0.0, WIRE_AT_ZERO, config)
    assert "out of window" in capsys.readouterr().out


def test_debug_does_not_change_result(config):
    loud = DriftAlgoConfig(0.00543, -3.0, 415.0, 0.02, debug=True)
    assert compute_drift(200.0, 3.0, WIRE_AT_ZERO, loud) == compute_drift(200.0, 3.0, WIRE_AT_ZERO, config)


def test_quiet_without_debug(config, capsys):
    compute_drift(200.0, 0.0, WIRE_AT_ZERO, config)
    compute_drift(900.0, 0.0, WIRE_AT_ZERO, config)
    assert capsys.readouterr().out == ""
