# file: tests/test_simulator_smoke.py
from __future__ import annotations

from orchestration import Simulator, render_csv
from benchmarks import build_model, build_time_range
from models import TimeRange


def test_sirs_conserves_population():
    sim = Simulator(model=build_model("default"), time_range=build_time_range("default"))
    e = sim.run()

    # t in [0, 50] with dt=0.1: about 501 steps, boundary may shift by one
    assert abs(e.step_count - 501) <= 1
    for snap in e.history:
        assert abs(snap["S"] + snap["I"] + snap["R"] - 1000.0) < 1e-6

    s, i, r = e.get_data_vec("S"), e.get_data_vec("I"), e.get_data_vec("R")
    assert len(s) == len(i) == len(r) == e.step_count
    # epidemic grows first (R0 = 3)
    assert max(i) > 10.0
    assert s[-1] < 990.0


def test_dataframe_columns_and_step_index():
    sim = Simulator(model=build_model("default"), time_range=TimeRange(t_end=1.0, t_delta=0.5))
    sim.run()
    df = sim.to_dataframe()
    assert list(df.columns) == ["t", "S", "I", "R"]
    assert df["t"].tolist() == [0, 1, 2]

    df_t = sim.to_dataframe(with_time=True)
    assert list(df_t.columns) == ["t", "time", "S", "I", "R"]
    assert df_t["time"].tolist() == [0.5, 1.0, 1.5]


def test_render_csv_matches_solver_format():
    sim = Simulator(model=build_model("sir"), time_range=TimeRange(t_end=0.0, t_delta=0.1))
    sim.run()
    text = render_csv(sim.to_dataframe())
    lines = text.splitlines()
    assert lines[0] == "t,S,I,R"
    assert len(lines) == 2
    assert lines[1].startswith("0, ")
    assert len(lines[1].split(", ")) == 4


def test_iter_run_stops_early():
    sim = Simulator(model=build_model("default"), time_range=build_time_range("default"))
    for n, _ in enumerate(sim.iter_run(), start=1):
        if n == 10:
            break
    assert sim.evaluator.step_count == 10
