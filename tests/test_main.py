import json
import sys

from plant_sim import main as cli
from plant_sim.core.config import RECOMMENDED_TICK_INTERVAL_MS


def test_cli_runs_and_saves_state(tmp_path, monkeypatch, capsys):
    state_file = tmp_path / "garden.json"
    argv = [
        "plant-sim", "--hours", "4", "--plants", "2", "--autocare", "--no-plots",
        "--state-file", str(state_file), "--output-dir", str(tmp_path / "results"),
    ]
    monkeypatch.setattr(sys, "argv", argv)
    cli.main()

    out = capsys.readouterr().out
    assert "Simulation complete: 4 ticks" in out
    assert "Garden Summary" in out
    saved = json.loads(state_file.read_text())
    assert len(saved["plants"]) == 2
    assert (tmp_path / "results" / "metrics.csv").exists()
    assert (tmp_path / "results" / "events.json").exists()

    # second run resumes the saved garden
    cli.main()
    assert "Loaded garden" in capsys.readouterr().out


def test_tick_length_defaults_to_recommended_interval(tmp_path, monkeypatch, capsys):
    base = ["plant-sim", "--hours", "4", "--plants", "1", "--no-plots", "--output-dir", str(tmp_path)]
    # 4 simulated hours at 3600x are 4000 ms of wall clock
    monkeypatch.setattr(sys, "argv", base)
    cli.main()
    assert f"{4000 // RECOMMENDED_TICK_INTERVAL_MS} ticks" in capsys.readouterr().out

    monkeypatch.setattr(sys, "argv", base + ["--tick-seconds", "2"])
    cli.main()
    assert "Simulation complete: 2 ticks" in capsys.readouterr().out
