import json
import pytest
from add_lines import UnknownStrategy, annotate, main
from gridbet.config import BacktestConfig

def _write_round(tmp_path, n=13):
    d = {"teams": [{"1": f"H{i}", "2": f"A{i}"} for i in range(n)],
         "odds": [x for i in range(n) for x in (1.5 + 0.1 * i, 3.4, 4.0)],
         "result": "0" * n}
    p = tmp_path / "2025-08-23.json"
    p.write_text(json.dumps(d), encoding="utf-8")
    return p

def _cfg(tmp_path):
    return BacktestConfig(data_dir=tmp_path, teams_dir=tmp_path / "teams", bets_count=5)

def test_annotate_writes_grid_lines_and_bets(tmp_path):
    data = annotate(_write_round(tmp_path), "ultra_conservative", _cfg(tmp_path))
    assert len(data["lines"]) == 27 and len(data["bets"]) == 5
    assert len(data["grid"]["picks"]) == 9 and data["grid"]["strategy"] == "ultra_conservative"

def test_unknown_strategy_is_reported_before_any_work(tmp_path):
    with pytest.raises(UnknownStrategy):
        annotate(_write_round(tmp_path), "no_such_strategy", _cfg(tmp_path))

def test_malformed_round_data_is_not_reported_as_unknown_strategy(tmp_path, monkeypatch, capsys):
    p = tmp_path / "2025-08-23.json"
    p.write_text(json.dumps({"teams": [{"home": "x"}], "odds": [2, 3, 4], "result": "0"}), encoding="utf-8")
    monkeypatch.setenv("GRIDBET_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("GRIDBET_TEAMS_DIR", str(tmp_path / "teams"))
    assert main(["2025-08-23", "ultra_conservative"]) == 1
    assert "unknown strategy" not in capsys.readouterr().out
