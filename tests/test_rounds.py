import json
import pytest
from gridbet.errors import MalformedRound
from gridbet.rounds import Round, Team, date_from_filename, finalized, load_round, load_rounds

def _data(n=3, result="012"):
    d = {"teams": [{"1": f"H{i}", "2": f"A{i}"} for i in range(n)],
         "odds": [2.0, 3.5, 4.0] * n}
    if result is not None:
        d["result"] = result
    return d

def test_from_dict_and_probabilities():
    r = Round.from_dict({**_data(), "lines": [["1", "1", "1"]]}, "2025-08-23").validate()
    assert r.teams[0] == Team("H0", "A0") and r.match_count == 3 and r.is_finalized
    assert len(r.probabilities) == 3 and abs(sum(r.probabilities[0]) - 1) < 1e-12
    assert r.to_dict()["lines"] == [["1", "1", "1"]]
    assert r.to_dict()["result"] == "012"

def test_validate_rejects_bad_lengths_and_odds():
    with pytest.raises(MalformedRound):
        Round.from_dict({**_data(), "odds": [2.0] * 8}, "d").validate()
    with pytest.raises(MalformedRound):
        Round.from_dict({**_data(), "odds": [1.0, 3.5, 4.0] * 3}, "d").validate()
    with pytest.raises(MalformedRound):
        Round.from_dict(_data(result="01"), "d").validate()
    with pytest.raises(MalformedRound):
        Round.from_dict({"teams": [{"home": "x"}], "odds": [2, 3, 4]}, "d")

def test_date_from_filename(tmp_path):
    assert date_from_filename(tmp_path / "round-2025-08-23.json") == "2025-08-23"
    assert date_from_filename(tmp_path / "misc.json") == "misc"

def test_load_rounds_skips_malformed_and_unplayed(tmp_path):
    (tmp_path / "2025-08-30.json").write_text(json.dumps(_data()))
    (tmp_path / "2025-08-23.json").write_text(json.dumps(_data(result="210")))
    (tmp_path / "2025-09-06.json").write_text(json.dumps(_data(result=None)))
    (tmp_path / "2025-09-13.json").write_text(json.dumps({**_data(), "odds": [2.0]}))
    (tmp_path / "2025-09-20.json").write_text("{not json")
    rounds = load_rounds(tmp_path)
    assert [r.date for r in rounds] == ["2025-08-23", "2025-08-30"]
    assert len(load_rounds(tmp_path, finalized_only=False)) == 3
    with pytest.raises(MalformedRound):
        load_round(tmp_path / "2025-09-20.json")

def test_finalized_filters():
    good = Round.from_dict(_data(), "a")
    unplayed = Round.from_dict(_data(result=None), "b")
    short = Round.from_dict(_data(result="0"), "c")
    assert finalized([good, unplayed, short]) == [good]
