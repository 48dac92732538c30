import pytest
from gridbet.bets import Bet, RoundBets
from gridbet.errors import InvalidResultCode, MalformedRound
from gridbet.evaluate import backtest, calculate_accuracy, evaluate_bet, max_possible_winnings
from gridbet.grid import match_mapping
from gridbet.outcomes import result_code_to_outcome
from gridbet.rounds import Round, Team

ALL_HOME = Bet(("1",) * 9)
ALL_DRAW = Bet(("X",) * 9)
IDENTITY = {i: i for i in range(9)}

def _round(result="000000000", odds=None, n=9, date="2025-08-23"):
    teams = tuple(Team(chr(65 + 2 * i), chr(66 + 2 * i)) for i in range(n))
    return Round(date=date, teams=teams, odds=tuple(odds or (2.0, 3.0, 4.0) * n), result=result)

def test_all_home_hits_every_line():
    res = evaluate_bet(_round(), ALL_HOME)
    assert len(res.correct_lines) == 27 and all(res.correct_cells)
    assert res.winnings == 27 * 8.0 and res.cost == 27

def test_all_draw_scores_nothing():
    res = evaluate_bet(_round(), ALL_DRAW)
    assert res.correct_lines == () and res.winnings == 0 and res.profit == -27

def test_single_line_payout_is_product_of_odds():
    odds = [2.0, 3.4, 4.0, 2.5, 3.0, 2.8, 3.0, 3.6, 1.5] + [2.0, 3.0, 4.0] * 6
    r = _round(result="012000000", odds=odds)
    res = evaluate_bet(r, Bet(("1", "X", "2") + ("X",) * 6), mapping=IDENTITY)
    assert res.correct_lines == ("path-0-1-2",)
    assert res.winnings == 9.0 and res.cost == 27

def test_perfect_bet_matches_max_possible():
    odds = [x for i in range(9) for x in (1.5 + 0.3 * i, 3.2, 5.0 - 0.2 * i)]
    r = _round(result="012012012", odds=odds)
    m = match_mapping(r.probabilities)
    bet = Bet(tuple(result_code_to_outcome(r.result[m[p]]) for p in range(9)))
    res = evaluate_bet(r, bet)
    assert len(res.correct_lines) == 27
    assert res.winnings == max_possible_winnings(r)

def test_out_of_range_cell_is_neutral_and_counted():
    mapping = {**IDENTITY, 0: 20}
    res = evaluate_bet(_round(), ALL_HOME, mapping=mapping)
    assert len(res.correct_lines) == 27
    assert res.winnings == 9 * 4.0 + 18 * 8.0
    assert res.recoveries == 2

def test_negative_mapped_index_is_neutral_and_counted():
    mapping = {**IDENTITY, 0: -1}
    res = evaluate_bet(_round(result="000000002"), ALL_HOME, mapping=mapping)
    assert res.correct_cells[0] and res.recoveries == 2
    assert not res.correct_cells[8] and res.winnings == 6 * 4.0 + 12 * 8.0

def test_short_grid_free_cells():
    r = _round(result="00000", n=5)
    acc = calculate_accuracy(r, [Bet.from_string("11111----")])
    assert acc.line_hits[27] == 1 and acc.recoveries == 0
    assert acc.best_bet.winnings == acc.max_possible_winnings

def test_calculate_accuracy_aggregates():
    acc = calculate_accuracy(_round(), [ALL_DRAW, ALL_HOME])
    assert len(acc.line_hits) == 28 and acc.line_hits[27] == 1 and acc.line_hits[0] == 1
    assert acc.total_bets == 2 and acc.total_cost == 54 and acc.total_winnings == 216
    assert acc.profit == 162 and acc.best_bet.bet == ALL_HOME
    assert acc.max_possible_winnings == 216

def test_repeat_count_scales_totals():
    acc = calculate_accuracy(_round(), [Bet(("1",) * 9, repeat_count=3)])
    assert acc.total_bets == 3 and acc.line_hits[27] == 3
    assert acc.total_cost == 81 and acc.total_winnings == 648

def test_repeated_bet_matches_expanded_copies():
    r = _round()
    weak, strong = Bet.from_string("11111111X"), Bet.from_string("111111111")
    packed = calculate_accuracy(r, [Bet(weak.predictions, repeat_count=10), strong])
    expanded = calculate_accuracy(r, [weak] * 10 + [strong])
    assert packed.best_bet.bet.key == expanded.best_bet.bet.key == strong.key
    assert packed.best_bet.profit == expanded.best_bet.profit == 216 - 27
    assert packed.line_hits == expanded.line_hits and packed.total_bets == 11
    assert packed.total_winnings == expanded.total_winnings
    assert packed.best_bet.cost == 27

def test_recoveries_count_every_wager():
    r = _round(result="0000000", n=7)
    acc = calculate_accuracy(r, [Bet(("1",) * 9, repeat_count=3)], selector=lambda probs, count: [0, 1, 2, 3, 4, 5, 6, 20, 21])
    assert acc.recoveries == 3 * 4

def test_evaluation_is_idempotent():
    r = _round(result="012012012")
    bets = [ALL_HOME, ALL_DRAW, Bet.from_string("1X21X21X2")]
    assert calculate_accuracy(r, bets) == calculate_accuracy(r, bets)

def test_invalid_result_code_is_not_defaulted():
    r = _round(result="00000000Z")
    with pytest.raises(InvalidResultCode):
        calculate_accuracy(r, [ALL_HOME])
    assert backtest([r], [RoundBets(r.date, tuple(range(9)), (ALL_HOME,))]) == []

def test_unplayed_round_cannot_be_scored():
    with pytest.raises(MalformedRound):
        evaluate_bet(_round(result=None), ALL_HOME)

def test_backtest_keys_by_date_and_skips_unplayed():
    played, later = _round(), _round(result=None, date="2025-08-30")
    other = _round(date="2025-09-06")
    rb = RoundBets(played.date, tuple(range(9)), (ALL_HOME,))
    out = backtest([played, later, other], [rb])
    assert [a.date for a in out] == ["2025-08-23", "2025-09-06"]
    assert out[0].total_bets == 1 and out[1].total_bets == 0
