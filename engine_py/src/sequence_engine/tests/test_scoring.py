"""
Tests for win thresholds and game end.
"""

import pytest

from sequence_engine.constants import PHASE_FINISHED, PHASE_IN_PROGRESS
from sequence_engine.engine import EVENT_GAME_OVER, submit_move
from sequence_engine.errors import GAME_NOT_IN_PROGRESS
from sequence_engine.rules import create_rules, default_rules
from sequence_engine.scoring import has_won, scores_by_color, sequence_points, win_threshold


@pytest.mark.parametrize("count,threshold", [
    (2, 2), (3, 2), (4, 1), (6, 1), (12, 1)
])
def test_win_threshold_by_player_count(make_lobby, count, threshold):
    assert win_threshold(make_lobby(count)) == threshold
    assert default_rules.get_win_threshold(count) == threshold


def test_points_for_run():
    assert default_rules.points_for_run(5) == 1
    assert default_rules.points_for_run(8) == 1
    assert default_rules.points_for_run(9) == 2
    assert default_rules.points_for_run(10) == 2
    assert create_rules(double_credit_long_runs=False).points_for_run(9) == 1


def test_nine_run_wins_two_player_game(make_game, card_for, place_chips):
    """Closing a nine-cell run in one move ends a two-player game."""
    state = make_game(2)
    place_chips(state, "p1", [(1, col) for col in range(0, 4)])
    place_chips(state, "p1", [(1, col) for col in range(5, 9)])
    state.players["p1"].hand[0] = card_for(state, (1, 4))

    result = submit_move(state, "p1", 0, (1, 4))

    assert result.success
    new_state = result.state
    color = new_state.players["p1"].color
    assert len(new_state.sequences) == 1
    assert new_state.sequences[0].length == 9
    assert sequence_points(new_state, color) == 2
    assert has_won(new_state, color)
    assert new_state.phase == PHASE_FINISHED
    assert new_state.winner == color
    # The winner keeps the turn
    assert new_state.turn_index == 0
    assert scores_by_color(new_state) == {color.key: 2}

    game_over = [e for e in result.events if e["type"] == EVENT_GAME_OVER]
    assert game_over == [{
        "type": EVENT_GAME_OVER,
        "winner": color.key,
        "winner_names": ["Player 1"],
    }]

    # No moves after the game ended
    assert submit_move(new_state, "p2", 0, (8, 8)).error_code == GAME_NOT_IN_PROGRESS


def test_nine_run_does_not_win_without_double_credit(make_game, card_for, place_chips):
    state = make_game(2, rule_config=create_rules(double_credit_long_runs=False))
    place_chips(state, "p1", [(1, col) for col in range(0, 4)])
    place_chips(state, "p1", [(1, col) for col in range(5, 9)])
    state.players["p1"].hand[0] = card_for(state, (1, 4))

    new_state = submit_move(state, "p1", 0, (1, 4)).state

    assert new_state.phase == PHASE_IN_PROGRESS
    assert new_state.winner is None
    assert new_state.current_player().id == "p2"


def test_one_sequence_wins_four_player_game(make_game, card_for, place_chips):
    state = make_game(4)
    place_chips(state, "p1", [(7, col) for col in range(2, 6)])
    state.players["p1"].hand[0] = card_for(state, (7, 6))

    new_state = submit_move(state, "p1", 0, (7, 6)).state

    assert new_state.phase == PHASE_FINISHED
    assert new_state.winner == new_state.players["p1"].color


def test_win_stops_recording_other_runs(make_game, card_for, place_chips):
    """Once the threshold is reached the remaining runs of the move are not recorded."""
    state = make_game(4)
    place_chips(state, "p1", [(4, col) for col in range(1, 5)])
    place_chips(state, "p1", [(row, 5) for row in range(0, 4)])
    state.players["p1"].hand[0] = card_for(state, (4, 5))

    new_state = submit_move(state, "p1", 0, (4, 5)).state

    assert new_state.phase == PHASE_FINISHED
    assert len(new_state.sequences) == 1
    assert new_state.last_move["sequences"] == 1


def test_two_runs_in_one_move_both_count(make_game, card_for, place_chips):
    state = make_game(2)
    place_chips(state, "p1", [(4, col) for col in range(1, 5)])
    place_chips(state, "p1", [(row, 5) for row in range(0, 4)])
    state.players["p1"].hand[0] = card_for(state, (4, 5))

    new_state = submit_move(state, "p1", 0, (4, 5)).state

    assert len(new_state.sequences) == 2
    assert new_state.phase == PHASE_FINISHED
    assert new_state.turn_index == 0


def test_extending_a_sequence_wins_two_player_game(make_game, card_for, place_chips):
    """Growing a five into a six adds a second sequence."""
    state = make_game(2)
    place_chips(state, "p1", [(6, col) for col in range(1, 5)])
    state.players["p1"].hand[0] = card_for(state, (6, 5))

    state = submit_move(state, "p1", 0, (6, 5)).state
    assert len(state.sequences) == 1
    assert state.phase == PHASE_IN_PROGRESS

    state.players["p2"].hand[0] = "JH"
    state = submit_move(state, "p2", 0, (8, 8)).state

    state.players["p1"].hand[0] = card_for(state, (6, 6))
    result = submit_move(state, "p1", 0, (6, 6))

    assert result.success
    new_state = result.state
    color = new_state.players["p1"].color
    assert [sequence.length for sequence in new_state.sequences] == [5, 6]
    assert sequence_points(new_state, color) == 2
    assert new_state.last_move["sequences"] == 1
    assert new_state.phase == PHASE_FINISHED
    assert new_state.winner == color


def test_team_shares_sequence_points(make_lobby, card_for):
    from sequence_engine.board import Team
    from sequence_engine.engine import set_team, start_game

    state = make_lobby(4)
    for player_id, team in (("p1", Team.BLUE), ("p2", Team.GREEN),
                            ("p3", Team.BLUE), ("p4", Team.GREEN)):
        state = set_team(state, player_id, team).state
    for player_id in state.players:
        state.players[player_id].ready = True
    state = start_game(state, "p1", seed=5).state
    state.turn_index = 0

    assert state.players["p1"].color == state.players["p3"].color
    for col in range(2, 6):
        state.board.place((8, col), state.players["p3"].color)
    state.players["p1"].hand[0] = card_for(state, (8, 6))

    new_state = submit_move(state, "p1", 0, (8, 6)).state

    assert new_state.phase == PHASE_FINISHED
    assert new_state.winner.key == Team.BLUE.value
    assert "won the game" in new_state.game_log[-1]
