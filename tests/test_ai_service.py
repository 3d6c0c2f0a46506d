import pytest
from dataclasses import replace

from models.errors import ValidationError
from models.moves import PawnMove
from models.player import other_player
from services.ai_service import DIFFICULTY_DEPTH, MinimaxAI, depth_for_difficulty, search
from services.board_logic import shortest_path
from services.evaluator import TRAPPED_SCORE, WIN_SCORE, evaluate
from services.move_generator import generate_legal_moves
from services.transition import apply_move


def plain_minimax(state, ai_player, depth, maximizing):
    """Reference search without pruning"""
    score = evaluate(state, ai_player)
    if depth == 0 or abs(score) > TRAPPED_SCORE:
        return score, None
    active = ai_player if maximizing else other_player(ai_player)
    best_score, best_move = None, None
    for move in generate_legal_moves(state, active):
        child, _ = plain_minimax(apply_move(state, move), ai_player, depth - 1, not maximizing)
        if best_score is None or (child > best_score if maximizing else child < best_score):
            best_score, best_move = child, move
    return best_score, best_move


def test_search_is_deterministic(initial_state):
    state = replace(initial_state, turn_owner=2)
    first = search(state, 2)
    second = search(state, 2)
    assert first == second
    assert first.move is not None


def test_player_two_first_move_shortens_its_path(initial_state):
    state = replace(initial_state, turn_owner=2)
    result = search(state, 1)
    assert isinstance(result.move, PawnMove)

    before = shortest_path(state.player2.position, 0, state.walls).distance
    after_state = apply_move(state, result.move)
    after = shortest_path(after_state.player2.position, 0, after_state.walls).distance
    assert before - after == 1


def test_alpha_beta_matches_plain_minimax(initial_state):
    expected_score, expected_move = plain_minimax(initial_state, 1, 2, True)
    result = search(initial_state, 2)
    assert result.score == expected_score
    assert result.move == expected_move


def test_alpha_beta_matches_plain_minimax_mid_game(state_factory):
    state = state_factory(p1=(3, 4), p2=(5, 3), turn=2, walls=[(3, 4, "h"), (5, 2, "v")],
                          p1_walls=8, p2_walls=2)
    expected_score, expected_move = plain_minimax(state, 2, 2, True)
    result = search(state, 2)
    assert result.score == expected_score
    assert result.move == expected_move


def test_takes_the_winning_step(state_factory):
    state = state_factory(p1=(0, 4), p2=(4, 1), turn=2)
    result = search(state, 3)
    assert result.move == PawnMove(4, 0)
    assert result.score == WIN_SCORE


def test_result_is_a_legal_move(state_factory):
    state = state_factory(p1=(2, 2), p2=(6, 6), walls=[(2, 2, "h")])
    result = search(state, 2)
    assert result.move in generate_legal_moves(state, state.turn_owner)


def test_decided_root_returns_no_move(state_factory):
    state = state_factory(p1=(4, 8), p2=(2, 3), turn=2, winner=1)
    result = search(state, 2)
    assert result.move is None
    assert result.score == -WIN_SCORE


def test_node_count_is_tracked(initial_state):
    ai = MinimaxAI(1)
    ai.choose_move(initial_state)
    assert ai.nodes == 1 + len(generate_legal_moves(initial_state, 1))


@pytest.mark.parametrize("depth", [0, 5, -1])
def test_depth_out_of_range(initial_state, depth):
    with pytest.raises(ValidationError):
        search(initial_state, depth)


def test_difficulty_levels():
    assert [depth_for_difficulty(d) for d in sorted(DIFFICULTY_DEPTH)] == [1, 2, 3, 4]
    with pytest.raises(ValidationError):
        depth_for_difficulty(9)
