import logging

from flask import Blueprint, request, jsonify

import config
from models.errors import ComputeFailure, SearchAlreadyPending, StructuralInconsistency, ValidationError
from schemas.game_schema import parse_move, parse_position, parse_state
from services.game_service import GameService

logger = logging.getLogger(__name__)

router = Blueprint('game_controller', __name__)


def _body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data


def _player_id(data, key="player", default=None):
    value = data.get(key, default)
    if value not in (1, 2):
        raise ValidationError(f"'{key}' must be 1 or 2")
    return value


@router.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({"success": False, "error": str(e)}), 400


@router.errorhandler(SearchAlreadyPending)
def handle_pending(e):
    return jsonify({"success": False, "error": str(e)}), 409


@router.errorhandler(StructuralInconsistency)
def handle_inconsistency(e):
    logger.critical("Structural inconsistency: %s", e)
    return jsonify({"success": False, "error": str(e)}), 500


@router.errorhandler(ComputeFailure)
def handle_compute_failure(e):
    return jsonify({"success": False, "error": str(e)}), 500


@router.route("/new_game", methods=["POST"])
def new_game():
    service = GameService()
    state = service.create_game()
    return jsonify({"state": state.to_dict()})


@router.route("/legal_moves", methods=["POST"])
def legal_moves():
    data = _body()
    state = parse_state(data.get("state"))
    player_id = _player_id(data, default=state.turn_owner)
    moves = GameService().legal_moves(state, player_id)
    return jsonify({"moves": [m.to_dict() for m in moves]})


@router.route("/is_valid_wall", methods=["POST"])
def is_valid_wall():
    data = _body()
    state = parse_state(data.get("state"))
    try:
        x, y = int(data["x"]), int(data["y"])
        orientation = data["orientation"]
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Bad wall coordinates: {e}") from e
    valid = GameService().is_valid_wall(state, x, y, orientation)
    return jsonify({"is_valid": valid})


@router.route("/shortest_path", methods=["POST"])
def shortest_path():
    data = _body()
    state = parse_state(data.get("state"))
    player_id = _player_id(data, default=state.turn_owner)
    result = GameService().shortest_path(state, player_id)
    if result is None:
        return jsonify({"distance": None, "nextStep": None, "path": None})
    return jsonify(result.to_dict())


@router.route("/action", methods=["POST"])
def perform_action():
    data = _body()
    state = parse_state(data.get("state"))
    move = parse_move(data.get("move"))
    new_state = GameService().perform_action(state, move)
    return jsonify({"success": True, "state": new_state.to_dict()})


@router.route("/check_winner", methods=["POST"])
def check_winner():
    data = _body()
    state = parse_state(data.get("state"))
    return jsonify({"winner": GameService().check_winner(state)})


@router.route("/evaluate", methods=["POST"])
def evaluate():
    data = _body()
    state = parse_state(data.get("state"))
    player_id = _player_id(data, default=state.turn_owner)
    previous = parse_position(data.get("previousPosition"))
    score = GameService().evaluate(state, player_id, previous)
    return jsonify({"score": score})


@router.route("/ia_play", methods=["POST"])
def ia_play():
    data = _body()
    state = parse_state(data.get("state"))
    difficulty = data.get("difficulty", config.AI_DEFAULT_DIFFICULTY)
    if isinstance(difficulty, bool) or not isinstance(difficulty, int):
        raise ValidationError("'difficulty' must be an integer")
    previous = parse_position(data.get("previousPosition"))
    game_id = str(data.get("game_id", "default"))

    result = GameService().ia_play(state, difficulty, game_id, previous)
    return jsonify(result), 200
