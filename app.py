from flask import Flask, request, jsonify
from engine_api import (
    analyse,
    get_board_state,
    make_move,
    get_game_status,
    get_legal_moves
)
from errors import DraughtsError, SearchError
from game import Position

app = Flask(__name__)


@app.errorhandler(DraughtsError)
def draughts_error(error):
    if isinstance(error, SearchError):
        return jsonify({"success": False, "error": str(error)}), 500
    return jsonify({"success": False, "error": str(error)}), 400


def _fen_from_query():
    fen = request.args.get("fen")
    if not fen:
        return None
    return fen


@app.route("/state", methods=["GET"])
def state():
    fen = _fen_from_query()
    if fen is None:
        return jsonify({"error": "Missing fen"}), 400
    return jsonify(get_board_state(Position(fen)))


@app.route("/legal", methods=["GET"])
def legal_moves():
    fen = _fen_from_query()
    if fen is None:
        return jsonify({"error": "Missing fen"}), 400
    return jsonify({"legal_moves": get_legal_moves(fen)})


@app.route("/move", methods=["POST"])
def move():
    data = request.get_json(silent=True) or {}
    try:
        fen = str(data["fen"])
        move_index = int(data["move"])
    except (KeyError, ValueError, TypeError):
        return jsonify({"success": False, "error": "Invalid input"}), 400

    result = make_move(fen, move_index)
    return jsonify({"success": True, **result})


@app.route("/search", methods=["POST"])
def search():
    data = request.get_json(silent=True) or {}
    try:
        fen = str(data["fen"])
        duration_ms = int(data.get("duration_ms", 1000))
        seed = data.get("seed")
        seed = int(seed) if seed is not None else None
    except (KeyError, ValueError, TypeError):
        return jsonify({"success": False, "error": "Invalid input"}), 400
    if duration_ms < 0:
        return jsonify({"success": False, "error": "duration_ms must be >= 0"}), 400

    result = analyse(fen, duration_ms=duration_ms, seed=seed)
    return jsonify({"success": True, **result})


@app.route("/status", methods=["GET"])
def status():
    fen = _fen_from_query()
    if fen is None:
        return jsonify({"error": "Missing fen"}), 400
    return jsonify(get_game_status(fen))


if __name__ == "__main__":
    app.run(debug=True)
