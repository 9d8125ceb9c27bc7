"""Push and rollback acknowledgement routes."""

from flask import Blueprint, jsonify, request

from sisyphus.api.player_routes import player_id_from_header
from sisyphus.api.services import current_services
from sisyphus.errors import InvalidBodyError

push_bp = Blueprint("push", __name__, url_prefix="/api/push")


@push_bp.route("", methods=["POST"])
def push_boulder():
    """
    Record a boulder push.

    Header: X-Player-ID (required)
    Body: {"localDate": "YYYY-MM-DD"}
    """
    player_id = player_id_from_header()
    services = current_services()

    services.rate_limiter.check_or_raise(player_id)
    services.engine.require_player(player_id)

    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise InvalidBodyError()

    result = services.engine.push(player_id, data.get("localDate"))
    return jsonify(result.to_api())


@push_bp.route("/acknowledge-rollback", methods=["POST"])
def acknowledge_rollback():
    """
    Acknowledge a rollback after the client animated it.

    Resets the player to the bottom so they can push again.
    """
    player_id = player_id_from_header()
    result = current_services().engine.acknowledge_rollback(player_id)
    return jsonify(result.to_api())
