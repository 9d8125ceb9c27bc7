"""Player registration and state routes."""

from typing import Optional

from flask import Blueprint, jsonify, request

from sisyphus.api.services import current_services
from sisyphus.config import PLAYER_ID_HEADER
from sisyphus.errors import MissingPlayerIdError

player_bp = Blueprint("player", __name__, url_prefix="/api/player")


def player_id_from_header(required: bool = True) -> Optional[str]:
    """
    Read the player id header.

    Args:
        required: Raise when the header is missing or blank

    Returns:
        The stripped id, or None when optional and absent
    """
    player_id = (request.headers.get(PLAYER_ID_HEADER) or "").strip()
    if not player_id:
        if required:
            raise MissingPlayerIdError()
        return None
    return player_id


@player_bp.route("", methods=["GET"])
def get_player_state():
    """
    Get (or create) player state for the client's local date.

    Header: X-Player-ID (optional, a new player is created without it)
    Query: ?localDate=YYYY-MM-DD
    """
    player_id = player_id_from_header(required=False)
    local_date = request.args.get("localDate")
    state = current_services().engine.get_state(player_id, local_date)
    return jsonify(state.to_api())


@player_bp.route("/register", methods=["POST"])
def register_player():
    """Create a new player."""
    player_id = current_services().engine.register()
    return jsonify({"id": player_id})
