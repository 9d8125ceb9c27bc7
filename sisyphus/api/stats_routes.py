"""Leaderboard and survivorship routes."""

from flask import Blueprint, jsonify, request

from sisyphus.api.player_routes import player_id_from_header
from sisyphus.api.services import current_services

stats_bp = Blueprint("stats", __name__, url_prefix="/api/stats")


@stats_bp.route("/leaderboard", methods=["GET"])
def leaderboard():
    """
    Top players by current height.

    Query: ?limit=100&offset=0
    Header: X-Player-ID (optional, adds your rank)
    """
    services = current_services()
    limit = request.args.get("limit", default=services.config.leaderboard_limit, type=int)
    offset = request.args.get("offset", default=0, type=int)
    player_id = player_id_from_header(required=False)

    entries = services.stats.leaderboard(limit=limit, offset=offset)
    return jsonify(
        {
            "leaderboard": [entry.model_dump(by_alias=True) for entry in entries],
            "total": services.stats.total_players(),
            "yourRank": services.stats.player_rank(player_id) if player_id else None,
        }
    )


@stats_bp.route("/survivorship", methods=["GET"])
def survivorship():
    """Share of players that reached, and still hold, each height."""
    services = current_services()
    return jsonify(
        {
            "totalPlayers": services.stats.total_players(),
            "activePlayers": services.stats.active_players(services.config.active_player_days),
            "survivorship": [entry.model_dump(by_alias=True) for entry in services.stats.survivorship()],
        }
    )


@stats_bp.route("/deaths", methods=["GET"])
def deaths():
    """Death statistics."""
    return jsonify(current_services().stats.death_stats().model_dump(by_alias=True))


@stats_bp.route("/summary", methods=["GET"])
def summary():
    """Summary of all stats."""
    services = current_services()
    death_stats = services.stats.death_stats()
    return jsonify(
        {
            "totalPlayers": services.stats.total_players(),
            "activePlayers": services.stats.active_players(services.config.active_player_days),
            "totalDeaths": death_stats.total_deaths,
            "averageHeightAtDeath": death_stats.average_height_at_death,
        }
    )
