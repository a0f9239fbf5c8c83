from typing import Any

from flask import Blueprint, current_app, jsonify, make_response, request

from common.utils.utils import handle_api_errors
from movies.movies_service import TmdbClient

bp_name = "movies"
bp_url_prefix = "/api/movies"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)


def get_tmdb_client() -> TmdbClient:
    return current_app.extensions["tmdb_client"]


@bp.route("/popular", methods=["GET"], endpoint="getPopularMovies")
@handle_api_errors("Failed to fetch popular movies")
def getPopularMovies() -> Any:
    result = get_tmdb_client().get_popular_movies()
    return make_response(jsonify(result), 200)


@bp.route("/search", methods=["GET"], endpoint="searchMovies")
@handle_api_errors("Failed to search movies")
def searchMovies() -> Any:
    result = get_tmdb_client().search_movies(request.args.get("query"))
    return make_response(jsonify(result), 200)


@bp.route("/<string:id>", methods=["GET"], endpoint="getMovie")
@handle_api_errors("Failed to fetch movie details")
def getMovie(id) -> Any:
    """Movie details relayed from TMDB."""
    result = get_tmdb_client().get_movie_details(id)
    return make_response(jsonify(result), 200)
