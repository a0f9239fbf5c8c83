from flask import Blueprint, jsonify

from reviews.reviews_views import get_reviews_service


bp_name = "utils"
bp_url_prefix = "/api"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)


@bp.route("/health", methods=["GET"])
def health_check():
    db_status = get_reviews_service().is_store_up()

    return jsonify(
        {
            "database": "up" if db_status else "down",
        }
    )
