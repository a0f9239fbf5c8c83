from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, make_response, request

from common.utils.utils import handle_api_errors
from reviews.review import UNSET, NewReview, ReviewOptions, ReviewPatch
from reviews.reviews_service import ReviewsService
from reviews.review_schema import (
    CreateReviewRequestSchema,
    MessageResponseSchema,
    ReviewSchema,
    UpdateReviewRequestSchema,
)

bp_name = "reviews"
bp_url_prefix = "/api/reviews"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)

review_schema = ReviewSchema()
reviews_schema = ReviewSchema(many=True)
message_schema = MessageResponseSchema()


def get_reviews_service() -> ReviewsService:
    return current_app.extensions["reviews_service"]


def __get_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@bp.route("", methods=["POST"], endpoint="createReview")
@handle_api_errors("Failed to create review")
def createReview():
    data = CreateReviewRequestSchema().load(__get_body())

    new_review = NewReview(
        movie_id=data.get("movie_id"),
        user_id=data.get("user_id"),
        rating=data.get("rating"),
        options=ReviewOptions(
            user_name=data.get("user_name"),
            review_text=data.get("review_text"),
            movie_title=data.get("movie_title"),
            movie_poster=data.get("movie_poster"),
        ),
    )
    review = get_reviews_service().add_review(new_review)

    return make_response(jsonify(review_schema.dump(review)), 201)


@bp.route("", methods=["GET"], endpoint="getRecentReviews")
@handle_api_errors("Failed to fetch reviews")
def getRecentReviews():
    reviews = get_reviews_service().get_recent_reviews()
    return make_response(jsonify(reviews_schema.dump(reviews)), 200)


@bp.route("/movie/<string:movie_id>", methods=["GET"], endpoint="getMovieReviews")
@handle_api_errors("Failed to fetch reviews")
def getMovieReviews(movie_id):
    reviews = get_reviews_service().get_movie_reviews(movie_id)
    return make_response(jsonify(reviews_schema.dump(reviews)), 200)


@bp.route("/user/<string:user_id>", methods=["GET"], endpoint="getUserReviews")
@handle_api_errors("Failed to fetch user reviews")
def getUserReviews(user_id):
    reviews = get_reviews_service().get_user_reviews(user_id)
    return make_response(jsonify(reviews_schema.dump(reviews)), 200)


@bp.route("/<string:review_id>", methods=["PUT"], endpoint="updateReview")
@handle_api_errors("Failed to update review")
def updateReview(review_id):
    data = UpdateReviewRequestSchema().load(__get_body())
    patch = ReviewPatch(
        rating=data.get("rating", UNSET),
        review_text=data.get("review_text", UNSET),
    )
    get_reviews_service().update_review(review_id, patch)

    return make_response(
        jsonify(message_schema.dump({"message": "Review updated successfully"})), 200
    )


@bp.route("/<string:review_id>", methods=["DELETE"], endpoint="deleteReview")
@handle_api_errors("Failed to delete review")
def deleteReview(review_id):
    get_reviews_service().delete_review(review_id)

    return make_response(
        jsonify(message_schema.dump({"message": "Review deleted successfully"})), 200
    )
