from typing import Callable, List

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from common.exceptions import ApiError, ErrorKind
from common.utils.logging_service import logger
from common.utils.utils import now_millis, time_it
from reviews.review import NewReview, Review, ReviewPatch
from reviews.review_filter_params import ReviewFilterParams

RECENT_REVIEWS_LIMIT = 20

# newest first, ties broken by insertion order of the generated ids
NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]

INDEXED_FIELDS = ["movieId", "userId", "createdAt"]


class ReviewsService:
    """
    CRUD over the reviews collection.

    Every public method is one round trip to the store (update and delete
    also read the record first). Store errors are raised as STORE_FAILURE
    ``ApiError``s, missing records as NOT_FOUND.
    """

    def __init__(self, collection: Collection, clock: Callable[[], int] = now_millis):
        self.collection = collection
        self.clock = clock

    @time_it
    def add_review(self, new_review: NewReview) -> Review:
        if new_review.missing_required():
            raise ApiError(
                ErrorKind.VALIDATION, "Missing required fields: movieId, userId, rating"
            )

        now = self.clock()
        document = {
            "movieId": str(new_review.movie_id),
            "userId": str(new_review.user_id),
            "rating": new_review.rating,
            **new_review.options.merged(),
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = self.collection.insert_one(document)
        except PyMongoError as e:
            raise ApiError(ErrorKind.STORE_FAILURE, f"Insert failed: {e}") from e

        document["_id"] = result.inserted_id
        logger.info(f"Created review {result.inserted_id} for movie {document['movieId']}")
        return Review.from_document(document)

    def get_recent_reviews(self) -> List[Review]:
        return self.get_filtered_reviews(
            ReviewFilterParams(limit_rows=RECENT_REVIEWS_LIMIT)
        )

    def get_movie_reviews(self, movie_id: str) -> List[Review]:
        return self.get_filtered_reviews(ReviewFilterParams(movie_id=movie_id))

    def get_user_reviews(self, user_id: str) -> List[Review]:
        return self.get_filtered_reviews(ReviewFilterParams(user_id=user_id))

    @time_it
    def get_filtered_reviews(self, params: ReviewFilterParams) -> List[Review]:
        try:
            documents = self.collection.find(
                params.to_query(), sort=NEWEST_FIRST, limit=params.limit_rows
            )
            return [Review.from_document(document) for document in documents]
        except PyMongoError as e:
            raise ApiError(ErrorKind.STORE_FAILURE, f"Query failed: {e}") from e

    @time_it
    def update_review(self, review_id: str, patch: ReviewPatch) -> None:
        object_id = self.__object_id(review_id)
        try:
            existing = self.collection.find_one({"_id": object_id})
            if existing is None:
                raise ApiError(ErrorKind.NOT_FOUND, "Review not found")

            updated_at = max(self.clock(), existing.get("updatedAt", 0) + 1)
            self.collection.update_one(
                {"_id": object_id}, {"$set": patch.to_update(updated_at)}
            )
        except PyMongoError as e:
            raise ApiError(ErrorKind.STORE_FAILURE, f"Update failed: {e}") from e

    @time_it
    def delete_review(self, review_id: str) -> None:
        object_id = self.__object_id(review_id)
        try:
            if self.collection.find_one({"_id": object_id}) is None:
                raise ApiError(ErrorKind.NOT_FOUND, "Review not found")

            self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            raise ApiError(ErrorKind.STORE_FAILURE, f"Delete failed: {e}") from e

    def ensure_indexes(self) -> List[str]:
        return [
            self.collection.create_index([(name, ASCENDING)]) for name in INDEXED_FIELDS
        ]

    def is_store_up(self) -> bool:
        try:
            self.collection.database.command("ping")
            return True
        except PyMongoError:
            logger.exception("Store ping failed")
            return False

    @staticmethod
    def __object_id(review_id: str) -> ObjectId:
        # ids the store could never have generated cannot exist
        if not ObjectId.is_valid(review_id):
            raise ApiError(ErrorKind.NOT_FOUND, "Review not found")
        return ObjectId(review_id)
