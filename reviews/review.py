from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class _Unset:
    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


# Marks a patch field that was left out of the request, as opposed to one
# explicitly set to None, 0 or "".
UNSET: Any = _Unset()


@dataclass
class Review:
    id: str
    movie_id: str
    user_id: str
    user_name: str
    rating: Any  # no range or type validation
    review_text: str
    movie_title: str
    movie_poster: str
    created_at: int  # epoch millis
    updated_at: int  # epoch millis

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Review":
        return cls(
            id=str(document["_id"]),
            movie_id=document["movieId"],
            user_id=document["userId"],
            user_name=document.get("userName", ReviewOptions.DEFAULT_USER_NAME),
            rating=document.get("rating"),
            review_text=document.get("reviewText", ""),
            movie_title=document.get("movieTitle", ""),
            movie_poster=document.get("moviePoster", ""),
            created_at=document["createdAt"],
            updated_at=document["updatedAt"],
        )


@dataclass
class ReviewOptions:
    """Optional fields of a new review. Any falsy value means use the default."""

    DEFAULT_USER_NAME = "Anonymous"

    user_name: Optional[str] = None
    review_text: Optional[str] = None
    movie_title: Optional[str] = None
    movie_poster: Optional[str] = None

    def merged(self) -> Dict[str, str]:
        defaults = {
            "userName": (self.user_name, self.DEFAULT_USER_NAME),
            "reviewText": (self.review_text, ""),
            "movieTitle": (self.movie_title, ""),
            "moviePoster": (self.movie_poster, ""),
        }
        return {
            key: value or default
            for key, (value, default) in defaults.items()
        }


@dataclass
class NewReview:
    movie_id: Any
    user_id: Any
    rating: Any
    options: ReviewOptions = field(default_factory=ReviewOptions)

    def missing_required(self) -> bool:
        # a rating of 0 is a real rating
        return not self.movie_id or not self.user_id or self.rating is None


@dataclass
class ReviewPatch:
    rating: Any = UNSET
    review_text: Any = UNSET

    def to_update(self, updated_at: int) -> Dict[str, Any]:
        update: Dict[str, Any] = {"updatedAt": updated_at}
        if self.rating is not UNSET:
            update["rating"] = self.rating
        if self.review_text is not UNSET:
            update["reviewText"] = self.review_text
        return update
