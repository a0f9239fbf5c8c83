from marshmallow import EXCLUDE, Schema, fields


class ReviewSchema(Schema):
    id = fields.Str()
    movie_id = fields.Str(data_key="movieId")
    user_id = fields.Str(data_key="userId")
    user_name = fields.Str(data_key="userName")
    rating = fields.Raw()
    review_text = fields.Str(data_key="reviewText")
    movie_title = fields.Str(data_key="movieTitle")
    movie_poster = fields.Str(data_key="moviePoster")
    created_at = fields.Int(data_key="createdAt")
    updated_at = fields.Int(data_key="updatedAt")


class CreateReviewRequestSchema(Schema):
    # presence of movieId, userId and rating is checked by the service
    class Meta:
        unknown = EXCLUDE

    movie_id = fields.Raw(data_key="movieId", allow_none=True)
    user_id = fields.Raw(data_key="userId", allow_none=True)
    rating = fields.Raw(allow_none=True)
    user_name = fields.Raw(data_key="userName", allow_none=True)
    review_text = fields.Raw(data_key="reviewText", allow_none=True)
    movie_title = fields.Raw(data_key="movieTitle", allow_none=True)
    movie_poster = fields.Raw(data_key="moviePoster", allow_none=True)


class UpdateReviewRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    rating = fields.Raw(allow_none=True)
    review_text = fields.Raw(data_key="reviewText", allow_none=True)


class MessageResponseSchema(Schema):
    message = fields.Str()
