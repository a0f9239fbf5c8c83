import logging
import os

import click
from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from dotenv import load_dotenv
from flask import Flask
from flask_apispec import FlaskApiSpec
from flask_cors import CORS
from flask_talisman import Talisman
from pymongo import MongoClient

import exceptions_views
from common.utils.logging_service import configure_logging, logger
from common.utils.utils_views import bp as utils_bp
from movies.movies_service import TmdbClient
from movies.movies_views import bp as movies_bp
from reviews.reviews_service import ReviewsService
from reviews.reviews_views import bp as reviews_bp

load_dotenv()

# view functions documented under /swagger/, by blueprint
DOCUMENTED_ENDPOINTS = {
    "movies": ["getPopularMovies", "searchMovies", "getMovie"],
    "reviews": [
        "createReview",
        "getRecentReviews",
        "getMovieReviews",
        "getUserReviews",
        "updateReview",
        "deleteReview",
    ],
}


def __env_flag(name, default):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def __optional_float(value):
    return float(value) if value not in (None, "") else None


def create_app(test_config=None, reviews_collection=None, tmdb_client=None):
    app = Flask(__name__, instance_relative_config=True)

    app.config.update(
        {
            "APISPEC_SPEC": APISpec(
                title="Movie Reviews API",
                version="v1",
                plugins=[MarshmallowPlugin()],
                openapi_version="3.0.2",
            ),
            "APISPEC_SWAGGER_URL": "/swagger/",  # JSON
            "APISPEC_SWAGGER_UI_URL": "/swagger-ui/",  # UI
        }
    )

    app.config.update(
        TMDB_API_KEY=os.getenv("TMDB_API_KEY"),
        TMDB_BASE_URL=os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3"),
        TMDB_LANGUAGE=os.getenv("TMDB_LANGUAGE", "en-US"),
        TMDB_TIMEOUT=__optional_float(os.getenv("TMDB_TIMEOUT")),
        MONGO_URL=os.getenv("MONGO_URL"),
        MONGO_DB_NAME=os.getenv("MONGO_DB_NAME", "movieReviewsDB"),
        ORIGINS=os.getenv("ORIGINS", "*"),
        FORCE_HTTPS=__env_flag("FORCE_HTTPS", "false"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "DEBUG"),
    )

    if test_config is not None:
        app.config.update(test_config)

    configure_logging(app.config["LOG_LEVEL"])

    csp = {"default-src": ["'self'"], "frame-ancestors": ["'none'"]}
    Talisman(
        app,
        force_https=app.config["FORCE_HTTPS"],
        frame_options="DENY",
        content_security_policy=csp,
        referrer_policy="no-referrer",
        x_content_type_options=True,
        strict_transport_security=True,
    )

    @app.after_request
    def add_no_cache(response):
        response.headers["Cache-Control"] = "no-store, max-age=0, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response

    CORS(app, origins=app.config["ORIGINS"])

    # MongoClient connects lazily, a bad URL only fails on the first query
    if reviews_collection is None:
        mongo = MongoClient(app.config["MONGO_URL"])
        reviews_collection = mongo[app.config["MONGO_DB_NAME"]]["reviews"]

    if tmdb_client is None:
        tmdb_client = TmdbClient(
            app.config["TMDB_API_KEY"],
            base_url=app.config["TMDB_BASE_URL"],
            language=app.config["TMDB_LANGUAGE"],
            timeout=app.config["TMDB_TIMEOUT"],
        )

    app.extensions["reviews_service"] = ReviewsService(reviews_collection)
    app.extensions["tmdb_client"] = tmdb_client

    app.register_blueprint(movies_bp)
    app.register_blueprint(reviews_bp)
    app.register_blueprint(utils_bp)
    app.register_blueprint(exceptions_views.bp)

    app.logger.handlers = logging.getLogger().handlers
    app.logger.setLevel(app.config["LOG_LEVEL"].upper())

    @app.cli.command("ensure-indexes")
    def ensure_indexes():
        """Create the reviews collection indexes."""
        names = app.extensions["reviews_service"].ensure_indexes()
        click.echo(f"Indexes ready: {', '.join(names)}")

    docs = FlaskApiSpec(app)
    for blueprint, endpoints in DOCUMENTED_ENDPOINTS.items():
        for endpoint in endpoints:
            docs.register(
                app.view_functions[f"{blueprint}.{endpoint}"],
                blueprint=blueprint,
                endpoint=endpoint,
            )

    logger.info(
        f"TMDB_API_KEY loaded: {'yes' if app.config['TMDB_API_KEY'] else 'no'}"
    )

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(port=int(os.getenv("PORT", 5000)))
