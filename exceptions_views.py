from flask import Blueprint
from werkzeug.exceptions import HTTPException

from common.utils.utils import json_error

bp = Blueprint("exceptions", __name__)


@bp.app_errorhandler(HTTPException)
def handle_http_exception(e: HTTPException):
    return json_error(e.code, e.description)


@bp.app_errorhandler(404)
def handle_not_found(e):
    return json_error(404, "Not found")


@bp.app_errorhandler(405)
def handle_method_not_allowed(e):
    return json_error(405, "Method not allowed")
