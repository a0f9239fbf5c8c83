import os
import time
from functools import wraps

import psutil
from flask import jsonify, make_response

from common.exceptions import ApiError
from common.utils.logging_service import logger


def now_millis() -> int:
    return int(time.time() * 1000)


def time_it(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        logger.info(f"Starting {func.__name__}")
        start_time = time.time()
        result = func(*args, **kwargs)
        elapsed_time = time.time() - start_time
        logger.info(f"{func.__name__} completed in {elapsed_time:.2f}s")
        logger.debug(
            f"Memory usage: {psutil.Process(os.getpid()).memory_info().rss / 1024**2:.2f} MB"
        )

        return result

    return wrapper


def json_error(status_code, message):
    return make_response(jsonify({"error": message}), status_code)


def handle_api_errors(failure_message: str):
    """
    Route boundary: nothing raised by the view escapes as an unhandled error.

    Validation and not-found errors keep their own message, everything else
    is logged and answered with ``failure_message`` and a 500.
    """

    def decorator(function):
        @wraps(function)
        def wrapper(*args, **kwargs):
            try:
                return function(*args, **kwargs)
            except ApiError as e:
                if e.kind.is_failure:
                    logger.error(f"{function.__name__}: {e.message}")
                    return json_error(e.status_code, failure_message)
                return json_error(e.status_code, e.message)
            except Exception:
                logger.exception(f"{function.__name__}: unexpected error")
                return json_error(500, failure_message)

        return wrapper

    return decorator
