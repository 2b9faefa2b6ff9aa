from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException
from blockcms.domain.errors import CMSError


def error_response(message, status_code):
    response = jsonify({
        "error": message,
        "code": status_code
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(CMSError)
    def handle_cms_error(error):
        if error.status_code >= 500:
            current_app.logger.error("Request failed: %s", error.message)
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        current_app.logger.exception("Unhandled exception")
        return error_response("Internal server error", 500)


def register_jwt_error_handlers(jwt):
    """Every credential failure is a 401 in the common error shape."""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response("Missing authentication token", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response("Invalid authentication token", 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return error_response("Authentication token has expired", 401)
