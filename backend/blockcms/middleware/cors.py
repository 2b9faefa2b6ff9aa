from flask import request

ALLOWED_METHODS = "GET,POST,PUT,PATCH,DELETE,OPTIONS"


def cors_middleware(app):
    """
    Echo allow-listed origins back with credentials so the admin SPA can
    send the auth cookie. An empty allow-list leaves responses untouched.
    """
    allowed = app.config.get("CORS_ALLOWED_ORIGINS") or []
    if not allowed:
        return

    @app.after_request
    def apply_cors(response):
        origin = request.headers.get("Origin")
        if not origin or origin not in allowed:
            return response

        response.headers.add("Vary", "Origin")
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        requested = request.headers.get("Access-Control-Request-Headers")
        if requested:
            response.headers["Access-Control-Allow-Headers"] = requested
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Max-Age"] = "600"
        return response
