import json
import logging

from flask import has_request_context, request


class JsonLogFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, self.datefmt),
        }
        if has_request_context():
            payload.update(
                {
                    "method": request.method,
                    "path": request.path,
                    "tenant": request.headers.get("X-Tenant-ID", ""),
                }
            )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter())

    package_logger = logging.getLogger("blockcms")
    # Avoid duplicate attachment when the factory runs more than once (tests)
    if not any(isinstance(h.formatter, JsonLogFormatter) for h in package_logger.handlers):
        package_logger.addHandler(handler)
    package_logger.setLevel(level)

    app.logger.handlers = [handler]
    app.logger.setLevel(level)
