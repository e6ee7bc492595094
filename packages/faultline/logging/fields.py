"""Canonical logging field names.

These constants define a stable key set for structured logs and context
propagation.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Error fields.
ERROR = "error"
ERROR_DETAILS = "error_details"
ERROR_EVENT = "request_error"

# Request fields.
HTTP_METHOD = "http_method"
HTTP_PATH = "http_path"
HTTP_STATUS = "http_status"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"

# Fields passed through ``extra=`` that formatters lift into the payload.
RECORD_FIELDS = (EVENT, ERROR, ERROR_DETAILS, HTTP_STATUS)
