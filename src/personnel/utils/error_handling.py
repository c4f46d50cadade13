"""
Centralized Error Handling and Logging
Request trace ids, structured error logs with PII redaction, and uniform JSON error bodies.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from contextvars import ContextVar

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'secret', 'authorization', 'credential', 'api_key',
        'national_id', 'nationalid'
    ]

    LOG_REQUEST_BODIES = True
    MAX_BODY_LOG_SIZE = 5000  # Truncate large bodies

    INCLUDE_TRACE_ID = True
    INCLUDE_TIMESTAMP = True

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        """Check if a field contains sensitive data"""
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, str, Any]) -> Any:
        """Recursively redact sensitive data before it is logged"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(str(key)) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, str) and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        else:
            return data

    @classmethod
    def sanitize_body(cls, body: Optional[bytes]) -> Any:
        """Decode a captured request body and redact it"""
        if not body:
            return None
        try:
            text = body.decode('utf-8')
        except UnicodeDecodeError:
            return "DECODE_ERROR"
        try:
            return cls.sanitize_data(json.loads(text))
        except ValueError:
            return cls.sanitize_data(text)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_trace_id() -> str:
    return str(uuid.uuid4())[:8]


class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True,
        level: int = logging.ERROR
    ) -> str:
        """Log one structured error entry and return its trace id"""

        trace_id = request_id_var.get('') or _new_trace_id()

        log_entry = {
            "timestamp": _utc_timestamp(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": logging.getLevelName(level)
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent", "unknown")
            }
            if ErrorHandlingConfig.LOG_REQUEST_BODIES:
                log_entry["request"]["body"] = ErrorHandlingConfig.sanitize_body(
                    getattr(request.state, 'captured_body', None)
                )

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
                "module": getattr(exception, '__module__', 'unknown')
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        logger.log(level, json.dumps(log_entry, indent=2, default=str))

        return trace_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to capture request context and add request IDs"""

    async def dispatch(self, request: Request, call_next):
        trace_id = _new_trace_id()
        request_id_var.set(trace_id)

        # Keep the body around for error logging
        body = None
        if ErrorHandlingConfig.LOG_REQUEST_BODIES and request.method in ("POST", "PUT", "PATCH"):
            body = await request.body()

        request.state.captured_body = body
        request.state.trace_id = trace_id

        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        return response


def _error_response(status_code: int, content: Dict[str, Any], trace_id: Optional[str]) -> JSONResponse:
    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        content["trace_id"] = trace_id
    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        content["timestamp"] = _utc_timestamp()
    return JSONResponse(status_code=status_code, content=content)


# Global Exception Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with logging"""

    # detail is either a plain message or {"message": ..., "errors": {...}}
    if isinstance(exc.detail, dict):
        message = exc.detail.get("message", f"HTTP {exc.status_code}")
        errors = exc.detail.get("errors")
    else:
        message = exc.detail
        errors = None

    trace_id = StructuredLogger.log_error(
        f"http_{exc.status_code}",
        f"HTTP {exc.status_code}: {message}",
        request=request,
        exception=exc if exc.status_code >= 500 else None,
        extra_context={"status_code": exc.status_code, "errors": errors} if errors else None,
        include_traceback=exc.status_code >= 500,
        level=logging.ERROR if exc.status_code >= 500 else logging.WARNING
    )

    content = {
        "error": f"HTTP {exc.status_code}",
        "message": message,
    }
    if errors:
        content["errors"] = errors

    response = _error_response(exc.status_code, content, trace_id)
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request schema errors (HTTP 422)"""

    validation_details = []
    for error in exc.errors():
        validation_details.append({
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown")
        })

    trace_id = StructuredLogger.log_error(
        "validation_error_422",
        f"Request validation failed: {len(validation_details)} validation errors",
        request=request,
        extra_context={"validation_errors": validation_details},
        include_traceback=False,
        level=logging.WARNING
    )

    content = {
        "error": "Validation Error",
        "message": "Request validation failed",
        "detail": validation_details,
        "error_count": len(validation_details)
    }
    return _error_response(422, content, trace_id)

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions"""

    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        include_traceback=True
    )

    # Don't expose internal details
    content = {
        "error": "Internal Server Error",
        "message": "An unexpected error occurred",
    }
    return _error_response(500, content, trace_id)

def setup_error_handling(app):
    """Setup error handling for a FastAPI app"""

    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
