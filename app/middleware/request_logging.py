from fastapi import Request
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        method = request.method
        path = request.url.path
        query_string = request.url.query
        has_auth = "Authorization" in request.headers

        logger.info(f"Request: {method} {path} {query_string} (auth header: {'yes' if has_auth else 'no'})")

        response = await call_next(request)

        process_time = time.time() - start_time
        if response.status_code in (401, 403):
            logger.warning(f"Auth error: {response.status_code} on {path}")
        logger.info(f"Response: {response.status_code} in {process_time:.4f}s")

        return response
