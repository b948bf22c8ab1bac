"""HTTP middleware: request timeout and request ID.

Applied in main app; order matters (last added = outermost).
"""

from music_api.middleware.request_id import RequestIDMiddleware, request_id_ctx
from music_api.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware", "request_id_ctx"]
