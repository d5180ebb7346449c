# Middleware package init
"""
SightSharing Backend: Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and the X-Request-ID header
    2. Logging: method, path, status, and duration of every request
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
