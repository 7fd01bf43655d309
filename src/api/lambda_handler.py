# src/api/lambda_handler.py
"""
AWS Lambda handler for FastAPI using Mangum (ASGI adapter).

How it works:
- API Gateway invokes Lambda
- Mangum translates the event into an ASGI request
- FastAPI handles routing (/health, /options, /quote, /compare)
- Response is returned back to API Gateway

Rate tables:
- get_rate_tables() is triggered at import time (cold start) so warm
  invocations reuse the cached snapshot. Disable with PRELOAD_TABLES=false.
- Mangum runs the app startup event, which configures JSON logging.
"""

from __future__ import annotations

from mangum import Mangum

from src.api.app import CONFIG, app
from src.pricing.config import get_rate_tables


if CONFIG.preload_tables:
    get_rate_tables()


handler = Mangum(app, lifespan="auto")
