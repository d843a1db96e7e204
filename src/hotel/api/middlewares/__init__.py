from src.hotel.api.middlewares.logging_context import logging_context_middleware
from src.hotel.api.middlewares.request_tracking import request_tracking_middleware

__all__ = ["logging_context_middleware", "request_tracking_middleware"]
