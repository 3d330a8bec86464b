"""HTTP services for dayglance."""

from .server import app, get_schedule_service, run_local_server

__all__ = ["app", "get_schedule_service", "run_local_server"]
