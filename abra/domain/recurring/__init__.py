"""Recurring jobs domain - weekly and fortnightly job templates"""

from .router import router

__all__ = ["router"]
