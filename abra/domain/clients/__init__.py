"""Clients domain - saved addresses used to pre-fill jobs"""

from .router import router

__all__ = ["router"]
