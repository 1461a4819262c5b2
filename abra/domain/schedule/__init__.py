"""Schedule domain - jobs, worker assignments and recurring job projection"""

from .router import router

__all__ = ["router"]
