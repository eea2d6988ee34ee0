from . import auth, report

__all__ = ["auth", "report"]
