from .auth import AuthController

__all__ = ["AuthController"]
