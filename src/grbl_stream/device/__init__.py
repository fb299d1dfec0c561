from .grbl import GrblDevice

__all__ = ["GrblDevice"]
