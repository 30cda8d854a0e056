from .result import Error, Result, Return

__all__ = ["Error", "Result", "Return"]
