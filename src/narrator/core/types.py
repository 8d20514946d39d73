"""Shared type aliases for the core and domain layers."""
from typing import Any, Dict, Literal

JsonDict = Dict[str, Any]
QueryNamespace = Literal["currentStory", "global", "local"]
LogLevel = Literal["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]

__all__ = ["JsonDict", "LogLevel", "QueryNamespace"]
