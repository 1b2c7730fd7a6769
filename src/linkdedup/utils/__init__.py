"""Small formatting and parsing helpers shared by the CLI and core."""

from .convert_utils import ConvertUtils

__all__ = ["ConvertUtils"]
