"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Size and time formatting for the CLI filters and the duplicate report.
"""
import re
import time

# Binary multiples; a bare number or a lone 'B' means bytes
_SIZE_UNITS = {"": 1, "B": 1}
for _power, _prefix in enumerate("KMGTP", start=1):
    _SIZE_UNITS[_prefix] = _SIZE_UNITS[_prefix + "B"] = 1024 ** _power

_SIZE_PATTERN = re.compile(r"^(-?\d+(?:\.\d+)?)\s*([KMGTP]?B?)$")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """Format a byte count with two decimals (5.00B, 1.50KB, 3.00MB)."""
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        for unit in ("B", "KB", "MB", "GB", "TB", "PB"):
            if value < 1024:
                return f"{value:.2f}{unit}"
            value /= 1024
        return f"{value:.2f}EB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parse '1.5GB', '2048KB', '1000', '1K', '10 mb' into bytes.
        Raises ValueError for negative sizes or anything else it cannot read.
        """
        normalized = size_str.strip().upper()
        match = _SIZE_PATTERN.match(normalized)
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 1K, 1M, etc."
            )

        number, unit = match.groups()
        value = float(number)
        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return int(value * _SIZE_UNITS[unit])

    @staticmethod
    def timestamp_to_human(timestamp: float, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """Local time for a Unix timestamp; 'Invalid timestamp' if it cannot be represented."""
        try:
            return time.strftime(fmt, time.localtime(timestamp))
        except (OverflowError, OSError, ValueError, TypeError):
            return "Invalid timestamp"
