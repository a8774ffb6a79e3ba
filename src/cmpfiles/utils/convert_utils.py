"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import math

# Longest suffix first so 'KB' is never read as 'K' + 'B'
_SIZE_UNITS = (
    ('PB', 1024 ** 5), ('TB', 1024 ** 4), ('GB', 1024 ** 3),
    ('MB', 1024 ** 2), ('KB', 1024),
    ('P', 1024 ** 5), ('T', 1024 ** 4), ('G', 1024 ** 3),
    ('M', 1024 ** 2), ('K', 1024),
    ('B', 1),
)


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 16.00KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"
        if size_bytes < 1024:
            return f"{size_bytes}B"

        value = float(size_bytes)
        for unit in ("KB", "MB", "GB", "TB", "PB"):
            value /= 1024
            if value < 1024:
                return f"{value:.2f}{unit}"
        return f"{value / 1024:.2f}EB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert a buffer size string to bytes.
        Supports formats: '16384', '16K', '16KB', '1.5M', '1MB', etc.
        Raises ValueError for negative sizes or invalid formats.
        """
        size_str = str(size_str).strip().upper()
        if not size_str:
            raise ValueError("Size cannot be empty")

        for unit, multiplier in _SIZE_UNITS:
            if size_str.endswith(unit):
                value_str = size_str[:-len(unit)].strip()
                try:
                    value = float(value_str)
                except ValueError:
                    raise ValueError(f"Invalid numeric value in size: '{value_str}'")

                if not math.isfinite(value * multiplier):
                    raise ValueError(f"Size must be a finite number: '{size_str}'")

                if value < 0:
                    raise ValueError(f"Negative size not allowed: '{size_str}'")
                return int(value * multiplier)

        try:
            value = int(size_str)
        except ValueError:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 16384, 16K, 64KB, 1M, etc."
            )

        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return value
