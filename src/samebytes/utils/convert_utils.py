"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Size strings for --file-size and --block-size, and the byte counts in the statistics summary.
"""

import re

# Binary multiples: position in this string is the power of 1024
_UNIT_ORDER = "BKMGTP"
_HUMAN_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
_SIZE_PATTERN = re.compile(r"(?P<number>-?\d+(?:\.\d+)?)\s*(?P<unit>[KMGTP]?B?)")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """Byte count as a string with two decimals and a binary unit (e.g., 1.50KB)."""
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        for unit in _HUMAN_UNITS[:-1]:
            if value < 1024:
                return f"{value:.2f}{unit}"
            value /= 1024
        return f"{value:.2f}{_HUMAN_UNITS[-1]}"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parse '1000', '4K', '64KB', '1.5M', '2gb'... into a byte count.
        Case and surrounding whitespace are ignored. A fraction needs a unit.
        Raises ValueError for negative or malformed sizes.
        """
        match = _SIZE_PATTERN.fullmatch(size_str.strip().upper())
        if match is None:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1000, 4K, 64KB, 1.5M, 2GB"
            )

        number, unit = match.group("number"), match.group("unit")
        if number.startswith("-"):
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        if not unit and "." in number:
            raise ValueError(f"A size in bytes must be a whole number: '{size_str}'")

        factor = 1024 ** _UNIT_ORDER.index(unit[0]) if unit else 1
        return int(float(number) * factor)

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        try:
            ConvertUtils.human_to_bytes(size_str)
        except ValueError:
            return False
        return True
