"""
Tests for size conversion utilities — used to parse the buffer size.
"""
import pytest
from cmpfiles.utils.convert_utils import ConvertUtils


class TestHumanToBytes:
    """Test conversion from human-readable sizes (e.g., "64K") to bytes."""

    def test_bytes_without_suffix(self):
        """Plain numbers should be interpreted as bytes."""
        assert ConvertUtils.human_to_bytes("0") == 0
        assert ConvertUtils.human_to_bytes("1") == 1
        assert ConvertUtils.human_to_bytes("16384") == 16384

    def test_bytes_with_b_suffix(self):
        assert ConvertUtils.human_to_bytes("1B") == 1
        assert ConvertUtils.human_to_bytes("1024B") == 1024

    def test_kilobytes(self):
        """KB suffix should multiply by 1024 (binary, not decimal)."""
        assert ConvertUtils.human_to_bytes("1KB") == 1024
        assert ConvertUtils.human_to_bytes("64K") == 64 * 1024
        assert ConvertUtils.human_to_bytes("1.5KB") == 1536
        assert ConvertUtils.human_to_bytes("0.5K") == 512

    def test_larger_units(self):
        assert ConvertUtils.human_to_bytes("1M") == 1024 ** 2
        assert ConvertUtils.human_to_bytes("1MB") == 1024 ** 2
        assert ConvertUtils.human_to_bytes("2G") == 2 * 1024 ** 3
        assert ConvertUtils.human_to_bytes("1TB") == 1024 ** 4

    def test_case_insensitivity(self):
        assert ConvertUtils.human_to_bytes("64k") == 64 * 1024
        assert ConvertUtils.human_to_bytes("1mb") == 1024 ** 2

    def test_whitespace_tolerance(self):
        assert ConvertUtils.human_to_bytes(" 1KB ") == 1024
        assert ConvertUtils.human_to_bytes("\t1M\n") == 1024 ** 2

    def test_rejects_negative_values(self):
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes("-1")
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes("-1K")

    @pytest.mark.parametrize("value", ["infK", "nanK", "-infM", "1e308P"])
    def test_rejects_non_finite_values(self, value):
        with pytest.raises(ValueError, match="finite"):
            ConvertUtils.human_to_bytes(value)

    @pytest.mark.parametrize("value", ["", "   ", "invalid", "1.2.3KB", "1KB2", "1 XB", "KB", "inf", "nan"])
    def test_rejects_invalid_formats(self, value):
        with pytest.raises(ValueError):
            ConvertUtils.human_to_bytes(value)


class TestBytesToHuman:
    """Test conversion from bytes to human-readable format."""

    def test_bytes_range(self):
        assert ConvertUtils.bytes_to_human(0) == "0B"
        assert ConvertUtils.bytes_to_human(512) == "512B"
        assert ConvertUtils.bytes_to_human(1023) == "1023B"

    def test_kilobytes_range(self):
        assert ConvertUtils.bytes_to_human(1024) == "1.00KB"
        assert ConvertUtils.bytes_to_human(16384) == "16.00KB"
        assert ConvertUtils.bytes_to_human(1500) == "1.46KB"

    def test_megabytes_and_gigabytes(self):
        assert ConvertUtils.bytes_to_human(1024 ** 2) == "1.00MB"
        assert ConvertUtils.bytes_to_human(int(1.5 * 1024 ** 2)) == "1.50MB"
        assert ConvertUtils.bytes_to_human(1024 ** 3) == "1.00GB"
