from svgshield.stats import SavingsStats, byte_size, format_bytes


def test_format_bytes():
    assert format_bytes(0) == "0 bytes"
    assert format_bytes(1023) == "1023 bytes"
    assert format_bytes(1024) == "1.00 KB"
    assert format_bytes(1536) == "1.50 KB"


def test_message():
    stats = SavingsStats(2048, 1024)
    assert stats.saved_bytes == 1024
    assert stats.saving_percent == 50.0
    assert stats.message() == "SVG optimized. Reduced from 2.00 KB to 1.00 KB (50.00% saved)"


def test_small_sizes_in_bytes():
    assert SavingsStats(400, 300).message() == "SVG optimized. Reduced from 400 bytes to 300 bytes (25.00% saved)"


def test_empty_original():
    assert SavingsStats(0, 0).saving_percent == 0.0


def test_utf8_sizes_and_sum():
    assert byte_size("й") == 2
    total = SavingsStats.between("ab", "a") + SavingsStats(10, 5)
    assert total == SavingsStats(12, 6)
