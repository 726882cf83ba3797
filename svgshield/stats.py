from __future__ import annotations

from dataclasses import dataclass

__all__ = ["SavingsStats", "format_bytes", "byte_size"]


def byte_size(text: str) -> int:
    """Size of the text in UTF-8 bytes."""
    return len(text.encode("utf-8"))


def format_bytes(n: int) -> str:
    """`"N bytes"` below 1 KiB, otherwise kilobytes with two decimals."""
    if n < 1024:
        return f"{n} bytes"
    return f"{n / 1024:.2f} KB"


@dataclass(frozen=True)
class SavingsStats:
    original_bytes: int
    optimized_bytes: int

    @classmethod
    def between(cls, original: str, optimized: str) -> "SavingsStats":
        return cls(byte_size(original), byte_size(optimized))

    @property
    def saved_bytes(self) -> int:
        return self.original_bytes - self.optimized_bytes

    @property
    def saving_percent(self) -> float:
        # пустой исходник: экономии нет
        if self.original_bytes == 0:
            return 0.0
        return self.saved_bytes / self.original_bytes * 100.0

    def message(self) -> str:
        return (
            f"SVG optimized. Reduced from {format_bytes(self.original_bytes)} "
            f"to {format_bytes(self.optimized_bytes)} ({self.saving_percent:.2f}% saved)"
        )

    def __add__(self, other: "SavingsStats") -> "SavingsStats":
        return SavingsStats(
            self.original_bytes + other.original_bytes,
            self.optimized_bytes + other.optimized_bytes,
        )
