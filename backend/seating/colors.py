"""Display palettes for seats, seat statuses and split checks."""

# Per-seat-number palette (high contrast on dark backgrounds).
# Seat 1 -> index 0, wraps modulo the palette length.
SEAT_COLORS = [
    "#6366f1",  # indigo
    "#f59e0b",  # amber
    "#10b981",  # emerald
    "#ef4444",  # red
    "#06b6d4",  # cyan
    "#f97316",  # orange
    "#8b5cf6",  # violet
    "#ec4899",  # pink
]

SEAT_EMPTY_COLOR = "#6b7280"  # gray

SEAT_STATUS_COLORS = {
    "empty": "#6b7280",
    "stale": "#f59e0b",
    "active": "#22c55e",
    "printed": "#3b82f6",
    "paid": "#a855f7",
}


def seat_color(seat_number: int, has_items: bool = True) -> str:
    """Solid color for a seat number; gray when the seat holds nothing."""
    if not has_items:
        return SEAT_EMPTY_COLOR
    return SEAT_COLORS[(seat_number - 1) % len(SEAT_COLORS)]


def palette_color(position: int) -> str:
    """Color for the Nth (1-based) generic check."""
    return SEAT_COLORS[(position - 1) % len(SEAT_COLORS)]
