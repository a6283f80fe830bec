"""Hilfsfunktionen – Formatierung von Byte-Größen."""

UNITS = ("Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def format_bytes(size_bytes: int, decimals: int = 2) -> str:
    """Konvertiert Bytes in menschenlesbare Größe (Basis 1024, wie Explorer).

    Gewählt wird die größte Einheit, bei der der Wert noch >= 1 ist. Gerundet
    wird auf ``decimals`` Stellen, überflüssige Nullen entfallen
    (1536 → "1.5 KB", 1024 → "1 KB").
    """
    if size_bytes < 0:
        raise ValueError(f"Negative Größe: {size_bytes}")
    if size_bytes == 0:
        return "0 Bytes"

    value = float(size_bytes)
    index = 0
    while value >= 1024 and index < len(UNITS) - 1:
        value /= 1024
        index += 1

    text = f"{round(value, max(decimals, 0)):.{max(decimals, 0)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {UNITS[index]}"
