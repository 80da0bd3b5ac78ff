import math


def escape_html(s: str = "") -> str:
    """Escape the five markup-significant characters, ampersand first."""
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def format_number(value: float) -> str:
    """Shortest decimal form for SVG/CSS output (180.0 -> "180", 0.25 -> "0.25")."""
    if not math.isfinite(value):
        raise ValueError(f"cannot format non-finite number: {value!r}")
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")
