def format_number(value: float) -> str:
    """Whole numbers without decimals, otherwise one decimal place"""
    if value == round(value):
        return str(int(value))
    return f"{value:.1f}"


def format_fixed(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}"


def truncate(text: str, max_len: int = 64) -> str:
    return text if len(text) <= max_len else text[:max_len - 1] + "…"
