"""
Utility functions for JSON Schema to UML conversion.
"""

import string


def capitalize_first(text: str) -> str:
    """Uppercase the first character and keep the rest untouched.

    Examples:
        "address" -> "Address"
        "billingAddress" -> "BillingAddress"
        "" -> ""
    """
    if not text:
        return ""
    return text[0].upper() + text[1:]


def _letters(index: int) -> str:
    """Spreadsheet-style column label: 0 -> A, 25 -> Z, 26 -> AA."""
    label = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        label = string.ascii_uppercase[remainder] + label
    return label


def variant_label(index: int, style: str = "letters") -> str:
    """Suffix for the `index`-th generated variant subclass.

    Args:
        index: Zero-based position of the variant in its `oneOf`/`anyOf` array
        style: "letters" (A, B, ..., Z, AA, ...) or "numbers" (1, 2, ...)

    Returns:
        The suffix string
    """
    if index < 0:
        raise ValueError(f"Variant index must be positive, got {index}")
    if style == "numbers":
        return str(index + 1)
    if style == "letters":
        return _letters(index)
    raise ValueError(f"Unknown variant label style: {style}")
