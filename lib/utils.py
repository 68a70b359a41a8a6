# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small string helpers used across the application.
# =============================================================================


# =============================================================================
# Prefix / Suffix Checks
# =============================================================================

def starts_with(needle: str, haystack: str, length: int = 1) -> bool:
    """
    Compare the first `length` characters of `haystack` with `needle`.

    The comparison is exact: `needle` must be `length` characters long to
    ever match.

    Example:
        starts_with("Exa", "Example string", 3)  # True
        starts_with("Ex", "Example string", 3)   # False
        starts_with("E", "Example string")       # True
    """
    return haystack[:length] == needle


def ends_with(needle: str, haystack: str, length: int = 1) -> bool:
    """
    Compare the last `length` characters of `haystack` with `needle`.

    Example:
        ends_with("ing", "Example string", 3)  # True
        ends_with("g", "Example string")       # True
    """
    if length <= 0:
        return needle == ""
    return haystack[-length:] == needle


# =============================================================================
# Case Conversion
# =============================================================================

def underscore_to_camel_case(value: str) -> str:
    """
    Convert snake_case to CamelCase.

    Example:
        underscore_to_camel_case("example_string")  # "ExampleString"
        underscore_to_camel_case("index_action")    # "IndexAction"
    """
    return "".join(part[:1].upper() + part[1:] for part in value.split("_"))
