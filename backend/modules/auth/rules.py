"""
Account rules shared by signup and login.
"""

import re
from typing import Iterable, Optional

DEFAULT_ACADEMIC_SUFFIXES = (".edu", ".ac.in")

# Indian college domains that don't use .ac.in
DEFAULT_ACADEMIC_PATTERNS = (
    r"@.*college.*\.in$",
    r"@.*university.*\.in$",
    r"@.*institute.*\.in$",
    r"@axiscolleges\.in$",
)


def is_academic_email(
    email: Optional[str],
    suffixes: Iterable[str] = DEFAULT_ACADEMIC_SUFFIXES,
    patterns: Iterable[str] = DEFAULT_ACADEMIC_PATTERNS,
) -> bool:
    """
    Check whether an email belongs to an academic domain.

    Matches case-insensitively against the end of the address, or
    against any of the institutional domain patterns. A missing or
    blank email never matches.
    """
    if not email or not email.strip():
        return False
    normalized = email.strip().lower()
    if any(normalized.endswith(suffix.lower()) for suffix in suffixes if suffix):
        return True
    return any(re.search(pattern, normalized, re.IGNORECASE) for pattern in patterns if pattern)


def format_display_name(name: Optional[str], email: Optional[str]) -> str:
    """
    Pick a display name, falling back to the email's local part.

    A real name wins unless it is just the email prefix. Otherwise
    "jane.doe_smith@x.edu" becomes "Jane Doe Smith" and "jane@x.edu"
    becomes "Jane".
    """
    prefix = email.split("@")[0] if email else ""
    if name and name.strip() and name != prefix:
        return name.strip()

    if not prefix:
        return "User"

    if "." in prefix or "_" in prefix:
        words = prefix.replace(".", " ").replace("_", " ").split(" ")
        return " ".join(word[:1].upper() + word[1:].lower() for word in words)

    return prefix[:1].upper() + prefix[1:].lower()
