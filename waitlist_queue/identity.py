from __future__ import annotations

# Member identity.
#
# A person is recognised by the pair (first name, last initial) derived from
# the full name they type. Matching is exact: "john" and "John" are different
# people, and so are two Johns whose surnames start with different letters.
# Two people sharing a first name and last initial collide.

from typing import NamedTuple

from .errors import ValidationError


class IdentityKey(NamedTuple):
    first_name: str
    last_initial: str = ""

    def display_name(self) -> str:
        if not self.last_initial:
            return self.first_name
        return f"{self.first_name} {self.last_initial}."


def parse_name(raw: str) -> IdentityKey:
    """Derive the identity key from a raw full-name input.

    Args:
        raw: whatever the user typed, e.g. "  Alice  Brown ".

    Returns:
        IdentityKey("Alice", "B"). A single token gives an empty initial.

    Raises:
        ValidationError: if the input is empty or whitespace only.
    """
    parts = raw.split()
    if not parts:
        raise ValidationError("empty name")

    first_name = parts[0]
    last_initial = parts[-1][0].upper() if len(parts) > 1 else ""
    return IdentityKey(first_name, last_initial)
