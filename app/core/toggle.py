from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class ToggleResult:
    members: List[str]
    was_added: bool


def toggle_membership(collection: Sequence[str], candidate: str) -> ToggleResult:
    """
    Add or remove a candidate from a list used as a set.

    A present candidate loses its first occurrence, an absent one is appended.
    The input is never mutated and the order of the remaining members is kept.
    Callers apply the paired counter change and persist both sides themselves.
    """
    members = list(collection or [])
    for index, member in enumerate(members):
        if str(member) == candidate:
            del members[index]
            return ToggleResult(members=members, was_added=False)

    members.append(candidate)
    return ToggleResult(members=members, was_added=True)
