import re
from typing import Optional, Tuple

CONVENTIONAL_RE = re.compile(r"^([a-z]+)(\([^)]+\))?!?:", re.IGNORECASE)
MERGE_RE = re.compile(r"^merge\b", re.IGNORECASE)
REVERT_RE = re.compile(r"^revert\b", re.IGNORECASE)
CHERRY_PICK_RE = re.compile(r"cherry[\s-]?pick", re.IGNORECASE)

# (kind, display label), checked in this order
RELATIONS = (
    ("merge", "Merge", MERGE_RE),
    ("revert", "Revert", REVERT_RE),
    ("cherry-pick", "Cherry-pick", CHERRY_PICK_RE),
)


def relation_of(message: str) -> Optional[Tuple[str, str]]:
    """Returns (kind, label) when the message is a merge, revert or cherry-pick."""
    for kind, label, pattern in RELATIONS:
        if pattern.search(message):
            return kind, label
    return None


def commit_type(message: str) -> str:
    """Infers the commit type shown on a flow group.

    'feat(ui)!: ...' -> 'feat'. Messages without a conventional prefix fall
    back to their relation kind, or 'commit'.
    """
    match = CONVENTIONAL_RE.match(message)
    if match:
        return match.group(1).lower()

    relation = relation_of(message)
    if relation:
        return relation[0]
    return "commit"
