# /edura/services/assignment_helpers/indexing.py

"""
Dense 1-based indexing for the ordered parts of assignment content (quiz
questions and flashcards).

Every function returns a new list whose `index` values are exactly 1..N, so
the stored order never has gaps or duplicates after an edit.
"""

import uuid
from typing import List, Optional, Sequence, TypeVar

from pydantic import BaseModel

from ...models.assignment_model import Flashcard

Item = TypeVar("Item", bound=BaseModel)


def renumber(items: Sequence[Item]) -> List[Item]:
    """Re-assigns `index` from list position, starting at 1."""
    return [item.model_copy(update={"index": position}) for position, item in enumerate(items, start=1)]


def insert_item(items: Sequence[Item], item: Item, position: Optional[int] = None) -> List[Item]:
    """
    Inserts `item` at the 1-based `position` (appends when omitted). Positions
    outside 1..N+1 are clamped.
    """
    updated = list(items)
    if position is None:
        updated.append(item)
    else:
        position = max(1, min(position, len(updated) + 1))
        updated.insert(position - 1, item)
    return renumber(updated)


def remove_item(items: Sequence[Item], item_id: str) -> List[Item]:
    remaining = [item for item in items if item.id != item_id]
    if len(remaining) == len(items):
        raise KeyError(item_id)
    return renumber(remaining)


def move_item(items: Sequence[Item], item_id: str, new_position: int) -> List[Item]:
    moving = next((item for item in items if item.id == item_id), None)
    if moving is None:
        raise KeyError(item_id)
    rest = [item for item in items if item.id != item_id]
    return insert_item(rest, moving, new_position)


def parse_flashcard_import(text: str, start_index: int = 1) -> List[Flashcard]:
    """
    Parses pasted flashcards.

    Two formats are recognised. If any line contains a tab, every line is read
    as `front<TAB>back` (extra tabs stay in the back). Otherwise non-blank lines
    are paired up as front, back, front, back. Pairs with an empty side are
    skipped. Indices continue from `start_index`.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    pairs = []

    if any("\t" in line for line in lines):
        for line in lines:
            parts = line.split("\t")
            if len(parts) >= 2:
                pairs.append((parts[0].strip(), "\t".join(parts[1:]).strip()))
    else:
        for i in range(0, len(lines), 2):
            front = lines[i].strip()
            back = lines[i + 1].strip() if i + 1 < len(lines) else ""
            pairs.append((front, back))

    cards = []
    for front, back in pairs:
        if front and back:
            cards.append(Flashcard(
                id=f"card_{uuid.uuid4().hex[:8]}",
                index=start_index + len(cards),
                front=front,
                back=back,
            ))
    return cards
