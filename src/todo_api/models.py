from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4

# Reserved identity meaning "no specific todo was addressed".
EMPTY_ID = UUID(int=0)


# PUBLIC_INTERFACE
@dataclass
class Todo:
    """
    Domain entity representing a Todo item.

    Fields:
    - title: Short title; not validated here, see the per-use-case specifications
    - is_complete: Boolean completion flag
    - id: Unique identifier, generated on construction and never reassigned
    """

    title: str
    is_complete: bool = False
    id: UUID = field(default_factory=uuid4)
