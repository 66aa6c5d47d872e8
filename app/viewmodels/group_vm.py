from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from app.viewmodels.photo_vm import PhotoVM


@dataclass
class GroupVM:
    title: str
    items: List[PhotoVM] = field(default_factory=list)
    is_separator: bool = False
