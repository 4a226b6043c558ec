from __future__ import annotations

import time
from copy import deepcopy
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping


@dataclass
class HistoryEntry:
    config: Dict[str, Any]
    instruction: str = ""
    ts: float = field(default_factory=lambda: time.time())


class ConfigHistory:
    """Append-only log of full configurations; undo drops the newest entry.

    The base entry (the configuration the history was started from) is
    never removed.
    """

    def __init__(self, base: Mapping[str, Any]) -> None:
        self.entries: List[HistoryEntry] = [HistoryEntry(config=deepcopy(dict(base)))]

    def push(self, config: Mapping[str, Any], instruction: str = "") -> None:
        self.entries.append(HistoryEntry(config=deepcopy(dict(config)), instruction=instruction))

    @property
    def current(self) -> Dict[str, Any]:
        return deepcopy(self.entries[-1].config)

    @property
    def can_undo(self) -> bool:
        return len(self.entries) > 1

    def undo(self) -> Dict[str, Any]:
        if self.can_undo:
            self.entries.pop()
        return self.current

    def instructions(self) -> List[str]:
        return [entry.instruction for entry in self.entries if entry.instruction]

    def __len__(self) -> int:
        return len(self.entries)

    def to_json(self) -> List[Dict[str, Any]]:
        return [asdict(entry) for entry in self.entries]
