# mediasync/schemas/media.py
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Operator = Literal["==", "!=", ">=", "<=", ">", "<"]


class MediaItem(BaseModel):
    name: str
    full_path: str
    relative_path: str  # '/'-separated, no leading separator; join key with the destination

    def destination_path(self, dest_root: Path | str) -> Path:
        """Where this item lands under dest_root."""
        return Path(dest_root).joinpath(*self.relative_path.split("/"))


class Condition(BaseModel):
    operator: Operator
    year: int


class CopyTask(BaseModel):
    item: MediaItem
    target: str


class SyncPlan(BaseModel):
    to_copy: List[CopyTask] = Field(default_factory=list)
    already_present: List[MediaItem] = Field(default_factory=list)
    to_delete: List[MediaItem] = Field(default_factory=list)


class SyncOptions(BaseModel):
    simulate: bool = False
    difference: bool = False
    delete: bool = False
    progress_size: bool = False
    assume_yes: bool = False


class BatchResult(BaseModel):
    action: Literal["copy", "delete"]
    total: int = 0
    done: int = 0
    bytes_processed: int = 0
    declined: bool = False
    total_bytes: Optional[int] = None
