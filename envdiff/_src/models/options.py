from typing import Optional

from pydantic import BaseModel

from envdiff._src.constants import DiffMode


class DiffOptions(BaseModel):
    """How a two-way diff is reported"""
    # only records from this channel are printed, None prints everything
    channel: Optional[str] = None
    mode: DiffMode = DiffMode.BOTH
    column_format: bool = False
