# failscope/utils/callsite.py
"""
Call-site capture for raises.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


_CORE_ROOT = str(Path(__file__).resolve().parent.parent / "core")


@dataclass(frozen=True)
class CallSite:
    filename: str
    function: str
    lineno: int

    def __str__(self) -> str:
        return f"{Path(self.filename).name}:{self.lineno} in {self.function}()"


def capture_callsite(skip: int = 1) -> Optional[CallSite]:
    """
    First frame outside failscope.core, starting ``skip`` levels up.
    """
    frame = sys._getframe(skip)
    while frame is not None:
        filename = frame.f_code.co_filename
        if not filename.startswith(_CORE_ROOT):
            return CallSite(filename, frame.f_code.co_name, frame.f_lineno)
        frame = frame.f_back
    return None
