from typing import Optional

from pydantic import BaseModel


class IncomingGoal(BaseModel):
    """Goal dropped into the inbox folder, e.g. by an iOS Shortcut."""

    title: str
    category: str = "Personal"
    notes: Optional[str] = None
