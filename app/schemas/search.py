from typing import Literal

from pydantic import BaseModel

class SearchResult(BaseModel):
    id: int
    type: Literal["user", "plan"]
    title: str
    subtitle: str
    link: str
