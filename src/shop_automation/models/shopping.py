from pydantic import BaseModel, Field, field_validator
from typing import Optional, List


class ShoppingListItem(BaseModel):
    """Shopping list entry; link is required but may be empty, meaning no attempt is possible"""
    name: str
    amount: Optional[str] = None
    link: str
    backup_link: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, value):
        # YAML turns "2" into an int
        if value is None:
            return None
        return str(value)

    @field_validator("link", mode="before")
    @classmethod
    def _link_as_text(cls, value):
        return "" if value is None else str(value).strip()

    @field_validator("backup_link", mode="before")
    @classmethod
    def _backup_as_text(cls, value):
        return None if value is None else str(value).strip()

    def candidate_links(self) -> List[str]:
        """Links to try, primary first"""
        links = []
        if self.link:
            links.append(self.link)
        if self.backup_link:
            links.append(self.backup_link)
        return links

    def has_usable_link(self) -> bool:
        return bool(self.candidate_links())


class ShoppingList(BaseModel):
    items: List[ShoppingListItem] = Field(default_factory=list)
