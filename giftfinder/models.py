import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_NON_DIGITS = re.compile(r"[^0-9]")


class Criteria(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    occasion: str = Field("", description="Birthday, Anniversary, Graduation, etc")
    relationship: str = Field("", description="Relationship to giver (e.g., friend, partner, colleague)")
    age: str = Field("", description="Age in years, digits only")
    gender: str = Field("", description="he, she or they")
    interests: str = Field("", description="Hobbies/interests")
    notable_events: str = Field("", description="Recent events in the recipient's life")
    min_price: str = Field("", description="Lower price bound in USD, digits only")
    max_price: str = Field("", description="Upper price bound in USD, digits only")

    @field_validator("age", "min_price", "max_price", mode="before")
    @classmethod
    def _digits_only(cls, v):
        if v is None:
            return ""
        return _NON_DIGITS.sub("", str(v))

    @field_validator("occasion", "relationship", "gender", mode="before")
    @classmethod
    def _lower_choice(cls, v):
        if v is None:
            return ""
        return str(v).lower()

    @field_validator("interests", "notable_events", mode="before")
    @classmethod
    def _text(cls, v):
        return "" if v is None else str(v)


class GiftIdea(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    description: str = ""
    purchase_link: str = Field("", alias="purchaseLink")


class HistoryTracker(BaseModel):
    """Linear back/forward history of fetched result sets.

    ``cursor`` stays in ``[-1, len(entries) - 1]``.  Pushing while the cursor
    is not at the end drops everything after it first.
    """

    entries: List[List[GiftIdea]] = Field(default_factory=list)
    cursor: int = -1

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def current(self) -> List[GiftIdea]:
        if self.cursor < 0:
            return []
        return list(self.entries[self.cursor])

    @property
    def can_go_back(self) -> bool:
        return self.cursor > 0

    @property
    def can_go_forward(self) -> bool:
        return self.cursor < len(self.entries) - 1

    def push(self, entry: List[GiftIdea]) -> None:
        del self.entries[self.cursor + 1:]
        self.entries.append(list(entry))
        self.cursor = len(self.entries) - 1

    def back(self) -> Optional[List[GiftIdea]]:
        if not self.can_go_back:
            return None
        self.cursor -= 1
        return self.current

    def forward(self) -> Optional[List[GiftIdea]]:
        if not self.can_go_forward:
            return None
        self.cursor += 1
        return self.current


class AppState(BaseModel):
    criteria: Criteria = Field(default_factory=Criteria)
    gift_ideas: List[GiftIdea] = Field(default_factory=list)
    error: Optional[str] = None
    card_message: str = ""
    is_loading: bool = False
    is_generating_message: bool = False
    history: HistoryTracker = Field(default_factory=HistoryTracker)

    @property
    def busy(self) -> bool:
        return self.is_loading or self.is_generating_message

    @property
    def has_occasion(self) -> bool:
        return bool(self.criteria.occasion.strip())

    @property
    def can_find_gifts(self) -> bool:
        return not self.busy and self.has_occasion

    @property
    def can_refresh(self) -> bool:
        return self.can_find_gifts and len(self.gift_ideas) > 0

    @property
    def can_generate_message(self) -> bool:
        return not self.busy and self.has_occasion

    @property
    def can_go_back(self) -> bool:
        return not self.busy and self.history.can_go_back

    @property
    def can_go_forward(self) -> bool:
        return not self.busy and self.history.can_go_forward
