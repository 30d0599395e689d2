"""
Input validation schemas using Pydantic for the JSON API.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Optional

from eatvienna.domain.Event import EventDetails
from eatvienna.domain.Selection import Selection, SelectedProduct, WriteKind, parse_quantity
from eatvienna.utilities.constants import DEFAULT_EVENT_TYPE, NACHBESTELLUNG_STATUSES, ITEM_STATUSES


class ProductQuantityInput(BaseModel):
    """Ordered menu item; unparseable or too small quantities become 1."""
    quantity: int = 1
    unit: str = ""

    @field_validator('quantity', mode='before')
    @classmethod
    def clamp_quantity(cls, v):
        return parse_quantity(v, minimum=1)


class IngredientQuantityInput(BaseModel):
    """Manual ingredient entry; unparseable or negative quantities become 0."""
    quantity: int = 0
    unit: str = ""

    @field_validator('quantity', mode='before')
    @classmethod
    def clamp_quantity(cls, v):
        return parse_quantity(v, minimum=0)


def _to_selection(entries) -> Selection:
    return Selection({name: SelectedProduct(e.quantity, e.unit)
                      for name, e in entries.items() if name.strip() and e.quantity > 0})


class CalculationInput(BaseModel):
    """Schema for an ad-hoc ingredient calculation."""
    products: Dict[str, ProductQuantityInput] = Field(default_factory=dict)
    ingredients: Dict[str, IngredientQuantityInput] = Field(default_factory=dict)

    def products_selection(self) -> Selection:
        return _to_selection(self.products)

    def ingredients_selection(self) -> Selection:
        return _to_selection(self.ingredients)


class SelectionInput(CalculationInput):
    """Schema for replacing the stored selection of an event."""


class QuantityWriteInput(BaseModel):
    """Schema for an ADD ("add N more") or SET ("set to exactly N") write."""
    name: str = Field(..., min_length=1, max_length=200)
    kind: WriteKind = WriteKind.ADD
    amount: int = 1
    unit: str = ""
    target: str = Field("products", pattern=r'^(products|ingredients)$')

    @field_validator('name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('amount', mode='before')
    @classmethod
    def parse_amount(cls, v):
        # ADD may be negative ("one less"); unparseable input is a no-op write
        try:
            return int(float(str(v).strip().replace(',', '.')))
        except (TypeError, ValueError, OverflowError):
            return 0


class EventInput(BaseModel):
    """Schema for creating or updating an event."""
    type: str = DEFAULT_EVENT_TYPE
    name: str = Field(..., min_length=1, max_length=200)
    ft: str = ""
    ka: str = ""
    date: str = ""
    supplier_name: str = ""
    notes: Optional[str] = None

    @field_validator('name', 'type', 'ft', 'ka', 'supplier_name')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

    def to_details(self) -> EventDetails:
        return EventDetails.from_dict(self.model_dump())


class FlagInput(BaseModel):
    value: bool


class NotesInput(BaseModel):
    notes: str = ""


class ReorderEntryInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    quantity: int = 0
    unit: str = ""
    packaging_unit: str = ""
    category: str = ""

    @field_validator('quantity', mode='before')
    @classmethod
    def clamp_quantity(cls, v):
        return parse_quantity(v, minimum=0)


class NachbestellungInput(BaseModel):
    """Schema for creating a Nachbestellung."""
    event_id: int = Field(..., ge=1)
    products: List[ReorderEntryInput] = Field(default_factory=list)
    ingredients: List[ReorderEntryInput] = Field(default_factory=list)
    notes: str = ""
    created_by: str = ""

    @model_validator(mode='after')
    def validate_not_empty(self):
        if not self.products and not self.ingredients:
            raise ValueError('Nachbestellung must contain at least one product or ingredient')
        return self


class StatusInput(BaseModel):
    status: str
    user: str = ""

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v not in NACHBESTELLUNG_STATUSES:
            raise ValueError(f'Unknown status: {v}')
        return v


class ItemUpdateInput(BaseModel):
    status: Optional[str] = None
    is_packed: Optional[bool] = None

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v is not None and v not in ITEM_STATUSES:
            raise ValueError(f'Unknown item status: {v}')
        return v


class PushKeysInput(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class PushSubscriptionInput(BaseModel):
    user_email: str = Field(..., min_length=3)
    endpoint: str = Field(..., min_length=1)
    keys: PushKeysInput


class CategoryInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip()


class ProductInput(BaseModel):
    """Schema for creating or updating a catalog product."""
    name: str = Field(..., min_length=1, max_length=200)
    unit: str = ""
    category_id: Optional[int] = None

    @field_validator('name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v
