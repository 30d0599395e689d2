"""Event domain entity: an event (catering, sale) with its details and selected products."""
from datetime import date, datetime
from typing import Optional

from eatvienna.domain.Selection import Selection
from eatvienna.utilities.constants import DATE_FORMAT, DEFAULT_EVENT_TYPE


class EventDetails:
    def __init__(self, type: str = DEFAULT_EVENT_TYPE, name: str = "", ft: str = "", ka: str = "",
                 date: str = "", supplier_name: str = ""):
        self.type = type or DEFAULT_EVENT_TYPE
        self.name = name
        self.ft = ft
        self.ka = ka
        self.date = date
        self.supplier_name = supplier_name

    def __str__(self) -> str:
        return f"{self.type}: {self.name} ({self.date or '-'})"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, EventDetails):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        return EventDetails(
            type=d.get("type") or DEFAULT_EVENT_TYPE,
            name=d.get("name") or "",
            ft=d.get("ft") or "",
            ka=d.get("ka") or "",
            date=format_event_date(d.get("date")),
            supplier_name=d.get("supplier_name") or d.get("supplierName") or "",
        )

    def to_dict(self):
        return {
            "type": self.type,
            "name": self.name,
            "ft": self.ft,
            "ka": self.ka,
            "date": self.date,
            "supplier_name": self.supplier_name,
        }


def format_event_date(value) -> str:
    """Render dates, datetimes and ISO strings as DD.MM.YYYY; other strings are kept as-is."""
    if not value:
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime(DATE_FORMAT)
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text[:10]).strftime(DATE_FORMAT)
    except ValueError:
        return text


def parse_event_date(value: str) -> Optional[date]:
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None


class Event:
    def __init__(self, id: int = 0, details: Optional[EventDetails] = None, print: bool = False,
                 finished: bool = False, notes: str = "", products: Optional[Selection] = None,
                 ingredients: Optional[Selection] = None,
                 created_at: str = "", updated_at: str = ""):
        self.id = id
        self.details = details or EventDetails()
        self.print = print
        self.finished = finished
        self.notes = notes
        self.products = products or Selection()
        # ingredients entered by hand, added to the calculated totals as they are
        self.ingredients = ingredients or Selection()
        self.created_at = created_at
        self.updated_at = updated_at

    @property
    def name(self) -> str:
        return self.details.name

    def sort_key(self):
        # events without a date go last
        d = parse_event_date(self.details.date)
        return (d is None, d or date.max, self.id)

    def __str__(self) -> str:
        return f"#{self.id} {self.details}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        return Event(
            id=int(d.get("id") or 0),
            details=EventDetails.from_dict(d),
            print=bool(d.get("print", False)),
            finished=bool(d.get("finished", False)),
            notes=d.get("notes") or "",
            products=Selection.from_dict(d.get("products")),
            ingredients=Selection.from_dict(d.get("ingredients")),
            created_at=d.get("created_at") or "",
            updated_at=d.get("updated_at") or "",
        )

    def to_dict(self):
        data = {"id": self.id}
        data.update(self.details.to_dict())
        data.update({
            "print": self.print,
            "finished": self.finished,
            "notes": self.notes,
            "products": self.products.to_dict(),
            "ingredients": self.ingredients.to_dict(),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        })
        return data
