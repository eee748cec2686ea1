"""Cookie attributes for Set-Cookie serialization."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Fixed English names; strftime's %a/%b follow the process locale.
_WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

EPOCH = datetime(1970, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class Cookie(BaseModel):
    """The attributes of a single cookie. The cookie name is passed separately.

    Attributes:
        value: The cookie value. None serializes as an empty value.
        domain: Optional Domain attribute.
        path: Optional Path attribute, "/" unless overridden.
        expires: Optional expiry. Naive datetimes are taken to be UTC.
        secure: Emit the Secure flag.
        http_only: Emit the HttpOnly flag.
    """

    value: Optional[str] = Field(default=None)
    domain: Optional[str] = Field(default=None)
    path: Optional[str] = Field(default="/")
    expires: Optional[datetime] = Field(default=None)
    secure: bool = Field(default=False)
    http_only: bool = Field(default=False)

    model_config = ConfigDict(frozen=True)


def format_cookie_date(moment: datetime) -> str:
    """Format an expiry as e.g. 'Thu, 01-Jan-1970 00:00:00 GMT'."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{_WEEKDAYS[moment.weekday()]}, {moment.day:02d}-{_MONTHS[moment.month - 1]}-{moment.year:04d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} GMT"
    )
