"""Timestamped market observations."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer


class Sample(BaseModel):
    """A single timestamped value, the unit consumed and produced by indicators."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    value: Decimal

    @classmethod
    def default(cls) -> "Sample":
        """The "not yet computed" sentinel."""
        return cls(time=datetime.min, value=Decimal(0))

    @field_serializer("value", when_used="json")
    def serialize_value(self, value: Decimal) -> str:
        return str(value)


class Bar(BaseModel):
    """One OHLCV observation."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int = 0

    @field_serializer("open", "high", "low", "close", when_used="json")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal to string."""
        return str(value)
