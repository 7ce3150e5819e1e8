"""SQLAlchemy models for RentDar.

All models are imported here so that ``Base.metadata`` knows every table
before ``create_all`` runs. If you add a new model, import it in this file.
"""

from rentdar.models.blocked_range import BlockedRange, BlockReason
from rentdar.models.booking import Booking
from rentdar.models.property import Property

__all__ = [
    "BlockReason",
    "BlockedRange",
    "Booking",
    "Property",
]
