"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, RoomFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.room import (
    MessageFactory,
    RoomFactory,
    RoomParticipantFactory,
    VisitRequestFactory,
)
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # User
    "DEFAULT_TEST_PASSWORD",
    "UserFactory",
    # Rooms
    "MessageFactory",
    "RoomFactory",
    "RoomParticipantFactory",
    "VisitRequestFactory",
]
