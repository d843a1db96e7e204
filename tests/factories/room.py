"""Room, participant, visit request and message factories."""

from polyfactory import Use

from src.hotel.models import (
    Message,
    ParticipantRole,
    Room,
    RoomParticipant,
    VisitRequest,
    VisitStatus,
)
from src.hotel.models.room import generate_room_id
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class RoomFactory(BaseFactory):
    __model__ = Room

    id = Use(generate_room_id)
    name = "Test Room"
    # FK fields - must be set explicitly
    host_id = None
    host_name = "Host User"
    is_active = True
    requires_approval = True
    created_at = Use(utc_now)


class RoomParticipantFactory(BaseFactory):
    __model__ = RoomParticipant

    room_id = None
    user_id = None
    user_name = "Guest User"
    role = ParticipantRole.GUEST.value
    joined_at = Use(utc_now)

    @classmethod
    def host(cls, **kwargs):
        return cls.build(role=ParticipantRole.HOST.value, **kwargs)


class VisitRequestFactory(BaseFactory):
    __model__ = VisitRequest

    id = Use(generate_uuid)
    room_id = None
    user_id = None
    user_name = "Guest User"
    note = None
    status = VisitStatus.PENDING.value
    requested_at = Use(utc_now)
    responded_at = None


class MessageFactory(BaseFactory):
    __model__ = Message

    id = Use(generate_uuid)
    room_id = None
    sender_id = None
    sender_name = "Test User"
    text = "hello"
    image_ref = None
    is_deleted = False
    created_at = Use(utc_now)
