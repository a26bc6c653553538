import secrets

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_invite_token():
    """Generate an unguessable token for a friend's personal invite link"""
    return secrets.token_urlsafe(24)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    # defaultLocation, socialLocation, systemPrompt, preferredModel, enableGoogleSearch
    preferences = Column(JSON, default=dict, nullable=True)
    google_api_key = Column(Text, nullable=True)  # Fernet-encrypted, admin only
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    activities = relationship("Activity", back_populates="user", cascade="all, delete-orphan")
    values = relationship("CoreValue", back_populates="user", cascade="all, delete-orphan")
    friends = relationship("Friend", back_populates="user", cascade="all, delete-orphan")
    locations = relationship("Location", back_populates="user", cascade="all, delete-orphan")
    instances = relationship("ActivityInstance", back_populates="user")


class CoreValue(Base):
    __tablename__ = "core_values"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_core_value_user_name"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="values")
    activity_links = relationship("ActivityValue", back_populates="value", cascade="all, delete-orphan")


class Activity(Base):
    """Reusable activity template, e.g. "Hiking" """

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="activities")
    values = relationship("ActivityValue", back_populates="activity", cascade="all, delete-orphan")
    instances = relationship(
        "ActivityInstance", back_populates="activity", cascade="all, delete-orphan"
    )


class ActivityValue(Base):
    __tablename__ = "activity_values"
    __table_args__ = (UniqueConstraint("activity_id", "value_id", name="uq_activity_value"),)

    id = Column(Integer, primary_key=True, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id"), nullable=False, index=True)
    value_id = Column(Integer, ForeignKey("core_values.id"), nullable=False, index=True)

    activity = relationship("Activity", back_populates="values")
    value = relationship("CoreValue", back_populates="activity_links")


class Friend(Base):
    __tablename__ = "friends"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), default="000", nullable=False)
    email = Column(String(255), nullable=True)
    group = Column(String(100), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="friends")
    participations = relationship(
        "Participation", back_populates="friend", cascade="all, delete-orphan"
    )


class Location(Base):
    """A place the user saved for the assistant to draw on"""

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(100), default="Venue", nullable=False)
    address = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    website = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="locations")


class ActivityInstance(Base):
    """A concrete scheduled event created from an activity template"""

    __tablename__ = "activity_instances"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id"), nullable=False, index=True)
    datetime = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)
    is_all_day = Column(Boolean, default=False, nullable=False)
    location = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    # Rich descriptive fields
    custom_title = Column(String(255), nullable=True)
    venue = Column(String(255), nullable=True)
    address = Column(String(500), nullable=True)
    city = Column(String(255), nullable=True)
    state = Column(String(255), nullable=True)
    zip_code = Column(String(20), nullable=True)
    detailed_description = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    contact_info = Column(String(500), nullable=True)
    venue_type = Column(String(50), nullable=True)  # indoor, outdoor, online, hybrid
    price_info = Column(String(255), nullable=True)
    capacity = Column(Integer, nullable=True)
    event_url = Column(String(1000), nullable=True)
    allow_external_guests = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="instances")
    activity = relationship("Activity", back_populates="instances")
    participations = relationship(
        "Participation", back_populates="instance", cascade="all, delete-orphan"
    )
    public_rsvps = relationship("PublicRSVP", back_populates="instance", cascade="all, delete-orphan")


class Participation(Base):
    """A friend invited to an instance; addressable through its invite token"""

    __tablename__ = "participations"
    __table_args__ = (UniqueConstraint("instance_id", "friend_id", name="uq_participation"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    instance_id = Column(Integer, ForeignKey("activity_instances.id"), nullable=False, index=True)
    friend_id = Column(Integer, ForeignKey("friends.id"), nullable=False, index=True)
    status = Column(String(20), default="INVITED", nullable=False)  # INVITED, GOING, MAYBE, NOT_GOING
    invite_token = Column(
        String(64), unique=True, index=True, nullable=False, default=generate_invite_token
    )
    responded_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    instance = relationship("ActivityInstance", back_populates="participations")
    friend = relationship("Friend", back_populates="participations")


class PublicRSVP(Base):
    """RSVP left by an external guest through the public event page"""

    __tablename__ = "public_rsvps"

    id = Column(Integer, primary_key=True, index=True)
    instance_id = Column(Integer, ForeignKey("activity_instances.id"), nullable=False, index=True)
    friend_id = Column(Integer, ForeignKey("friends.id"), nullable=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    instance = relationship("ActivityInstance", back_populates="public_rsvps")
