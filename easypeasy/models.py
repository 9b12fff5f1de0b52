import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_public_id():
    """Generate a unique public ID for secure public access"""
    return str(uuid.uuid4())


class Client(Base):
    """A family (parent) or an institution (school, nursery) buying labs"""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    public_id = Column(
        String(36), unique=True, nullable=False, index=True, default=generate_public_id
    )
    client_type = Column(String(20), nullable=False, index=True)  # parent, institutional

    # Parent clients
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    tax_code = Column(String(32), nullable=True)  # Codice fiscale

    # Institutional clients
    company_name = Column(String(255), nullable=True)
    vat_number = Column(String(32), nullable=True)  # Partita IVA
    number_of_children = Column(Integer, nullable=True)
    age_range = Column(String(50), nullable=True)

    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    city = Column(String(255), nullable=True)
    province = Column(String(10), nullable=True)
    zip_code = Column(String(10), nullable=True)

    # Status workflow: lead → active → inactive
    status = Column(String(50), default="lead", nullable=False, index=True)
    notes = Column(Text, nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    enrollments = relationship("Enrollment", back_populates="client")

    @property
    def display_name(self) -> str:
        if self.client_type == "institutional":
            return self.company_name or ""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Supplier(Base):
    """A company renting out venues (schools, community centres, studios)"""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String(255), nullable=False)
    vat_number = Column(String(32), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    city = Column(String(255), nullable=True)
    province = Column(String(10), nullable=True)
    zip_code = Column(String(10), nullable=True)
    notes = Column(Text, nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    venues = relationship(
        "Venue",
        back_populates="supplier",
        cascade="all, delete-orphan",
        order_by="Venue.name",
    )


class Venue(Base):
    """A physical location ("sede") where labs take place"""

    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    address = Column(String(500), nullable=True)
    city = Column(String(255), nullable=True)
    capacity = Column(Integer, default=0, nullable=False)
    rental_cost = Column(Float, default=0, nullable=False)  # Per hour
    color = Column(String(7), nullable=True)  # e.g., #RRGGBB
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    supplier = relationship("Supplier", back_populates="venues")
    labs = relationship("Lab", back_populates="venue")


class LabType(Base):
    """Category of lab; meeting_count is the number of weekly sessions"""

    __tablename__ = "lab_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    code = Column(String(2), unique=True, nullable=False, index=True)
    meeting_count = Column(Integer, default=0, nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    labs = relationship("Lab", back_populates="lab_type")


class Lab(Base):
    """One scheduled recurring offering at one venue"""

    __tablename__ = "labs"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False, index=True)
    lab_type_id = Column(Integer, ForeignKey("lab_types.id"), nullable=False, index=True)

    # Status workflow: planned → active ⇄ paused → completed | cancelled
    status = Column(String(20), default="planned", nullable=False, index=True)

    start_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=True)  # HH:MM format
    end_date = Column(Date, nullable=True)  # Date of the highest-order meeting

    list_price = Column(Float, default=0, nullable=False)
    activity_cost = Column(Float, default=0, nullable=False)
    logistics_cost = Column(Float, default=0, nullable=False)

    version = Column(Integer, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    venue = relationship("Venue", back_populates="labs")
    lab_type = relationship("LabType", back_populates="labs")
    meetings = relationship(
        "Meeting",
        back_populates="lab",
        cascade="all, delete-orphan",
        order_by="Meeting.order",
    )
    enrollments = relationship("Enrollment", back_populates="lab", cascade="all, delete-orphan")

    __mapper_args__ = {"version_id_col": version}


class Meeting(Base):
    """One occurrence of a lab on a calendar date"""

    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, index=True)
    lab_id = Column(Integer, ForeignKey("labs.id"), nullable=False, index=True)
    order = Column("meeting_order", Integer, nullable=False)  # 1-based
    date = Column(Date, nullable=False, index=True)

    # Status workflow: scheduled → completed | cancelled
    status = Column(String(20), default="scheduled", nullable=False)
    present_count = Column(Integer, default=0, nullable=False)
    absent_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    lab = relationship("Lab", back_populates="meetings")
    absences = relationship("Absence", back_populates="meeting", cascade="all, delete-orphan")


class Enrollment(Base):
    """A client (or one of their children) signed up for a lab"""

    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    lab_id = Column(Integer, ForeignKey("labs.id"), nullable=False, index=True)
    child_name = Column(String(255), nullable=True)  # Empty for adult participants
    price = Column(Float, default=0, nullable=False)

    # Status workflow: pending → active → completed | expired
    status = Column(String(20), default="pending", nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="enrollments")
    lab = relationship("Lab", back_populates="enrollments")
    absences = relationship("Absence", back_populates="enrollment", cascade="all, delete-orphan")


class Absence(Base):
    """One enrollment missing one meeting; mirrored in Meeting.absent_count"""

    __tablename__ = "absences"
    __table_args__ = (UniqueConstraint("enrollment_id", "meeting_id", name="uq_absence_enrollment_meeting"),)

    id = Column(Integer, primary_key=True, index=True)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id"), nullable=False, index=True)
    meeting_id = Column(Integer, ForeignKey("meetings.id"), nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())

    enrollment = relationship("Enrollment", back_populates="absences")
    meeting = relationship("Meeting", back_populates="absences")
