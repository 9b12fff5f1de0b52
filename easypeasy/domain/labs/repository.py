"""Lab repository - Database operations for labs and their meetings"""

from datetime import date, datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Lab, LabType, Meeting, Venue


class LabRepository:
    """Repository for lab database operations"""

    @staticmethod
    def get_labs(
        db: Session, status: Optional[str] = None, venue_id: Optional[int] = None
    ) -> list[Lab]:
        """Get labs with venue, type and meetings loaded"""
        query = db.query(Lab).options(
            joinedload(Lab.venue),
            joinedload(Lab.lab_type),
            selectinload(Lab.meetings),
        )

        if status:
            query = query.filter(Lab.status == status)

        if venue_id:
            query = query.filter(Lab.venue_id == venue_id)

        return query.order_by(Lab.start_date.desc(), Lab.id.desc()).all()

    @staticmethod
    def get_lab_by_id(db: Session, lab_id: int) -> Optional[Lab]:
        return (
            db.query(Lab)
            .options(selectinload(Lab.meetings))
            .filter(Lab.id == lab_id)
            .first()
        )

    @staticmethod
    def get_venue(db: Session, venue_id: int) -> Optional[Venue]:
        return db.query(Venue).filter(Venue.id == venue_id).first()

    @staticmethod
    def get_lab_type(db: Session, lab_type_id: int) -> Optional[LabType]:
        return db.query(LabType).filter(LabType.id == lab_type_id).first()

    @staticmethod
    def create_lab(db: Session, meetings: Iterable, **lab_data) -> Lab:
        """Insert the lab and its generated meetings in one commit"""
        lab = Lab(**lab_data)
        lab.meetings = [Meeting(order=m.order, date=m.date) for m in meetings]
        db.add(lab)
        db.commit()
        db.refresh(lab)
        return lab

    @staticmethod
    def replace_meetings(db: Session, lab: Lab, meetings: Iterable) -> None:
        """Discard every meeting of the lab and attach freshly generated ones"""
        lab.meetings.clear()
        db.flush()
        lab.meetings.extend(Meeting(order=m.order, date=m.date) for m in meetings)

    @staticmethod
    def apply_dates(lab: Lab, dates_by_order: dict[int, date]) -> int:
        """Set meeting dates in place. Returns the number of meetings changed."""
        changed = 0
        for meeting in lab.meetings:
            new_date = dates_by_order.get(meeting.order)
            if new_date is not None and new_date != meeting.date:
                meeting.date = new_date
                changed += 1
        return changed

    @staticmethod
    def append_meeting(lab: Lab, meeting_date: date, status: str) -> Meeting:
        meeting = Meeting(order=len(lab.meetings) + 1, date=meeting_date, status=status)
        lab.meetings.append(meeting)
        return meeting

    @staticmethod
    def remove_meeting(db: Session, lab: Lab, meeting: Meeting) -> None:
        """Remove one meeting and renumber the rest from 1"""
        lab.meetings.remove(meeting)
        db.flush()
        for position, remaining in enumerate(sorted(lab.meetings, key=lambda m: m.order), start=1):
            remaining.order = position

    @staticmethod
    def sync_dates(lab: Lab) -> None:
        """
        Keep the lab's date range in line with its meetings and bump the
        version so concurrent writers notice the change.
        """
        ordered = sorted(lab.meetings, key=lambda m: m.order)
        if ordered:
            lab.start_date = ordered[0].date
            lab.end_date = ordered[-1].date
        else:
            lab.end_date = None
        lab.updated_at = datetime.now()

    @staticmethod
    def save(db: Session, lab: Lab) -> Lab:
        db.commit()
        db.refresh(lab)
        return lab

    @staticmethod
    def delete_lab(db: Session, lab: Lab) -> None:
        db.delete(lab)
        db.commit()

    @staticmethod
    def get_meetings_between(db: Session, start: date, end: date) -> list[Meeting]:
        """Meetings of every lab dated within [start, end]"""
        return (
            db.query(Meeting)
            .join(Lab)
            .options(joinedload(Meeting.lab).joinedload(Lab.venue))
            .filter(Meeting.date >= start, Meeting.date <= end)
            .order_by(Meeting.date, Lab.start_time, Meeting.lab_id)
            .all()
        )
