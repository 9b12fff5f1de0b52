"""Lab service - Business logic for labs, meeting generation and rescheduling"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ...models import Lab, LabType, Meeting, Venue
from ..scheduling import (
    InvalidScheduleInput,
    MeetingNotFound,
    Schedule,
    generate_schedule,
    lab_code_for,
    reschedule_cascade,
)
from .repository import LabRepository
from .schemas import LabCreate, LabUpdate, MeetingCreate, MeetingUpdate

logger = logging.getLogger(__name__)

# Longest range the calendar view returns in one call
MAX_CALENDAR_DAYS = 366


class LabService:
    """Service layer for lab business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LabRepository()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_labs(self, status: Optional[str] = None, venue_id: Optional[int] = None) -> list[Lab]:
        return self.repo.get_labs(self.db, status, venue_id)

    def get_lab(self, lab_id: int) -> Lab:
        lab = self.repo.get_lab_by_id(self.db, lab_id)
        if not lab:
            raise HTTPException(status_code=404, detail="Lab not found")
        return lab

    def _get_venue(self, venue_id: int) -> Venue:
        venue = self.repo.get_venue(self.db, venue_id)
        if not venue:
            raise HTTPException(status_code=404, detail="Venue not found")
        if venue.supplier.is_deleted:
            raise HTTPException(status_code=409, detail="Venue belongs to a deleted supplier")
        return venue

    def _get_lab_type(self, lab_type_id: int) -> LabType:
        lab_type = self.repo.get_lab_type(self.db, lab_type_id)
        if not lab_type:
            raise HTTPException(status_code=404, detail="Lab type not found")
        return lab_type

    def _get_meeting(self, lab: Lab, order: int) -> Meeting:
        meeting = next((m for m in lab.meetings if m.order == order), None)
        if not meeting:
            raise HTTPException(status_code=404, detail=f"Meeting #{order} not found")
        return meeting

    @staticmethod
    def _check_version(lab: Lab, version: Optional[int]) -> None:
        """Reject writes based on a stale copy of the lab"""
        if version is not None and version != lab.version:
            logger.warning(
                f"⚠️ Stale write on lab {lab.id}: client version {version}, current {lab.version}"
            )
            raise HTTPException(
                status_code=409,
                detail="Lab was modified by someone else. Reload and try again.",
            )

    @staticmethod
    def _build_schedule(start_date: date, meeting_count: int) -> Schedule:
        try:
            return generate_schedule(start_date, meeting_count)
        except InvalidScheduleInput as e:
            raise HTTPException(status_code=400, detail=str(e))

    def _commit(self, lab: Lab, action: str) -> Lab:
        """Commit pending lab changes, rolling back on database errors"""
        try:
            return self.repo.save(self.db, lab)
        except StaleDataError:
            self.db.rollback()
            logger.warning(f"⚠️ Concurrent update detected on lab {lab.id}")
            raise HTTPException(
                status_code=409,
                detail="Lab was modified by someone else. Reload and try again.",
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to {action} lab {lab.id}: {str(e)}")
            logger.exception(e)
            raise HTTPException(status_code=500, detail=f"Failed to {action} lab. Please try again.")

    # ------------------------------------------------------------------
    # Lab CRUD
    # ------------------------------------------------------------------

    def create_lab(self, data: LabCreate) -> Lab:
        """Create a lab with one meeting per week for the type's meeting count"""
        venue = self._get_venue(data.venueId)
        lab_type = self._get_lab_type(data.labTypeId)

        schedule = self._build_schedule(data.startDate, lab_type.meeting_count)
        code = lab_code_for(venue.name, data.startDate, data.startTime)

        logger.info(
            f"📥 Creating lab {code} at venue {venue.id}: {len(schedule.meetings)} meetings from {data.startDate}"
        )

        try:
            lab = self.repo.create_lab(
                self.db,
                schedule.meetings,
                code=code,
                venue_id=venue.id,
                lab_type_id=lab_type.id,
                status=data.status,
                start_date=data.startDate,
                start_time=data.startTime,
                end_date=schedule.end_date,
                list_price=data.listPrice,
                activity_cost=data.activityCost,
                logistics_cost=data.logisticsCost,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create lab: {str(e)}")
            logger.exception(e)
            raise HTTPException(status_code=500, detail="Failed to create lab. Please try again.")

        logger.info(f"✅ Created lab {lab.id} ({lab.code}), ends {lab.end_date}")
        return lab

    def update_lab(self, lab_id: int, data: LabUpdate) -> Lab:
        """
        Update a lab.

        A new start date or type replaces all meetings. A new venue, start
        date or start time regenerates the code.
        """
        lab = self.get_lab(lab_id)
        self._check_version(lab, data.version)

        # Only a new venue is looked up and checked
        venue_changed = data.venueId is not None and data.venueId != lab.venue_id
        venue = self._get_venue(data.venueId) if venue_changed else lab.venue
        lab_type = (
            self._get_lab_type(data.labTypeId) if data.labTypeId is not None else lab.lab_type
        )

        regenerate = (data.startDate is not None and data.startDate != lab.start_date) or (
            data.labTypeId is not None and data.labTypeId != lab.lab_type_id
        )
        recode = regenerate or (
            venue_changed
            or (data.startTime is not None and data.startTime != lab.start_time)
        )

        updates = {
            "venue_id": data.venueId,
            "lab_type_id": data.labTypeId,
            "start_date": data.startDate,
            "start_time": data.startTime,
            "status": data.status,
            "list_price": data.listPrice,
            "activity_cost": data.activityCost,
            "logistics_cost": data.logisticsCost,
        }
        for key, value in updates.items():
            if value is not None:
                setattr(lab, key, value)

        if regenerate:
            self._regenerate(lab, lab_type)
        if recode:
            lab.code = lab_code_for(venue.name, lab.start_date, lab.start_time)

        lab = self._commit(lab, "update")
        logger.info(f"✅ Updated lab {lab.id} (regenerated={regenerate})")
        return lab

    def regenerate_lab(self, lab_id: int, version: Optional[int] = None) -> Lab:
        """Throw away every meeting and rebuild them from the start date and type"""
        lab = self.get_lab(lab_id)
        self._check_version(lab, version)

        self._regenerate(lab, lab.lab_type)
        lab = self._commit(lab, "regenerate")
        logger.info(f"🔁 Regenerated {len(lab.meetings)} meetings for lab {lab.id}")
        return lab

    def _regenerate(self, lab: Lab, lab_type: LabType) -> None:
        schedule = self._build_schedule(lab.start_date, lab_type.meeting_count)
        self.repo.replace_meetings(self.db, lab, schedule.meetings)
        self.repo.sync_dates(lab)

    def delete_lab(self, lab_id: int) -> dict:
        lab = self.get_lab(lab_id)
        try:
            self.repo.delete_lab(self.db, lab)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete lab {lab_id}: {str(e)}")
            logger.exception(e)
            raise HTTPException(status_code=500, detail="Failed to delete lab. Please try again.")
        logger.info(f"🗑️ Deleted lab {lab_id} and its meetings")
        return {"message": "Lab deleted"}

    # ------------------------------------------------------------------
    # Meetings
    # ------------------------------------------------------------------

    def move_meeting(
        self, lab_id: int, order: int, new_date: date, version: Optional[int] = None
    ) -> Lab:
        """
        Move one meeting to `new_date` and shift every later meeting by the
        same number of days. The whole meeting list is saved in one commit;
        nothing is written when the meeting is unknown or the date unchanged.
        """
        lab = self.get_lab(lab_id)
        self._check_version(lab, version)

        try:
            rescheduled = reschedule_cascade(lab.meetings, order, new_date)
        except MeetingNotFound as e:
            logger.warning(f"⚠️ Move rejected on lab {lab_id}: {e}")
            raise HTTPException(status_code=404, detail=str(e))
        except InvalidScheduleInput as e:
            raise HTTPException(status_code=400, detail=str(e))

        changed = self.repo.apply_dates(lab, {m.order: m.date for m in rescheduled})
        if not changed:
            return lab

        self.repo.sync_dates(lab)
        lab = self._commit(lab, "reschedule")
        logger.info(f"📅 Moved meeting #{order} of lab {lab_id} to {new_date}, {changed} meeting(s) shifted")
        return lab

    def add_meeting(self, lab_id: int, data: MeetingCreate) -> Lab:
        """Append a meeting after the current last one"""
        lab = self.get_lab(lab_id)
        self._check_version(lab, data.version)

        meeting = self.repo.append_meeting(lab, data.date, data.status)
        self.repo.sync_dates(lab)
        lab = self._commit(lab, "add a meeting to")
        logger.info(f"✅ Added meeting #{meeting.order} on {meeting.date} to lab {lab_id}")
        return lab

    def update_meeting(self, lab_id: int, order: int, data: MeetingUpdate) -> Lab:
        lab = self.get_lab(lab_id)
        meeting = self._get_meeting(lab, order)

        if data.status is not None:
            meeting.status = data.status
        if data.presentCount is not None:
            meeting.present_count = data.presentCount
        if data.absentCount is not None:
            meeting.absent_count = data.absentCount

        return self._commit(lab, "update a meeting of")

    def delete_meeting(self, lab_id: int, order: int, version: Optional[int] = None) -> Lab:
        """Remove one meeting; the remaining ones are renumbered from 1"""
        lab = self.get_lab(lab_id)
        self._check_version(lab, version)
        meeting = self._get_meeting(lab, order)

        self.repo.remove_meeting(self.db, lab, meeting)
        self.repo.sync_dates(lab)
        lab = self._commit(lab, "remove a meeting from")
        logger.info(f"🗑️ Removed meeting #{order} from lab {lab_id}, {len(lab.meetings)} left")
        return lab

    # ------------------------------------------------------------------
    # Calendar
    # ------------------------------------------------------------------

    def get_calendar(self, start: date, end: date) -> list[Meeting]:
        if end < start:
            raise HTTPException(status_code=400, detail="End date must not be before start date")
        if (end - start).days > MAX_CALENDAR_DAYS:
            raise HTTPException(
                status_code=400, detail=f"Calendar range cannot exceed {MAX_CALENDAR_DAYS} days"
            )
        return self.repo.get_meetings_between(self.db, start, end)
