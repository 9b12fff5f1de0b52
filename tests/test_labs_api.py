from datetime import date

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from easypeasy.domain.labs.repository import LabRepository
from easypeasy.domain.labs.service import LabService


def meeting_dates(lab):
    return [m["date"] for m in lab["meetings"]]


class TestCreateLab:
    def test_generates_weekly_meetings(self, lab, venue, lab_type):
        assert lab["code"] == "SOL.LUN.10:00"
        assert lab["venueName"] == venue["name"]
        assert lab["labTypeCode"] == "RB"
        assert lab["status"] == "planned"
        assert lab["meetingCount"] == 6
        assert [m["order"] for m in lab["meetings"]] == [1, 2, 3, 4, 5, 6]
        assert meeting_dates(lab) == [
            "2024-01-01",
            "2024-01-08",
            "2024-01-15",
            "2024-01-22",
            "2024-01-29",
            "2024-02-05",
        ]
        assert lab["startDate"] == "2024-01-01"
        assert lab["endDate"] == "2024-02-05"
        assert lab["version"] == 1

    def test_flags_holidays(self, lab):
        assert lab["meetings"][0]["holidayName"] == "Capodanno"
        assert lab["meetings"][1]["holidayName"] is None

    def test_lab_type_without_meetings(self, client, venue):
        empty_type = client.post("/lab-types", json={"name": "Open day", "code": "OD"}).json()

        response = client.post(
            "/labs",
            json={"venueId": venue["id"], "labTypeId": empty_type["id"], "startDate": "2024-01-01"},
        )

        assert response.status_code == 201
        assert response.json()["meetings"] == []
        assert response.json()["endDate"] is None

    def test_unknown_venue(self, client, lab_type):
        response = client.post(
            "/labs", json={"venueId": 999, "labTypeId": lab_type["id"], "startDate": "2024-01-01"}
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Venue not found"

    def test_unknown_lab_type(self, client, venue):
        response = client.post(
            "/labs", json={"venueId": venue["id"], "labTypeId": 999, "startDate": "2024-01-01"}
        )
        assert response.status_code == 404

    def test_invalid_start_date(self, client, venue, lab_type):
        response = client.post(
            "/labs",
            json={"venueId": venue["id"], "labTypeId": lab_type["id"], "startDate": "2024-02-30"},
        )
        assert response.status_code == 422

    def test_invalid_start_time(self, client, venue, lab_type):
        response = client.post(
            "/labs",
            json={
                "venueId": venue["id"],
                "labTypeId": lab_type["id"],
                "startDate": "2024-01-01",
                "startTime": "25:00",
            },
        )
        assert response.status_code == 422


class TestReadLabs:
    def test_list_and_get(self, client, lab):
        response = client.get("/labs")
        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [lab["id"]]

        response = client.get(f"/labs/{lab['id']}")
        assert response.status_code == 200
        assert meeting_dates(response.json()) == meeting_dates(lab)

    def test_filter_by_status(self, client, lab):
        assert client.get("/labs", params={"status": "planned"}).json()
        assert client.get("/labs", params={"status": "active"}).json() == []

    def test_missing_lab(self, client):
        assert client.get("/labs/999").status_code == 404


class TestMoveMeeting:
    def test_cascade_shifts_later_meetings(self, client, lab):
        response = client.post(
            f"/labs/{lab['id']}/meetings/3/move", json={"newDate": "2024-01-17"}
        )

        assert response.status_code == 200
        moved = response.json()
        assert meeting_dates(moved) == [
            "2024-01-01",
            "2024-01-08",
            "2024-01-17",
            "2024-01-24",
            "2024-01-31",
            "2024-02-07",
        ]
        assert moved["startDate"] == "2024-01-01"
        assert moved["endDate"] == "2024-02-07"
        assert moved["version"] > lab["version"]

        # Persisted, not just returned
        stored = client.get(f"/labs/{lab['id']}").json()
        assert meeting_dates(stored) == meeting_dates(moved)

    def test_moving_backwards(self, client, lab):
        response = client.post(
            f"/labs/{lab['id']}/meetings/3/move", json={"newDate": "2024-01-10"}
        )
        assert meeting_dates(response.json())[2:] == [
            "2024-01-10",
            "2024-01-17",
            "2024-01-24",
            "2024-01-31",
        ]
        assert response.json()["endDate"] == "2024-01-31"

    def test_moving_first_meeting_moves_start_date(self, client, lab):
        response = client.post(
            f"/labs/{lab['id']}/meetings/1/move", json={"newDate": "2024-01-02"}
        )
        assert response.json()["startDate"] == "2024-01-02"
        assert response.json()["endDate"] == "2024-02-06"

    def test_unknown_order_changes_nothing(self, client, lab):
        response = client.post(
            f"/labs/{lab['id']}/meetings/7/move", json={"newDate": "2024-03-01"}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Meeting #7 not found"
        stored = client.get(f"/labs/{lab['id']}").json()
        assert meeting_dates(stored) == meeting_dates(lab)
        assert stored["version"] == lab["version"]

    def test_same_date_writes_nothing(self, client, lab):
        response = client.post(
            f"/labs/{lab['id']}/meetings/2/move", json={"newDate": "2024-01-08"}
        )

        assert response.status_code == 200
        assert response.json()["version"] == lab["version"]
        assert meeting_dates(response.json()) == meeting_dates(lab)

    def test_current_version_is_accepted(self, client, lab):
        response = client.post(
            f"/labs/{lab['id']}/meetings/2/move",
            json={"newDate": "2024-01-09", "version": lab["version"]},
        )
        assert response.status_code == 200

    def test_stale_version_is_rejected(self, client, lab):
        first = client.post(
            f"/labs/{lab['id']}/meetings/2/move",
            json={"newDate": "2024-01-09", "version": lab["version"]},
        )
        assert first.status_code == 200

        second = client.post(
            f"/labs/{lab['id']}/meetings/4/move",
            json={"newDate": "2024-01-30", "version": lab["version"]},
        )

        assert second.status_code == 409
        stored = client.get(f"/labs/{lab['id']}").json()
        assert meeting_dates(stored) == meeting_dates(first.json())

    def test_invalid_new_date(self, client, lab):
        response = client.post(
            f"/labs/{lab['id']}/meetings/2/move", json={"newDate": "09/01/2024"}
        )
        assert response.status_code == 422

    def test_missing_lab(self, client):
        response = client.post("/labs/999/meetings/1/move", json={"newDate": "2024-01-09"})
        assert response.status_code == 404


class TestMeetings:
    def test_add_meeting_appends(self, client, lab):
        response = client.post(f"/labs/{lab['id']}/meetings", json={"date": "2024-02-12"})

        assert response.status_code == 201
        data = response.json()
        assert data["meetingCount"] == 7
        assert data["meetings"][-1]["order"] == 7
        assert data["endDate"] == "2024-02-12"

    def test_delete_meeting_renumbers(self, client, lab):
        response = client.delete(f"/labs/{lab['id']}/meetings/2")

        assert response.status_code == 200
        data = response.json()
        assert [m["order"] for m in data["meetings"]] == [1, 2, 3, 4, 5]
        assert meeting_dates(data) == [
            "2024-01-01",
            "2024-01-15",
            "2024-01-22",
            "2024-01-29",
            "2024-02-05",
        ]

    def test_delete_last_meeting_moves_end_date(self, client, lab):
        data = client.delete(f"/labs/{lab['id']}/meetings/6").json()
        assert data["endDate"] == "2024-01-29"

    def test_delete_unknown_meeting(self, client, lab):
        assert client.delete(f"/labs/{lab['id']}/meetings/10").status_code == 404

    def test_delete_meeting_with_stale_version(self, client, lab):
        client.post(f"/labs/{lab['id']}/meetings", json={"date": "2024-02-12"})

        response = client.delete(
            f"/labs/{lab['id']}/meetings/1", params={"version": lab["version"]}
        )
        assert response.status_code == 409

    def test_update_attendance(self, client, lab):
        response = client.patch(
            f"/labs/{lab['id']}/meetings/1",
            json={"status": "completed", "presentCount": 9, "absentCount": 2},
        )

        assert response.status_code == 200
        first = response.json()["meetings"][0]
        assert first["status"] == "completed"
        assert first["presentCount"] == 9
        assert first["absentCount"] == 2
        assert first["date"] == "2024-01-01"

    def test_negative_attendance_is_rejected(self, client, lab):
        response = client.patch(f"/labs/{lab['id']}/meetings/1", json={"presentCount": -1})
        assert response.status_code == 422


class TestUpdateLab:
    def test_new_start_date_regenerates_meetings(self, client, lab):
        client.post(f"/labs/{lab['id']}/meetings/3/move", json={"newDate": "2024-01-17"})

        response = client.patch(f"/labs/{lab['id']}", json={"startDate": "2024-01-03"})

        assert response.status_code == 200
        data = response.json()
        assert meeting_dates(data) == [
            "2024-01-03",
            "2024-01-10",
            "2024-01-17",
            "2024-01-24",
            "2024-01-31",
            "2024-02-07",
        ]
        assert data["endDate"] == "2024-02-07"
        assert data["code"] == "SOL.MER.10:00"

    def test_new_lab_type_regenerates_meetings(self, client, lab):
        short = client.post(
            "/lab-types", json={"name": "Teatro", "code": "TE", "meetingCount": 3}
        ).json()

        data = client.patch(f"/labs/{lab['id']}", json={"labTypeId": short["id"]}).json()

        assert data["labTypeCode"] == "TE"
        assert meeting_dates(data) == ["2024-01-01", "2024-01-08", "2024-01-15"]
        assert data["endDate"] == "2024-01-15"

    def test_price_change_keeps_meetings(self, client, lab):
        client.post(f"/labs/{lab['id']}/meetings/6/move", json={"newDate": "2024-02-06"})

        data = client.patch(
            f"/labs/{lab['id']}", json={"listPrice": 150, "status": "active"}
        ).json()

        assert data["listPrice"] == 150
        assert data["status"] == "active"
        assert data["endDate"] == "2024-02-06"

    def test_new_start_time_changes_code(self, client, lab):
        data = client.patch(f"/labs/{lab['id']}", json={"startTime": "16:30"}).json()
        assert data["code"] == "SOL.LUN.16:30"

    def test_stale_version_is_rejected(self, client, lab):
        client.patch(f"/labs/{lab['id']}", json={"startDate": "2024-01-08"})

        response = client.patch(
            f"/labs/{lab['id']}", json={"listPrice": 10, "version": lab["version"]}
        )
        assert response.status_code == 409

    def test_regenerate_endpoint(self, client, lab):
        client.post(f"/labs/{lab['id']}/meetings/3/move", json={"newDate": "2024-01-17"})
        client.delete(f"/labs/{lab['id']}/meetings/6")

        response = client.post(f"/labs/{lab['id']}/regenerate")

        assert response.status_code == 200
        assert meeting_dates(response.json()) == meeting_dates(lab)
        assert response.json()["endDate"] == "2024-02-05"


class TestDeleteLab:
    def test_delete_removes_lab_and_meetings(self, client, lab):
        assert client.delete(f"/labs/{lab['id']}").status_code == 200
        assert client.get(f"/labs/{lab['id']}").status_code == 404

        calendar = client.get("/labs/calendar", params={"start": "2024-01-01", "end": "2024-12-31"})
        assert calendar.json() == []


class TestCalendar:
    def test_range_across_labs(self, client, lab, venue, lab_type):
        client.post(
            "/labs",
            json={
                "venueId": venue["id"],
                "labTypeId": lab_type["id"],
                "startDate": "2024-01-06",
                "startTime": "09:00",
            },
        )

        response = client.get("/labs/calendar", params={"start": "2024-01-01", "end": "2024-01-08"})

        assert response.status_code == 200
        entries = response.json()
        assert [(e["date"], e["order"]) for e in entries] == [
            ("2024-01-01", 1),
            ("2024-01-06", 1),
            ("2024-01-08", 2),
        ]
        assert entries[0]["holidayName"] == "Capodanno"
        assert entries[1]["holidayName"] == "Epifania"
        assert entries[2]["holidayName"] is None
        assert entries[0]["labCode"] == "SOL.LUN.10:00"

    def test_end_before_start(self, client):
        response = client.get("/labs/calendar", params={"start": "2024-02-01", "end": "2024-01-01"})
        assert response.status_code == 400

    def test_range_too_long(self, client):
        response = client.get("/labs/calendar", params={"start": "2024-01-01", "end": "2026-01-01"})
        assert response.status_code == 400


class TestConcurrentWrites:
    def test_second_writer_with_stale_row_gets_conflict(self, client, lab, open_session):
        first = LabService(open_session())
        second = LabService(open_session())
        # Both writers hold version 1 of the lab
        assert second.get_lab(lab["id"]).version == lab["version"]

        first.move_meeting(lab["id"], 3, date(2024, 1, 17))

        with pytest.raises(HTTPException) as exc_info:
            second.move_meeting(lab["id"], 2, date(2024, 1, 9))

        assert exc_info.value.status_code == 409
        stored = client.get(f"/labs/{lab['id']}").json()
        assert meeting_dates(stored)[1:3] == ["2024-01-08", "2024-01-17"]

    def test_stale_row_outside_commit_maps_to_conflict(self, client, lab, monkeypatch):
        def stale_flush(db, lab, meetings):
            raise StaleDataError("UPDATE statement on table 'labs' expected to update 1 row(s); 0 were matched.")

        monkeypatch.setattr(LabRepository, "replace_meetings", staticmethod(stale_flush))

        response = client.post(f"/labs/{lab['id']}/regenerate")

        assert response.status_code == 409
        assert response.json()["detail"] == "Lab was modified by someone else. Reload and try again."


class TestTrashedSupplierVenues:
    def test_cannot_create_lab_at_trashed_supplier(self, client, supplier, venue, lab_type):
        client.delete(f"/suppliers/{supplier['id']}")

        response = client.post(
            "/labs",
            json={"venueId": venue["id"], "labTypeId": lab_type["id"], "startDate": "2024-01-01"},
        )

        assert response.status_code == 409

    def test_cannot_move_lab_to_trashed_supplier(self, client, lab):
        other = client.post("/suppliers", json={"companyName": "Ludoteca Arcobaleno"}).json()
        other_venue = client.post(f"/suppliers/{other['id']}/venues", json={"name": "Sala Verde"}).json()
        client.delete(f"/suppliers/{other['id']}")

        response = client.patch(f"/labs/{lab['id']}", json={"venueId": other_venue["id"]})

        assert response.status_code == 409

    def test_existing_lab_stays_editable(self, client, supplier, lab):
        client.delete(f"/suppliers/{supplier['id']}")

        response = client.patch(
            f"/labs/{lab['id']}", json={"venueId": lab["venueId"], "status": "active"}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "active"


class TestDatabaseErrors:
    def test_failed_delete_rolls_back(self, client, lab, monkeypatch):
        def broken_delete(db, lab):
            db.delete(lab)
            raise SQLAlchemyError("database is locked")

        monkeypatch.setattr(LabRepository, "delete_lab", staticmethod(broken_delete))

        response = client.delete(f"/labs/{lab['id']}")

        assert response.status_code == 500
        assert client.get(f"/labs/{lab['id']}").status_code == 200
