"""End-to-end API flows: each qualifying action feeds the badge and activity engines."""

from datetime import timedelta

import pytest

from dayflow.core.utils import utc_today
from dayflow.models.productivity import Task
from dayflow.repositories.activity_repository import ActivityRepository
from dayflow.repositories.badge_repository import BadgeRepository

from conftest import PASSWORD, make_user

API = "/api/v1"


async def today_activity(client, headers):
    response = await client.get(f"{API}/activity/today", headers=headers)
    assert response.status_code == 200
    return response.json()


class TestAuth:
    async def test_register_login_me(self, client):
        response = await client.post(
            f"{API}/auth/register",
            json={"name": "Robin", "email": "Robin@DayFlow.app", "password": PASSWORD},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "robin@dayflow.app"
        assert body["stats"]["tasksCompleted"] == 0

        response = await client.post(
            f"{API}/auth/login",
            data={"username": "robin@dayflow.app", "password": PASSWORD},
        )
        assert response.status_code == 200
        tokens = response.json()

        response = await client.get(
            f"{API}/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Robin"

        response = await client.post(
            f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert response.status_code == 200

    async def test_duplicate_email(self, client, user):
        response = await client.post(
            f"{API}/auth/register",
            json={"name": "Alex", "email": user.email, "password": PASSWORD},
        )
        assert response.status_code == 422

    async def test_wrong_password(self, client, user):
        response = await client.post(
            f"{API}/auth/login", data={"username": user.email, "password": "not-the-password"}
        )
        assert response.status_code == 401

    async def test_refresh_token_is_not_an_access_token(self, client, user):
        response = await client.post(
            f"{API}/auth/login", data={"username": user.email, "password": PASSWORD}
        )
        refresh = response.json()["refresh_token"]

        response = await client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {refresh}"})
        assert response.status_code == 401

    async def test_requires_token(self, client):
        response = await client.get(f"{API}/badges/")
        assert response.status_code == 401


class TestTasks:
    async def create_task(self, client, headers, title="Write report"):
        response = await client.post(f"{API}/tasks/", json={"title": title}, headers=headers)
        assert response.status_code == 201
        return response.json()["task"]["id"]

    async def test_completion_awards_badge_and_logs_activity(self, client, auth_headers):
        task_id = await self.create_task(client, auth_headers)

        response = await client.patch(
            f"{API}/tasks/{task_id}", json={"status": "completed"}, headers=auth_headers
        )
        assert response.status_code == 200
        body = response.json()
        assert body["task"]["status"] == "completed"
        assert body["task"]["completedAt"] is not None
        assert [b["id"] for b in body["newBadges"]] == ["first_task"]

        activity = await today_activity(client, auth_headers)
        assert activity["tasksCompleted"] == 1
        assert activity["score"] == 2.0
        assert activity["intensity"] == 1

        me = (await client.get(f"{API}/auth/me", headers=auth_headers)).json()
        assert me["stats"]["tasksCompleted"] == 1
        assert me["stats"]["lastActiveDate"] == utc_today().isoformat()

    async def test_repeat_completion_is_not_counted_twice(self, client, auth_headers):
        task_id = await self.create_task(client, auth_headers)
        await client.patch(f"{API}/tasks/{task_id}", json={"status": "completed"}, headers=auth_headers)

        response = await client.patch(
            f"{API}/tasks/{task_id}", json={"status": "completed"}, headers=auth_headers
        )
        assert response.json()["newBadges"] == []
        assert (await today_activity(client, auth_headers))["tasksCompleted"] == 1

    async def test_other_edits_do_not_log_activity(self, client, auth_headers):
        task_id = await self.create_task(client, auth_headers)
        response = await client.patch(
            f"{API}/tasks/{task_id}", json={"title": "Write the report"}, headers=auth_headers
        )
        assert response.status_code == 200

        activity = await today_activity(client, auth_headers)
        assert activity["score"] == 0
        assert activity["intensity"] == 0

    async def test_bulk_completion(self, client, auth_headers):
        ids = [await self.create_task(client, auth_headers, f"task {i}") for i in range(3)]
        await client.patch(f"{API}/tasks/{ids[0]}", json={"status": "completed"}, headers=auth_headers)

        response = await client.post(
            f"{API}/tasks/bulk/status", json={"ids": ids, "status": "completed"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["updated"] == 3

        activity = await today_activity(client, auth_headers)
        assert activity["tasksCompleted"] == 3
        assert activity["score"] == 6.0

    async def test_foreign_task_is_not_found(self, client, session, auth_headers):
        other = await make_user(session, name="Sam", email="sam@dayflow.app")
        task = Task(user_id=other.id, title="private")
        session.add(task)
        await session.commit()

        response = await client.patch(
            f"{API}/tasks/{task.id}", json={"status": "completed"}, headers=auth_headers
        )
        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"

    async def test_null_title_is_rejected(self, client, auth_headers):
        task_id = await self.create_task(client, auth_headers)

        response = await client.patch(f"{API}/tasks/{task_id}", json={"title": None}, headers=auth_headers)
        assert response.status_code == 422

        response = await client.patch(
            f"{API}/tasks/{task_id}", json={"description": None}, headers=auth_headers
        )
        assert response.status_code == 200


class TestPomodoro:
    async def test_work_session(self, client, auth_headers):
        response = await client.post(
            f"{API}/pomodoro/", json={"type": "work", "duration": 25}, headers=auth_headers
        )
        assert response.status_code == 201
        pomo_id = response.json()["pomodoro"]["id"]

        response = await client.patch(f"{API}/pomodoro/{pomo_id}/complete", json={}, headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["pomodoro"]["actualDuration"] == 1500
        assert [b["id"] for b in body["newBadges"]] == ["first_pomo"]

        activity = await today_activity(client, auth_headers)
        assert activity["pomodoros"] == 1
        assert activity["focusMinutes"] == 25
        assert activity["score"] == 1

        response = await client.patch(f"{API}/pomodoro/{pomo_id}/complete", json={}, headers=auth_headers)
        assert response.status_code == 422

    async def test_break_is_not_activity(self, client, auth_headers):
        response = await client.post(
            f"{API}/pomodoro/", json={"type": "short-break", "duration": 5}, headers=auth_headers
        )
        pomo_id = response.json()["pomodoro"]["id"]

        response = await client.patch(f"{API}/pomodoro/{pomo_id}/complete", json={}, headers=auth_headers)
        assert response.json()["newBadges"] == []
        assert (await today_activity(client, auth_headers))["pomodoros"] == 0


class TestHabits:
    async def test_toggle_today(self, client, auth_headers):
        today = utc_today()
        response = await client.post(f"{API}/habits/", json={"name": "Read"}, headers=auth_headers)
        assert response.status_code == 201
        habit_id = response.json()["id"]

        response = await client.post(
            f"{API}/habits/{habit_id}/complete", json={"day": today.isoformat()}, headers=auth_headers
        )
        body = response.json()
        assert body["completedDays"] == [today.isoformat()]
        assert body["currentStreak"] == 1
        assert (await today_activity(client, auth_headers))["habitsCompleted"] == 1

        # toggling off removes the completion but never decrements activity
        response = await client.post(
            f"{API}/habits/{habit_id}/complete", json={"day": today.isoformat()}, headers=auth_headers
        )
        assert response.json()["completedDays"] == []
        assert (await today_activity(client, auth_headers))["habitsCompleted"] == 1

    async def test_backfilled_days_build_streak_without_activity(self, client, auth_headers):
        today = utc_today()
        response = await client.post(f"{API}/habits/", json={"name": "Run"}, headers=auth_headers)
        habit_id = response.json()["id"]

        for days_ago in (2, 1):
            day = (today - timedelta(days=days_ago)).isoformat()
            await client.post(f"{API}/habits/{habit_id}/complete", json={"day": day}, headers=auth_headers)
        assert (await today_activity(client, auth_headers))["habitsCompleted"] == 0

        response = await client.post(
            f"{API}/habits/{habit_id}/complete", json={"day": today.isoformat()}, headers=auth_headers
        )
        assert response.json()["currentStreak"] == 3

        me = (await client.get(f"{API}/auth/me", headers=auth_headers)).json()
        assert me["stats"]["currentStreak"] == 3

        response = await client.post(f"{API}/badges/check", headers=auth_headers)
        assert {b["id"] for b in response.json()["newBadges"]} == {"first_habit", "streak_3"}


class TestNotesAndSchedule:
    async def test_note_logs_activity(self, client, auth_headers):
        response = await client.post(f"{API}/notes/", json={"title": "Ideas"}, headers=auth_headers)
        assert response.status_code == 201
        assert (await today_activity(client, auth_headers))["notesCreated"] == 1

    async def test_schedule_toggle(self, client, auth_headers):
        response = await client.post(
            f"{API}/schedule/",
            json={"title": "Standup", "day": utc_today().isoformat(), "startTime": "09:00"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        event_id = response.json()["id"]

        response = await client.patch(f"{API}/schedule/{event_id}/complete", headers=auth_headers)
        assert response.json()["isCompleted"] is True
        assert (await today_activity(client, auth_headers))["scheduleEventsCompleted"] == 1

        response = await client.patch(f"{API}/schedule/{event_id}/complete", headers=auth_headers)
        assert response.json()["isCompleted"] is False
        assert (await today_activity(client, auth_headers))["scheduleEventsCompleted"] == 1

    async def test_completing_another_days_event_is_not_activity(self, client, auth_headers):
        tomorrow = utc_today() + timedelta(days=1)
        response = await client.post(
            f"{API}/schedule/", json={"title": "Dentist", "day": tomorrow.isoformat()}, headers=auth_headers
        )
        event_id = response.json()["id"]

        await client.patch(f"{API}/schedule/{event_id}/complete", headers=auth_headers)
        assert (await today_activity(client, auth_headers))["scheduleEventsCompleted"] == 0


class TestBadgesAndHistory:
    async def test_catalog(self, client, auth_headers):
        response = await client.get(f"{API}/badges/", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 15
        assert body["count"] == 0
        assert all(not entry["earned"] for entry in body["catalogue"])

    async def test_check_after_note(self, client, auth_headers):
        await client.post(f"{API}/notes/", json={"title": "Ideas"}, headers=auth_headers)

        response = await client.post(f"{API}/badges/check", headers=auth_headers)
        assert [b["id"] for b in response.json()["newBadges"]] == ["first_note"]

        response = await client.post(f"{API}/badges/check", headers=auth_headers)
        assert response.json()["newBadges"] == []

    async def test_history(self, client, auth_headers):
        await client.post(f"{API}/notes/", json={"title": "Ideas"}, headers=auth_headers)

        response = await client.get(f"{API}/activity/12m", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert len(body["logs"]) == 1
        assert body["logs"][0]["day"] == utc_today().isoformat()
        analytics = body["analytics"]
        assert analytics["currentWeekScore"] == 1
        assert analytics["growth"] == 100
        assert analytics["records"]["maxStreak"] == 1
        assert analytics["predictions"]["nextStreakMilestone"] == 5
        assert analytics["predictions"]["daysToNextMilestone"] == 4


@pytest.fixture
def broken_badge_counts(monkeypatch):
    async def broken(self, user_id):
        raise RuntimeError("count query failed")

    monkeypatch.setattr(BadgeRepository, "get_counts", broken)


@pytest.fixture
def broken_activity_upsert(monkeypatch):
    async def broken(self, *args, **kwargs):
        raise RuntimeError("upsert failed")

    monkeypatch.setattr(ActivityRepository, "increment", broken)


class TestEngineFailuresKeepPrimaryAction:
    async def create_task(self, client, headers, title="Write report"):
        response = await client.post(f"{API}/tasks/", json={"title": title}, headers=headers)
        return response.json()["task"]["id"]

    async def test_task_completion_survives_badge_failure(self, client, auth_headers, broken_badge_counts):
        task_id = await self.create_task(client, auth_headers)

        response = await client.patch(
            f"{API}/tasks/{task_id}", json={"status": "completed"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["task"]["status"] == "completed"
        assert response.json()["newBadges"] == []

        assert (await today_activity(client, auth_headers))["tasksCompleted"] == 1
        me = (await client.get(f"{API}/auth/me", headers=auth_headers)).json()
        assert me["stats"]["tasksCompleted"] == 1

    async def test_bulk_completion_survives_badge_failure(self, client, auth_headers, broken_badge_counts):
        ids = [await self.create_task(client, auth_headers, f"task {i}") for i in range(2)]

        response = await client.post(
            f"{API}/tasks/bulk/status", json={"ids": ids, "status": "completed"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json() == {"updated": 2, "newBadges": []}
        assert (await today_activity(client, auth_headers))["tasksCompleted"] == 2

    async def test_pomodoro_survives_badge_failure(self, client, auth_headers, broken_badge_counts):
        response = await client.post(
            f"{API}/pomodoro/", json={"type": "work", "duration": 25}, headers=auth_headers
        )
        pomo_id = response.json()["pomodoro"]["id"]

        response = await client.patch(f"{API}/pomodoro/{pomo_id}/complete", json={}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["pomodoro"]["completed"] is True
        assert response.json()["newBadges"] == []

        activity = await today_activity(client, auth_headers)
        assert activity["pomodoros"] == 1
        assert activity["focusMinutes"] == 25

    async def test_task_completion_survives_activity_failure(
        self, client, auth_headers, broken_activity_upsert
    ):
        task_id = await self.create_task(client, auth_headers)

        response = await client.patch(
            f"{API}/tasks/{task_id}", json={"status": "completed"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert [b["id"] for b in response.json()["newBadges"]] == ["first_task"]
        assert (await today_activity(client, auth_headers))["score"] == 0

    async def test_note_survives_activity_failure(self, client, auth_headers, broken_activity_upsert):
        response = await client.post(f"{API}/notes/", json={"title": "Ideas"}, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["title"] == "Ideas"
