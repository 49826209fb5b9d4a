"""Home screen summary: service assembly and the HTTP endpoint."""

from datetime import date, timedelta

from dayflow.core.utils import utc_today
from dayflow.models.activity import DailyActivity
from dayflow.models.productivity import Habit, HabitCompletion, Note, ScheduleEvent, Task
from dayflow.services.dashboard_service import DashboardService

DAY = date(2026, 3, 20)


async def seed(session, user_id):
    session.add_all([
        Task(user_id=user_id, title="low", priority="low"),
        Task(user_id=user_id, title="urgent", priority="urgent"),
        Task(user_id=user_id, title="tomorrow", due_date=DAY + timedelta(days=1)),
        Task(user_id=user_id, title="late", due_date=DAY - timedelta(days=2)),
        Task(user_id=user_id, title="done", status="completed"),
        ScheduleEvent(user_id=user_id, title="Review", day=DAY, start_time="14:00"),
        ScheduleEvent(user_id=user_id, title="Standup", day=DAY, start_time="09:00"),
        ScheduleEvent(user_id=user_id, title="Dentist", day=DAY + timedelta(days=1)),
        DailyActivity(user_id=user_id, day=DAY - timedelta(days=2), pomodoros=2, focus_minutes=50, score=2),
        DailyActivity(user_id=user_id, day=DAY, pomodoros=1, focus_minutes=25, tasks_completed=1, score=3),
        DailyActivity(user_id=user_id, day=DAY - timedelta(days=9), pomodoros=9, score=9),
    ])
    session.add_all(Note(user_id=user_id, title=f"note {i}") for i in range(4))
    reading = Habit(user_id=user_id, name="Read")
    session.add_all([reading, Habit(user_id=user_id, name="Run")])
    await session.flush()
    session.add(HabitCompletion(habit_id=reading.id, day=DAY))
    await session.commit()


async def test_summary(session, user):
    await seed(session, user.id)

    dashboard = await DashboardService(session).summary(user, DAY)

    assert dashboard.user.name == "Alex"
    assert dashboard.tasks.summary.pending == 4
    assert dashboard.tasks.summary.completed == 1
    assert dashboard.tasks.summary.total == 5
    assert [t.title for t in dashboard.tasks.today] == ["urgent", "low"]
    assert dashboard.tasks.overdue == 1
    assert [e.title for e in dashboard.schedule] == ["Standup", "Review"]
    assert dashboard.habits.total == 2
    assert dashboard.habits.completed_today == 1
    assert len(dashboard.notes) == 3
    assert dashboard.pomodoro.today_count == 1
    assert dashboard.pomodoro.today_minutes == 25


async def test_week_is_zero_filled(session, user):
    await seed(session, user.id)

    week = (await DashboardService(session).summary(user, DAY)).week_activity

    assert [d.day for d in week] == [DAY - timedelta(days=6 - i) for i in range(7)]
    assert [d.pomodoros for d in week] == [0, 0, 0, 0, 2, 0, 1]
    assert week[-1].intensity == 0
    assert week[0].score == 0


async def test_empty_dashboard(session, user):
    dashboard = await DashboardService(session).summary(user, DAY)

    assert dashboard.tasks.summary.total == 0
    assert dashboard.habits.items == []
    assert len(dashboard.week_activity) == 7


async def test_endpoint(client, auth_headers):
    await client.post("/api/v1/notes/", json={"title": "Ideas"}, headers=auth_headers)
    response = await client.post("/api/v1/tasks/", json={"title": "Ship it"}, headers=auth_headers)
    task_id = response.json()["task"]["id"]
    await client.patch(f"/api/v1/tasks/{task_id}", json={"status": "completed"}, headers=auth_headers)

    response = await client.get("/api/v1/dashboard/", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["tasks"]["summary"]["completed"] == 1
    assert body["tasks"]["summary"]["inProgress"] == 0
    assert [n["title"] for n in body["notes"]] == ["Ideas"]
    assert len(body["weekActivity"]) == 7
    assert body["weekActivity"][-1]["day"] == utc_today().isoformat()
    assert body["weekActivity"][-1]["tasksCompleted"] == 1
    assert body["weekActivity"][-1]["notesCreated"] == 1
