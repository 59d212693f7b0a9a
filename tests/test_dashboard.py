from datetime import date, timedelta

from conftest import create_user


class TestStudentDashboard:
    def test_without_profile(self, student_client, created_job):
        body = student_client.get("/api/dashboard/student").json()
        assert body["profile_complete"] is False
        assert body["eligible_jobs"] == 0
        assert body["total_applications"] == 0
        assert body["recent_applications"] == []

    def test_counts_and_recent_items(self, admin_client, eligible_student, job_payload):
        for company in ("A", "B", "C", "D"):
            job = admin_client.post("/api/jobs", json={**job_payload, "company_name": company}).json()
            eligible_student.post("/api/applications", json={"job_id": job["id"]})
        admin_client.post("/api/jobs", json={**job_payload, "company_name": "E", "allowed_courses": ["MBA"]})
        for i in range(7):
            admin_client.post("/api/notifications", json={"title": f"note {i}", "message": "m"})

        body = eligible_student.get("/api/dashboard/student").json()
        assert body["profile_complete"] is True
        assert body["eligible_jobs"] == 4
        assert body["total_applications"] == 4
        assert [a["company_name"] for a in body["recent_applications"]] == ["D", "C", "B"]
        assert [n["title"] for n in body["notifications"]] == [f"note {i}" for i in (6, 5, 4, 3, 2)]


class TestAdminDashboard:
    def test_counts(self, admin_client, student_id, test_db, job_payload):
        create_user(test_db, "second@uni.edu", "student")
        admin_client.post("/api/jobs", json=job_payload)
        admin_client.post("/api/jobs", json={**job_payload, "deadline": "2000-01-01T00:00:00Z"})
        admin_client.post("/api/placements", json={
            "company_name": "Google", "students_placed": 4, "year": 2024, "branch": "CSE",
        })
        admin_client.post("/api/placements", json={
            "company_name": "TCS", "students_placed": 6, "year": 2024, "branch": "IT",
        })
        event = {"title": "Talk", "description": "d", "event_time": "10:00"}
        admin_client.post("/api/events", json={**event, "event_date": date.today().isoformat()})
        admin_client.post("/api/events", json={**event, "event_date": (date.today() + timedelta(days=3)).isoformat()})
        admin_client.post("/api/events", json={**event, "event_date": (date.today() - timedelta(days=3)).isoformat()})

        body = admin_client.get("/api/dashboard/admin").json()
        assert body == {
            "total_students": 2,
            "active_jobs": 1,
            "students_placed": 10,
            "upcoming_events": 2,
        }

    def test_empty(self, admin_client):
        assert admin_client.get("/api/dashboard/admin").json() == {
            "total_students": 0, "active_jobs": 0, "students_placed": 0, "upcoming_events": 0,
        }
