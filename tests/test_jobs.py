from decimal import Decimal


class TestCreateJob:
    def test_admin_creates_job(self, admin_client, admin_id, job_payload):
        r = admin_client.post("/api/jobs", json=job_payload)
        assert r.status_code == 201
        body = r.json()
        assert body["posted_by"] == admin_id
        assert body["allowed_branches"] == ["CSE", "IT"]
        assert Decimal(body["min_cgpa"]) == Decimal("7.00")

    def test_branch_codes_cleaned(self, admin_client, job_payload):
        job_payload["allowed_branches"] = [" CSE ", "CSE", "", "IT"]
        r = admin_client.post("/api/jobs", json=job_payload)
        assert r.json()["allowed_branches"] == ["CSE", "IT"]

    def test_empty_branch_list_rejected(self, admin_client, job_payload):
        job_payload["allowed_branches"] = ["  "]
        assert admin_client.post("/api/jobs", json=job_payload).status_code == 422

    def test_min_cgpa_range(self, admin_client, job_payload):
        job_payload["min_cgpa"] = 11
        assert admin_client.post("/api/jobs", json=job_payload).status_code == 422

    def test_missing_fields(self, admin_client):
        assert admin_client.post("/api/jobs", json={"title": "Intern"}).status_code == 422


class TestListJobs:
    def test_annotations_for_eligible_student(self, eligible_student, created_job):
        jobs = eligible_student.get("/api/jobs").json()
        assert len(jobs) == 1
        assert jobs[0]["is_eligible"] is True
        assert jobs[0]["has_applied"] is False

        eligible_student.post("/api/applications", json={"job_id": created_job["id"]})
        assert eligible_student.get("/api/jobs").json()[0]["has_applied"] is True

    def test_student_without_profile_is_not_eligible(self, student_client, created_job):
        jobs = student_client.get("/api/jobs").json()
        assert jobs[0]["is_eligible"] is False

    def test_eligible_only(self, admin_client, eligible_student, job_payload):
        admin_client.post("/api/jobs", json=job_payload)
        admin_client.post("/api/jobs", json={**job_payload, "company_name": "Qualcomm",
                                             "allowed_branches": ["ECE"]})
        admin_client.post("/api/jobs", json={**job_payload, "company_name": "Goldman",
                                             "min_cgpa": 8.5})

        assert len(eligible_student.get("/api/jobs").json()) == 3
        eligible = eligible_student.get("/api/jobs", params={"eligible_only": True}).json()
        assert [j["company_name"] for j in eligible] == ["Google"]

    def test_newest_first(self, admin_client, job_payload):
        admin_client.post("/api/jobs", json={**job_payload, "company_name": "First"})
        admin_client.post("/api/jobs", json={**job_payload, "company_name": "Second"})
        names = [j["company_name"] for j in admin_client.get("/api/jobs").json()]
        assert names == ["Second", "First"]

    def test_admin_gets_no_eligibility_flag(self, admin_client, created_job):
        assert admin_client.get("/api/jobs").json()[0]["is_eligible"] is None


class TestSingleJob:
    def test_get(self, student_client, created_job):
        r = student_client.get(f"/api/jobs/{created_job['id']}")
        assert r.status_code == 200
        assert r.json()["title"] == "Software Engineer"

    def test_get_missing(self, student_client):
        r = student_client.get("/api/jobs/does-not-exist")
        assert r.status_code == 404
        assert r.json()["detail"] == "Job not found"

    def test_partial_update(self, admin_client, created_job):
        r = admin_client.patch(f"/api/jobs/{created_job['id']}", json={"package": "35 LPA"})
        assert r.status_code == 200
        body = r.json()
        assert body["package"] == "35 LPA"
        assert body["company_name"] == "Google"

    def test_update_changes_eligibility(self, admin_client, eligible_student, created_job):
        admin_client.patch(f"/api/jobs/{created_job['id']}", json={"min_cgpa": 9.0})
        assert eligible_student.get(f"/api/jobs/{created_job['id']}").json()["is_eligible"] is False

    def test_update_missing(self, admin_client):
        assert admin_client.patch("/api/jobs/nope", json={"package": "1 LPA"}).status_code == 404

    def test_delete_cascades_to_applications(self, admin_client, eligible_student, created_job):
        eligible_student.post("/api/applications", json={"job_id": created_job["id"]})
        assert len(eligible_student.get("/api/applications/my").json()) == 1

        r = admin_client.delete(f"/api/jobs/{created_job['id']}")
        assert r.status_code == 200
        assert admin_client.get(f"/api/jobs/{created_job['id']}").status_code == 404
        assert eligible_student.get("/api/applications/my").json() == []

    def test_delete_missing(self, admin_client):
        assert admin_client.delete("/api/jobs/nope").status_code == 404
