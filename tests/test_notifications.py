def test_publish_and_list(admin_client, student_client, admin_id):
    r = admin_client.post("/api/notifications", json={"title": "Drive", "message": "Google drive on Monday"})
    assert r.status_code == 201
    assert r.json()["created_by"] == admin_id

    admin_client.post("/api/notifications", json={"title": "Reminder", "message": "Update your resume"})
    titles = [n["title"] for n in student_client.get("/api/notifications").json()]
    assert titles == ["Reminder", "Drive"]


def test_blank_message_rejected(admin_client):
    r = admin_client.post("/api/notifications", json={"title": "Drive", "message": ""})
    assert r.status_code == 422


def test_delete(admin_client):
    note_id = admin_client.post("/api/notifications", json={"title": "t", "message": "m"}).json()["id"]
    assert admin_client.delete(f"/api/notifications/{note_id}").status_code == 200
    assert admin_client.get("/api/notifications").json() == []
    assert admin_client.delete(f"/api/notifications/{note_id}").status_code == 404
