POST = {"company_name": "Google", "title": "Onsite loop", "content": "Four rounds, one system design."}


def test_create_post_with_author(student_client, student_id):
    r = student_client.post("/api/forums", json=POST)
    assert r.status_code == 201
    body = r.json()
    assert body["user_id"] == student_id
    assert body["author_name"] == "Priya Sharma"


def test_list_newest_first(student_client, admin_client):
    student_client.post("/api/forums", json=POST)
    admin_client.post("/api/forums", json={**POST, "title": "Aptitude round"})

    posts = student_client.get("/api/forums").json()
    assert [p["title"] for p in posts] == ["Aptitude round", "Onsite loop"]
    assert [p["author_name"] for p in posts] == ["Placement Cell", "Priya Sharma"]


def test_blank_content_rejected(student_client):
    assert student_client.post("/api/forums", json={**POST, "content": ""}).status_code == 422


def test_admin_deletes_post(student_client, admin_client):
    post_id = student_client.post("/api/forums", json=POST).json()["id"]

    assert student_client.delete(f"/api/forums/{post_id}").status_code == 403
    r = admin_client.delete(f"/api/forums/{post_id}")
    assert r.status_code == 200
    assert student_client.get("/api/forums").json() == []


def test_delete_missing_post(admin_client):
    r = admin_client.delete("/api/forums/nope")
    assert r.status_code == 404
    assert r.json()["detail"] == "Post not found"
