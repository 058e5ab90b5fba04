from bson import ObjectId


def test_teacher_creates_pending_class(client, store, teacher):
    response = client.post(
        "/classes",
        json={"title": "Geometry", "price": 25, "status": "approved", "totalEnrollment": 99},
        headers=teacher,
    )
    assert response.status_code == 201
    row = store.classes.find_one({"_id": ObjectId(response.json()["insertedId"])})
    assert row["status"] == "pending"
    assert row["totalEnrollment"] == 0
    assert row["email"] == "teacher@example.com"


def test_public_listings_only_show_approved(client, add_class):
    add_class("Approved")
    add_class("Pending", status="pending")
    add_class("Rejected", status="rejected")
    titles = [c["title"] for c in client.get("/approved_classes").json()]
    assert titles == ["Approved"]
    assert client.get("/classes_count").json() == {"count": 1}


def test_admin_lists_all_classes(client, admin, add_class):
    add_class("Approved")
    add_class("Pending", status="pending")
    response = client.get("/classes", headers=admin)
    assert len(response.json()) == 2


def test_single_class(client, add_class):
    class_id = add_class("Algebra")
    response = client.get(f"/single_class/{class_id}")
    assert response.status_code == 200
    assert response.json()["_id"] == class_id


def test_single_class_not_found_and_bad_id(client):
    assert client.get(f"/single_class/{ObjectId()}").status_code == 404
    response = client.get("/single_class/nope")
    assert response.status_code == 400
    assert response.json() == {"message": "invalid id"}


def test_get_class_requires_token(client, student, add_class):
    class_id = add_class()
    assert client.get(f"/classes/{class_id}").status_code == 401
    assert client.get(f"/classes/{class_id}", headers=student).status_code == 200


def test_admin_approves_class(client, store, admin, add_class):
    class_id = add_class(status="pending")
    response = client.patch(f"/classes/{class_id}", json={"status": "approved"}, headers=admin)
    assert response.status_code == 200
    assert store.classes.find_one({"_id": ObjectId(class_id)})["status"] == "approved"


def test_teacher_cannot_change_status(client, teacher, add_class):
    class_id = add_class(status="pending")
    response = client.patch(f"/classes/{class_id}", json={"status": "approved"}, headers=teacher)
    assert response.status_code == 403


def test_owner_edits_class(client, store, teacher, add_class):
    class_id = add_class()
    response = client.patch(f"/classes/{class_id}", json={"title": "Algebra II", "totalEnrollment": 50},
                            headers=teacher)
    assert response.status_code == 200
    row = store.classes.find_one({"_id": ObjectId(class_id)})
    assert row["title"] == "Algebra II"
    assert row["totalEnrollment"] == 0


def test_other_teacher_cannot_edit(client, add_user, auth_headers, add_class):
    add_user("rival@example.com", "teacher")
    class_id = add_class()
    response = client.patch(f"/classes/{class_id}", json={"title": "Mine now"},
                            headers=auth_headers("rival@example.com"))
    assert response.status_code == 403


def test_update_missing_class_is_404(client, store, admin):
    response = client.patch(f"/classes/{ObjectId()}", json={"status": "approved"}, headers=admin)
    assert response.status_code == 404
    assert store.classes.count_documents({}) == 0


def test_delete_class(client, store, teacher, student, add_class):
    class_id = add_class()
    assert client.delete(f"/classes/{class_id}", headers=student).status_code == 403
    response = client.delete(f"/classes/{class_id}", headers=teacher)
    assert response.status_code == 200
    assert response.json()["deletedCount"] == 1
    assert client.delete(f"/classes/{class_id}", headers=teacher).status_code == 404


def test_teacher_classes(client, teacher, add_class):
    add_class("Mine")
    add_class("Theirs", owner="rival@example.com")
    response = client.get("/teacher_classes/teacher@example.com", headers=teacher)
    assert [c["title"] for c in response.json()] == ["Mine"]
