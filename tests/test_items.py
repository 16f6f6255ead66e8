"""Item API tests."""

from pathlib import Path

from tests.conftest import image


def stored_files(settings) -> set[str]:
    return {p.name for p in Path(settings.upload_dir).iterdir()}


def test_create_item_with_images(client, settings, auth_headers):
    """Submitting an item stores its images and starts it as pending."""
    response = client.post(
        "/api/items",
        headers=auth_headers,
        data={
            "title": "Air Jordan 1",
            "brand": "Nike",
            "model": "AJ1",
            "size": "42",
            "purchasePrice": "199.90",
            "purchaseDate": "2024-05-01",
        },
        files=[image("left.jpg"), image("right.png", "image/png")],
    )
    assert response.status_code == 201
    item = response.json()["item"]
    assert item["status"] == "pending"
    assert item["owner"]["id"] == auth_headers.user_id
    assert item["purchasePrice"] == 199.9
    assert item["purchaseDate"] == "2024-05-01"
    assert item["evaluation"] is None

    assert [i["originalName"] for i in item["images"]] == ["left.jpg", "right.png"]
    for record in item["images"]:
        assert record["filename"].startswith("images-")
        assert record["path"] == f"/uploads/{record['filename']}"
        assert record["size"] == 64
        assert record["filename"] in stored_files(settings)
    assert item["images"][1]["filename"].endswith(".png")


def test_create_item_requires_auth(client):
    response = client.post("/api/items", data={"title": "Bag", "brand": "Gucci", "model": "GG"})
    assert response.status_code == 401


def test_create_item_missing_required_field(client, auth_headers):
    response = client.post("/api/items", headers=auth_headers, data={"title": "Bag", "brand": "Gucci"})
    assert response.status_code == 400
    assert "model" in response.json()["error"]


def test_create_item_title_too_short(client, auth_headers):
    response = client.post(
        "/api/items", headers=auth_headers, data={"title": "AB", "brand": "Nike", "model": "AJ1"}
    )
    assert response.status_code == 400


def test_create_item_rejects_eleven_images(client, settings, auth_headers):
    """An oversized batch is rejected whole; no item and no files are created."""
    before = stored_files(settings)
    response = client.post(
        "/api/items",
        headers=auth_headers,
        data={"title": "Air Jordan 1", "brand": "Nike", "model": "AJ1"},
        files=[image(f"{n}.jpg") for n in range(11)],
    )
    assert response.status_code == 400
    assert "Too many files" in response.json()["error"]
    assert stored_files(settings) == before

    listing = client.get("/api/items/my-items", headers=auth_headers).json()
    assert listing["pagination"]["total"] == 0


def test_create_item_rejects_pdf(client, settings, auth_headers):
    before = stored_files(settings)
    response = client.post(
        "/api/items",
        headers=auth_headers,
        data={"title": "Air Jordan 1", "brand": "Nike", "model": "AJ1"},
        files=[image("ok.jpg"), image("receipt.pdf", "application/pdf")],
    )
    assert response.status_code == 400
    assert "File type not allowed" in response.json()["error"]
    assert stored_files(settings) == before


def test_create_item_rejects_oversized_file(client, settings, auth_headers):
    before = stored_files(settings)
    response = client.post(
        "/api/items",
        headers=auth_headers,
        data={"title": "Air Jordan 1", "brand": "Nike", "model": "AJ1"},
        files=[image("huge.jpg", size=settings.max_file_size + 1)],
    )
    assert response.status_code == 400
    assert "huge.jpg" in response.json()["error"]
    assert stored_files(settings) == before


def test_get_item_owner(client, auth_headers, create_item):
    item = create_item(auth_headers)
    response = client.get(f"/api/items/{item['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["item"]["owner"]["email"] == auth_headers.email


def test_get_item_not_found(client, auth_headers):
    response = client.get("/api/items/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Item not found"


def test_get_item_forbidden_for_other_user(client, auth_headers, other_headers, create_item):
    item = create_item(auth_headers)
    response = client.get(f"/api/items/{item['id']}", headers=other_headers)
    assert response.status_code == 403


def test_admin_can_get_any_item(client, auth_headers, admin_headers, create_item):
    item = create_item(auth_headers)
    response = client.get(f"/api/items/{item['id']}", headers=admin_headers)
    assert response.status_code == 200


def test_update_item_partial(client, auth_headers, create_item):
    item = create_item(auth_headers, color="Red", size="42")
    response = client.put(
        f"/api/items/{item['id']}",
        headers=auth_headers,
        data={"title": "Air Jordan 1 Retro", "color": ""},
    )
    assert response.status_code == 200
    updated = response.json()["item"]
    assert updated["title"] == "Air Jordan 1 Retro"
    assert updated["brand"] == "Nike"
    assert updated["size"] == "42"
    # An explicit empty value clears an optional field
    assert updated["color"] is None


def test_update_item_cannot_clear_required_field(client, auth_headers, create_item):
    item = create_item(auth_headers)
    response = client.put(f"/api/items/{item['id']}", headers=auth_headers, data={"brand": ""})
    assert response.status_code == 400


def test_update_item_appends_images(client, auth_headers, create_item):
    item = create_item(auth_headers, images=[image("first.jpg")])
    response = client.put(
        f"/api/items/{item['id']}",
        headers=auth_headers,
        files=[image("second.jpg"), image("third.png", "image/png")],
    )
    assert response.status_code == 200
    names = [i["originalName"] for i in response.json()["item"]["images"]]
    assert names == ["first.jpg", "second.jpg", "third.png"]


def test_update_item_forbidden_for_non_owner(client, auth_headers, other_headers, create_item):
    item = create_item(auth_headers)
    response = client.put(
        f"/api/items/{item['id']}", headers=other_headers, data={"title": "Hijacked title"}
    )
    assert response.status_code == 403

    unchanged = client.get(f"/api/items/{item['id']}", headers=auth_headers).json()["item"]
    assert unchanged["title"] == "Air Jordan 1"


def test_update_item_with_json_body(client, auth_headers, create_item):
    item = create_item(auth_headers, color="Red")
    response = client.put(
        f"/api/items/{item['id']}",
        headers=auth_headers,
        json={"title": "Changed title", "purchasePrice": 120.5, "color": ""},
    )
    assert response.status_code == 200
    updated = response.json()["item"]
    assert updated["title"] == "Changed title"
    assert updated["purchasePrice"] == 120.5
    assert updated["color"] is None
    assert updated["brand"] == "Nike"


def test_update_item_json_validation(client, auth_headers, create_item):
    item = create_item(auth_headers)
    response = client.put(f"/api/items/{item['id']}", headers=auth_headers, json={"title": "AB"})
    assert response.status_code == 400
    response = client.put(f"/api/items/{item['id']}", headers=auth_headers, json=["title"])
    assert response.status_code == 400


def test_update_item_rejects_unsupported_content_type(client, auth_headers, create_item):
    item = create_item(auth_headers)
    response = client.put(
        f"/api/items/{item['id']}",
        headers={**auth_headers, "Content-Type": "text/plain"},
        content="title=Changed title",
    )
    assert response.status_code == 400
    assert "Unsupported content type" in response.json()["error"]

    unchanged = client.get(f"/api/items/{item['id']}", headers=auth_headers).json()["item"]
    assert unchanged["title"] == "Air Jordan 1"


def test_update_item_checks_ownership_before_validation(
    client, auth_headers, other_headers, create_item
):
    item = create_item(auth_headers)
    response = client.put(f"/api/items/{item['id']}", headers=other_headers, data={"brand": ""})
    assert response.status_code == 403
    response = client.put(f"/api/items/{item['id']}", headers=other_headers, json={"title": "AB"})
    assert response.status_code == 403


def test_delete_item_removes_files(client, settings, auth_headers, create_item):
    item = create_item(auth_headers, images=[image("a.jpg"), image("b.jpg")])
    filenames = {i["filename"] for i in item["images"]}
    assert filenames <= stored_files(settings)

    response = client.delete(f"/api/items/{item['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert not filenames & stored_files(settings)
    assert client.get(f"/api/items/{item['id']}", headers=auth_headers).status_code == 404


def test_delete_item_survives_missing_file(client, settings, auth_headers, create_item):
    item = create_item(auth_headers, images=[image("a.jpg")])
    (Path(settings.upload_dir) / item["images"][0]["filename"]).unlink()

    response = client.delete(f"/api/items/{item['id']}", headers=auth_headers)
    assert response.status_code == 200


def test_delete_item_forbidden_for_non_owner(client, auth_headers, other_headers, create_item):
    item = create_item(auth_headers)
    response = client.delete(f"/api/items/{item['id']}", headers=other_headers)
    assert response.status_code == 403
    assert client.get(f"/api/items/{item['id']}", headers=auth_headers).status_code == 200


def test_admin_can_delete_any_item(client, auth_headers, admin_headers, create_item):
    item = create_item(auth_headers)
    response = client.delete(f"/api/items/{item['id']}", headers=admin_headers)
    assert response.status_code == 200


def test_my_items_pagination(client, auth_headers, other_headers, create_item):
    for n in range(3):
        create_item(auth_headers, title=f"Sneaker {n}")
    create_item(other_headers, title="Not mine")

    response = client.get("/api/items/my-items?page=2&limit=2", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["pagination"] == {"total": 3, "page": 2, "limit": 2, "totalPages": 2}
    assert len(data["items"]) == 1


def test_my_items_status_filter(client, auth_headers, create_item):
    create_item(auth_headers)
    response = client.get("/api/items/my-items?status=approved", headers=auth_headers)
    assert response.json()["pagination"]["total"] == 0
    response = client.get("/api/items/my-items?status=pending", headers=auth_headers)
    assert response.json()["pagination"]["total"] == 1


def test_invalid_status_filter(client, auth_headers):
    response = client.get("/api/items/my-items?status=lost", headers=auth_headers)
    assert response.status_code == 400


def test_public_items_anonymous_projection(client, auth_headers, create_item):
    create_item(auth_headers, purchasePrice="150", purchaseLocation="Outlet")

    response = client.get("/api/items/public")
    assert response.status_code == 200
    item = response.json()["items"][0]
    assert item["owner"]["email"] is None
    assert item["owner"]["name"] == "Test User"
    assert item["purchasePrice"] is None
    assert item["purchaseLocation"] is None


def test_public_item_full_projection_for_owner(client, auth_headers, create_item):
    item = create_item(auth_headers, purchasePrice="150", purchaseLocation="Outlet")

    response = client.get(f"/api/items/public/{item['id']}", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["item"]
    assert data["owner"]["email"] == auth_headers.email
    assert data["purchaseLocation"] == "Outlet"


def test_public_item_with_bad_token_is_anonymous(client, auth_headers, create_item):
    item = create_item(auth_headers)
    response = client.get(
        f"/api/items/public/{item['id']}", headers={"Authorization": "Bearer garbage"}
    )
    assert response.status_code == 200
    assert response.json()["item"]["owner"]["email"] is None


def test_all_items_requires_admin(client, auth_headers, admin_headers, create_item):
    create_item(auth_headers)
    assert client.get("/api/items", headers=auth_headers).status_code == 403

    response = client.get(f"/api/items?userId={auth_headers.user_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 1


def test_item_stats(client, auth_headers, admin_headers, create_item):
    create_item(auth_headers)
    create_item(auth_headers, title="Second item")

    assert client.get("/api/items/stats", headers=auth_headers).status_code == 403
    response = client.get("/api/items/stats", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["stats"] == {"total": 2, "pending": 2, "approved": 0, "rejected": 0}
