from scholarship_service.domain.entities import Role

SCHOLARSHIP = "e" * 32


def review_payload(**overrides):
    payload = {
        "scholarship_id": SCHOLARSHIP,
        "reviewer_email": "r@example.com",
        "reviewer_name": "R",
        "rating": 4,
        "comment": "Helpful staff",
    }
    payload.update(overrides)
    return payload


def test_average_rating_without_reviews_is_null(client):
    response = client.get(f"/average-rating/{SCHOLARSHIP}")
    assert response.status_code == 200
    assert response.json() == {"scholarship_id": SCHOLARSHIP, "average_rating": None, "review_count": 0}


def test_average_rating(client):
    for rating in (5, 4, 3):
        assert client.post("/add-review", json=review_payload(rating=rating)).status_code == 201
    client.post("/add-review", json=review_payload(scholarship_id="1" * 32, rating=1))
    data = client.get(f"/average-rating/{SCHOLARSHIP}").json()
    assert data["average_rating"] == 4
    assert data["review_count"] == 3


def test_rating_bounds(client):
    assert client.post("/add-review", json=review_payload(rating=6)).status_code == 422


def test_reviews_for_scholarship(client):
    client.post("/add-review", json=review_payload())
    reviews = client.get(f"/reviews/{SCHOLARSHIP}").json()
    assert len(reviews) == 1
    assert reviews[0]["comment"] == "Helpful staff"


def test_my_reviews_and_owner_update(client, headers):
    rid = client.post("/add-review", json=review_payload()).json()["id"]
    mine = client.get("/my-reviews/r@example.com", headers=headers("r@example.com"))
    assert [r["id"] for r in mine.json()] == [rid]

    response = client.patch(f"/review/{rid}", json={"rating": 2}, headers=headers("r@example.com"))
    assert response.status_code == 200
    assert response.json()["rating"] == 2

    response = client.patch(f"/review/{rid}", json={"rating": 5}, headers=headers("x@example.com"))
    assert response.status_code == 403


def test_delete_review_owner_or_staff(client, make_user, headers):
    make_user("mod@example.com", Role.MODERATOR)
    first = client.post("/add-review", json=review_payload()).json()["id"]
    second = client.post("/add-review", json=review_payload()).json()["id"]

    assert client.delete(f"/review/{first}", headers=headers("x@example.com")).status_code == 403
    assert client.delete(f"/review/{first}", headers=headers("r@example.com")).status_code == 204
    assert client.delete(f"/review/{second}", headers=headers("mod@example.com")).status_code == 204
    assert client.get(f"/reviews/{SCHOLARSHIP}").json() == []


def test_all_reviews_staff_only(client, make_user, headers):
    make_user("admin@example.com", Role.ADMIN)
    make_user("u@example.com")
    client.post("/add-review", json=review_payload())
    assert client.get("/all-reviews", headers=headers("u@example.com")).status_code == 403
    assert len(client.get("/all-reviews", headers=headers("admin@example.com")).json()) == 1
