import json

import pytest

from scholarship_service.domain.entities import Role
from scholarship_service.infrastructure.models import ScholarshipORM


def scholarship_payload(**overrides):
    payload = {
        "scholarship_name": "Global Leaders",
        "university_name": "Oxford",
        "university_country": "UK",
        "degree": "Masters",
        "application_fees": 50,
        "service_charge": 10,
        "application_deadline": "2025-09-01",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def moderator(make_user):
    make_user("mod@example.com", Role.MODERATOR)
    return "mod@example.com"


def test_add_scholarship_by_staff(client, moderator, headers, redis_client):
    response = client.post("/add-scholarship", json=scholarship_payload(), headers=headers(moderator))
    assert response.status_code == 201
    data = response.json()
    assert data["posted_user_email"] == moderator
    assert data["application_deadline"].startswith("2025-09-01T00:00:00")
    redis_client.scan_iter.assert_called_with(match="scholarships:*")


def test_add_scholarship_requires_staff(client, database, make_user, headers):
    make_user("u@example.com")
    response = client.post("/add-scholarship", json=scholarship_payload(), headers=headers("u@example.com"))
    assert response.status_code == 403
    with database.session() as s:
        assert s.query(ScholarshipORM).count() == 0


def test_add_scholarship_requires_token(client):
    assert client.post("/add-scholarship", json=scholarship_payload()).status_code == 401


def test_update_and_get_scholarship(client, moderator, headers):
    sid = client.post("/add-scholarship", json=scholarship_payload(), headers=headers(moderator)).json()["id"]
    response = client.put(f"/scholarship/update/{sid}", json={"application_fees": 20},
                          headers=headers(moderator))
    assert response.status_code == 200
    assert response.json()["application_fees"] == 20
    assert response.json()["scholarship_name"] == "Global Leaders"

    got = client.get(f"/scholarship/{sid}")
    assert got.status_code == 200
    assert got.json()["application_fees"] == 20


def test_get_scholarship_not_found_vs_invalid(client):
    assert client.get("/scholarship/" + "0" * 32).status_code == 404
    assert client.get("/scholarship/123").status_code == 400


def test_delete_scholarship(client, moderator, headers):
    sid = client.post("/add-scholarship", json=scholarship_payload(), headers=headers(moderator)).json()["id"]
    assert client.delete(f"/scholarship/{sid}", headers=headers(moderator)).status_code == 204
    assert client.get(f"/scholarship/{sid}").status_code == 404


def test_list_scholarships_search_and_cache(client, moderator, headers, redis_client):
    client.post("/add-scholarship", json=scholarship_payload(), headers=headers(moderator))
    client.post("/add-scholarship", json=scholarship_payload(scholarship_name="Rhodes", university_name="Cambridge"),
                headers=headers(moderator))

    response = client.get("/scholarships", params={"q": "cambridge"})
    assert response.status_code == 200
    assert [s["scholarship_name"] for s in response.json()] == ["Rhodes"]
    key, ttl, value = redis_client.setex.call_args.args
    assert key == "scholarships:list:cambridge:10:0"
    assert json.loads(value)[0]["scholarship_name"] == "Rhodes"


def test_list_scholarships_served_from_cache(client, redis_client):
    cached = [{
        "id": "a" * 32, "scholarship_name": "Cached", "university_name": "MIT",
        "application_fees": 1, "service_charge": 0, "post_date": "2025-01-01T00:00:00",
    }]
    redis_client.get.return_value = json.dumps(cached)
    response = client.get("/scholarships")
    assert response.json()[0]["scholarship_name"] == "Cached"


def test_top_scholarships_cheapest_first(client, moderator, headers):
    for fee in (80, 10, 40, 5, 60, 70, 90):
        client.post("/add-scholarship", json=scholarship_payload(application_fees=fee), headers=headers(moderator))
    fees = [s["application_fees"] for s in client.get("/top-scholarships").json()]
    assert fees == [5, 10, 40, 60, 70, 80]
