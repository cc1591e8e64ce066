"""Integration tests for the donation and catalogue endpoints."""

from __future__ import annotations

import pytest

from donamatch.models.catalog import CategoryKey
from tests.factories.donation import CategoryFactory, CollectionCenterFactory, DonationFactory
from tests.helpers.http import API, assert_problem, build_url, json_headers

DONATIONS = f"{API}/donations"


def _sign_up(client, role: str, email: str) -> str:
    resp = client.post(
        f"{API}/auth/sign-up/{role}",
        json={"name": "Pablo", "last_name_1": "Ruiz", "email": email, "password": "s3cret-pass"},
    )
    assert resp.status_code == 201, resp.get_data(as_text=True)
    return resp.get_json()["data"]["access_token"]


@pytest.fixture()
def donor_token(client, reference_data):
    return _sign_up(client, "donor", "pablo@example.com")


@pytest.fixture()
def reader_headers(client, reference_data):
    return json_headers(_sign_up(client, "beneficiary", "lectora@example.com"))


@pytest.fixture()
def lookups(session, reference_data):
    category = CategoryFactory(key=CategoryKey.SPORTS.value)
    center = CollectionCenterFactory()
    session.commit()
    return category, center


def _payload(category, center, **overrides):
    data = {
        "category_id": category.id,
        "collection_center_id": center.id,
        "name": "Balón de fútbol",
        "description": "Talla 5, poco uso.",
        "image_url": "https://img.example.com/balon.jpg",
    }
    data.update(overrides)
    return data


class TestListDonations:
    def test_lists_pending_with_meta(self, client, session, reader_headers):
        for i in range(3):
            DonationFactory(name=f"Chaqueta {i}")
        session.commit()

        resp = client.get(build_url(DONATIONS, page=1, limit=2), headers=reader_headers)

        assert resp.status_code == 200
        body = resp.get_json()
        assert len(body["data"]) == 2
        assert body["meta"] == {
            "total": 3,
            "page": 1,
            "limit": 2,
            "has_prev": False,
            "has_next": True,
        }
        item = body["data"][0]
        assert item["status"] == "pendiente"
        assert {"id", "name"} <= set(item["donor"])

    def test_filters_by_name(self, client, session, reader_headers):
        DonationFactory(name="Bicicleta infantil")
        DonationFactory(name="Libro de cocina")
        session.commit()

        resp = client.get(build_url(DONATIONS, name="BICI"), headers=reader_headers)

        assert [d["name"] for d in resp.get_json()["data"]] == ["Bicicleta infantil"]

    def test_limit_is_capped(self, client, reader_headers):
        resp = client.get(build_url(DONATIONS, limit=500), headers=reader_headers)
        assert resp.get_json()["meta"]["limit"] == 50

    def test_invalid_page(self, client, reader_headers):
        resp = client.get(build_url(DONATIONS, page=0), headers=reader_headers)
        assert_problem(resp, 422, "validation_error")

    def test_requires_token(self, client, reference_data):
        assert_problem(client.get(DONATIONS), 401, "unauthorized")


class TestGetDonation:
    def test_found(self, client, session, reader_headers):
        donation = DonationFactory()
        session.commit()

        resp = client.get(f"{DONATIONS}/{donation.id}", headers=reader_headers)

        assert resp.status_code == 200
        assert resp.get_json()["data"]["id"] == donation.id

    def test_missing(self, client, reader_headers):
        resp = client.get(f"{DONATIONS}/999999", headers=reader_headers)
        assert_problem(resp, 404, "not_found")

    def test_requires_token(self, client, session, reference_data):
        donation = DonationFactory()
        session.commit()

        assert_problem(client.get(f"{DONATIONS}/{donation.id}"), 401, "unauthorized")


class TestCreateDonation:
    def test_donor_creates(self, client, donor_token, lookups):
        resp = client.post(DONATIONS, json=_payload(*lookups), headers=json_headers(donor_token))

        assert resp.status_code == 201, resp.get_data(as_text=True)
        data = resp.get_json()["data"]
        assert data["status"] == "pendiente"
        assert data["category"]["key"] == "deportes"
        assert data["donor"]["name"] == "Pablo"

    def test_requires_token(self, client, lookups):
        assert_problem(client.post(DONATIONS, json=_payload(*lookups)), 401, "unauthorized")

    def test_beneficiary_is_forbidden(self, client, lookups):
        token = _sign_up(client, "beneficiary", "bene@example.com")

        resp = client.post(DONATIONS, json=_payload(*lookups), headers=json_headers(token))
        assert_problem(resp, 403, "forbidden")

    def test_validation(self, client, donor_token, lookups):
        resp = client.post(
            DONATIONS,
            json=_payload(*lookups, image_url="not a url", name=""),
            headers=json_headers(donor_token),
        )

        body = assert_problem(resp, 422, "validation_error")
        assert {"image_url", "name"} <= set(body["details"]["errors"])

    def test_unknown_collection_center(self, client, donor_token, lookups):
        category, _ = lookups
        resp = client.post(
            DONATIONS,
            json=_payload(category, lookups[1], collection_center_id=999999),
            headers=json_headers(donor_token),
        )
        assert_problem(resp, 404, "not_found")


class TestCatalogAndHealth:
    def test_categories(self, client, reference_data):
        resp = client.get(f"{API}/catalog/categories")

        assert resp.status_code == 200
        assert {c["key"] for c in resp.get_json()["data"]} == {k.value for k in CategoryKey}

    def test_collection_centers(self, client, reference_data):
        resp = client.get(f"{API}/catalog/collection-centers")

        centers = resp.get_json()["data"]
        assert len(centers) == len(reference_data.COLLECTION_CENTER_FIXTURES)
        assert {"latitude", "longitude", "observation"} <= set(centers[0])

    def test_health(self, client):
        resp = client.get(f"{API}/health")
        assert resp.status_code == 200
        assert resp.get_json()["db"] == "ok"

    def test_unknown_route(self, client):
        body = assert_problem(client.get(f"{API}/nope"), 404, "not_found")
        assert "/api/v1/nope" in body["detail"]
