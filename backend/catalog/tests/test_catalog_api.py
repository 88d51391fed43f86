import pytest
from django.core.management import call_command
from django.db import DatabaseError

from catalog.models import Location, TourType
from catalog.services import build_catalog, load_catalog


@pytest.fixture
def islands(db):
    return TourType.objects.create(id="islands", label_th="เกาะ", label_en="Islands")


@pytest.fixture
def heritage(db):
    return TourType.objects.create(id="heritage", label_th="มรดก", label_en="Heritage")


@pytest.fixture
def cove(islands):
    return Location.objects.create(
        id="cove",
        name_en="Paradise Cove",
        name_th="อ่าวสวรรค์",
        image_path="locations/cove.jpg",
        tour_type_ids=["islands"],
        available_durations=["full"],
        price_per_person={"full": 3200},
    )


@pytest.fixture
def old_town(islands, heritage):
    # Legacy record with no associations or prices.
    return Location.objects.create(id="old-town", name_en="Old Town")


@pytest.mark.django_db
def test_catalog_falls_back_to_defaults_when_empty(api_client):
    response = api_client.get("/api/catalog/")

    assert response.status_code == 200
    data = response.json()
    assert [item["id"] for item in data["tour_types"]] == ["islands", "heritage", "adventure"]
    locations = {item["id"]: item for item in data["locations"]}
    assert set(locations) == {"phuket-cove", "chiang-mai", "ayutthaya", "krabi"}
    assert locations["chiang-mai"]["tour_type_ids"] == ["islands", "heritage", "adventure"]
    assert locations["chiang-mai"]["available_durations"] == ["full", "half"]
    assert locations["chiang-mai"]["image_url"] == "/media/chiang-mai-highland.jpg"
    assert data["base_prices"] == {"full": 2500, "half": 1500}
    assert data["party_size"] == {"min": 1, "max": 20}
    assert data["currency"] == "THB"
    assert data["from_defaults"] is True
    addons = {item["key"]: item for item in data["addons"]}
    assert addons["pickup"]["per_person"] is False
    assert addons["guide"]["unit_price"] == 600


def test_catalog_uses_stored_records(api_client, cove, old_town):
    response = api_client.get("/api/catalog/")

    data = response.json()
    assert [item["id"] for item in data["tour_types"]] == ["heritage", "islands"]
    locations = {item["id"]: item for item in data["locations"]}
    assert set(locations) == {"cove", "old-town"}
    assert data["from_defaults"] is False
    assert locations["old-town"]["tour_type_ids"] == ["heritage", "islands"]
    assert locations["old-town"]["price_per_person"] == {}
    assert locations["cove"]["price_per_person"] == {"full": 3200}


def test_load_catalog_falls_back_on_database_error(db, monkeypatch):
    def broken():
        raise DatabaseError("connection refused")

    monkeypatch.setattr(TourType.objects, "all", broken)

    catalog = load_catalog()

    assert catalog.from_defaults is True
    assert catalog.get_location("phuket-cove")["price_per_person"] == {"full": 3200, "half": 1900}


def test_build_catalog_normalizes_against_loaded_tour_types():
    catalog = build_catalog([{"id": "a"}, {"id": "b"}], [{"id": "x"}])

    assert catalog.from_defaults is False
    assert catalog.get_location("x")["tour_type_ids"] == ["a", "b"]
    assert catalog.tour_type_ids == ["a", "b"]
    assert catalog.get_tour_type("missing") is None


def test_location_list_filters_by_tour_type_and_duration(api_client, cove, old_town):
    response = api_client.get("/api/locations/", {"tour_type": "heritage", "duration": "half"})

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == ["old-town"]

    response = api_client.get("/api/locations/", {"tour_type": "islands", "duration": "full"})
    assert [item["id"] for item in response.json()] == ["old-town", "cove"]


def test_anonymous_users_cannot_write_catalog(api_client, islands):
    response = api_client.post("/api/tour-types/", {"label_en": "Food"}, format="json")

    assert response.status_code == 401


def test_non_staff_users_cannot_write_catalog(api_client, regular_user, islands):
    api_client.force_authenticate(regular_user)

    response = api_client.delete(f"/api/tour-types/{islands.pk}/")

    assert response.status_code == 403
    assert TourType.objects.filter(pk="islands").exists()


def test_staff_creates_tour_type_with_mirrored_label(staff_client, db):
    response = staff_client.post("/api/tour-types/", {"label_en": "Food trails"}, format="json")

    assert response.status_code == 201
    body = response.json()
    assert body["label_th"] == "Food trails"
    assert len(body["id"]) == 32


def test_tour_type_requires_a_name(staff_client, db):
    response = staff_client.post("/api/tour-types/", {"label_en": "  ", "label_th": ""}, format="json")

    assert response.status_code == 400
    assert response.json()["label_en"] == ["Please provide a tour type name."]


def test_duplicate_tour_type_id_is_rejected(staff_client, islands):
    response = staff_client.post("/api/tour-types/", {"id": "islands", "label_en": "Again"}, format="json")

    assert response.status_code == 400
    assert "id" in response.json()


def test_deleting_tour_type_leaves_locations_dangling(staff_client, cove):
    response = staff_client.delete("/api/tour-types/islands/")

    assert response.status_code == 204
    cove.refresh_from_db()
    assert cove.tour_type_ids == ["islands"]


def test_staff_creates_location_with_prices(staff_client, islands):
    payload = {
        "name_en": "Krabi Cliffs",
        "highlights": "Kayak, Cliffs, ",
        "tour_type_ids": ["islands", "islands"],
        "available_durations": ["half"],
        "price_per_person": {"half": "1750"},
    }

    response = staff_client.post("/api/locations/", payload, format="json")

    assert response.status_code == 201, response.json()
    body = response.json()
    assert body["name_th"] == "Krabi Cliffs"
    assert body["highlights"] == ["Kayak", "Cliffs"]
    assert body["tour_type_ids"] == ["islands"]
    assert body["price_per_person"] == {"half": 1750}

    stored = Location.objects.get(pk=body["id"])
    assert stored.available_durations == ["half"]
    assert stored.price_per_person == {"half": 1750}


def test_location_without_durations_needs_both_prices(staff_client, islands):
    payload = {"name_en": "Somewhere", "price_per_person": {"full": 2000}}

    response = staff_client.post("/api/locations/", payload, format="json")

    assert response.status_code == 400
    assert response.json()["price_per_person"] == ["Please provide a valid Half day price."]


def test_location_rejects_negative_price(staff_client, islands):
    payload = {
        "name_en": "Somewhere",
        "available_durations": ["full"],
        "price_per_person": {"full": -10},
    }

    response = staff_client.post("/api/locations/", payload, format="json")

    assert response.status_code == 400
    assert response.json()["price_per_person"] == ["Please provide a valid Full day price."]


def test_location_requires_a_name(staff_client, islands):
    payload = {"available_durations": ["full"], "price_per_person": {"full": 100}}

    response = staff_client.post("/api/locations/", payload, format="json")

    assert response.status_code == 400
    assert response.json()["name_en"] == ["Please provide a location name."]


def test_staff_updates_location_prices(staff_client, cove):
    response = staff_client.patch(
        f"/api/locations/{cove.pk}/prices/",
        {"price_per_person": {"full": "3500", "half": "bogus"}},
        format="json",
    )

    assert response.status_code == 200
    assert response.json()["price_per_person"] == {"full": 3500}
    cove.refresh_from_db()
    assert cove.price_per_person == {"full": 3500}


def test_price_update_requires_offered_durations(staff_client, cove):
    response = staff_client.patch(
        f"/api/locations/{cove.pk}/prices/",
        {"price_per_person": {"half": 1000}},
        format="json",
    )

    assert response.status_code == 400
    cove.refresh_from_db()
    assert cove.price_per_person == {"full": 3200}


def test_staff_deletes_location(staff_client, cove):
    response = staff_client.delete(f"/api/locations/{cove.pk}/")

    assert response.status_code == 204
    assert not Location.objects.filter(pk=cove.pk).exists()


@pytest.mark.django_db
def test_seedcatalog_loads_defaults_once():
    call_command("seedcatalog")
    Location.objects.filter(pk="krabi").update(name_en="Renamed")
    call_command("seedcatalog")

    assert TourType.objects.count() == 3
    assert Location.objects.count() == 4
    assert Location.objects.get(pk="krabi").name_en == "Renamed"

    call_command("seedcatalog", "--overwrite")
    assert Location.objects.get(pk="krabi").name_en == "Krabi Cliffs & Coves"
