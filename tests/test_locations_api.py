"""Tests for the location endpoints."""
from conftest import location_payload


def test_get_location_list(client, make_customer, make_location):
    first = make_customer()
    second = make_customer()
    locations = [make_location(first["id"]), make_location(second["id"])]

    r = client.get("/api/locations")
    assert r.status_code == 200
    assert r.json() == locations


def test_get_location(client, make_customer, make_location):
    location = make_location(make_customer()["id"])

    r = client.get(f"/api/locations/{location['id']}")
    assert r.status_code == 200
    assert r.json() == location


def test_get_location_not_exists(client):
    r = client.get("/api/locations/999")
    assert r.status_code == 404
    assert r.json() == {"message": "Record not found."}


def test_create_valid_location(client, make_customer):
    customer = make_customer()
    payload = location_payload(customer["id"])

    r = client.post("/api/locations", json=payload)
    assert r.status_code == 201
    data = r.json()
    assert isinstance(data["id"], int)
    for field, value in payload.items():
        assert data[field] == value

    owner = client.get(f"/api/customers/{customer['id']}").json()
    assert owner["locations"] == [data]


def test_create_location_with_string_customer_id(client, make_customer):
    customer = make_customer()
    r = client.post("/api/locations", json=location_payload(str(customer["id"])))
    assert r.status_code == 201
    assert r.json()["customer_id"] == customer["id"]


def test_create_location_input_validation_empty(client):
    r = client.post(
        "/api/locations",
        json={"address": "", "city": "", "state": "", "zip": "", "customer_id": ""},
    )
    assert r.status_code == 422
    assert r.json() == {
        "message": "The given data was invalid.",
        "errors": {
            "address": ["The address field is required."],
            "city": ["The city field is required."],
            "state": ["The state field is required."],
            "zip": ["The zip field is required."],
            "customer_id": ["The customer id field is required."],
        },
    }


def test_create_location_input_validation_too_long(client, make_customer):
    customer = make_customer()
    r = client.post(
        "/api/locations",
        json=location_payload(
            customer["id"],
            address="A" * 256,
            city="A" * 256,
            state="A" * 256,
            zip="1" * 31,
        ),
    )
    assert r.status_code == 422
    assert r.json()["errors"] == {
        "address": ["The address must not be greater than 255 characters."],
        "city": ["The city must not be greater than 255 characters."],
        "state": ["The state must not be greater than 255 characters."],
        "zip": ["The zip must not be greater than 30 characters."],
    }


def test_create_location_input_validation_invalid(client):
    r = client.post(
        "/api/locations",
        json=location_payload("1", zip="AAAAAAAAAAAAAAAAAAAA"),
    )
    assert r.status_code == 422
    assert r.json() == {
        "message": "The given data was invalid.",
        "errors": {
            "zip": ["The zip format is invalid."],
            "customer_id": ["The selected customer id is invalid."],
        },
    }


def test_create_location_with_non_numeric_customer_id(client, make_customer):
    make_customer()
    r = client.post("/api/locations", json=location_payload("one"))
    assert r.status_code == 422
    assert r.json()["errors"] == {"customer_id": ["The selected customer id is invalid."]}


def test_zip_accepts_digits_spaces_dots_and_hyphens(client, make_customer):
    customer = make_customer()
    for zip_code in ["12345", "12345-6789", "123 45", "1.234"]:
        r = client.post("/api/locations", json=location_payload(customer["id"], zip=zip_code))
        assert r.status_code == 201, zip_code


def test_update_valid_location(client, make_customer, make_location):
    first = make_customer()
    second = make_customer()
    location = make_location(first["id"])
    update = location_payload(
        second["id"], address="1 Infinite Loop", city="Cupertino", state="California", zip="95014"
    )

    r = client.put(f"/api/locations/{location['id']}", json=update)
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == location["id"]
    for field, value in update.items():
        assert data[field] == value

    assert client.get(f"/api/locations/{location['id']}").json() == data
    assert client.get(f"/api/customers/{first['id']}").json()["locations"] == []
    assert client.get(f"/api/customers/{second['id']}").json()["locations"] == [data]


def test_update_location_not_exists(client, make_customer):
    customer = make_customer()
    r = client.put("/api/locations/999", json=location_payload(customer["id"]))
    assert r.status_code == 404
    assert r.json() == {"message": "Record not found."}


def test_update_location_input_validation_empty(client, make_customer, make_location):
    location = make_location(make_customer()["id"])
    r = client.put(
        f"/api/locations/{location['id']}",
        json={"address": "", "city": "", "state": "", "zip": "", "customer_id": ""},
    )
    assert r.status_code == 422
    assert set(r.json()["errors"]) == {"address", "city", "state", "zip", "customer_id"}


def test_update_location_to_missing_customer(client, make_customer, make_location):
    location = make_location(make_customer()["id"])
    r = client.put(f"/api/locations/{location['id']}", json=location_payload(999))
    assert r.status_code == 422
    assert r.json()["errors"] == {"customer_id": ["The selected customer id is invalid."]}
    assert client.get(f"/api/locations/{location['id']}").json() == location


def test_delete_valid_location(client, make_customer, make_location):
    customer = make_customer()
    location = make_location(customer["id"])

    r = client.delete(f"/api/locations/{location['id']}")
    assert r.status_code == 204
    assert r.content == b""

    assert client.get(f"/api/locations/{location['id']}").status_code == 404
    assert client.get(f"/api/customers/{customer['id']}").json()["locations"] == []


def test_delete_location_not_exists(client):
    r = client.delete("/api/locations/999")
    assert r.status_code == 404
    assert r.json() == {"message": "Record not found."}


def test_location_ids_beyond_integer_range_are_not_found(client, make_customer):
    customer = make_customer()
    huge = 99999999999999999999
    for method, body in (("get", None), ("put", location_payload(customer["id"])), ("delete", None)):
        r = client.request(method.upper(), f"/api/locations/{huge}", json=body)
        assert r.status_code == 404, method
        assert r.json() == {"message": "Record not found."}


def test_create_location_with_customer_id_beyond_integer_range(client, make_customer):
    make_customer()
    for customer_id in (10**20, str(10**20), 2**31, -(2**31) - 1):
        r = client.post("/api/locations", json=location_payload(customer_id))
        assert r.status_code == 422, customer_id
        assert r.json()["errors"] == {"customer_id": ["The selected customer id is invalid."]}
