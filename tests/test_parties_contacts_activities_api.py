import uuid


def test_buying_party_crud(client, make_party):
    party = make_party(name="Granite Holdings", target_acquisition_min=1, target_acquisition_max=3)
    assert party["status"] == "evaluating"

    assert client.get(f"/api/buying-parties/{party['id']}").json()["name"] == "Granite Holdings"
    assert [p["id"] for p in client.get("/api/buying-parties").json()] == [party["id"]]

    assert client.delete(f"/api/buying-parties/{party['id']}").status_code == 204
    assert client.get(f"/api/buying-parties/{party['id']}").status_code == 404


def test_buying_party_validation(client):
    assert client.post("/api/buying-parties", json={"name": ""}).status_code == 422
    assert client.post(
        "/api/buying-parties", json={"name": "X", "budget_min": "10", "budget_max": "5"}
    ).status_code == 422
    assert client.post(
        "/api/buying-parties", json={"name": "X", "target_acquisition_min": 4, "target_acquisition_max": 2}
    ).status_code == 422


def test_list_buying_parties_by_status(client, make_party):
    make_party(name="Active", status="active")
    make_party(name="Idle", status="evaluating")

    names = [p["name"] for p in client.get("/api/buying-parties", params={"status": "active"}).json()]
    assert names == ["Active"]


def test_delete_unknown_party_returns_404(client):
    assert client.delete(f"/api/buying-parties/{uuid.uuid4()}").status_code == 404


def test_contacts_are_scoped_to_their_entity(client, make_deal, make_party):
    deal = make_deal()
    party = make_party()
    seller = client.post(
        "/api/contacts",
        json={"name": "Sam Owner", "role": "Owner", "entity_id": deal["id"], "entity_type": "deal"},
    )
    assert seller.status_code == 201
    assert seller.json()["entity_type"] == "deal"
    client.post(
        "/api/contacts",
        json={"name": "Bo Buyer", "role": "Partner", "entity_id": party["id"], "entity_type": "buying_party"},
    )

    deal_contacts = client.get("/api/contacts", params={"entity_id": deal["id"], "entity_type": "deal"}).json()
    assert [c["name"] for c in deal_contacts] == ["Sam Owner"]

    party_contacts = client.get(
        "/api/contacts", params={"entity_id": party["id"], "entity_type": "buying_party"}
    ).json()
    assert [c["name"] for c in party_contacts] == ["Bo Buyer"]

    assert len(client.get("/api/contacts").json()) == 2


def test_contact_entity_fields_must_come_together(client, make_deal):
    deal = make_deal()
    assert client.post(
        "/api/contacts", json={"name": "A", "role": "Owner", "entity_id": deal["id"]}
    ).status_code == 422
    assert client.get("/api/contacts", params={"entity_id": deal["id"]}).status_code == 422


def test_contact_for_missing_entity(client):
    response = client.post(
        "/api/contacts",
        json={"name": "A", "role": "Owner", "entity_id": str(uuid.uuid4()), "entity_type": "deal"},
    )
    assert response.status_code == 400


def test_activity_lifecycle(client, make_deal):
    deal = make_deal()

    response = client.post(
        "/api/activities",
        json={"deal_id": deal["id"], "type": "meeting", "title": "Site visit"},
    )
    assert response.status_code == 201
    activity = response.json()
    assert activity["status"] == "pending"
    assert activity["completed_at"] is None

    completed = client.patch(f"/api/activities/{activity['id']}", json={"status": "completed"}).json()
    assert completed["status"] == "completed"
    assert completed["completed_at"] is not None

    reopened = client.patch(f"/api/activities/{activity['id']}", json={"status": "pending"}).json()
    assert reopened["completed_at"] is None


def test_activity_created_completed_is_stamped(client, make_deal):
    deal = make_deal()
    activity = client.post(
        "/api/activities",
        json={"deal_id": deal["id"], "type": "document", "title": "CIM sent", "status": "completed"},
    ).json()
    assert activity["completed_at"] is not None


def test_activity_validation(client, make_deal):
    deal = make_deal()
    assert client.post(
        "/api/activities", json={"deal_id": deal["id"], "type": "fax", "title": "x"}
    ).status_code == 422
    assert client.post(
        "/api/activities", json={"deal_id": deal["id"], "type": "task", "title": ""}
    ).status_code == 422
    assert client.post(
        "/api/activities", json={"deal_id": str(uuid.uuid4()), "type": "task", "title": "x"}
    ).status_code == 400

    activity = client.post(
        "/api/activities", json={"deal_id": deal["id"], "type": "task", "title": "x"}
    ).json()
    assert client.patch(f"/api/activities/{activity['id']}", json={"status": None}).status_code == 422
    assert client.patch(f"/api/activities/{uuid.uuid4()}", json={"title": "y"}).status_code == 404


def test_activities_filtered_by_entity(client, make_deal):
    first = make_deal(company_name="First")
    second = make_deal(company_name="Second")
    client.post("/api/activities", json={"deal_id": first["id"], "type": "task", "title": "A"})
    client.post("/api/activities", json={"deal_id": second["id"], "type": "task", "title": "B"})

    titles = [a["title"] for a in client.get("/api/activities", params={"entity_id": first["id"]}).json()]
    assert titles == ["A"]


def test_documents_for_deal(client, make_deal):
    deal = make_deal()
    assert client.post("/api/documents", json={"deal_id": deal["id"], "name": "Teaser.pdf"}).status_code == 201
    assert client.post(
        "/api/documents", json={"deal_id": str(uuid.uuid4()), "name": "Lost.pdf"}
    ).status_code == 400

    docs = client.get("/api/documents", params={"entity_id": deal["id"]}).json()
    assert [d["name"] for d in docs] == ["Teaser.pdf"]
    assert docs[0]["status"] == "draft"
