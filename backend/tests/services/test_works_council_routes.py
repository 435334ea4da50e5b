"""Works-council HTTP surface — status codes, camelCase bodies, error envelope.

Invariants:
    - Success answers 200 with camelCase JSON
    - 400 for bad category, duplicate membership, unit mismatch, repeated ordering ids
    - 404 for unknown employee, non-member removal, missing council
"""

from uuid import uuid4

BASE = "/api/v1/works-council"


async def test_add_member_returns_scope(client, make_employees, unit_id):
    e1, e2 = await make_employees(unit_id, 2)
    await client.post(
        f"{BASE}/{unit_id}/members",
        json={"employeeId": str(e1.id), "category": "workers"},
    )
    res = await client.post(
        f"{BASE}/{unit_id}/members",
        json={"employeeId": str(e2.id), "category": "workers"},
    )
    assert res.status_code == 200
    body = res.json()
    assert [m["employeeId"] for m in body] == [str(e1.id), str(e2.id)]
    assert [m["position"] for m in body] == [0, 1]
    assert body[0]["employee"]["firstName"] == "E1"


async def test_add_duplicate_is_400(client, make_employees, unit_id):
    (e1,) = await make_employees(unit_id, 1)
    payload = {"employeeId": str(e1.id), "category": "workers"}
    await client.post(f"{BASE}/{unit_id}/members", json=payload)

    res = await client.post(f"{BASE}/{unit_id}/members", json=payload)

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_MEMBERSHIP"


async def test_add_invalid_category_is_400(client, make_employees, unit_id):
    (e1,) = await make_employees(unit_id, 1)
    res = await client.post(
        f"{BASE}/{unit_id}/members",
        json={"employeeId": str(e1.id), "category": "board"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_add_unknown_employee_is_404(client, unit_id):
    res = await client.post(
        f"{BASE}/{unit_id}/members",
        json={"employeeId": str(uuid4()), "category": "workers"},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_add_employee_of_other_unit_is_400(client, make_employees, unit_id):
    (e1,) = await make_employees(uuid4(), 1)
    res = await client.post(
        f"{BASE}/{unit_id}/members",
        json={"employeeId": str(e1.id), "category": "workers"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "UNIT_MISMATCH"


async def test_malformed_body_is_400(client, unit_id):
    res = await client.post(f"{BASE}/{unit_id}/members", json={"category": "workers"})
    assert res.status_code == 400
    assert res.json()["error"]["details"]


async def test_remove_member(client, make_employees, unit_id):
    (e1,) = await make_employees(unit_id, 1)
    payload = {"employeeId": str(e1.id), "category": "clerks"}
    await client.post(f"{BASE}/{unit_id}/members", json=payload)

    res = await client.request("DELETE", f"{BASE}/{unit_id}/members", json=payload)

    assert res.status_code == 200
    assert res.json()["employeeId"] == str(e1.id)
    listed = await client.get(f"{BASE}/{unit_id}/members")
    assert listed.json() == []


async def test_remove_non_member_is_404(client, make_employees, unit_id):
    (e1,) = await make_employees(unit_id, 1)
    res = await client.request(
        "DELETE", f"{BASE}/{unit_id}/members",
        json={"employeeId": str(e1.id), "category": "clerks"},
    )
    assert res.status_code == 404


async def test_list_with_category_filter(client, make_employees, unit_id):
    e1, e2 = await make_employees(unit_id, 2)
    await client.post(
        f"{BASE}/{unit_id}/members",
        json={"employeeId": str(e1.id), "category": "workers"},
    )
    await client.post(
        f"{BASE}/{unit_id}/members",
        json={"employeeId": str(e2.id), "category": "management"},
    )

    res = await client.get(f"{BASE}/{unit_id}/members", params={"category": "management"})

    assert res.status_code == 200
    assert [m["employeeId"] for m in res.json()] == [str(e2.id)]


async def test_list_bad_filter_is_400(client, unit_id):
    res = await client.get(f"{BASE}/{unit_id}/members", params={"category": "x"})
    assert res.status_code == 400


async def test_bulk_add_and_remove(client, make_employees, unit_id):
    e1, e2, e3 = await make_employees(unit_id, 3)
    ids = [str(e.id) for e in (e1, e2, e3)]

    res = await client.post(
        f"{BASE}/{unit_id}/members/bulk-add",
        json={"employeeIds": ids, "category": "clerks"},
    )
    assert res.status_code == 200
    body = res.json()
    assert [entry["employee"]["id"] for entry in body] == ids
    assert body[2]["memberships"]["clerks"] == {"member": True, "position": 2}

    res = await client.post(
        f"{BASE}/{unit_id}/members/bulk-remove",
        json={"employeeIds": [ids[1]], "category": "clerks"},
    )
    assert res.status_code == 200
    assert res.json()[0]["memberships"]["clerks"]["member"] is False

    listed = await client.get(f"{BASE}/{unit_id}/members", params={"category": "clerks"})
    assert [m["employeeId"] for m in listed.json()] == [ids[0], ids[2]]


async def test_bulk_add_strict_unknown_is_404(client, make_employees, unit_id):
    (e1,) = await make_employees(unit_id, 1)
    res = await client.post(
        f"{BASE}/{unit_id}/members/bulk-add",
        json={
            "employeeIds": [str(e1.id), str(uuid4())],
            "category": "clerks", "strict": True,
        },
    )
    assert res.status_code == 404
    listed = await client.get(f"{BASE}/{unit_id}/members")
    assert listed.json() == []


async def test_bulk_remove_with_no_matches_is_200(client, unit_id):
    res = await client.post(
        f"{BASE}/{unit_id}/members/bulk-remove",
        json={"employeeIds": [str(uuid4())], "category": "clerks"},
    )
    assert res.status_code == 200
    assert res.json() == []


async def test_reorder(client, make_employees, unit_id):
    a, b, c = await make_employees(unit_id, 3)
    await client.post(
        f"{BASE}/{unit_id}/members/bulk-add",
        json={"employeeIds": [str(a.id), str(b.id), str(c.id)], "category": "workers"},
    )

    res = await client.post(
        f"{BASE}/{unit_id}/reorder",
        json={"category": "workers", "orderedIds": [str(c.id), str(a.id)]},
    )

    assert res.status_code == 200
    assert [(m["employeeId"], m["position"]) for m in res.json()] == [
        (str(c.id), 0), (str(a.id), 1), (str(b.id), 2),
    ]


async def test_reorder_repeated_ids_is_400(client, unit_id):
    repeated = str(uuid4())
    res = await client.post(
        f"{BASE}/{unit_id}/reorder",
        json={"category": "workers", "orderedIds": [repeated, repeated]},
    )
    assert res.status_code == 400


async def test_get_council(client, make_employees, unit_id):
    res = await client.get(f"{BASE}/{unit_id}")
    assert res.status_code == 404

    (e1,) = await make_employees(unit_id, 1)
    await client.post(
        f"{BASE}/{unit_id}/members",
        json={"employeeId": str(e1.id), "category": "workers"},
    )

    res = await client.get(f"{BASE}/{unit_id}")
    assert res.status_code == 200
    assert res.json()["unitId"] == str(unit_id)


async def test_health_probes(client):
    live = await client.get("/api/v1/health/")
    assert live.status_code == 200
    assert live.json()["service"] == "works-council-api"

    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
