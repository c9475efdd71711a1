"""Listing & Search — GET /rest/phonebook-item and /rest/phonebook-item/{id}.

Invariants:
    - Items ordered by phone_number ascending
    - total counts every match, independent of the window
    - pageSize defaults to 2; skip = (page - 1) * pageSize + offset
    - id overrides the name filter
"""

import pytest

URL = "/rest/phonebook-item"


@pytest.fixture
async def five_items(make_item):
    # Inserted out of order so ordering comes from the query
    phones = ["+1 555 0105", "+1 555 0101", "+1 555 0104", "+1 555 0102", "+1 555 0103"]
    return [await make_item(phone_number=p) for p in phones]


def _phones(res) -> list[str]:
    return [i["phone_number"] for i in res.json()["data"]["items"]]


async def test_first_page_ordered_by_phone(client, five_items):
    res = await client.get(URL, params={"pageSize": 2})
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"
    assert body["data"]["page"] == 1
    assert body["data"]["total"] == 5
    assert _phones(res) == ["+1 555 0101", "+1 555 0102"]


async def test_default_page_size_is_two(client, five_items):
    res = await client.get(URL)
    assert len(res.json()["data"]["items"]) == 2
    assert res.json()["data"]["total"] == 5


@pytest.mark.parametrize("page,expected", [
    (2, ["+1 555 0103", "+1 555 0104"]),
    (3, ["+1 555 0105"]),
    (4, []),
])
async def test_later_pages(client, five_items, page, expected):
    res = await client.get(URL, params={"page": page, "pageSize": 2})
    assert res.json()["data"]["page"] == page
    assert _phones(res) == expected
    assert res.json()["data"]["total"] == 5


async def test_offset_shifts_window(client, five_items):
    res = await client.get(URL, params={"page": 2, "pageSize": 2, "offset": 1})
    assert _phones(res) == ["+1 555 0104", "+1 555 0105"]


async def test_page_size_clamped_to_maximum(client, five_items):
    res = await client.get(URL, params={"pageSize": 100_000})
    assert res.status_code == 200
    assert len(res.json()["data"]["items"]) == 5


async def test_items_carry_all_fields(client, make_item):
    item = await make_item(first_name="Ada", last_name="Lovelace")
    res = await client.get(URL)
    [listed] = res.json()["data"]["items"]
    assert listed["id"] == item.id
    assert listed["first_name"] == "Ada"
    assert listed["last_name"] == "Lovelace"
    assert listed["country_code"] == "US"
    assert listed["timezone_name"] == "America/New_York"
    assert listed["inserted_on"] is not None
    assert listed["updated_on"] is None


async def test_name_filter_matches_first_or_last_name(client, make_item):
    await make_item(first_name="Bob", last_name="Stone", phone_number="+1 555 0001")
    await make_item(first_name="Alice", last_name="Johnson", phone_number="+1 555 0003")
    await make_item(first_name="John", last_name="Smith", phone_number="+1 555 0002")

    res = await client.get(URL, params={"name": "John", "pageSize": 10})

    body = res.json()["data"]
    assert body["total"] == 2
    assert [i["first_name"] for i in body["items"]] == ["John", "Alice"]


async def test_name_filter_treats_wildcards_literally(client, make_item):
    await make_item(first_name="John")
    res = await client.get(URL, params={"name": "%"})
    assert res.json()["data"]["total"] == 0


async def test_get_by_id(client, make_item):
    await make_item()
    target = await make_item(first_name="Target")

    res = await client.get(f"{URL}/{target.id}")

    body = res.json()["data"]
    assert body["total"] == 1
    assert body["items"][0]["id"] == target.id


async def test_id_overrides_name_filter(client, make_item):
    target = await make_item(first_name="Target")
    res = await client.get(f"{URL}/{target.id}", params={"name": "nobody"})
    assert res.json()["data"]["total"] == 1


async def test_get_unknown_id_returns_empty_list(client):
    res = await client.get(f"{URL}/999")
    assert res.status_code == 200
    assert res.json()["data"] == {"items": [], "page": 1, "total": 0}


@pytest.mark.parametrize("params,field", [
    ({"page": 0}, "page"),
    ({"pageSize": 0}, "pageSize"),
    ({"offset": -1}, "offset"),
    ({"page": "abc"}, "page"),
])
async def test_bad_query_params_return_400(client, params, field):
    res = await client.get(URL, params=params)
    assert res.status_code == 400
    body = res.json()
    assert body["status"] == "error"
    assert field in body["data"]


async def test_non_integer_id_returns_400(client):
    res = await client.get(f"{URL}/abc")
    assert res.status_code == 400
    assert "entry_id" in res.json()["data"]


@pytest.mark.parametrize("params,field", [
    ({"page": 10**20}, "page"),
    ({"page": 2**31}, "page"),
    ({"offset": 10**20}, "offset"),
])
async def test_oversized_window_params_return_400(client, params, field):
    res = await client.get(URL, params=params)
    assert res.status_code == 400
    assert field in res.json()["data"]


async def test_largest_page_is_an_empty_page(client, make_item):
    await make_item()
    res = await client.get(URL, params={"page": 2**31 - 1, "pageSize": 100})
    assert res.status_code == 200
    assert res.json()["data"]["items"] == []
    assert res.json()["data"]["total"] == 1


@pytest.mark.parametrize("entry_id", ["99999999999999999999", str(2**31), "0"])
async def test_out_of_range_id_returns_400(client, entry_id):
    res = await client.get(f"{URL}/{entry_id}")
    assert res.status_code == 400
    assert res.json()["status"] == "error"
    assert "entry_id" in res.json()["data"]


async def test_largest_id_is_looked_up(client):
    res = await client.get(f"{URL}/{2**31 - 1}")
    assert res.status_code == 200
    assert res.json()["data"]["total"] == 0
