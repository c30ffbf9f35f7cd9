import pytest

pytestmark = pytest.mark.api


@pytest.mark.asyncio
async def test_search_locations_returns_ranked_candidates(app_client, store):
    res = await app_client.get("/api/locations/search", params={"keyword": "paris"})

    assert res.status_code == 200
    body = res.json()
    assert [item["code"] for item in body] == ["PAR"]
    assert body[0]["kind"] == "city"
    assert body[0]["latitude"] == pytest.approx(48.85341)
    assert "PAR" in store.rows


@pytest.mark.asyncio
async def test_search_locations_rejects_short_keyword(app_client, provider):
    res = await app_client.get("/api/locations/search", params={"keyword": "p"})

    assert res.status_code == 400
    assert "keyword" in res.json()["detail"]
    assert provider.calls == []


@pytest.mark.asyncio
async def test_coordinates_for_known_code(app_client):
    res = await app_client.get("/api/locations/jfk/coordinates")

    assert res.status_code == 200
    body = res.json()
    assert body["code"] == "JFK"
    assert body["kind"] == "airport"
    assert (body["latitude"], body["longitude"]) == (40.6413, -73.7781)


@pytest.mark.asyncio
async def test_coordinates_unknown_code_is_404(app_client):
    res = await app_client.get("/api/locations/XYZ/coordinates")

    assert res.status_code == 404
    assert res.json() == {"detail": "location coordinates not found for XYZ"}


@pytest.mark.asyncio
async def test_coordinates_malformed_code_is_400(app_client, provider):
    res = await app_client.get("/api/locations/J1K/coordinates")

    assert res.status_code == 400
    assert provider.calls == []


@pytest.mark.asyncio
async def test_provider_outage_is_503(app_client, provider):
    provider.fail = True

    res = await app_client.get("/api/locations/LHR/coordinates")

    assert res.status_code == 503
    assert res.json() == {"detail": "provider down"}


@pytest.mark.asyncio
async def test_route_map(app_client):
    res = await app_client.get("/api/locations/route-map", params={"origin": "JFK", "destination": "LHR"})

    assert res.status_code == 200
    body = res.json()
    assert body["origin"]["code"] == "JFK"
    assert body["destination"]["code"] == "LHR"
    assert body["distance_km"] == 5540
    bounds = body["bounds"]
    assert bounds["south"] < 40.6413 < 51.47 < bounds["north"]
    assert bounds["west"] < -73.7781 < -0.4543 < bounds["east"]


@pytest.mark.asyncio
async def test_route_map_requires_both_codes(app_client):
    res = await app_client.get("/api/locations/route-map", params={"origin": "JFK"})

    assert res.status_code == 400


@pytest.mark.asyncio
async def test_route_map_unknown_destination_is_404(app_client):
    res = await app_client.get("/api/locations/route-map", params={"origin": "JFK", "destination": "QQQ"})

    assert res.status_code == 404
