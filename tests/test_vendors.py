import pytest

from vendor_seo.vendors import duckduckgo, nominatim, overpass


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


class DummySession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append(("GET", url, params, headers, timeout))
        return self.responses.pop(0)

    def post(self, url, data=None, timeout=None):
        self.calls.append(("POST", url, data, None, timeout))
        return self.responses.pop(0)


def test_resolve_location_success(monkeypatch):
    session = DummySession(
        DummyResponse(payload=[{"lat": "6.5244", "lon": "3.3792", "display_name": "Lagos, Nigeria"}])
    )
    monkeypatch.setattr(nominatim, "_SESSION", session)

    location = nominatim.resolve_location("Lagos")

    assert location.city == "Lagos"
    assert location.display_name == "Lagos, Nigeria"
    assert location.lat == pytest.approx(6.5244)
    assert location.lon == pytest.approx(3.3792)
    assert location.neighborhoods == []
    _, url, params, headers, timeout = session.calls[0]
    assert "nominatim" in url
    assert params["country"] == "nigeria"
    assert params["limit"] == 1
    assert headers["User-Agent"]
    assert timeout == nominatim.REQUEST_TIMEOUT


def test_resolve_location_no_results(monkeypatch):
    monkeypatch.setattr(nominatim, "_SESSION", DummySession(DummyResponse(payload=[])))
    assert nominatim.resolve_location("Nowhere") is None


def test_resolve_location_http_error(monkeypatch):
    monkeypatch.setattr(nominatim, "_SESSION", DummySession(DummyResponse(status_code=503)))
    with pytest.raises(nominatim.LocationLookupError):
        nominatim.resolve_location("Lagos")


def test_resolve_location_rejects_bad_coordinates(monkeypatch):
    session = DummySession(DummyResponse(payload=[{"lat": "nan", "lon": "3.1", "display_name": "x"}]))
    monkeypatch.setattr(nominatim, "_SESSION", session)
    with pytest.raises(LookupError):
        nominatim.resolve_location("Lagos")


def test_build_around_query_covers_all_element_types():
    query = overpass.build_around_query("shop", overpass.SHOP_PATTERN, 20000, 6.5, 3.3)
    assert query.startswith("[out:json][timeout:25];")
    for kind in ("node", "way", "relation"):
        assert f'{kind}["shop"~"clothes|boutique|jewelry|fashion|tailor|shoes"](around:20000,6.5,3.3);' in query
    assert query.strip().endswith("out center;")


def test_query_shops_posts_query(monkeypatch):
    session = DummySession(DummyResponse(payload={"elements": [{"id": 1, "tags": {"name": "Ada Couture"}}]}))
    monkeypatch.setattr(overpass, "_SESSION", session)

    elements = overpass.query_shops(6.5, 3.3)

    assert elements == [{"id": 1, "tags": {"name": "Ada Couture"}}]
    method, url, data, _, _ = session.calls[0]
    assert method == "POST"
    assert "interpreter" in url
    assert '["shop"~' in data


def test_query_neighborhoods_returns_names(monkeypatch):
    payload = {"elements": [{"tags": {"name": "Yaba"}}, {"tags": {}}, {"tags": {"name": " Surulere "}}]}
    monkeypatch.setattr(overpass, "_SESSION", DummySession(DummyResponse(payload=payload)))
    assert overpass.query_neighborhoods(6.5, 3.3) == ["Yaba", "Surulere"]


def test_overpass_error_status(monkeypatch):
    monkeypatch.setattr(overpass, "_SESSION", DummySession(DummyResponse(status_code=504, text="timeout")))
    with pytest.raises(overpass.OverpassError):
        overpass.query_shops(6.5, 3.3)


def test_autosuggest_parses_phrase_objects(monkeypatch):
    session = DummySession(DummyResponse(payload=[{"phrase": "aso ebi lagos"}, {"phrase": " "}, {"other": 1}]))
    monkeypatch.setattr(duckduckgo, "_SESSION", session)

    assert duckduckgo.autosuggest("aso ebi lagos") == ["aso ebi lagos"]
    assert session.calls[0][2] == {"q": "aso ebi lagos"}


def test_autosuggest_parses_opensearch_shape(monkeypatch):
    payload = ["aso ebi", ["aso ebi styles", "aso ebi lace"]]
    monkeypatch.setattr(duckduckgo, "_SESSION", DummySession(DummyResponse(payload=payload)))
    assert duckduckgo.autosuggest("aso ebi") == ["aso ebi styles", "aso ebi lace"]


def test_autosuggest_error_status(monkeypatch):
    monkeypatch.setattr(duckduckgo, "_SESSION", DummySession(DummyResponse(status_code=429)))
    with pytest.raises(duckduckgo.DuckDuckGoError):
        duckduckgo.autosuggest("anything")


class NonJSONResponse(DummyResponse):
    def json(self):
        raise ValueError("Expecting value")


def test_resolve_location_rejects_object_body(monkeypatch):
    session = DummySession(DummyResponse(payload={"error": "Unable to geocode"}))
    monkeypatch.setattr(nominatim, "_SESSION", session)
    with pytest.raises(nominatim.LocationLookupError):
        nominatim.resolve_location("Lagos")


def test_resolve_location_rejects_non_json_body(monkeypatch):
    monkeypatch.setattr(nominatim, "_SESSION", DummySession(NonJSONResponse(payload=None)))
    with pytest.raises(nominatim.LocationLookupError):
        nominatim.resolve_location("Lagos")


def test_autosuggest_non_json_body(monkeypatch):
    monkeypatch.setattr(duckduckgo, "_SESSION", DummySession(NonJSONResponse(payload=None)))
    with pytest.raises(duckduckgo.DuckDuckGoError):
        duckduckgo.autosuggest("aso ebi")
