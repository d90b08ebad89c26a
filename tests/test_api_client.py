from ui import api_client as api_client_mod
from ui.api_client import ApiClient


class _FakeResponse:
    def __init__(self, payload):
        self._payload = payload
        self.text = "board"

    def raise_for_status(self):
        return None

    def json(self):
        return self._payload


def test_client_routes_calls(monkeypatch):
    calls = []

    def fake_post(url, json=None, params=None, timeout=None):
        calls.append(("POST", url, json))
        return _FakeResponse({"ok": True})

    def fake_get(url, params=None, timeout=None):
        calls.append(("GET", url, params))
        return _FakeResponse({"ok": True})

    monkeypatch.setattr(api_client_mod.requests, "post", fake_post)
    monkeypatch.setattr(api_client_mod.requests, "get", fake_get)

    client = ApiClient(base_url="http://api")
    client.create_network()
    client.add_train(3, "t18", 1, 8)
    client.move_trains(3, ["t18", "t34"])
    client.get_section(3, 5)
    assert client.render(3) == "board"

    assert calls[0] == ("POST", "http://api/networks", {"corridor": None, "corridor_id": None})
    assert calls[1] == ("POST", "http://api/networks/3/trains", {"name": "t18", "entry": 1, "destination": 8})
    assert calls[2] == ("POST", "http://api/networks/3/move", {"trains": ["t18", "t34"]})
    assert calls[3][:2] == ("GET", "http://api/networks/3/sections/5")
    assert calls[4][:2] == ("GET", "http://api/networks/3/render")
