import os
import requests
from typing import Any, Dict, List, Optional


class ApiClient:
    def __init__(self, base_url: Optional[str] = None, timeout: float = 30.0) -> None:
        self.base_url = base_url or os.environ.get("API_BASE", "http://localhost:8000")
        self.timeout = timeout

    def _post(self, path: str, json: Dict[str, Any] | None = None, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        r = requests.post(f"{self.base_url}{path}", json=json, params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _get(self, path: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        r = requests.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _delete(self, path: str) -> Dict[str, Any]:
        r = requests.delete(f"{self.base_url}{path}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Networks
    def create_network(self, corridor: Optional[Dict[str, Any]] = None, corridor_id: Optional[int] = None) -> Dict[str, Any]:
        return self._post("/networks", json={"corridor": corridor, "corridor_id": corridor_id})

    def get_state(self, nid: int) -> Dict[str, Any]:
        return self._get(f"/networks/{nid}")

    def render(self, nid: int) -> str:
        r = requests.get(f"{self.base_url}/networks/{nid}/render", timeout=self.timeout)
        r.raise_for_status()
        return r.text

    def delete_network(self, nid: int) -> Dict[str, Any]:
        return self._delete(f"/networks/{nid}")

    # Trains
    def add_train(self, nid: int, name: str, entry: int, destination: int) -> Dict[str, Any]:
        return self._post(f"/networks/{nid}/trains", json={"name": name, "entry": entry, "destination": destination})

    def remove_train(self, nid: int, name: str) -> Dict[str, Any]:
        return self._delete(f"/networks/{nid}/trains/{name}")

    def move_trains(self, nid: int, names: List[str]) -> Dict[str, Any]:
        return self._post(f"/networks/{nid}/move", json={"trains": names})

    def get_section(self, nid: int, sid: int) -> Dict[str, Any]:
        return self._get(f"/networks/{nid}/sections/{sid}")

    def get_train(self, nid: int, name: str) -> Dict[str, Any]:
        return self._get(f"/networks/{nid}/trains/{name}")

    # Saved corridors
    def save_corridor(self, payload: Dict[str, Any], name: str) -> Dict[str, Any]:
        return self._post("/corridors", json={"name": name, "payload": payload})

    def get_corridors(self, offset: int = 0, limit: int = 50) -> Dict[str, Any]:
        return self._get("/corridors", params={"offset": offset, "limit": limit})

    def delete_corridor(self, cid: int) -> Dict[str, Any]:
        return self._delete(f"/corridors/{cid}")
