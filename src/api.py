import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from pydantic import BaseModel

from src.config import load_corridor
from src.core.errors import (
    ConstraintViolation,
    CorridorConfigError,
    DuplicateNameError,
    InterlockingError,
    NoPathError,
    ResourceConflict,
    UnknownSectionError,
    UnknownTrainError,
)
from src.core.interlocking import Interlocking
from src.core.models import CorridorConfig
from src.sim.render import render_board
from src.store.db import (
    init_db,
    save_corridor,
    list_corridors,
    get_corridor,
    update_corridor,
    delete_corridor,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Corridor Interlocking API")
init_db()

# Live networks, keyed by id. Handlers are async and never await while
# mutating, so each request sees a network exclusively.
_networks: Dict[int, Interlocking] = {}
_next_id = 1


class UnknownNetworkError(InterlockingError, LookupError):
    pass


class UnknownCorridorError(InterlockingError, LookupError):
    pass


_STATUS = {
    UnknownTrainError: 404,
    UnknownSectionError: 404,
    UnknownNetworkError: 404,
    UnknownCorridorError: 404,
    DuplicateNameError: 409,
    ConstraintViolation: 409,
    ResourceConflict: 409,
    NoPathError: 422,
    CorridorConfigError: 422,
}


@app.exception_handler(InterlockingError)
async def interlocking_error_handler(request: Request, exc: InterlockingError) -> JSONResponse:
    status = next((code for cls, code in _STATUS.items() if isinstance(exc, cls)), 400)
    return JSONResponse(status_code=status, content={"error": type(exc).__name__, "detail": str(exc)})


@app.get("/")
async def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.get("/favicon.ico")
async def favicon() -> Response:
    return Response(status_code=204)


class NetworkIn(BaseModel):
    # inline corridor payload, else a saved corridor id, else the default corridor
    corridor: Dict[str, Any] | None = None
    corridor_id: int | None = None


class TrainIn(BaseModel):
    name: str
    entry: int
    destination: int


class MoveIn(BaseModel):
    trains: List[str]


class CorridorIn(BaseModel):
    name: str = "corridor"
    payload: Dict[str, Any]


class CorridorUpdate(BaseModel):
    name: str | None = None
    payload: Dict[str, Any] | None = None


def _network(nid: int) -> Interlocking:
    network = _networks.get(nid)
    if network is None:
        raise UnknownNetworkError(f"Network {nid} does not exist")
    return network


def _saved_corridor(cid: int) -> CorridorConfig:
    return CorridorConfig.from_dict(_corridor_row(cid)["payload"])


def _corridor_row(cid: int) -> Dict[str, Any]:
    row = get_corridor(cid)
    if not row:
        raise UnknownCorridorError(f"Corridor {cid} not found")
    return row


# Networks

@app.post("/networks")
async def create_network(body: NetworkIn | None = None) -> Dict[str, Any]:
    global _next_id
    body = body or NetworkIn()
    if body.corridor is not None:
        config = CorridorConfig.from_dict(body.corridor)
    elif body.corridor_id is not None:
        config = _saved_corridor(body.corridor_id)
    else:
        config = load_corridor()
    nid = _next_id
    _next_id += 1
    _networks[nid] = Interlocking(config)
    logger.info("Created network %d with %d sections", nid, len(config.section_ids))
    return {"id": nid, "sections": sorted(config.section_ids)}


@app.get("/networks/{nid}")
async def network_state(nid: int) -> Dict[str, Any]:
    network = _network(nid)
    layout = [list(row) for row in network.config.layout] if network.config.layout else None
    return {"id": nid, "layout": layout, **network.snapshot()}


@app.delete("/networks/{nid}")
async def delete_network(nid: int) -> Dict[str, Any]:
    return {"deleted": _networks.pop(nid, None) is not None}


@app.get("/networks/{nid}/render")
async def render_network(nid: int) -> PlainTextResponse:
    return PlainTextResponse(render_board(_network(nid)))


# Trains

@app.post("/networks/{nid}/trains")
async def add_train(nid: int, body: TrainIn) -> Dict[str, Any]:
    network = _network(nid)
    network.add_train(body.name, body.entry, body.destination)
    return {"train": body.name, "section": network.get_train(body.name)}


@app.delete("/networks/{nid}/trains/{name}")
async def remove_train(nid: int, name: str) -> Dict[str, Any]:
    _network(nid).remove_train(name)
    return {"removed": name}


@app.post("/networks/{nid}/move")
async def move_trains(nid: int, body: MoveIn) -> Dict[str, Any]:
    network = _network(nid)
    moved = network.move_trains(body.trains)
    return {"moved": moved, "positions": {name: network.get_train(name) for name in body.trains}}


@app.get("/networks/{nid}/sections/{sid}")
async def get_section(nid: int, sid: int) -> Dict[str, Any]:
    return {"section": sid, "train": _network(nid).get_section(sid)}


@app.get("/networks/{nid}/trains/{name}")
async def get_train(nid: int, name: str) -> Dict[str, Any]:
    return {"train": name, "section": _network(nid).get_train(name)}


# Saved corridor configurations

@app.post("/corridors")
async def create_corridor(body: CorridorIn) -> Dict[str, Any]:
    # validate before storing so only loadable corridors are saved
    config = CorridorConfig.from_dict(body.payload)
    cid = save_corridor(body.name, config.to_dict())
    return {"id": cid}


@app.get("/corridors")
async def corridors(offset: int = 0, limit: int = 50) -> Dict[str, Any]:
    return {"items": list_corridors(offset=offset, limit=limit)}


@app.get("/corridors/{cid}")
async def corridor(cid: int) -> Dict[str, Any]:
    return {"corridor": _corridor_row(cid)}


@app.put("/corridors/{cid}")
async def update_corridor_api(cid: int, body: CorridorUpdate) -> Dict[str, Any]:
    payload = CorridorConfig.from_dict(body.payload).to_dict() if body.payload is not None else None
    ok = update_corridor(cid, name=body.name, payload=payload)
    return {"updated": bool(ok)}


@app.delete("/corridors/{cid}")
async def delete_corridor_api(cid: int) -> Dict[str, Any]:
    ok = delete_corridor(cid)
    return {"deleted": bool(ok)}
