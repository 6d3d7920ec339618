from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Literal
import asyncio, logging, websockets, time

logger = logging.getLogger(__name__)

EventType = Literal["blink", "mouth_open", "eyebrow_raise"]

class Counts(BaseModel):
    eye_blinks: int = 0
    mouth_openings: int = 0
    eyebrow_raises: int = 0

class Event(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())
    type: EventType
    counts: Counts

async def ws_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765):
    clients=set()
    async def handler(websocket):
        clients.add(websocket)
        try:
            await websocket.wait_closed()
        finally:
            clients.discard(websocket)
    async def pump():
        while True:
            msg = await queue.get()
            if clients:
                results = await asyncio.gather(*[c.send(msg) for c in list(clients)], return_exceptions=True)
                for r in results:
                    if isinstance(r, Exception):
                        logger.debug("ws send failed: %s", r)
    async with websockets.serve(handler, host, port):
        logger.info("broadcasting events on ws://%s:%d", host, port)
        await pump()
