from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from fleet import Dispatcher, EventLog, FleetConfig, ThreadedDispatcher, build_dispatcher

logger = logging.getLogger(__name__)


class HallCall(BaseModel):
    floor: int
    direction: str


class StrategySelection(BaseModel):
    name: str
    options: Dict[str, object] = {}


class DispatchManager:
    """Serializes calls into the dispatcher and streams car updates to panels."""

    def __init__(self, config: Optional[FleetConfig] = None) -> None:
        self.config = config or FleetConfig()
        self.dispatcher: Dispatcher = build_dispatcher(self.config)
        self.strategy_name = self.config.strategy
        self.events = EventLog()
        self.dispatcher.register_sink(self.events)
        if isinstance(self.dispatcher, ThreadedDispatcher):
            self.dispatcher.start()
        self.watchers: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def watch(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.watchers.add(websocket)
        await websocket.send_json(self.current_state())

    def unwatch(self, websocket: WebSocket) -> None:
        self.watchers.discard(websocket)

    def current_state(self) -> dict:
        return {
            "floors": [self.config.lowest_floor, self.config.highest_floor],
            "cars": [snapshot.to_dict() for snapshot in self.dispatcher.snapshot()],
            "strategy": self.strategy_name,
        }

    async def submit(self, floor: int, direction: str) -> dict:
        async with self._lock:
            car_id = self.dispatcher.submit_request(floor, direction)
            if isinstance(self.dispatcher, ThreadedDispatcher):
                await asyncio.to_thread(self.dispatcher.wait_idle)
            events: List[dict] = [event.to_dict() for event in self.events.drain()]
            state = self.current_state()
        if events:
            await self._push_updates(events, state["cars"])
        return {**state, "car_id": car_id, "events": events}

    async def set_strategy(self, name: str, options: Dict[str, object]) -> dict:
        async with self._lock:
            self.dispatcher.use_strategy(name, **options)
            self.strategy_name = name
            return self.current_state()

    def close(self) -> None:
        if isinstance(self.dispatcher, ThreadedDispatcher):
            self.dispatcher.stop()

    async def _push_updates(self, events: List[dict], cars: List[dict]) -> None:
        payload = {"events": events, "cars": cars}
        for websocket in list(self.watchers):
            try:
                await websocket.send_json(payload)
            except (WebSocketDisconnect, RuntimeError):
                logger.info("Dropping closed update stream")
                self.unwatch(websocket)


def create_app(manager: Optional[DispatchManager] = None) -> FastAPI:
    manager = manager or DispatchManager()
    app = FastAPI(title="LiftCall Dispatch API")
    app.state.manager = manager
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        manager.close()

    @app.get("/state")
    async def get_state() -> dict:
        return manager.current_state()

    @app.post("/calls")
    async def submit_call(call: HallCall) -> dict:
        try:
            return await manager.submit(call.floor, call.direction)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.post("/strategy")
    async def set_strategy(selection: StrategySelection) -> dict:
        try:
            return await manager.set_strategy(selection.name, selection.options)
        except (TypeError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.websocket("/ws/stream")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await manager.watch(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            manager.unwatch(websocket)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
