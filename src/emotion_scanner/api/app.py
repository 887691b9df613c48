"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect

from emotion_scanner.app_logging import configure_logging
from emotion_scanner.containers import AppContainer
from emotion_scanner.domain.scanner import ScannerSnapshot


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(
        level=container.settings.log_level,
        module_levels={
            "emotion_scanner.services.sampler": container.settings.sampler_log_level
        },
    )
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        state_container: AppContainer = app.state.container
        state_container.sampler.stop()
        await state_container.sampler.drain(cancel=True)
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/scanner")
    async def scanner_state(request: Request) -> dict[str, object]:
        """Return the current scanner snapshot."""
        state_container: AppContainer = request.app.state.container
        return _snapshot_payload(state_container.sampler.snapshot())

    @app.post("/scanner/start")
    async def start_scanner(request: Request) -> dict[str, object]:
        """Start sampling, acquiring the camera for a new session."""
        state_container: AppContainer = request.app.state.container
        state_container.sampler.start()
        return _snapshot_payload(state_container.sampler.snapshot())

    @app.post("/scanner/stop")
    async def stop_scanner(request: Request) -> dict[str, object]:
        """Stop sampling and release the camera."""
        state_container: AppContainer = request.app.state.container
        state_container.sampler.stop()
        return _snapshot_payload(state_container.sampler.snapshot())

    @app.websocket("/scanner/stream")
    async def scanner_stream(websocket: WebSocket) -> None:
        """Push a snapshot on connect and after every scanner update."""
        state_container: AppContainer = websocket.app.state.container
        sampler = state_container.sampler
        await websocket.accept()
        queue = sampler.subscribe()
        disconnected = asyncio.create_task(_wait_for_disconnect(websocket))
        next_snapshot: asyncio.Task[ScannerSnapshot] | None = None
        try:
            await websocket.send_json(_snapshot_payload(sampler.snapshot()))
            while True:
                next_snapshot = asyncio.create_task(queue.get())
                await asyncio.wait(
                    {next_snapshot, disconnected},
                    return_when=asyncio.FIRST_COMPLETED,
                )
                if disconnected.done():
                    break
                await websocket.send_json(_snapshot_payload(next_snapshot.result()))
        except WebSocketDisconnect:
            pass
        finally:
            if next_snapshot is not None:
                next_snapshot.cancel()
            disconnected.cancel()
            sampler.unsubscribe(queue)
        logger.info("Scanner stream client disconnected")

    return app


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    """Return once the client closes; other inbound messages are ignored."""
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


def _snapshot_payload(snapshot: ScannerSnapshot) -> dict[str, object]:
    payload = asdict(snapshot)
    payload["status"] = snapshot.status.value
    return payload
