import json
import logging
import os
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from dotenv import load_dotenv
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field, StringConstraints, TypeAdapter, ValidationError

from sneaky import GameConfig, GameState, InputRouter, Phase, TickDriver, load_config
from sneaky.engine import TickOutcome
from sneaky.state import GameSnapshot

# Paths
BASE_DIR = Path(__file__).parent
STATIC_DIR = BASE_DIR / "static"

load_dotenv(BASE_DIR / ".env")

logger = logging.getLogger("sneaky.server")

config: GameConfig = load_config()

app = FastAPI(title="Sneaky")


class SetPlayerName(BaseModel):
    type: Literal["set_player_name"]
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=32)]


class SetBoardSize(BaseModel):
    type: Literal["set_board_size"]
    size: int


class Start(BaseModel):
    type: Literal["start"]


class Key(BaseModel):
    type: Literal["key"]
    key: str


class Reset(BaseModel):
    type: Literal["reset"]


class Quit(BaseModel):
    type: Literal["quit"]


ClientMessage = Annotated[
    Union[SetPlayerName, SetBoardSize, Start, Key, Reset, Quit],
    Field(discriminator="type"),
]
client_message_adapter = TypeAdapter(ClientMessage)


@app.get("/")
async def serve_index():
    """Serve the main index.html file."""
    index_path = STATIC_DIR / "index.html"
    if index_path.exists():
        return FileResponse(index_path)
    return {"error": "index.html not found"}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/config")
async def get_config():
    """Return the active game configuration."""
    return config.model_dump()


class GameSession:
    """Manages a single game session over one WebSocket."""

    def __init__(self, websocket: WebSocket, game_config: GameConfig):
        self.websocket = websocket
        self.state = GameState(game_config)
        self.router = InputRouter(self.state)
        self.driver = TickDriver(
            self.state,
            interval_ms=game_config.tick_interval_ms,
            on_tick=self.on_tick,
        )

    async def send_state(self) -> None:
        await self.websocket.send_json({
            "type": "state_update",
            "state": self.state.snapshot().to_dict(),
        })

    async def send_error(self, message: str) -> None:
        await self.websocket.send_json({"type": "error", "message": message})

    async def send_game_over(self, snapshot: GameSnapshot) -> None:
        await self.websocket.send_json({
            "type": "game_over",
            "state": snapshot.to_dict(),
            "result": snapshot.phase.value,
            "final_score": snapshot.score,
            "games_played": snapshot.games_played,
        })

    async def on_tick(self, outcome: TickOutcome, snapshot: GameSnapshot) -> None:
        await self.websocket.send_json({
            "type": "state_update",
            "state": snapshot.to_dict(),
        })
        if snapshot.phase.is_over:
            await self.send_game_over(snapshot)

    async def handle(self, message: ClientMessage) -> None:
        """Apply one validated client command."""
        if isinstance(message, SetPlayerName):
            self.state.set_player_name(message.name)

        elif isinstance(message, SetBoardSize):
            self.state.set_board_size(message.size)

        elif isinstance(message, Start):
            if not self.state.player_name:
                await self.send_error("Player name is required to start")
                return
            self.state.start()
            self.driver.start()

        elif isinstance(message, Key):
            # Key presses only move the buffer; the next tick reports the result
            if self.state.phase is Phase.RUNNING:
                self.router.handle_key(message.key)
            return

        elif isinstance(message, Reset):
            if not self.state.player_name:
                await self.send_error("Player name is required to start")
                return
            await self.driver.stop()
            self.state.reset()
            self.driver.start()

        elif isinstance(message, Quit):
            await self.driver.stop()
            self.state.quit()

        await self.send_state()

    async def close(self) -> None:
        await self.driver.stop()


@app.websocket("/ws/game")
async def websocket_game(websocket: WebSocket):
    """WebSocket endpoint for real-time game communication."""
    await websocket.accept()

    session = GameSession(websocket, config)
    await session.send_state()

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = client_message_adapter.validate_python(json.loads(data))
            except (json.JSONDecodeError, ValidationError) as e:
                await session.send_error(f"Invalid message: {e}")
                continue

            await session.handle(message)

    except WebSocketDisconnect:
        logger.info("Client disconnected")
    finally:
        await session.close()


# Mount static files (after all routes)
if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


def find_available_port(start_port: int = 8000, max_attempts: int = 100) -> int:
    """Find an available port starting from start_port.

    Args:
        start_port: Port number to start searching from
        max_attempts: Maximum number of ports to try

    Returns:
        An available port number

    Raises:
        RuntimeError: If no available port is found
    """
    import socket

    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(("0.0.0.0", port))
                return port
        except OSError:
            continue

    raise RuntimeError(f"No available port found in range {start_port}-{start_port + max_attempts - 1}")


def main(port: Optional[int] = None) -> None:
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    default_port = 8000
    port = port or int(os.environ.get("PORT", 0))
    if not port:
        port = find_available_port(default_port)
        if port != default_port:
            print(f"Port {default_port} is in use, using port {port} instead")

    print(f"Starting server at http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
