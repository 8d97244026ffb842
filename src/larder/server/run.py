"""Run the Larder ASGI application under uvicorn."""

from __future__ import annotations

import asyncio
import os
from typing import Optional

import uvicorn

APP_IMPORT_PATH = "larder.server.app:app"


async def _serve_for(server: uvicorn.Server, duration: float) -> None:
    """Serve until ``duration`` seconds have elapsed (smoke runs in CI)."""

    async def _shutdown() -> None:
        await asyncio.sleep(duration)
        server.should_exit = True

    asyncio.create_task(_shutdown())
    await server.serve()


def parse_duration(value: str | float | None) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid LARDER_SERVER_DURATION '{value}': {exc}") from exc
    if parsed <= 0:
        raise SystemExit("LARDER_SERVER_DURATION must be greater than 0 when provided.")
    return parsed


def serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: Optional[bool] = None,
    duration: Optional[float] = None,
) -> None:
    """Start uvicorn; unset arguments fall back to ``LARDER_SERVER_*`` variables."""

    host = host or os.environ.get("LARDER_SERVER_HOST", "127.0.0.1")
    port = port or int(os.environ.get("LARDER_SERVER_PORT", "8000"))
    if reload is None:
        reload = os.environ.get("RELOAD") == "1"
    if duration is None:
        duration = parse_duration(os.environ.get("LARDER_SERVER_DURATION"))

    if reload and duration is not None:
        raise SystemExit("Reload mode cannot be combined with a serve duration.")

    if reload:
        uvicorn.run(APP_IMPORT_PATH, host=host, port=port, reload=True)
        return

    server = uvicorn.Server(uvicorn.Config(APP_IMPORT_PATH, host=host, port=port, reload=False))
    if duration is not None:
        asyncio.run(_serve_for(server, duration))
        return
    server.run()


def main() -> None:
    serve()


if __name__ == "__main__":
    main()
