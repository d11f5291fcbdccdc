#!/usr/bin/env python3
"""
OBD-II Decode Server

Exposes the PID registry over HTTP. Clients that already talk to an ELM327
adapter post the raw data bytes of a response and get the decoded value
back, with its unit and bounds.

Usage:
    python -m obd2_decoder.server --port 8327

    curl -X POST http://127.0.0.1:8327/decode \\
         -H 'Content-Type: application/json' \\
         -d '{"mode": 1, "pid": 12, "data": "1AF8"}'
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from obd2_decoder import __version__
from obd2_decoder.config import DEFAULT_CONFIG, configure_logging, load_config
from obd2_decoder.errors import InvalidLengthError, PIDNotFoundError
from obd2_decoder.pids import MODE_CURRENT_DATA, REGISTRY

logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Models
# =============================================================================

class DecodeRequest(BaseModel):
    mode: int = MODE_CURRENT_DATA
    pid: int
    data: str  # Hex data bytes, without the mode/PID echo: "1AF8" or "1A F8"


class SupportedRequest(BaseModel):
    mode: int = MODE_CURRENT_DATA
    responses: Dict[str, str]  # Query PID in hex -> bitmap in hex: {"00": "BE1FA813"}


# =============================================================================
# Helpers
# =============================================================================

def to_json_value(value: Any) -> Any:
    """Convert a decoded value to something JSON can carry."""
    if isinstance(value, Enum):
        return value.name
    if is_dataclass(value):
        return {k: to_json_value(v) for k, v in asdict(value).items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    return value


def _parse_hex(text: str) -> bytes:
    try:
        return bytes.fromhex(''.join(text.split()))
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid hex data: {text!r}")


# =============================================================================
# FastAPI App
# =============================================================================

def create_app(config: Optional[dict] = None) -> FastAPI:
    """Build the decode API."""
    config = config or DEFAULT_CONFIG

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        logger.info(f"OBD-II decode server starting ({len(REGISTRY)} PIDs, modes {REGISTRY.modes()})")
        yield
        logger.info("OBD-II decode server stopped")

    app = FastAPI(
        title="OBD-II Decoder",
        description="Decode raw OBD-II PID responses into physical values",
        version=__version__,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get("cors_origins", ["*"]),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": __version__, "pids": len(REGISTRY)}

    @app.get("/pids")
    async def list_pids(mode: int = MODE_CURRENT_DATA):
        """List PID definitions for a mode."""
        return {"mode": mode, "pids": [d.to_dict() for d in REGISTRY.all(mode)]}

    @app.get("/pids/name/{name}")
    async def get_pid_by_name(name: str, mode: int = MODE_CURRENT_DATA):
        """Get a PID definition by name or alias."""
        try:
            return REGISTRY.find(name, mode).to_dict()
        except PIDNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @app.get("/pids/{mode}/{pid}")
    async def get_pid(mode: int, pid: int):
        """Get a single PID definition."""
        try:
            return REGISTRY.lookup(mode, pid).to_dict()
        except PIDNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @app.post("/decode")
    async def decode(req: DecodeRequest):
        """Decode the data bytes of one PID response."""
        data = _parse_hex(req.data)
        try:
            defn = REGISTRY.lookup(req.mode, req.pid)
            value = defn.decode(data)
        except PIDNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InvalidLengthError as e:
            raise HTTPException(status_code=422, detail=str(e))

        return {
            "mode": defn.mode,
            "pid": defn.pid,
            "name": defn.name,
            "value": to_json_value(value),
            "unit": defn.unit,
        }

    @app.post("/supported")
    async def supported(req: SupportedRequest):
        """Combine supported-PIDs bitmaps (PIDs 00, 20, 40...) into one list."""
        responses = {}
        for base, bitmap in req.responses.items():
            try:
                base_pid = int(base, 16)
            except ValueError:
                raise HTTPException(status_code=422, detail=f"Invalid PID: {base!r}")
            data = _parse_hex(bitmap)
            if len(data) != 4:
                raise HTTPException(status_code=422, detail=str(InvalidLengthError(4, len(data))))
            responses[base_pid] = int.from_bytes(data, "big")

        try:
            pids = REGISTRY.decode_available(responses)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return {"mode": req.mode, "pids": pids}

    return app


app = create_app()


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="OBD-II Decode Server")
    parser.add_argument("--config", default=None, help="Path to JSON config file")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.host:
        config["host"] = args.host
    if args.port:
        config["port"] = args.port
    configure_logging(config)

    uvicorn.run(create_app(config), host=config["host"], port=config["port"])
