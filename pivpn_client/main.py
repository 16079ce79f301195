from typing import Iterator

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse, StreamingResponse
from pydantic import BaseModel, Field

from .pivpn.client import PiVPNClient
from .pivpn.config import load_settings
from .pivpn.exceptions import ConfPathNotSetError, InvalidUserNameError, PiVPNError
from .logging_utility import Logger, logger


class NewUser(BaseModel):
    name: str = Field(min_length=1)


def _error(e: PiVPNError, action: str) -> HTTPException:
    """Map a client error to an HTTP error."""
    if isinstance(e, ConfPathNotSetError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, InvalidUserNameError):
        return HTTPException(status_code=400, detail=str(e))
    logger.error(f"Error while trying to {action}: {str(e)}")
    return HTTPException(status_code=500, detail=f"Failed to {action}")


def _iter_file(stream, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
    with stream:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            yield chunk


def create_app(pivpn: PiVPNClient) -> FastAPI:
    app = FastAPI(title="PiVPN Client")

    @app.get("/users")
    async def list_users():
        """All client profiles"""
        try:
            return [user.to_dict() for user in await pivpn.list_users()]
        except PiVPNError as e:
            raise _error(e, "list users")

    @app.post("/users")
    async def add_user(user: NewUser):
        """Create a client profile"""
        try:
            added = await pivpn.add_user(user.name)
        except PiVPNError as e:
            raise _error(e, "add user")
        if not added:
            raise HTTPException(status_code=400, detail=f"User {user.name} was not added")
        return {"status": "success", "message": f"User {user.name} added"}

    @app.get("/users/{name}")
    async def get_user(name: str):
        try:
            user = await pivpn.get_user(name)
        except PiVPNError as e:
            raise _error(e, "get user")
        if user is None:
            raise HTTPException(status_code=404, detail=f"User {name} not found")
        return user.to_dict()

    @app.delete("/users/{name}")
    async def remove_user(name: str):
        """Remove a client profile"""
        try:
            removed = await pivpn.remove_user(name)
        except PiVPNError as e:
            raise _error(e, "remove user")
        if not removed:
            raise HTTPException(status_code=404, detail=f"User {name} does not exist")
        return {"status": "success", "message": f"User {name} removed"}

    @app.get("/users/{name}/config")
    async def get_user_config(name: str):
        """Download a client conf file"""
        try:
            conf_file = await pivpn.get_user_config_path(name)
        except PiVPNError as e:
            raise _error(e, "get user config")
        if conf_file is None:
            raise HTTPException(status_code=404, detail=f"No config for user {name}")
        return FileResponse(conf_file, media_type="text/plain", filename=conf_file.name)

    @app.get("/users/{name}/qrcode")
    async def get_user_qr_code(name: str):
        """Client conf as a QR code, generated on first request"""
        try:
            stream = await pivpn.get_user_qr_code_stream(name)
        except PiVPNError as e:
            raise _error(e, "get QR code")
        if stream is None:
            raise HTTPException(status_code=404, detail=f"No config for user {name}")
        return StreamingResponse(_iter_file(stream), media_type="image/png")

    @app.post("/users/{name}/qrcode")
    async def generate_user_qr_code(name: str):
        """Regenerate the QR code from the current conf file"""
        try:
            png_file = await pivpn.generate_user_qr_code(name)
        except PiVPNError as e:
            raise _error(e, "generate QR code")
        if png_file is None:
            raise HTTPException(status_code=404, detail=f"No config for user {name}")
        return {"status": "success", "path": str(png_file)}

    @app.get("/connections")
    async def list_connections():
        """Connection details for all clients"""
        try:
            return [conn.to_dict() for conn in await pivpn.list_connections()]
        except PiVPNError as e:
            raise _error(e, "list connections")

    @app.get("/connections/{name}")
    async def get_connection(name: str):
        try:
            conn = await pivpn.get_connection(name)
        except PiVPNError as e:
            raise _error(e, "get connection")
        if conn is None:
            raise HTTPException(status_code=404, detail=f"No connection for user {name}")
        return conn.to_dict()

    @app.post("/update")
    async def update_pivpn():
        """Update the PiVPN scripts"""
        try:
            updated = await pivpn.update_pivpn()
        except PiVPNError as e:
            raise _error(e, "update PiVPN")
        return {"updated": updated}

    @app.post("/backup")
    async def backup():
        """Back up server and client configuration"""
        try:
            return (await pivpn.backup()).to_dict()
        except PiVPNError as e:
            raise _error(e, "back up PiVPN")

    return app


def create_default_app(config_file: str = "config/pivpn_client.conf") -> FastAPI:
    settings = load_settings(config_file)
    Logger().set_level(settings.log_level)
    return create_app(PiVPNClient.from_settings(settings))
