"""One-shot local HTTP server receiving the OAuth redirect."""

import asyncio
from typing import Optional

from aiohttp import web
from loguru import logger

CODE_PARAM = "code"
STATE_PARAM = "state"
SUCCESS_MESSAGE = "Successfully completed authorization. Go back to acick on your terminal."


class CallbackServer:
    """
    Serves ``GET {path}?code=...&state=...`` on ``127.0.0.1:{port}``.

    The first request carrying the expected state resolves the code future;
    :meth:`wait_for_code` then shuts the server down.
    """

    def __init__(self, port: int, path: str, state: str):
        self.port = port
        self.path = path
        self.state = state
        self._code: Optional[asyncio.Future] = None

    def _code_future(self) -> asyncio.Future:
        if self._code is None:
            self._code = asyncio.get_running_loop().create_future()
        return self._code

    async def handle(self, request: web.Request) -> web.Response:
        if request.method != "GET" or request.path != self.path:
            return web.Response(status=404, text="Not Found")

        code = request.query.get(CODE_PARAM)
        if code is None:
            return web.Response(status=400, text=f"Missing parameter: {CODE_PARAM}")
        state = request.query.get(STATE_PARAM)
        if state is None:
            return web.Response(status=400, text=f"Missing parameter: {STATE_PARAM}")
        if state != self.state:
            logger.warning("Received OAuth callback with unexpected state")
            return web.Response(status=400, text=f"Invalid parameter: {STATE_PARAM}")

        future = self._code_future()
        if not future.done():
            future.set_result(code)
        return web.Response(text=SUCCESS_MESSAGE)

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self.handle)
        return app

    async def wait_for_code(self) -> str:
        """Run the server until the first valid callback arrives."""
        future = self._code_future()
        runner = web.AppRunner(self.build_app())
        await runner.setup()
        try:
            site = web.TCPSite(runner, "127.0.0.1", self.port)
            await site.start()
            logger.debug(f"Listening for OAuth callback on 127.0.0.1:{self.port}{self.path}")
            return await future
        finally:
            logger.debug("Shutting down OAuth callback server")
            await runner.cleanup()
