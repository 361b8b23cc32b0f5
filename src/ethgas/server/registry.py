# ethgas/server/registry.py
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Type, get_type_hints

import anyio
import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from ethgas.config.default import configure_logging
from ethgas.errors import METHOD_NOT_FOUND
from ethgas.server.dispatcher import RPCDispatcher
from ethgas.transport.http import HTTPTransport


# ──────────────────────────────────────────────────────────────
# _MethodWrapper – Holds function + metadata
# ──────────────────────────────────────────────────────────────
@dataclass
class _MethodWrapper:
    """
    Wraps an RPC method with metadata for introspection and dispatch.

    Callable like the original function.
    """

    fn: Callable[..., Any]
    name: str
    description: str | None = None
    param_types: Dict[str, Type] = field(default_factory=dict)
    return_type: Optional[Type] = None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.fn(*args, **kwargs)

    @property
    def is_async(self) -> bool:
        return inspect.iscoroutinefunction(self.fn)

    def to_json(self) -> dict:
        return {
            "description": self.description,
            "param_types": {k: str(v) for k, v in self.param_types.items()},
            "return_type": str(self.return_type) if self.return_type else None,
            "is_async": self.is_async,
        }


# ──────────────────────────────────────────────────────────────
# Settings
# ──────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class RegistrySettings:
    warn_on_duplicate: bool = True
    log_level: str | int = "INFO"
    host: str = "127.0.0.1"
    port: int = 8545


# ──────────────────────────────────────────────────────────────
# Main Registry Class
# ──────────────────────────────────────────────────────────────
class RPCMethodRegistry:
    def __init__(
        self,
        name: str | None = None,
        settings: RegistrySettings | dict | None = None,
    ):
        # normalize settings: accept dataclass or dict or None
        if settings is None:
            self._settings: RegistrySettings = RegistrySettings()
        elif isinstance(settings, RegistrySettings):
            self._settings = settings
        elif isinstance(settings, dict):
            self._settings = RegistrySettings(**settings)
        else:
            raise TypeError("settings must be RegistrySettings | dict | None")

        self._name = name or "RPCRegistry"
        self._methods: Dict[str, _MethodWrapper] = {}
        self._logger = logging.getLogger("ethgas.node")
        self._app: FastAPI | None = None

        configure_logging(self._settings.log_level)
        self._logger.info(f"Initialized {self._name}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def settings(self) -> RegistrySettings:
        return self._settings

    # ───── Register Decorator ─────
    def register(self, name: str | None = None, description: str | None = None):
        def decorator(fn: Callable) -> Callable:
            method_name = name or fn.__name__

            if method_name in self._methods:
                if not self._settings.warn_on_duplicate:
                    raise ValueError(f"Method '{method_name}' already registered")
                self._logger.warning(f"Replacing method: {method_name}")

            hints = get_type_hints(fn)
            return_hint = hints.pop("return", None)
            self._methods[method_name] = _MethodWrapper(
                fn=fn,
                name=method_name,
                description=description or inspect.getdoc(fn),
                param_types=hints,
                return_type=return_hint,
            )
            self._logger.debug(f"Registered: {method_name}")
            return fn
        return decorator

    def get(self, method_name: str) -> _MethodWrapper:
        try:
            return self._methods[method_name]
        except KeyError:
            self._logger.warning(f"Method not found: {method_name}")
            raise METHOD_NOT_FOUND({"method": method_name})

    def list_methods(self) -> Dict[str, dict]:
        return {name: w.to_json() for name, w in self._methods.items()}

    # ───── FastAPI App ─────
    @property
    def app(self) -> FastAPI:
        if self._app is None:
            transport = HTTPTransport(RPCDispatcher(self))
            app = FastAPI(title=self._name)

            # Ethereum clients post to the root path
            app.post("/")(transport.handle)
            app.post("/jsonrpc")(transport.handle)

            async def methods_endpoint():
                return JSONResponse(content={"result": self.list_methods(), "error": None})

            app.get("/methods")(methods_endpoint)
            self._app = app
        return self._app

    def run(self, *, host: str | None = None, port: int | None = None) -> None:
        """Serve the registry over HTTP until interrupted."""
        host = host or self._settings.host
        port = port or self._settings.port
        anyio.run(self._run_http_async, host, port)

    async def _run_http_async(self, host: str, port: int):
        config = uvicorn.Config(
            self.app,
            host=host,
            port=port,
            log_level=self._settings.log_level.lower() if isinstance(self._settings.log_level, str) else "info",
        )
        server = uvicorn.Server(config)
        self._logger.info(f"Starting HTTP server at http://{host}:{port}/")
        await server.serve()
