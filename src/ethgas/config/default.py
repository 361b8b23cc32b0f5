# ethgas/config/default.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

load_dotenv()

LOCAL_RPC_URL = "http://127.0.0.1:8545"
INFURA_URL_TEMPLATE = "https://mainnet.infura.io/v3/{key}"


def resolve_rpc_url(environ: Mapping[str, str] | None = None) -> str:
    """ETH_RPC_URL wins, then an Infura URL built from INFURA_KEY, then a local node."""
    env = os.environ if environ is None else environ
    url = env.get("ETH_RPC_URL")
    if url:
        return url
    key = env.get("INFURA_KEY")
    if key:
        return INFURA_URL_TEMPLATE.format(key=key)
    return LOCAL_RPC_URL


@dataclass(frozen=True)
class ClientSettings:
    rpc_url: str = LOCAL_RPC_URL
    timeout: float = 10.0
    log_level: str | int = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientSettings":
        env = os.environ if environ is None else environ
        return cls(
            rpc_url=resolve_rpc_url(env),
            timeout=float(env.get("ETH_RPC_TIMEOUT", "10.0")),
            log_level=env.get("ETHGAS_LOG_LEVEL", "INFO"),
        )


settings = ClientSettings.from_env()

RPC_URL: str = settings.rpc_url
RPC_TIMEOUT: float = settings.timeout
LOG_LEVEL: str | int = settings.log_level


def configure_logging(level: str | int = LOG_LEVEL):
    logger = logging.getLogger("ethgas")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
