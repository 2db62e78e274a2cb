# =============================================
# File: oborobot/cli/serve.py
# Purpose: CLI entrypoint to run the API with a named server profile from config.json.
# Usage:
#   python -m oborobot.cli.serve test
#   python -m oborobot.cli.serve product --config /etc/oborobot/config.json
# =============================================
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Literal, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

ENV_TYPES = ("test", "product")


class ServerConfig(BaseModel):
    schema_: Literal["http", "https"] = Field("https", alias="schema")
    host: str = "localhost"
    port: int = 8443
    cert_file: Optional[str] = None
    key_file: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    def cert_paths(self, env_type: str) -> tuple[str, str]:
        base = Path("cert_key") / env_type
        return (
            self.cert_file or str(base / "cert.pem"),
            self.key_file or str(base / "key.pem"),
        )


def load_profile(path: str, env_type: str) -> ServerConfig:
    """Read one profile ("test" | "product") from a config.json holding both."""
    if env_type not in ENV_TYPES:
        raise ValueError("config-type is invalid.")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return ServerConfig.model_validate(data.get(env_type) or {})


def main(argv=None):
    ap = argparse.ArgumentParser(description="Run the Oborobot question API.")
    ap.add_argument("env", choices=ENV_TYPES, help="Server profile to load from the config file")
    ap.add_argument("--config", default="config.json", help="Config file (default: config.json)")
    args = ap.parse_args(argv)

    try:
        cfg = load_profile(args.config, args.env)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"[serve] {e}")
        sys.exit(1)

    import uvicorn

    kwargs = {"host": cfg.host, "port": cfg.port}
    if cfg.schema_ == "https":
        cert, key = cfg.cert_paths(args.env)
        kwargs.update(ssl_certfile=cert, ssl_keyfile=key)

    logger.info(f"LISTEN: {cfg.schema_}://{cfg.host}:{cfg.port}")
    uvicorn.run("oborobot.main:app", **kwargs)


if __name__ == "__main__":
    main()
