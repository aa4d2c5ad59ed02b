"""
org_provisioner.api.__main__

`python -m org_provisioner.api [--host HOST] [--port PORT]`

Serves the provisioning API with settings from `ORGP_*` environment variables;
the flags override the bind address only.
"""

from __future__ import annotations

import argparse

import uvicorn

from org_provisioner.api.app import create_app
from org_provisioner.settings import get_settings


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="python -m org_provisioner.api")
    parser.add_argument("--host", default=settings.api_host)
    parser.add_argument("--port", type=int, default=settings.api_port)
    args = parser.parse_args(argv)

    uvicorn.run(
        create_app(settings=settings),
        host=args.host,
        port=args.port,
        # Logging is owned by structlog (see observability.logging).
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
