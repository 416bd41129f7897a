"""Run the event desk API with uvicorn: `python -m eventdesk.api`."""

from __future__ import annotations

import uvicorn

from eventdesk.api.app import create_app
from eventdesk.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        # procedure_completed lines replace uvicorn's access log
        access_log=False,
        log_config=None,
    )


if __name__ == "__main__":
    main()
