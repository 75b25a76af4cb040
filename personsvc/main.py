# personsvc/main.py
from __future__ import annotations

import uvicorn

from personsvc.common.logging import get_logger
from personsvc.common.settings import get_settings
from personsvc.services.api.app import create_app


def run() -> None:
    cfg = get_settings()
    get_logger(level=cfg.log_level)
    uvicorn.run(
        create_app(),
        host=cfg.api.host,
        port=cfg.api.port,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    run()
