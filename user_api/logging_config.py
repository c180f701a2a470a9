from __future__ import annotations

import logging


def configure_logging(level: str = "INFO") -> None:
    """Root logging for the user API, driven by the LOG_LEVEL setting.

    Called once from create_app(); later calls are no-ops because basicConfig
    leaves an already configured root logger alone. Unknown level names fall
    back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
