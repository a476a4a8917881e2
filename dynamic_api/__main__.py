"""Run the dynamic API server with uvicorn."""

import logging

import uvicorn

from dynamic_api.config import get_host, get_log_level, get_port

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=get_log_level(),
)
logger = logging.getLogger(__name__)


def main() -> None:
    host, port = get_host(), get_port()
    logger.info(f"Server listening on http://{host}:{port}")
    uvicorn.run("dynamic_api.main:app", host=host, port=port, log_level=get_log_level().lower())


if __name__ == "__main__":
    main()
