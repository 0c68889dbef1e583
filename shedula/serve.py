"""Run the Shedula API with uvicorn.

Usage:
    python -m shedula.serve
"""
import logging

import uvicorn
from fastapi.routing import APIRoute

from shedula.core import config
from shedula.main import app

logger = logging.getLogger('shedula')


def log_endpoints() -> None:
    logger.info('Shedula API server (%s) running on http://%s:%s', config.APP_ENV, config.HOST, config.PORT)
    for route in app.routes:
        if isinstance(route, APIRoute):
            methods = ','.join(sorted(route.methods))
            logger.info('   %-6s %s', methods, route.path)


def main() -> None:
    config.validate_runtime_config()
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    log_endpoints()
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == '__main__':
    main()
