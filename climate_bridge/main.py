"""
Entry point for the HomeKit climate bridge.

Loads the add-on options, publishes the HomeKit accessory, starts the sync loop
and the status API, and runs until SIGINT or SIGTERM.
"""

import asyncio
import signal
import sys
from typing import Optional

import uvicorn
from dotenv import load_dotenv

from climate_bridge.api import create_app
from climate_bridge.config import ConfigError, load_config
from climate_bridge.dependencies import build_context
from climate_bridge.homekit.driver import create_driver
from climate_bridge.models.config import BridgeConfig
from climate_bridge.utils.logging import get_logger, setup_logging
from climate_bridge.version import __version__

log = get_logger(__name__)


def create_status_server(app, port: int, host: str = "0.0.0.0") -> uvicorn.Server:
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_config=None,
        lifespan="off",
    )
    return uvicorn.Server(config)


async def serve_status_api(server: uvicorn.Server) -> bool:
    """
    Serve the status API until the server is asked to exit.

    uvicorn reports a port it cannot bind with sys.exit, so SystemExit is
    caught here along with OSError. HomeKit keeps running without the API.

    Returns:
        True after a normal exit, False if the server never came up
    """
    try:
        await server.serve()
    except (OSError, SystemExit) as e:
        log.error(
            "status_api_unavailable",
            host=server.config.host,
            port=server.config.port,
            error=str(e) or type(e).__name__,
        )
        return False
    return True


async def run(config: BridgeConfig, stop_event: Optional[asyncio.Event] = None) -> None:
    """
    Run the bridge until a stop signal arrives.

    Args:
        config: Validated bridge configuration
        stop_event: Set to stop the bridge; SIGINT and SIGTERM set it too
    """
    loop = asyncio.get_running_loop()
    if stop_event is None:
        stop_event = asyncio.Event()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    driver = create_driver(config, loop)
    context = build_context(config, driver)
    driver.add_accessory(context.accessory)

    # Publishes the accessory over mDNS and starts the HAP server
    await driver.async_start()
    context.sync_loop.start()

    stop_task = loop.create_task(stop_event.wait())
    waiters = {stop_task}
    server = None
    status_task = None
    if config.status_port:
        server = create_status_server(create_app(context), config.status_port)
        status_task = loop.create_task(serve_status_api(server))
        waiters.add(status_task)

    log.info(
        "bridge_ready",
        version=__version__,
        entity_id=config.climate,
        name=config.name,
        homekit_port=config.homekit_port,
        status_port=config.status_port,
        sim_mode=config.sim_mode,
    )

    # A signal, or the status server exiting after catching one, stops the bridge
    done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    if status_task in done and not status_task.result():
        await stop_task

    log.info("bridge_shutting_down")
    await context.sync_loop.stop()
    await context.router.drain()

    stop_event.set()
    if server is not None:
        server.should_exit = True
    await asyncio.gather(*waiters, return_exceptions=True)

    await driver.async_stop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.remove_signal_handler(sig)
    log.info("bridge_stopped")


def main() -> None:
    load_dotenv()
    setup_logging()

    try:
        config = load_config()
    except ConfigError as e:
        log.error("config_invalid", error=str(e))
        sys.exit(1)

    log.info("config_loaded", entity_id=config.climate, ha_url=config.ha_url)
    asyncio.run(run(config))


if __name__ == "__main__":
    main()
