"""Wait for the process to be asked to stop."""

import logging
import signal

import anyio

logger = logging.getLogger("roost.server")


async def wait_for_kill() -> signal.Signals:
    """Block until SIGINT or SIGTERM arrives and return it.

    Usage::

        async with anyio.create_task_group() as tg:
            tg.start_soon(worker)
            await wait_for_kill()
            tg.cancel_scope.cancel()
    """
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            logger.info("received %s, shutting down", signal.Signals(signum).name)
            return signal.Signals(signum)
    msg = "signal receiver closed without a signal"
    raise RuntimeError(msg)
