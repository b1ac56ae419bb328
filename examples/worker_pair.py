"""
Parent and worker process talking over one multiprocessing pipe.

Run with: python examples/worker_pair.py
"""

from __future__ import annotations

import asyncio
import multiprocessing
import os

from loguru import logger

from duplexipc import ConnectionTransport, Endpoint, RemoteError, TimeoutError


async def _serve(conn) -> None:
    stop = asyncio.Event()
    endpoint = Endpoint(ConnectionTransport(conn))

    async def slow_upper(text: str) -> str:
        await asyncio.sleep(0.2)
        return text.upper()

    def divide(ab: list[float]) -> float:
        return ab[0] / ab[1]

    endpoint.add("math_add", lambda ab: ab[0] + ab[1])
    endpoint.add("divide", divide)
    endpoint.add("slow_upper", slow_upper)
    endpoint.on("shutdown", lambda _: stop.set())
    endpoint.emit("ready", {"pid": os.getpid()})
    await stop.wait()
    endpoint.stop_service()


def worker_main(conn) -> None:
    asyncio.run(_serve(conn))


async def main() -> None:
    parent_conn, child_conn = multiprocessing.Pipe()
    proc = multiprocessing.Process(target=worker_main, args=(child_conn,), daemon=True)
    proc.start()

    endpoint = Endpoint(ConnectionTransport(parent_conn), {"default_act_timeout_ms": 5000})
    ready: asyncio.Future = asyncio.get_running_loop().create_future()
    endpoint.once("ready", ready.set_result)
    info = await asyncio.wait_for(ready, 10)
    logger.info("worker ready: {}", info)

    logger.info("math_add -> {}", await endpoint.act("math_add", [5, 10]))
    try:
        await endpoint.act("divide", [1, 0])
    except RemoteError as exc:
        logger.info("divide failed remotely: {} ({})", exc.message, exc.remote_error.name)
    try:
        await endpoint.act("slow_upper", "hello", timeout_ms=50)
    except TimeoutError as exc:
        logger.info("slow_upper: {}", exc)

    endpoint.emit("shutdown")
    endpoint.close()
    await asyncio.to_thread(proc.join, 5)


if __name__ == "__main__":
    asyncio.run(main())
