"""Simple HTTP client for manual testing of a running proxy."""

from __future__ import annotations

import argparse
import asyncio
import logging
import time

import httpx

DEFAULT_URL = "http://127.0.0.1:5000/ask"


async def run_client(
    url: str,
    message: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Post a message to the proxy and return the assistant reply."""

    logger = logging.getLogger("ask_client")
    start = time.perf_counter()

    async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
        response = await client.post(url, json={"message": message})
        logger.info("Sent message (%d chars)", len(message))

    if response.status_code != 200:
        logger.error("Received error %d: %s", response.status_code, response.text)
        raise SystemExit(1)

    data = response.json()
    elapsed = time.perf_counter() - start
    logger.info("Received reply (%d chars) in %.2fs", len(data["content"]), elapsed)
    return data["content"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Test client for the chat proxy.")
    parser.add_argument("--url", default=DEFAULT_URL, help="Endpoint URL (default: %(default)s)")
    parser.add_argument("--message", required=True, help="Message to send.")
    parser.add_argument(
        "--timeout", type=float, default=60.0, help="Seconds to wait for the reply."
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    try:
        reply = asyncio.run(run_client(args.url, args.message, args.timeout))
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        return
    print(reply)


if __name__ == "__main__":  # pragma: no cover
    main()
