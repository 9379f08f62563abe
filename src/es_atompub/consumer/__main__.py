"""Read a publisher's recent page and print it decrypted.

Usage::

    python -m es_atompub.consumer https://feed.example.com
"""
from __future__ import annotations

import argparse
import asyncio
import sys

from es_atompub.consumer.reader import FeedReader
from es_atompub.kernel.errors import BaseError
from es_atompub.security.encryption import AioBotoKmsClient, EnvelopeDecrypter


async def _read_recent(base_url: str) -> bytes:
    async with AioBotoKmsClient() as kms, FeedReader(base_url, EnvelopeDecrypter(kms)) as reader:
        return await reader.fetch(f"{base_url.rstrip('/')}/notifications/recent")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="python -m es_atompub.consumer")
    parser.add_argument("url", help="publisher base URL")
    args = parser.parse_args(argv)

    try:
        body = asyncio.run(_read_recent(args.url))
    except BaseError as exc:
        print(exc.message, file=sys.stderr)
        return 1

    print("Decrypted :\n", body.decode("utf-8"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
