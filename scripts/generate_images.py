"""Command-line entry point for generating images from a prompt."""

from __future__ import annotations

import argparse
import asyncio
import sys

from src.verse_images.config import GeneratorConfig, load_config
from src.verse_images.errors import InvalidPromptError
from src.verse_images.extension import GENERATE_IMAGES_COMMAND, activate, deactivate
from src.verse_images.host import CommandBus, ExecutionContext
from src.verse_images.logging import configure_logging
from src.verse_images.storage import InMemoryUserDataStore, SqlUserDataStore, UserDataStore


async def run(prompt: str, *, mirror: int, use_memory: bool, config: GeneratorConfig) -> list[str]:
    """Activate the extension, run one generation and shut it down again."""
    store: UserDataStore
    if use_memory:
        store = InMemoryUserDataStore()
    else:
        sql_store = SqlUserDataStore.from_url(config.database_url)
        sql_store.init()
        store = sql_store

    bus = CommandBus()
    context = ExecutionContext(execution_token=config.execution_token)
    service = await activate(context, bus, store, config)
    try:
        return await bus.invoke(GENERATE_IMAGES_COMMAND, prompt, mirror)
    finally:
        await deactivate(context, service)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate images for a prompt.")
    parser.add_argument("prompt", help="Text prompt to send to the mirror.")
    parser.add_argument("--mirror", type=int, default=0, help="Mirror id (0, 1 or 2; others mean 0).")
    parser.add_argument("--memory", action="store_true", help="Do not read or write the persistent cache.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging()
    try:
        images = asyncio.run(run(args.prompt, mirror=args.mirror, use_memory=args.memory, config=load_config()))
    except InvalidPromptError as exc:
        print(f"generation failed: {exc}", file=sys.stderr)
        return 2

    for uri in images:
        print(uri)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    sys.exit(main())
