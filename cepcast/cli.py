"""CLI entry point for CEP lookups with weather forecast."""

import argparse
import asyncio
import logging

from cepcast.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from cepcast.config.schema import CepcastConfig
from cepcast.models.reporting import LookupResult
from cepcast.pipeline.resolution_pipeline import ResolutionPipeline
from cepcast.reporting.formatters import (
    format_cached_location,
    format_result_json,
    format_result_text,
)
from cepcast.storage.location_cache import LocationCache

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "config/cepcast.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cepcast",
        description="Resolve a CEP into an address and a 5-day forecast",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # lookup
    lookup_p = sub.add_parser("lookup", help="Resolve a CEP and fetch its forecast")
    lookup_p.add_argument("cep", help="Postal code, any formatting")
    lookup_p.add_argument("--json", action="store_true", help="Print JSON output")

    # last
    sub.add_parser("last", help="Show the last resolved location")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    file_config = load_config(args.config)
    if args.command == "config":
        return _cmd_config(file_config, args)

    config = file_config
    if args.db:
        config = config.model_copy(
            update={"cache": config.cache.model_copy(update={"db_path": args.db})}
        )

    if args.command == "lookup":
        return _cmd_lookup(config, args)
    elif args.command == "last":
        return _cmd_last(config)
    else:
        parser.print_help()
        return 1


def _cmd_lookup(config: CepcastConfig, args) -> int:
    cache = LocationCache(config.cache.db_path, config.cache.key)
    previous = cache.load()
    if previous is not None:
        logger.info(
            "Last location: %s (%.4f, %.4f)",
            previous.name, previous.latitude, previous.longitude,
        )

    pipeline = ResolutionPipeline.from_config(config)

    def _print(result: LookupResult) -> None:
        print(format_result_json(result) if args.json else format_result_text(result))

    pipeline.subscribe(_print)
    result = asyncio.run(_run_lookup(pipeline, args.cep, config))
    return 0 if result.succeeded else 1


async def _run_lookup(
    pipeline: ResolutionPipeline, cep: str, config: CepcastConfig
) -> LookupResult:
    result = await pipeline.lookup(cep)
    await pipeline.scheduler.drain(config.notifications.drain_timeout_seconds)
    return result


def _cmd_last(config: CepcastConfig) -> int:
    cached = LocationCache(config.cache.db_path, config.cache.key).load()
    if cached is None:
        print("Nenhuma localização salva")
        return 1
    print(format_cached_location(cached))
    return 0


def _cmd_config(config: CepcastConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        key = key.strip()
        try:
            new_config = set_config_value(config, key, value.strip())
        except (KeyError, TypeError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key)}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
