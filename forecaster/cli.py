"""CLI entry point for the forecast display pipeline."""

import argparse
import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from forecaster.config.loader import get_config_value, load_config, set_config_value
from forecaster.config.schema import ForecastConfig
from forecaster.ingest.timestamps import parse_instant
from forecaster.pipeline.assembler import ForecastAssembler
from forecaster.reporting.formatters import format_forecast_json, format_forecast_text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="forecaster",
        description="Normalize NWS point forecasts into a display forecast",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")

    sub = parser.add_subparsers(dest="command")

    # render
    render_p = sub.add_parser("render", help="Render saved forecast documents")
    render_p.add_argument("--hourly", required=True, help="Hourly forecast JSON")
    render_p.add_argument("--daily", required=True, help="Daily forecast JSON")
    render_p.add_argument("--grid", required=True, help="Gridpoint data JSON")
    render_p.add_argument("--now", default=None, help="ISO timestamp to use as now")
    render_p.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format"
    )

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
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config) if args.config else ForecastConfig()

    if args.command == "render":
        return _cmd_render(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _read_json(path: str):
    with open(Path(path)) as f:
        return json.load(f)


def _cmd_render(config: ForecastConfig, args) -> int:
    try:
        hourly = _read_json(args.hourly)
        daily = _read_json(args.daily)
        grid = _read_json(args.grid)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: could not read forecast documents: {e}")
        return 1

    now = None
    if args.now:
        now = parse_instant(args.now)
        if now is None:
            print(f"Error: invalid --now timestamp: {args.now}")
            return 1

    forecast = ForecastAssembler(config).refresh(hourly, daily, grid, now=now)
    if args.format == "json":
        print(format_forecast_json(forecast))
    else:
        print(format_forecast_text(forecast))
    return 0


def _cmd_config(config: ForecastConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = (part.strip() for part in kv.split("=", 1))
        try:
            new_config = set_config_value(config, key, value)
        except (KeyError, ValidationError) as e:
            print(f"Error: {e}")
            return 1
        if args.config:
            _write_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key)}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _write_config(config: ForecastConfig, path: str) -> None:
    data = config.model_dump(mode="json", by_alias=True)
    with open(Path(path), "w") as f:
        yaml.safe_dump(data, f, sort_keys=False)
