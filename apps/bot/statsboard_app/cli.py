"""CLI entrypoints for the stats dashboard bot, one-off renders, and diagnostics."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from statsboard_core import (
    CollectionError,
    ConfigError,
    DiagnosticsExporter,
    RenderError,
    build_doctor_payload,
    load_config,
    validate_config,
)
from statsboard_core.config import AppConfig
from statsboard_core.logging_setup import configure_logging


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def cmd_run(args: argparse.Namespace) -> int:
    from .app import run_bot

    cfg: AppConfig = args.cfg
    validate_config(cfg)
    return run_bot(cfg)


def cmd_render(args: argparse.Namespace) -> int:
    from .app import build_collector, build_renderer

    cfg: AppConfig = args.cfg
    out = Path(args.out).expanduser().resolve()

    async def _collect():
        # Network rates are measured from the provider's first counter sample.
        collector = build_collector()
        await asyncio.sleep(args.warmup)
        return await collector.collect()

    try:
        snapshot = asyncio.run(_collect())
        image = build_renderer(cfg).render(snapshot)
    except (CollectionError, RenderError) as exc:
        _print_json({"success": False, "error": str(exc)})
        return 1

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(image.data)
    _print_json({"success": True, "path": str(out), "bytes": len(image.data)})
    return 0


def cmd_doctor(args: argparse.Namespace) -> int:
    from .app import build_collector

    cfg: AppConfig = args.cfg
    snapshot = None
    error = None
    try:
        snapshot = asyncio.run(build_collector().collect())
    except CollectionError as exc:
        error = str(exc)

    payload = build_doctor_payload(cfg, snapshot=snapshot, collection_error=error)

    if args.export:
        exporter = DiagnosticsExporter()
        out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else None
        bundle = exporter.bundle(cfg=cfg, doctor_payload=payload, output_dir=out_dir)
        payload["diagnostics_bundle"] = str(bundle)

    _print_json(payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="statsboard", description="Host stats dashboard for a Discord channel")
    parser.add_argument("--config", default=None, help="Path to config.json (default: ./config.json or user config dir)")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Run the dashboard bot")
    run_cmd.set_defaults(func=cmd_run)

    render_cmd = sub.add_parser("render", help="Collect metrics once and write the dashboard PNG")
    render_cmd.add_argument("--out", default="stats.png", help="Output PNG path")
    render_cmd.add_argument("--warmup", type=float, default=1.0, help="Seconds to sample network rates before collecting")
    render_cmd.set_defaults(func=cmd_render)

    doctor_cmd = sub.add_parser("doctor", help="Print diagnostics and a metrics snapshot")
    doctor_cmd.add_argument("--export", action="store_true", help="Export offline diagnostics bundle")
    doctor_cmd.add_argument("--out-dir", default=None, help="Optional output directory for diagnostics bundle")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.cfg = load_config(Path(args.config) if args.config else None)
        configure_logging(
            keep_files=args.cfg.logging.keep_log_files,
            console=(args.command == "run" and args.cfg.logging.console),
            level=args.cfg.logging.level,
        )
        return int(args.func(args))
    except ConfigError as exc:
        print(f"statsboard: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
