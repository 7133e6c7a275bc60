from __future__ import annotations

import argparse
import logging
from typing import Any

from pydantic import ValidationError
from shared.config.loader import load_tracker_settings

from apps.tracker.compose import build_app

LOG = logging.getLogger("tracker")


def _parse_size(text: str) -> tuple[int, int]:
    try:
        w, h = (int(v) for v in text.lower().split("x", 1))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None
    return w, h


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="roi-tracker",
        description="Drag a box over a subject in the video window to track it.",
    )
    ap.add_argument("--source", help="Video path/URL, camera index, or screen:<monitor>.")
    ap.add_argument("--output", help="Encoded output path ('' disables writing).")
    ap.add_argument("--size", type=_parse_size, metavar="WxH", help="Output frame size.")
    ap.add_argument("--fourcc", help="Output codec fourcc (e.g. mp4v, X264).")
    ap.add_argument("--algorithm", choices=("csrt", "kcf", "mil"), help="Tracker algorithm.")
    ap.add_argument(
        "--max-lost",
        type=int,
        metavar="N",
        help="End a track after N consecutive lost frames (0 = never).",
    )
    ap.add_argument("--no-display", action="store_true", help="Run without a window.")
    ap.add_argument("--profile", help="Config profile under configs/profiles/.")
    ap.add_argument("--quiet", action="store_true", help="Reduce console output.")
    ap.add_argument("--verbose", action="store_true", help="Debug logging.")
    return ap


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    out: dict[str, Any] = {
        "source": args.source,
        "output": args.output,
        "fourcc": args.fourcc,
        "tracker_algorithm": args.algorithm,
        "max_lost_frames": args.max_lost,
    }
    if args.size:
        out["frame_width"], out["frame_height"] = args.size
    if args.no_display:
        out["display"] = False
    return out


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="[%(name)s] %(levelname)s %(message)s")

    try:
        settings = load_tracker_settings(profile=args.profile, overrides=_overrides(args))
    except ValidationError as ex:
        LOG.error("Invalid configuration:\n%s", ex)
        return 2
    except RuntimeError as ex:
        LOG.error("%s", ex)
        return 2

    try:
        app = build_app(settings)
    except RuntimeError as ex:
        LOG.error("Error: %s", ex)
        return 1

    if not args.quiet:
        print(
            f"[tracker] source={settings.source} output={settings.output or '-'} "
            f"size={settings.frame_width}x{settings.frame_height} "
            f"algorithm={settings.tracker_algorithm} ipc_impl={settings.ipc_impl}"
        )

    frames = app.run()
    LOG.info("Processed %d frames", frames)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
