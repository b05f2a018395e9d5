#!/usr/bin/env python3
import argparse
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from subtitle_processor import SubtitleError, SubtitleList, construct_raw_name_dict
from subtitle_processor.logging_helper import (
    log_debug,
    log_error,
    log_info,
    log_warn,
    log_trace_block,
    set_log_level,
)

from scripts.config_loader import FORMATS, load_effective_config, resolve_settings


def load_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return f.read()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description=(
            "Clean up raw captions or bilingual subtitles, normalize punctuation, dialog and "
            "lyrics lines, and translate leftover names with a name dictionary. "
            "Defaults come from config.default.yaml, overridden by config.yaml and these flags."
        )
    )
    ap.add_argument("--input", required=True, help="Path to the subtitle or caption file")
    ap.add_argument("--format", choices=FORMATS, help="Input shape (otherwise taken from config)")
    ap.add_argument("--names", default=None, help="Path to a 'source = target' name dictionary")
    ap.add_argument("--outdir", default=None, help="Output directory")
    ap.add_argument("--list-names", action="store_true", help="Print untranslated names and exit")
    ap.add_argument("--no-reformat", dest="reformat", action="store_false", default=None,
                    help="Skip punctuation/dialog/lyrics reformatting")
    ap.add_argument("--debug", action="store_true", help="Enable debug logging")
    ap.add_argument("--trace", action="store_true", help="Enable trace logging: dump whole text blocks")
    return ap


def main(argv: Optional[List[str]] = None, base: Optional[Path] = None) -> int:
    args = build_parser().parse_args(argv)
    base = base or Path(__file__).parent.parent

    try:
        cfg, has_local = load_effective_config(base)
        settings = resolve_settings(cfg)
    except (OSError, ValueError) as e:
        log_error(f"ERROR: Failed to load configuration: {e}")
        return 1

    level = settings.log_level if settings.log_level in ("debug", "trace", "info") else "info"
    if args.debug:
        level = "debug"
    if args.trace:
        level = "trace"
    set_log_level(level)
    debug = level in ("debug", "trace")
    log_debug(f"Config -> local override={has_local}, format={settings.format}, reformat={settings.reformat}")

    # override config
    if args.format:
        settings.format = args.format
    if args.names:
        settings.names_path = args.names
    if args.outdir:
        settings.outdir = args.outdir
    if args.reformat is not None:
        settings.reformat = args.reformat

    in_path = Path(args.input)
    try:
        input_text = load_text(str(in_path))
    except OSError as e:
        log_error(f"ERROR: Cannot read input {in_path}: {e}")
        return 1
    if not input_text.strip():
        log_error("ERROR: input file is empty after trimming whitespace.")
        return 1
    log_trace_block("Input", input_text)

    try:
        if settings.format == "captions":
            subs = SubtitleList.from_captions(input_text).clean_up_captions(settings.credit_patterns)
        else:
            subs = SubtitleList.from_subtitles(input_text)
        if settings.reformat:
            subs = subs.reformat()

        if args.list_names:
            for name in subs.find_untranslated_names():
                print(name)
            return 0

        if settings.names_path:
            name_dict = construct_raw_name_dict(load_text(settings.names_path))
            if not name_dict:
                log_warn(f"Name dictionary {settings.names_path} has no usable entries")
            log_info(f"Loaded name dictionary: {len(name_dict)} entries from {settings.names_path}")
            subs = subs.translate_names(name_dict, sentinel=settings.sentinel)
    except (SubtitleError, OSError) as e:
        log_error(f"ERROR: {e}")
        if debug:
            traceback.print_exc()
        return 1

    outdir = Path(settings.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    out_path = outdir / f"{in_path.stem}{settings.suffix}"
    # newline="" keeps the \r\n endings produced by serialization
    with open(out_path, "w", encoding="utf-8", newline="") as f:
        f.write(subs.to_string())
    log_info(f"Done. {len(subs)} record(s) written to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
