from __future__ import annotations
import argparse, dataclasses, logging, pathlib, sys, traceback
from . import analyze, process, write
from .config import converter_config, load_config
from .errors import ConversionError

def main(argv=None):
    p = argparse.ArgumentParser(description="MIDI-XML / MIDI -> ringtone voice tokens")
    p.add_argument("--in", dest="infile", required=True, help="Input MIDI-XML (.xml) or MIDI (.mid)")
    p.add_argument("--out", dest="outfile", required=False, help="Write all tracks into this text file (default: stdout)")
    p.add_argument("--tracks-out-dir", dest="tracks_out_dir", default=None, help="Write one token file per track into this directory")
    p.add_argument("--config", dest="config", default=None, help="YAML config (defaults applied if omitted)")
    p.add_argument("--strict", action="store_true", help="Abort a track when a note is still open at its end")
    p.add_argument("-v", "--verbose", action="store_true", help="Log tolerated anomalies")

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s: %(message)s",
    )

    in_path = pathlib.Path(args.infile).expanduser().resolve()
    if not in_path.exists():
        print(f"[cli] ERROR: Input not found: {in_path}", file=sys.stderr)
        sys.exit(1)

    cfg = converter_config(load_config(args.config))
    if args.strict:
        cfg = dataclasses.replace(cfg, strict_unclosed_notes=True)
    print(f"[cli] infile = {in_path}", file=sys.stderr)

    try:
        events = analyze.read_events(str(in_path))
    except ConversionError:
        traceback.print_exc()
        sys.exit(2)

    result = process.convert_file(events, cfg)
    for tr in result.failed:
        print(f"[cli] track {tr.index + 1}: {type(tr.error).__name__}: {tr.error}", file=sys.stderr)

    if args.outfile:
        out_path = pathlib.Path(args.outfile).expanduser().resolve()
        write.write_text(result, str(out_path), cfg)
        print(f"[cli] text   -> {out_path}", file=sys.stderr)
    if args.tracks_out_dir:
        out_dir = pathlib.Path(args.tracks_out_dir).expanduser().resolve()
        write.write_tracks_separately(result, str(out_dir), cfg)
        print(f"[cli] tracks -> {out_dir}", file=sys.stderr)
    if not args.outfile and not args.tracks_out_dir:
        sys.stdout.write(write.format_result(result, cfg))

    voices = sum(len(tr.voices) for tr in result.tracks)
    print(f"[cli] Done. tracks={len(result.tracks)} failed={len(result.failed)} "
          f"voices={voices} tpb={result.ticks_per_beat}", file=sys.stderr)
    if result.tracks and len(result.failed) == len(result.tracks):
        sys.exit(3)

if __name__ == "__main__":
    main()
