from __future__ import annotations

import argparse
import codecs
import json
import logging
from pathlib import Path

from luxldt.models.record import SYMMETRY_CODES, TYPE_CODES
from luxldt.models.result import LDTParseError
from luxldt.parser.ldt_parser import load_ldt
from luxldt.parser.ldt_writer import write_ldt
from luxldt.parser.options import CodecOptions


_DEMO_LDT_LINES = [
    "Luxldt Demo",
    "1",  # type: vertical-axis symmetry
    "1",  # symmetry: one stored plane
    "4",
    "90",
    "3",
    "45",
    "DEMO-REPORT-001",
    "Demo downlight",
    "DL-100",
    "demo.ldt",
    "2026-01-01 / luxldt",
    "100",
    "0",
    "50",
    "80",
    "0",
    "0",
    "0",
    "0",
    "0",
    "100",
    "85",
    "1",
    "0",
    "1",
    "1",
    "LED 10W",
    "1000",
    "3000",
    "1",
    "11.5",
    *["0.5", "0.55", "0.6", "0.65", "0.7", "0.75", "0.8", "0.85", "0.9", "0.95"],
    *["0", "90", "180", "270"],
    *["0", "45", "90"],
    *["300", "200", "0"],
]

_DEMO_LDT_TEXT = "\n".join(_DEMO_LDT_LINES) + "\n"


def _options(args: argparse.Namespace) -> CodecOptions:
    return CodecOptions(
        encoding=getattr(args, "encoding", "utf-8"),
        dtype="float32" if getattr(args, "float32", False) else "float64",
        precision=getattr(args, "precision", None),
    )


def _existing_file(raw: str) -> Path | None:
    path = Path(raw).expanduser().resolve()
    if not path.exists():
        print(f"[ERROR] File not found: {path}")
        print("        Provide a valid path to a .ldt file.")
        return None
    if not path.is_file():
        print(f"[ERROR] Not a file: {path}")
        return None
    return path


def _cmd_demo(args: argparse.Namespace) -> int:
    outpath = Path(args.out).expanduser().resolve()
    outpath.parent.mkdir(parents=True, exist_ok=True)
    outpath.write_text(_DEMO_LDT_TEXT, encoding="utf-8")
    print(f"Saved demo LDT to: {outpath}")
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    from luxldt.photometry.verify import verify_ldt_file

    path = _existing_file(args.file)
    if path is None:
        return 2
    try:
        res = verify_ldt_file(str(path), _options(args))
    except LDTParseError as exc:
        print(f"[ERROR] {exc}")
        return 3

    if args.json:
        print(json.dumps(res.to_dict(), indent=2, sort_keys=True))
        return 0

    print("Luxldt Info")
    print(f"  File: {res.file}")
    print(f"  Luminaire: {res.luminaire_name} ({res.manufacturer})")
    print(f"  Type: {res.type_code} ({TYPE_CODES.get(res.type_code, 'unknown')})")
    print(f"  Symmetry: {res.symmetry_code} ({SYMMETRY_CODES.get(res.symmetry_code, 'unknown')})")
    print(
        f"  C-planes: {res.counts['num_c']} (stored {res.stored_planes['low']}..{res.stored_planes['high']}), "
        f"gamma angles: {res.counts['num_gamma']}, lamp sets: {res.counts['num_lamp_sets']}"
    )
    print(f"  Peak intensity: {res.intensity_stats['max_cd_klm']:g} cd/klm")
    for w in res.warnings:
        print(f"  [WARN] {w}")
    return 0


def _cmd_rewrite(args: argparse.Namespace) -> int:
    path = _existing_file(args.file)
    if path is None:
        return 2
    opts = _options(args)
    res = load_ldt(path, opts)
    if not res.ok:
        print(f"[ERROR] {res.error}")
        return 3
    if res.warning is not None:
        print(f"[WARN] {res.warning}")

    outpath = Path(args.out).expanduser().resolve()
    written = write_ldt(outpath, res.unwrap(), options=opts)
    if not written:
        print(f"[ERROR] {written.error}")
        return 4
    print(f"Saved: {outpath}")
    return 0


def _cmd_view(args: argparse.Namespace) -> int:
    # Import here so the codec commands work without matplotlib configured
    from luxldt.plotting.plots import save_default_plots

    path = _existing_file(args.file)
    if path is None:
        return 2
    res = load_ldt(path, _options(args))
    if not res.ok:
        print(f"[ERROR] {res.error}")
        return 3
    if res.warning is not None:
        print(f"[WARN] {res.warning}")

    try:
        paths = save_default_plots(res.unwrap(), Path(args.out).expanduser().resolve(), stem=args.stem)
    except ValueError as exc:
        print(f"[ERROR] Cannot plot intensity table: {exc}")
        return 3
    print(f"  Saved: {paths.intensity_png}")
    print(f"  Saved: {paths.polar_png}")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="luxldt")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Write a small demo .ldt file to disk.")
    demo.add_argument("--out", default="data/ldt_samples/demo.ldt", help="Output .ldt path")
    demo.set_defaults(func=_cmd_demo)

    info = sub.add_parser("info", help="Decode an LDT file and print a summary.")
    info.add_argument("file", help="Path to .ldt file")
    info.add_argument("--json", action="store_true", help="Print the summary as JSON")
    info.add_argument("--encoding", default="utf-8", help="Text encoding of the file")
    info.set_defaults(func=_cmd_info)

    rw = sub.add_parser("rewrite", help="Decode an LDT file and write it back out.")
    rw.add_argument("file", help="Path to .ldt file")
    rw.add_argument("out", help="Output .ldt path")
    rw.add_argument("--precision", type=int, default=None, help="Significant digits for float values")
    rw.add_argument("--float32", action="store_true", help="Read and write values at single precision")
    rw.add_argument("--encoding", default="utf-8", help="Text encoding of input and output")
    rw.set_defaults(func=_cmd_rewrite)

    v = sub.add_parser("view", help="Decode an LDT file and save intensity plots (PNG).")
    v.add_argument("file", help="Path to .ldt file")
    v.add_argument("--out", default="out", help="Output directory (default: out)")
    v.add_argument("--stem", default="luxldt_view", help="Filename stem for outputs")
    v.set_defaults(func=_cmd_view)

    args = p.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if getattr(args, "precision", None) is not None and args.precision < 1:
        p.error("--precision must be a positive integer")
    if getattr(args, "encoding", None) is not None:
        try:
            codecs.lookup(args.encoding)
        except LookupError:
            p.error(f"unknown encoding: {args.encoding}")
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
