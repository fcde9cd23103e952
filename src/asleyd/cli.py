from __future__ import annotations
import argparse, json, logging, sys
from .models.options import DecodeOptions
from .models.trace import DecodedTrace


def _options(args) -> DecodeOptions:
    segments = None if args.all_segments else (args.segment or [1])
    return DecodeOptions(segments=segments, legacy_y=args.legacy_y)


def cmd_info(args):
    # Fast path: header + segment directory only
    if args.summary:
        from .binary.reader import summarize_file
        s = summarize_file(args.input)
        print(json.dumps(s.model_dump(mode="json"), indent=2))
        return

    f = DecodedTrace.from_binary(args.input, _options(args))
    print(json.dumps(f.model_dump(mode="json"), indent=2))


def cmd_summary(args):
    from .report import format_summary
    f = DecodedTrace.from_binary(args.input, _options(args))
    print(format_summary(f))


def cmd_to_json(args):
    f = DecodedTrace.from_binary(args.input, _options(args))
    with open(args.output, "w", encoding="utf-8") as out:
        json.dump(f.model_dump(mode="json"), out, indent=2)


def cmd_to_npz(args):
    import numpy as np
    f = DecodedTrace.from_binary(args.input, _options(args))
    np.savez(args.output, **f.to_columns())


def _add_decode_args(sp):
    sp.add_argument("input", help="Path to .eyd file")
    sp.add_argument("--segment", type=int, action="append",
                    help="1-based segment to decode (repeatable, default 1)")
    sp.add_argument("--all-segments", action="store_true", help="Decode every segment in the directory")
    sp.add_argument("--legacy-y", action="store_true",
                    help="Reproduce the vendor exporter: y taken from the raw x value")


def build_parser():
    p = argparse.ArgumentParser(prog="asleyd", description="ASL .eyd eye-tracker trace decoder")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("info", help="print decoded trace as JSON")
    _add_decode_args(sp)
    sp.add_argument("--summary", action="store_true",
                    help="Header and segment directory only, no records")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("summary", help="print a text summary of the trace")
    _add_decode_args(sp)
    sp.set_defaults(func=cmd_summary)

    sp = sub.add_parser("to-json", help="convert .eyd to JSON")
    _add_decode_args(sp)
    sp.add_argument("output")
    sp.set_defaults(func=cmd_to_json)

    sp = sub.add_parser("to-npz", help="write record columns as a numpy .npz archive")
    _add_decode_args(sp)
    sp.add_argument("output")
    sp.set_defaults(func=cmd_to_npz)

    return p


def main(argv=None):
    ns = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ns.func(ns)
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
