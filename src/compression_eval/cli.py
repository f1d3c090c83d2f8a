from __future__ import annotations

import argparse
import logging
from pathlib import Path

from compression_eval.methods import METHOD_SPECS, BenchmarkConfig, Method, Priority


def safe_print(msg: str) -> None:
    # Avoid UnicodeEncodeError on Windows CI/console encodings
    try:
        print(msg)
    except UnicodeEncodeError:
        print(msg.encode("utf-8", errors="replace").decode("utf-8"))


def _version() -> str:
    try:
        from importlib.metadata import version

        return version("compression-eval")
    except Exception:
        return "unknown version"


def _fmt_ms(ms: float) -> str:
    return f"{ms:.3f} ms"


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load_observations(table: str | None):
    from compression_eval.comparison import historical_observations, parse_observations

    if table is None:
        return historical_observations()
    return parse_observations(Path(table).read_text(encoding="utf-8"))


# ============================
# Commands
# ============================


def cmd_methods(_args: argparse.Namespace) -> int:
    for spec in METHOD_SPECS.values():
        if spec.levels is None:
            levels = "-"
        else:
            levels = f"{spec.levels[0]}..{spec.levels[1]} (default {spec.default_level})"
        native = "  platform-native" if spec.platform_native else ""
        safe_print(f"{spec.method.value:<8} levels: {levels}{native}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    from compression_eval.benchmark.runner import CorpusRunner
    from compression_eval.benchmark.session import BenchmarkSession
    from compression_eval.corpus import load_corpus, synthetic_corpus
    from compression_eval.errors import CompressionEvalError
    from compression_eval.methods import get_method, get_priority

    try:
        config = BenchmarkConfig(
            method=get_method(args.method),
            level=args.level,
            priority=get_priority(args.priority),
        )
        config.validate()

        if args.synthetic:
            corpus = synthetic_corpus(args.seed)
        else:
            corpus = load_corpus(args.corpus_dir)
    except (CompressionEvalError, ValueError) as e:
        safe_print(f"Error: {e}")
        return 2

    runner = CorpusRunner(corpus)
    safe_print(f"Running {config.label()} ({config.priority}) on {len(corpus)} samples...")

    with BenchmarkSession(runner) as session:
        try:
            results = session.submit(config).result()
        except CompressionEvalError as e:
            safe_print(f"Error: {e}")
            return 2
        except Exception as e:
            # Already logged by the session worker.
            safe_print(f"Error: {e}")
            return 1

    if results is None:
        safe_print("No samples loaded. Use --corpus-dir, COMPRESSION_EVAL_CORPUS_DIR or --synthetic.")
        return 1

    name_w = max(len("Recording"), *(len(n) for n in results.by_file))
    safe_print(f"{'Recording':<{name_w}}  {'Iterations':>10}  {'Time':>12}")
    for name, r in results.by_file_name():
        safe_print(f"{name:<{name_w}}  {r.iteration_count:>10}  {_fmt_ms(r.duration_ms):>12}")
    safe_print(f"{'Average':<{name_w}}  {'':>10}  {_fmt_ms(results.mean_ms):>12}")
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    from compression_eval.comparison import compute_closest_runs, compute_reference_averages
    from compression_eval.comparison.matching import group_by_segment

    try:
        observations = _load_observations(args.table)
    except (OSError, UnicodeDecodeError) as e:
        safe_print(f"Error: {e}")
        return 2

    averages = compute_reference_averages(observations)
    if not averages:
        safe_print("No reference observations.")
        return 1

    safe_print("Reference averages:")
    for a in averages:
        safe_print(f"  {a.method.value:<8} {_fmt_ms(a.mean_ms):>12}")

    closest = set(compute_closest_runs(observations, averages))
    safe_print("")
    safe_print("Closest runs:")
    for segment, runs in group_by_segment(observations).items():
        picked = [o for o in sorted(runs, key=lambda o: o.mean_duration_ms) if o in closest]
        if not picked:
            continue
        safe_print(f"  {segment}")
        for o in picked:
            level = "-" if o.level is None else str(o.level)
            safe_print(f"    level {level:>3}  {_fmt_ms(o.mean_duration_ms):>12}")
    return 0


def cmd_observations(args: argparse.Namespace) -> int:
    from compression_eval.comparison.matching import sort_observations

    try:
        observations = _load_observations(args.table)
    except (OSError, UnicodeDecodeError) as e:
        safe_print(f"Error: {e}")
        return 2

    for o in sort_observations(observations):
        level = "" if o.level is None else str(o.level)
        safe_print(f"{str(o.segment):<16} {level:>3}  {_fmt_ms(o.mean_duration_ms):>12}")
    return 0


def cmd_corpus_generate(args: argparse.Namespace) -> int:
    from compression_eval.corpus import write_synthetic_corpus

    try:
        paths = write_synthetic_corpus(Path(args.out_dir), seed=args.seed, points=args.points)
    except (OSError, ValueError) as e:
        safe_print(f"Error: {e}")
        return 2

    for p in paths:
        safe_print(f"Wrote: {p}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compression-eval",
        description="Benchmark compressors on brew recordings and compare with reference timings.",
    )
    parser.add_argument("--version", action="store_true", help="Print version")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")

    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("methods", help="List compression methods and level ranges")
    p.set_defaults(func=cmd_methods)

    p = sub.add_parser("run", help="Benchmark one configuration over the corpus")
    p.add_argument(
        "--method",
        default=Method.ZLIB.value,
        help=f"One of: {', '.join(m.value for m in Method)} (default: zlib)",
    )
    p.add_argument("--level", type=int, default=None, help="Level/quality (zstd, Brotli only)")
    p.add_argument(
        "--priority",
        default=Priority.DEFAULT.value,
        help=f"One of: {', '.join(q.value for q in Priority)} (default: default)",
    )
    p.add_argument("--corpus-dir", default=None, help="Directory with the sample recordings")
    p.add_argument("--synthetic", action="store_true", help="Use generated recordings instead of files")
    p.add_argument("--seed", type=int, default=0, help="Seed for --synthetic (default: 0)")
    p.set_defaults(func=cmd_run)

    p = sub.add_parser("compare", help="Reference averages and closest runs")
    p.add_argument("--table", default=None, help="TSV table of runs (default: built-in)")
    p.set_defaults(func=cmd_compare)

    p = sub.add_parser("observations", help="List historical runs")
    p.add_argument("--table", default=None, help="TSV table of runs (default: built-in)")
    p.set_defaults(func=cmd_observations)

    p = sub.add_parser("corpus", help="Corpus utilities")
    corpus_sub = p.add_subparsers(dest="corpus_command")
    g = corpus_sub.add_parser("generate", help="Write synthetic recordings")
    g.add_argument("out_dir", help="Output directory")
    g.add_argument("--seed", type=int, default=0)
    g.add_argument("--points", type=int, default=2_000)
    g.set_defaults(func=cmd_corpus_generate)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        safe_print(f"compression-eval {_version()}")
        return 0

    _configure_logging(args.verbose)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0

    return func(args)


if __name__ == "__main__":
    raise SystemExit(main())
