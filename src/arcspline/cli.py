"""
Command-line interface for arcspline.

Provides commands for fitting arcs to curves, listing the bundled sample
curves and writing a default configuration file.
"""

import argparse
import sys

from arcspline.config import load_config, save_default_config
from arcspline.tracer import configure_tracer, get_tracer


def build_parser():
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="arcspline: approximate cubic Bezier curves with circular arcs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Fit command
    fit_parser = subparsers.add_parser("fit", help="Fit arcs to one or more curves")
    source = fit_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--path", "-p",
        default=None,
        help="SVG path data, e.g. 'M 0 0 C 0 100 100 0 100 100'",
    )
    source.add_argument(
        "--curve",
        nargs=8,
        type=float,
        metavar=("X0", "Y0", "X1", "Y1", "X2", "Y2", "X3", "Y3"),
        default=None,
        help="Control points of a single cubic Bezier",
    )
    source.add_argument(
        "--sample", "-s",
        default=None,
        help="Name of a bundled sample curve (see 'arcspline samples')",
    )
    source.add_argument(
        "--input", "-i",
        default=None,
        help="SVG, JSON or path data file",
    )
    fit_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output directory",
    )
    fit_parser.add_argument(
        "--tolerance", "-t",
        type=float,
        default=None,
        help="Maximum deviation between curve and arcs (overrides config)",
    )
    fit_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    fit_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    fit_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    fit_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    fit_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    # Samples command
    subparsers.add_parser("samples", help="List the bundled sample curves")

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="arcspline_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    # Handle commands
    if args.command == "fit":
        return handle_fit(args)
    elif args.command == "samples":
        return handle_samples(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def _load_input(args):
    """Curves and skipped segment count for whichever source was given."""
    from arcspline.io.load_path import curve_from_values, load_curves_file, parse_path_data
    from arcspline.samples import get_sample

    if args.path is not None:
        return parse_path_data(args.path)
    if args.curve is not None:
        return [curve_from_values(args.curve)], 0
    if args.sample is not None:
        return get_sample(args.sample)
    return load_curves_file(args.input)


def handle_fit(args):
    """Handle the fit command."""
    config = load_config(args.config)

    # Command line flags win over the config file
    configure_tracer(
        enabled=args.trace or config.tracing.enabled,
        level=args.trace_level if args.trace else config.tracing.level,
        file_path=args.trace_file or config.tracing.file_path,
        json_output=args.trace_json or config.tracing.json_output,
    )

    tracer = get_tracer()

    try:
        from arcspline.pipeline import run_pipeline

        with tracer.span("cli_fit", module="cli"):
            beziers, skipped = _load_input(args)
            arc_path, report = run_pipeline(
                beziers,
                out_dir=args.out,
                config=config,
                tolerance=args.tolerance,
                skipped=skipped,
            )

        # Print summary
        print("\nFit completed successfully.")
        print(f"  Tolerance: {arc_path.tolerance:g}")
        print(f"  Curves fitted: {len(arc_path.splines)}")
        print(f"  Segments skipped: {arc_path.skipped_segments}")
        print(f"  Arcs: {arc_path.segment_count}")
        for spline in arc_path.splines:
            print(f"    {spline.curve_id}: {spline.arc_count} arcs, "
                  f"max error {spline.max_error:.4g}")
        print(f"  Validation errors: {report.error_count}")
        print(f"  Validation warnings: {report.warning_count}")
        print(f"\nOutputs saved to: {args.out}/")
        print("  - arcs.json")
        print("  - arcs.svg")
        print("  - validation_report.json")

        if report.has_errors:
            print("\n[!] Validation errors detected. Review validation_report.json")
            return 1

        return 0

    except Exception as e:
        tracer.event(f"Fit failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_samples(args):
    """Handle the samples command."""
    from arcspline.samples import list_samples

    for name, description in list_samples():
        print(f"{name:<22} {description}")
    return 0


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
