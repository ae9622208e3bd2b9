"""
Architecture Analysis CLI

Parses a C4-style architecture description, lays it out with the
force-directed optimizer, detects structural anti-patterns and exports the
result.

Pipeline:
    1. Parse       -> DSL text (or a JSON model when INPUT ends in .json)
    2. Matrix      -> dense adjacency matrix
    3. Layout      -> force-directed positions (skipped with --no-layout)
    4. Detection   -> cycle, bottleneck, over-coupling, isolated components
    5. Export      -> DOT, positioned DOT, JSON report, PNG/SVG/PDF image

Settings come from ARCHGRAPH_* environment variables, then a --config file
(JSON or YAML) for detector thresholds, then explicit command-line flags.

Usage:
    archgraph architecture.c4
    archgraph architecture.c4 --format dot -o output/architecture.dot
    archgraph model.json --no-layout --json
    archgraph architecture.c4 --image output/layout.png --seed 42
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .. import __version__
from ..analysis.antipattern_detector import AntiPatternDetector, enumerate_cycles
from ..analysis.models import AntiPatternAnalysisResult, AntiPatternConfig
from ..config.settings import Settings
from ..core.errors import ArchGraphError
from ..core.graph_model import GraphModel
from ..core.interchange import load_config_file, load_model, model_to_dict
from ..dsl.parser import parse_file
from ..layout.optimizer import LayoutOptimizer, LayoutResult
from ..layout.quality import LayoutQuality, evaluate_layout
from ..visualization.dot_exporter import to_dot, to_dot_with_positions
from ..visualization.plot import render_layout_image
from .console import ConsoleDisplay

logger = logging.getLogger("archgraph.cli")


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with clear grouping."""
    parser = argparse.ArgumentParser(
        prog="archgraph",
        description="Layout and anti-pattern analysis for C4-style architecture models.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s system.c4                              Analyze and print a summary
  %(prog)s system.c4 -f dot -o out/system.dot     Export coloured DOT
  %(prog)s system.c4 -f positions -o -            Positioned DOT to stdout
  %(prog)s model.json --no-layout --json          JSON report of a saved model
  %(prog)s system.c4 --image out/layout.png       Render the layout with matplotlib
""",
    )
    parser.add_argument("input", metavar="INPUT", help="DSL file, or a JSON model ending in .json")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # --- Layout ---
    layout = parser.add_argument_group("Layout")
    layout.add_argument("--iterations", "-n", type=int, metavar="N", help="Simulation steps (default: 100)")
    layout.add_argument("--learning-rate", type=float, metavar="F", help="Initial step size (default: 0.1)")
    layout.add_argument("--area", type=float, metavar="F", help="Layout area; also sets k = sqrt(area / N)")
    layout.add_argument("--seed", type=int, metavar="N", help="Seed for the initial placement")
    layout.add_argument("--no-layout", action="store_true", help="Skip layout optimization")

    # --- Detection ---
    detection = parser.add_argument_group("Anti-pattern detection")
    detection.add_argument("--bottleneck-threshold", type=int, metavar="N", help="Fan-in threshold (default: 5)")
    detection.add_argument("--over-coupling-threshold", type=int, metavar="N", help="Fan-out threshold (default: 7)")
    detection.add_argument("--no-isolated", action="store_true", help="Do not report isolated components")
    detection.add_argument("--config", metavar="FILE", help="JSON or YAML file with detector thresholds")
    detection.add_argument("--all-cycles", action="store_true", help="Also list every simple cycle")

    # --- Output ---
    output = parser.add_argument_group("Output")
    output.add_argument("--format", "-f", choices=["dot", "positions", "json"], default="dot",
                        help="Export format for --output (default: dot)")
    output.add_argument("--output", "-o", metavar="FILE", help="Write the export to FILE ('-' for stdout)")
    output.add_argument("--image", metavar="FILE", help="Render the layout to PNG/SVG/PDF")
    output.add_argument("--json", action="store_true", help="Print the JSON report to stdout")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def resolve_settings(args: argparse.Namespace, settings: Optional[Settings] = None) -> Settings:
    """Environment settings overridden by explicit command-line flags."""
    settings = settings or Settings.from_env()
    overrides = {
        "layout_iterations": args.iterations,
        "learning_rate": args.learning_rate,
        "layout_area": args.area,
        "layout_seed": args.seed,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(settings, key, value)
    return settings


def resolve_detector_config(args: argparse.Namespace, settings: Settings) -> AntiPatternConfig:
    config = settings.antipattern_config()
    if args.config:
        file_values = {**config.to_dict(), **load_config_file(args.config)}
        config = AntiPatternConfig.from_dict(file_values)
    if args.bottleneck_threshold is not None:
        config.bottleneck_threshold = args.bottleneck_threshold
    if args.over_coupling_threshold is not None:
        config.over_coupling_threshold = args.over_coupling_threshold
    if args.no_isolated:
        config.detect_isolated = False
    config.validate()
    return config


def load_input(path: str) -> GraphModel:
    if Path(path).suffix.lower() == ".json":
        return load_model(path)
    return parse_file(path)


def run_layout(model: GraphModel, optimizer: LayoutOptimizer) -> Optional[LayoutResult]:
    if model.node_count() == 0:
        logger.warning("Model has no nodes; skipping layout")
        return None
    return optimizer.optimize_layout(model)


def build_report(model: GraphModel,
                 config: AntiPatternConfig,
                 analysis: AntiPatternAnalysisResult,
                 layout: Optional[LayoutResult] = None,
                 quality: Optional[LayoutQuality] = None,
                 all_cycles: Optional[List[List[str]]] = None) -> Dict[str, Any]:
    report = {
        "model": model_to_dict(model),
        "config": config.to_dict(),
        "layout": layout.to_dict() if layout else None,
        "layout_quality": quality.to_dict() if quality else None,
        "anti_patterns": analysis.to_dict(),
    }
    if all_cycles is not None:
        report["all_cycles"] = all_cycles
    return report


def write_output(text: str, path: str) -> None:
    """Write text to a file (creating parent directories) or to stdout for '-'."""
    if path == "-":
        sys.stdout.write(text)
        return
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    display = ConsoleDisplay()

    try:
        settings = resolve_settings(args)

        log_level = (
            logging.DEBUG if args.verbose
            else logging.WARNING if args.quiet
            else getattr(logging, settings.log_level, logging.INFO)
        )
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

        config = resolve_detector_config(args, settings)
        optimizer = settings.optimizer()

        model = load_input(args.input)
        model.build_adjacency_matrix()

        layout = quality = None
        if not args.no_layout:
            layout = run_layout(model, optimizer)
            if layout is not None:
                quality = evaluate_layout(model)

        analysis = AntiPatternDetector(config).analyze(model)
        all_cycles = enumerate_cycles(model) if args.all_cycles else None
        report = build_report(model, config, analysis, layout, quality, all_cycles)

        # the export owns stdout when written to "-"
        show_console = not args.quiet and args.output != "-"

        if args.output:
            if args.format == "dot":
                text = to_dot(model, patterns=analysis.patterns)
            elif args.format == "positions":
                text = to_dot_with_positions(model)
            else:
                text = json.dumps(report, indent=2) + "\n"
            write_output(text, args.output)
            if show_console:
                display.success(f"{args.format} export written to: {args.output}")

        if args.image:
            if layout is None:
                display.warning("No layout computed; skipping image rendering")
            else:
                render_layout_image(model, args.image, patterns=analysis.patterns)
                if show_console:
                    display.success(f"Layout image written to: {args.image}")

        if args.json:
            print(json.dumps(report, indent=2))
        elif show_console:
            display.display_model_summary(model.get_statistics())
            if layout is not None:
                display.display_layout(layout, quality)
            display.display_analysis(analysis, all_cycles)

        return 0

    except (ArchGraphError, OSError) as exc:
        print(display.colored(f"Error: {exc}", display.Colors.RED), file=sys.stderr)
        if args.verbose:
            logging.exception("Analysis failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
