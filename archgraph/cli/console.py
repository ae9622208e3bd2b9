"""
Console Display

Formatted terminal output with ANSI colours for CLI reports.
"""

import sys
from typing import Any, List, Optional

from ..analysis.models import AntiPatternAnalysisResult, AntiPatternType
from ..layout.optimizer import LayoutResult
from ..layout.quality import LayoutQuality


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"
    HEADER = "\033[95m"


def severity_color(severity: float) -> str:
    if severity >= 1.0:
        return Colors.RED
    if severity >= 0.7:
        return Colors.YELLOW
    if severity >= 0.3:
        return Colors.CYAN
    return Colors.GRAY


class ConsoleDisplay:
    """Prints pipeline results as coloured sections and tables."""

    Colors = Colors

    def __init__(self, use_color: Optional[bool] = None, stream=None):
        self.stream = stream or sys.stdout
        if use_color is None:
            use_color = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.use_color = use_color

    def colored(self, text: str, color: str) -> str:
        """Apply color if enabled."""
        if self.use_color:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def success(self, message: str) -> None:
        self._print(self.colored(f"✓ {message}", Colors.GREEN))

    def warning(self, message: str) -> None:
        self._print(self.colored(f"⚠ {message}", Colors.YELLOW))

    def section(self, title: str) -> None:
        line = "=" * (len(title) + 4)
        self._print()
        self._print(self.colored(line, Colors.HEADER))
        self._print(self.colored(f"  {title}  ", Colors.HEADER + Colors.BOLD))
        self._print(self.colored(line, Colors.HEADER))

    def table(self, headers: List[str], rows: List[List[Any]]) -> None:
        if not headers or not rows:
            return

        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(str(cell)))

        header_line = " | ".join(str(h).ljust(widths[i]) for i, h in enumerate(headers))
        self._print(self.colored(header_line, Colors.BOLD))
        self._print("-" * len(header_line))
        for row in rows:
            self._print(" | ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)))

    # =========================================================================
    # Reports
    # =========================================================================

    def display_model_summary(self, stats: dict) -> None:
        self.section("Architecture Model")
        self._print(f"  Nodes: {stats['num_nodes']}    Edges: {stats['num_edges']}")
        for node_type, count in sorted(stats["nodes_by_type"].items()):
            self._print(f"    {node_type:<10} {count}")

    def display_layout(self, layout: LayoutResult, quality: Optional[LayoutQuality] = None) -> None:
        self.section("Layout")
        self._print(f"  Iterations:        {layout.iterations}")
        self._print(f"  Final temperature: {layout.final_temperature:.4f}")
        self._print(f"  Duration:          {layout.duration_ms:.1f} ms")
        if quality is not None:
            self._print(f"  Edge crossings:    {quality.edge_crossings}")
            self._print(f"  Overlap penalty:   {quality.overlap_penalty:.3f}")
            self._print(f"  Quality score:     {quality.quality_score:.4f}")

    def display_analysis(self, result: AntiPatternAnalysisResult,
                         all_cycles: Optional[List[List[str]]] = None) -> None:
        self.section("Anti-Patterns")
        if not result.patterns:
            self.success("No anti-patterns detected")
            return

        rows = []
        for pattern in result.patterns:
            if pattern.pattern_type == AntiPatternType.CYCLE:
                nodes = " -> ".join(pattern.node_ids + [pattern.node_ids[0]])
            else:
                nodes = pattern.node_id
            rows.append([
                pattern.pattern_type.value,
                nodes,
                self.colored(f"{pattern.severity:.2f}", severity_color(pattern.severity)),
                pattern.description,
            ])
        self.table(["Type", "Nodes", "Severity", "Description"], rows)

        if all_cycles is not None:
            self._print()
            self._print(f"  All simple cycles: {len(all_cycles)}")
            for cycle in all_cycles:
                self._print(f"    {' -> '.join(cycle + [cycle[0]])}")

        if result.recommendations:
            self._print()
            self._print(self.colored("  Recommendations:", Colors.BOLD))
            for recommendation in result.recommendations:
                self._print(f"    • {recommendation}")
