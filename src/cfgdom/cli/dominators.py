"""
Dominator commands for the cfgdom CLI.

Each command reads a CFG spec (a path, or ``-`` for stdin), runs the
dominance analysis and prints one view of the result:

- dom: dominator set of every block
- rpo: reverse post-order of the reachable blocks
- dot: the CFG as a Graphviz DOT graph
"""

import sys
from pathlib import Path

from cfgdom.analysis.cfg.dom import DominanceAnalysis
from cfgdom.analysis.cfg import dump, nxbridge
from cfgdom.application.config import AnalysisConfig, ORDERS
from cfgdom.application.errors import (
    AnalysisAbort,
    ConfigError,
    InternalError,
    SpecSyntaxError,
    abort,
)
from cfgdom.frontend.specreader import loadSpecFile, readSpec
from cfgdom.util.application.console import Console

EXIT_MISMATCH = 2


def _add_common_arguments(parser):
    parser.add_argument("spec", help="CFG spec file, or '-' to read stdin")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--timing", action="store_true", help="Report time spent in each phase")
    parser.add_argument("--order", choices=sorted(ORDERS), default="rpo",
                        help="Block visitation order for the solver (default: rpo)")
    parser.add_argument("--max-passes", type=int, default=None,
                        help="Give up if the solver needs more passes than this")


def add_dom_parser(subparsers):
    """Add the dominator report subcommand."""
    parser = subparsers.add_parser("dom", help="Print the dominator set of every block")
    _add_common_arguments(parser)
    parser.add_argument("--cross-check", action="store_true",
                        help="Verify the result against networkx")
    return parser


def add_rpo_parser(subparsers):
    """Add the reverse post-order subcommand."""
    parser = subparsers.add_parser("rpo", help="Print the reverse post-order of reachable blocks")
    _add_common_arguments(parser)
    return parser


def add_dot_parser(subparsers):
    """Add the DOT output subcommand."""
    parser = subparsers.add_parser("dot", help="Write the CFG with dominator sets as a DOT graph")
    _add_common_arguments(parser)
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    return parser


def make_config(args):
    """Build an AnalysisConfig from parsed arguments."""
    return AnalysisConfig(
        order=args.order,
        trace=args.verbose,
        maxPasses=args.max_passes,
        crossCheck=getattr(args, "cross_check", False),
    )


def load_analysis(args, console):
    """Read the spec named by ``args.spec`` and run the analysis on it."""
    try:
        config = make_config(args)
    except ConfigError as e:
        abort(str(e))

    with console.scope("read"):
        try:
            if args.spec == "-":
                records = list(readSpec(sys.stdin))
            else:
                path = Path(args.spec)
                if not path.exists():
                    abort(f"Path '{path}' not found")
                records = loadSpecFile(path)
        except SpecSyntaxError as e:
            abort(f"{args.spec}: {e}")
        except UnicodeDecodeError as e:
            abort(f"{args.spec}: input is not valid UTF-8 ({e.reason})")
        except OSError as e:
            abort(f"{args.spec}: {e.strerror or e}")

    analysis = DominanceAnalysis.fromRecords(records, config)

    with console.scope("solve"):
        try:
            analysis.runAnalysis()
        except InternalError as e:
            abort(str(e))

    return analysis


def _run(args, body):
    console = Console(enabled=args.timing)
    try:
        analysis = load_analysis(args, console)
    except AnalysisAbort as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return body(analysis)


def run_dom(args):
    def body(analysis):
        print(dump.formatDominators(analysis))

        if analysis.config.crossCheck:
            mismatches = nxbridge.crossCheck(analysis)
            if mismatches:
                print("Error: networkx disagrees on block(s): %s"
                      % ", ".join(str(m) for m in mismatches), file=sys.stderr)
                return EXIT_MISMATCH
        return 0

    return _run(args, body)


def run_rpo(args):
    def body(analysis):
        print(dump.formatOrder(analysis))
        return 0

    return _run(args, body)


def run_dot(args):
    def body(analysis):
        text = dump.toDot(analysis)
        if args.output:
            with open(args.output, "w") as f:
                f.write(text)
            print(f"CFG dumped to: {args.output}", file=sys.stderr)
        else:
            sys.stdout.write(text)
        return 0

    return _run(args, body)


COMMANDS = {
    "dom": run_dom,
    "rpo": run_rpo,
    "dot": run_dot,
}
