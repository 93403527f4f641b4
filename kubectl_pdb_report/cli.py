import argparse
import logging
import os
import sys

from kubectl_pdb_report.engine import build_report
from kubectl_pdb_report.errors import ReportError
from kubectl_pdb_report.fetcher import DEFAULT_KUBECTL
from kubectl_pdb_report.output import render_tsv, write_csv
from kubectl_pdb_report.snapshot import ClusterSnapshot

DEFAULT_CSV_PATH = "pod-disruptions.csv"

logger = logging.getLogger("kubectl_pdb_report")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubectl-pdb-report",
        allow_abbrev=False,
        description=(
            "Report every Pod with its ReplicaSet, PriorityClass and "
            "matching PodDisruptionBudget"
        ),
    )

    parser.add_argument(
        "--csv",
        default=DEFAULT_CSV_PATH,
        metavar="PATH",
        help=f"CSV file to write (default: {DEFAULT_CSV_PATH})",
    )

    parser.add_argument("--context", help="kubectl context to query")
    parser.add_argument(
        "--kubectl",
        default=os.environ.get("KUBECTL", DEFAULT_KUBECTL),
        help="kubectl binary (default: $KUBECTL or kubectl)",
    )

    # Offline mode: kubectl get ... -o json|yaml dumps
    parser.add_argument("--pods", metavar="FILE", help="Path to Pod list")
    parser.add_argument("--pdbs", metavar="FILE", help="Path to PDB list")
    parser.add_argument(
        "--priorityclasses", metavar="FILE", help="Path to PriorityClass list"
    )

    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def load_cluster_snapshot(args: argparse.Namespace) -> ClusterSnapshot:
    if args.pods:
        return ClusterSnapshot.from_files(args.pods, args.pdbs, args.priorityclasses)
    return ClusterSnapshot.from_cluster(binary=args.kubectl, context=args.context)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    offline = [args.pods, args.pdbs, args.priorityclasses]
    if any(offline) and not all(offline):
        parser.error("--pods, --pdbs and --priorityclasses must be given together")

    configure_logging(args.verbose)

    try:
        snapshot = load_cluster_snapshot(args)
        rows = build_report(snapshot)

        render_tsv(rows, sys.stdout)
        sys.stdout.flush()

        write_csv(rows, args.csv)
    except ReportError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code
    except BrokenPipeError:
        print("Error: standard output closed", file=sys.stderr)
        return 1

    # Status line to stderr (keeps stdout clean)
    print(f"Wrote CSV to: {args.csv}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
