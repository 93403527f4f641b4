"""Resource fetcher - lists Pods, PDBs and PriorityClasses through kubectl."""

import json
import logging
import shutil
import subprocess
from typing import Any

from kubectl_pdb_report.errors import MissingDependencyError, UpstreamQueryError

logger = logging.getLogger(__name__)

DEFAULT_KUBECTL = "kubectl"


def ensure_kubectl(binary: str = DEFAULT_KUBECTL) -> str:
    """
    Return the resolved kubectl path or raise MissingDependencyError.
    """
    path = shutil.which(binary)
    if path is None:
        raise MissingDependencyError(
            f"{binary} command could not be found. "
            "Please ensure it's installed and in your PATH."
        )
    return path


def build_list_args(
    resource: str, all_namespaces: bool = True, context: str | None = None
) -> list[str]:
    args = ["get", resource]
    if all_namespaces:
        args.append("--all-namespaces")
    args.extend(["-o", "json"])
    if context:
        args.append(f"--context={context}")
    return args


def run_kubectl(args: list[str], binary: str = DEFAULT_KUBECTL) -> dict[str, Any]:
    """
    Run one read-only kubectl query and decode its JSON output.
    Any failure is fatal for the run, nothing is retried.
    """
    cmd = [binary, *args]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as exc:
        raise MissingDependencyError(f"{binary} command could not be found") from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise UpstreamQueryError(
            f"kubectl {' '.join(args)} failed: {stderr or 'no output'}",
            exit_code=result.returncode,
            stderr=stderr,
        )

    if not (result.stdout or "").strip():
        raise UpstreamQueryError(f"kubectl {' '.join(args)} returned no output")

    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        raise UpstreamQueryError(
            f"kubectl {' '.join(args)} returned invalid JSON: {exc}"
        ) from exc


def fetch_pods(binary: str = DEFAULT_KUBECTL, context: str | None = None) -> dict:
    return run_kubectl(build_list_args("pods", context=context), binary)


def fetch_pdbs(binary: str = DEFAULT_KUBECTL, context: str | None = None) -> dict:
    return run_kubectl(build_list_args("pdb", context=context), binary)


def fetch_priority_classes(
    binary: str = DEFAULT_KUBECTL, context: str | None = None
) -> dict:
    # PriorityClasses are cluster-scoped
    return run_kubectl(
        build_list_args("priorityclasses", all_namespaces=False, context=context),
        binary,
    )
