import logging
from typing import Any

from kubectl_pdb_report import fetcher
from kubectl_pdb_report.model import (
    PDBRecord,
    PodRecord,
    PriorityClassRecord,
    load_snapshot,
    parse_pdbs,
    parse_pods,
    parse_priority_classes,
)

logger = logging.getLogger(__name__)


class ClusterSnapshot:
    """
    Point-in-time view of the three resource listings for one run.
    Collections are tuples and never change after construction.
    """

    def __init__(
        self,
        pods: tuple[PodRecord, ...] = (),
        pdbs: tuple[PDBRecord, ...] = (),
        priority_classes: tuple[PriorityClassRecord, ...] = (),
    ):
        self.pods = tuple(pods)
        self.pdbs = tuple(pdbs)
        self.priority_classes = tuple(priority_classes)

    @classmethod
    def from_documents(
        cls, pods: Any, pdbs: Any, priority_classes: Any
    ) -> "ClusterSnapshot":
        snapshot = cls(
            pods=parse_pods(pods),
            pdbs=parse_pdbs(pdbs),
            priority_classes=parse_priority_classes(priority_classes),
        )
        logger.debug(
            "Snapshot: %d pods, %d pdbs, %d priority classes",
            len(snapshot.pods),
            len(snapshot.pdbs),
            len(snapshot.priority_classes),
        )
        return snapshot

    @classmethod
    def from_files(
        cls, pods_path: str, pdbs_path: str, priority_classes_path: str
    ) -> "ClusterSnapshot":
        return cls.from_documents(
            load_snapshot(pods_path),
            load_snapshot(pdbs_path),
            load_snapshot(priority_classes_path),
        )

    @classmethod
    def from_cluster(
        cls, binary: str = fetcher.DEFAULT_KUBECTL, context: str | None = None
    ) -> "ClusterSnapshot":
        fetcher.ensure_kubectl(binary)
        pdbs = fetcher.fetch_pdbs(binary, context)
        pods = fetcher.fetch_pods(binary, context)
        priority_classes = fetcher.fetch_priority_classes(binary, context)
        return cls.from_documents(pods, pdbs, priority_classes)
