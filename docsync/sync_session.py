"""Orchestration of one synchronization run over ordered framework snapshots."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from docsync.compute_config_hash import compute_config_hash
from docsync.errors import AssemblyProcessingError, DataInconsistencyError
from docsync.formatter_set import FormatterSet
from docsync.framework_index import FrameworkIndex
from docsync.index_document import IndexDocument, type_file_name
from docsync.namespace_stub import GLOBAL_NAMESPACE, write_namespace_stub
from docsync.reconciler import Reconciler, ReconcileResult
from docsync.statistics import StatisticsCollector, StatItem, StatMetric
from docsync.sync_options import SyncOptions
from docsync.type_document import TypeDocument
from docsync.type_model import TypeDecl

logger = logging.getLogger(__name__)

ALL_FRAMEWORKS = "all"

Snapshot = tuple[str, Sequence[TypeDecl]]


class SyncSession:
    """Synchronizes a documentation directory against framework snapshots.

    Frameworks are processed strictly in the order given. Within one
    framework pass, distinct types are independent and may run in parallel.
    """

    def __init__(
        self,
        output_dir: Path,
        config: dict[str, Any],
        formatters: FormatterSet | None = None,
    ) -> None:
        """Set up the collaborators for a run writing below ``output_dir``."""
        self.output_dir = output_dir
        self.config = config
        self.config_hash = compute_config_hash(config)
        self.options = SyncOptions.from_config(config)
        self.languages: list[str] = list(config.get("languages", []))
        signatures = config.get("signatures", {})
        self.formatters = formatters or FormatterSet.declared(
            self.languages,
            signatures.get("fingerprint_language", "ILAsm"),
            signatures.get("usage_languages", []),
        )
        index_config = config.get("index", {})
        self.index_document = IndexDocument.load_or_new(output_dir / index_config.get("file_name", "index.xml"))
        self.title = index_config.get("title", "Untitled")
        self.max_workers = int(config.get("parallel", {}).get("max_workers", 1))
        self.statistics = StatisticsCollector()
        self.reconciler = Reconciler(self.formatters, self.options, self.languages, self.index_document)
        self.good_types: set[tuple[str, str]] = set()
        self.failures: list[AssemblyProcessingError] = []

    def type_path(self, decl: TypeDecl) -> Path:
        """Location of the document for ``decl``."""
        return self.output_dir / (decl.namespace or GLOBAL_NAMESPACE) / f"{type_file_name(decl)}.xml"

    def run(self, snapshots: Sequence[Snapshot]) -> StatisticsCollector:
        """Process every snapshot in order, then write the index document.

        A type that fails is logged, recorded in ``failures`` and skipped.
        """
        frameworks = FrameworkIndex.from_snapshots(snapshots, self.formatters)
        self.index_document.reset_assemblies()
        for framework, types in snapshots:
            logger.info(f"Processing framework {framework} ({len(types)} types)")
            if self.max_workers > 1:
                self.run_parallel(framework, types, frameworks)
            else:
                for decl in types:
                    self.process_or_skip(framework, decl, frameworks)
            namespaces = {decl.namespace for decl in types}
            self.statistics.add_metric(framework, StatItem.NAMESPACES, StatMetric.TOTAL, len(namespaces))
        self.finalize()
        return self.statistics

    def run_parallel(self, framework: str, types: Sequence[TypeDecl], frameworks: FrameworkIndex) -> None:
        """Process the types of one framework pass on a thread pool.

        A type listed more than once (reachable from several assemblies) is
        processed sequentially within one task so its passes never overlap.
        """
        groups: dict[str, list[TypeDecl]] = {}
        for decl in types:
            groups.setdefault(decl.full_name, []).append(decl)

        def process_group(decls: list[TypeDecl]) -> None:
            for decl in decls:
                self.process_or_skip(framework, decl, frameworks)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(process_group, decls): name for name, decls in groups.items()}
            for future in as_completed(futures):
                future.result()

    def process_or_skip(
        self, framework: str, decl: TypeDecl, frameworks: FrameworkIndex
    ) -> ReconcileResult | None:
        """Process one type; a failure skips only that type.

        The skipped type's document and index entry are left as they are. A
        data inconsistency still aborts the whole run.
        """
        try:
            return self.process_type(framework, decl, frameworks)
        except AssemblyProcessingError as e:
            logger.error(f"{e}; skipping {decl.full_name}")
            self.failures.append(e)
            self.good_types.add((decl.namespace, type_file_name(decl)))
            return None

    def process_type(self, framework: str, decl: TypeDecl, frameworks: FrameworkIndex) -> ReconcileResult:
        """Reconcile and save the document of one type for one framework."""
        path = self.type_path(decl)
        if not decl.namespace:
            logger.warning(
                f"The type '{decl.full_name}' is in the root namespace; it is filed under '{GLOBAL_NAMESPACE}'"
            )
        try:
            entry = frameworks.start_type(framework, decl.full_name)
            is_new = not path.exists()
            document = TypeDocument.load_or_new(path, decl.name, decl.full_name)
            if is_new:
                logger.info(f"New Type: {decl.full_name}")
            else:
                logger.debug(f"Updating: {decl.full_name}")
            result = self.reconciler.reconcile(document, decl, entry)
            document.save(path)
        except DataInconsistencyError:
            logger.error(f"Data inconsistency in {decl.full_name} ({decl.assembly_name}, {framework})")
            raise
        except Exception as e:
            raise AssemblyProcessingError(decl.assembly_name, framework, f"{decl.full_name}: {e}") from e

        if write_namespace_stub(self.output_dir, decl.namespace) is not None:
            logger.info(f"New Namespace File: {decl.namespace or GLOBAL_NAMESPACE}")
            self.statistics.add_metric(framework, StatItem.NAMESPACES, StatMetric.ADDED)

        self.index_document.add_type(decl)
        self.index_document.add_assembly(decl.assembly_name, decl.assembly_version, decl.assembly_culture)
        self.good_types.add((decl.namespace, type_file_name(decl)))

        if entry.times_processed == 1:
            self.statistics.add_metric(framework, StatItem.TYPES, StatMetric.TOTAL)
        if is_new:
            self.statistics.add_metric(framework, StatItem.TYPES, StatMetric.ADDED)
        self.statistics.add_metric(framework, StatItem.MEMBERS, StatMetric.ADDED, result.added)
        self.statistics.add_metric(framework, StatItem.MEMBERS, StatMetric.REMOVED, result.removed)
        self.statistics.add_metric(framework, StatItem.MEMBERS, StatMetric.TOTAL, result.added + result.unchanged)
        return result

    def cleanup_stale_types(self) -> int:
        """Drop types no snapshot contains any more.

        Their documents and index entries are deleted only when deletion is
        enabled; otherwise both are kept.
        """
        stale = [
            (ns.get("Name", ""), node.get("Name", ""))
            for ns in self.index_document.types_element.findall("Namespace")
            for node in ns.findall("Type")
            if (ns.get("Name", ""), node.get("Name", "")) not in self.good_types
        ]
        for namespace, file_name in stale:
            path = self.output_dir / (namespace or GLOBAL_NAMESPACE) / f"{file_name}.xml"
            if self.options.delete and not self.options.preserve:
                logger.warning(f"Type Removed: File='{path}'")
                path.unlink(missing_ok=True)
            else:
                logger.warning(f"Type no longer present; keeping '{path}'")
                self.good_types.add((namespace, file_name))
        removed = self.index_document.cleanup_types(self.good_types)
        self.statistics.add_metric(ALL_FRAMEWORKS, StatItem.TYPES, StatMetric.REMOVED, removed)
        return removed

    def finalize(self) -> Path:
        """Write the index document once every framework pass is done."""
        self.cleanup_stale_types()
        self.index_document.finalize(self.title)
        return self.index_document.save()

    def write_report(self, path: Path) -> None:
        """Write the statistics report stamped with the configuration hash."""
        self.statistics.write_report(path, self.config_hash)
