"""Core analyzer: discovers C# files and runs the rule engine on each."""

from __future__ import annotations

import fnmatch
import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from automapper_analyzer.config import AnalyzerConfig
from automapper_analyzer.models import AnalysisReport, FileReport, Finding, RuleDescriptor
from automapper_analyzer.scanner.csharp import parse_csharp
from automapper_analyzer.scanner.rules import DEFAULT_RULE_SET, RuleSet
from automapper_analyzer.scanner.walker import CancellationSignal, analyze

logger = logging.getLogger(__name__)

CS_SUFFIX = ".cs"
GENERATED_SUFFIXES = (".g.cs", ".g.i.cs", ".designer.cs", ".generated.cs")
GENERATED_MARKER = "<auto-generated"


def is_generated(path: Path, source: bytes) -> bool:
    """Detect generated code by file name or by an ``<auto-generated>`` header comment."""
    if path.name.lower().endswith(GENERATED_SUFFIXES):
        return True
    text = source.decode("utf-8", errors="replace").lstrip("\ufeff")
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if not stripped.startswith(("//", "/*", "*")):
            return False
        if GENERATED_MARKER in stripped.lower():
            return True
    return False


def _is_excluded(path: Path, patterns: list[str]) -> bool:
    posix = path.as_posix()
    return any(fnmatch.fnmatch(posix, p) or fnmatch.fnmatch(path.name, p) for p in patterns)


def find_cs_files(paths: Iterable[str], exclude: list[str] | None = None) -> list[Path]:
    """Find all C# files under the given files and directories."""
    found: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            if path.suffix == CS_SUFFIX:
                found.add(path)
        elif path.is_dir():
            found.update(f for f in path.rglob(f"*{CS_SUFFIX}") if f.is_file())
        else:
            logger.warning("Path not found: %s", raw)
    return sorted(f for f in found if not _is_excluded(f, exclude or []))


class Analyzer:
    """Runs a rule set over C# sources, one independent traversal per file."""

    def __init__(
        self,
        rule_set: RuleSet = DEFAULT_RULE_SET,
        config: AnalyzerConfig | None = None,
    ) -> None:
        self.config = config or AnalyzerConfig()
        self.rule_set = self.config.apply(rule_set)

    def supported_rules(self) -> list[RuleDescriptor]:
        return self.rule_set.descriptors()

    def analyze_source(
        self, source: bytes, file_path: str, cancel: CancellationSignal | None = None,
    ) -> list[Finding]:
        tree = parse_csharp(source)
        return analyze(tree, file_path, self.rule_set, cancel=cancel)

    def _file_report(
        self, source: bytes, file_path: str, cancel: CancellationSignal | None,
    ) -> FileReport:
        start = time.monotonic()
        findings = self.analyze_source(source, file_path, cancel=cancel)
        logger.debug("Analyzed %s: %d finding(s)", file_path, len(findings))
        return FileReport(
            file=file_path,
            findings=findings,
            duration_ms=int((time.monotonic() - start) * 1000),
        )

    def analyze_file(self, path: str | Path, cancel: CancellationSignal | None = None) -> FileReport:
        return self._file_report(Path(path).read_bytes(), str(path), cancel)

    def _analyze_candidate(
        self, path: Path, cancel: CancellationSignal | None,
    ) -> FileReport | None:
        try:
            source = path.read_bytes()
        except OSError as e:
            logger.warning("Skipping unreadable file %s: %s", path, e)
            return None
        if not self.config.include_generated and is_generated(path, source):
            logger.debug("Skipping generated file %s", path)
            return None
        try:
            return self._file_report(source, str(path), cancel)
        except Exception as e:
            logger.warning("Skipping %s: analysis failed: %s", path, e)
            return None

    def analyze_paths(
        self, paths: Iterable[str], cancel: CancellationSignal | None = None,
    ) -> AnalysisReport:
        start = time.monotonic()
        roots = list(paths)
        files = find_cs_files(roots, self.config.exclude)

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            results = list(pool.map(lambda f: self._analyze_candidate(f, cancel), files))

        findings: list[Finding] = []
        skipped: list[str] = []
        analyzed = 0
        for path, report in zip(files, results, strict=True):
            if report is None:
                skipped.append(str(path))
                continue
            analyzed += 1
            findings.extend(report.findings)

        logger.info(
            "Analyzed %d file(s), %d finding(s), %d skipped", analyzed, len(findings), len(skipped),
        )
        return AnalysisReport(
            root=", ".join(roots),
            files_analyzed=analyzed,
            findings=findings,
            skipped=skipped,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
