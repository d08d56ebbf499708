"""Rule engine, C# front end and orchestration."""

from automapper_analyzer.scanner.walker import AnalysisCancelled, TreeWalker, analyze, iter_nodes

__all__ = ["AnalysisCancelled", "TreeWalker", "analyze", "iter_nodes"]
