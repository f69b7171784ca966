"""Core node model, type descriptors and error types.

WHY: Converters need a stable vocabulary: what a node is, how a caller
names the type it wants, and how failures are reported. Keeping these
in one package lets converters, the registry and the CLI share them
without import cycles.

HOW: node.py defines the document Node, types.py the type descriptors
and the closed Category enum, errors.py the failure reasons and
exceptions, dump.py the JSON bridge used by the CLI.

RULES:
- Nothing in core imports from converters (except Node.as_, lazily)
- Descriptors are frozen and hashable
"""
