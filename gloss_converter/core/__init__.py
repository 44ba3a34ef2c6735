"""Core IR, tier resolution, alignment, and metadata modules.

WHY: The core package contains the stable heart of the converter:
the IR dataclasses and the alignment logic. These are consumed by all
formatters and the presenter and must remain backward-compatible.

HOW: ir.py defines the data structures, resolver.py binds tiers to
sections, aligner.py builds per-word morph/gloss tokens, metadata.py
builds the citation fields, and pipeline.py chains them.

RULES:
- IR dataclasses are the contract; change with care
- Alignment logic is format-agnostic; no LaTeX here
"""
