"""Core data model, codecs and the segment combination engine.

WHY: The core package holds everything that does not depend on a
particular input format: the IR dataclasses, the timestamp codec, speaker
extraction, the combination options and the merge engine. Every parser in
formats/ is built on top of it.

HOW: ir.py defines the data structures, timestamp.py and speaker.py parse
the small inline grammars, options.py holds CombineOptions and the
process-wide Options singleton, segments.py applies the merge rules.

RULES:
- No module here imports from formats/
- The engine only ever sees Segment values and an explicit CombineOptions
"""
