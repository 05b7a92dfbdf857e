"""Core parsing, assembly and data model modules.

WHY: The core package contains the parts with real invariants: the
container parser, the sector arithmetic, and the timecode encoding.
Formatters and the CLI only consume what these produce.

HOW: wav.py resolves each input's payload, assembler.py lays payloads
out as padded sectors, ir.py and timecode.py define the records passed
between them, errors.py the exceptions they raise.

RULES:
- The Disc dataclass is the contract with formatters; change with care
- No formatter-specific logic here
"""
