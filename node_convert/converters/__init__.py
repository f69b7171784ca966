"""Category converters and the registry that selects between them.

WHY: Each category of host type has its own conversion rules, but
callers should not have to know which converter handles which type.

HOW: base.py defines the converter interface and the Decoded result;
scalars.py, containers.py and binary.py implement the categories;
registry.py maps a requested type onto exactly one converter.

RULES:
- Converters are built through the registry, never looked up by name
- Every converter listed in the registry must be importable without
  side effects
"""
