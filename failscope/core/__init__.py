# failscope/core/__init__.py
"""
Core components for failscope.

- kinds: error-kind taxonomy and errno bridge
- bindings: LET / MAYBE / ENSURE / TRYE / CHECK
- scope: frames, propagation, function boundary
- trace: scope events and recorders
- errors: exceptions raised on protocol misuse

No side effects on import.
"""
