from __future__ import annotations

# EVM sizes (bytes)
WORD_SIZE     = 32
ADDRESS_SIZE  = 20
SELECTOR_SIZE = 4
PC_SIZE       = 4
