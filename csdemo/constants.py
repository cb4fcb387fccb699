"""Entity-handle constants shared across the demo model."""

ENTITY_HANDLE_SERIAL_NUMBER_BITS = 10

MAX_EDICT_BITS = 11
ENTITY_HANDLE_INDEX_MASK = (1 << MAX_EDICT_BITS) - 1
ENTITY_HANDLE_BITS = MAX_EDICT_BITS + ENTITY_HANDLE_SERIAL_NUMBER_BITS
INVALID_ENTITY_HANDLE = (1 << ENTITY_HANDLE_BITS) - 1

MAX_EDICT_BITS_SOURCE2 = 14
ENTITY_HANDLE_INDEX_MASK_SOURCE2 = (1 << MAX_EDICT_BITS_SOURCE2) - 1
ENTITY_HANDLE_BITS_SOURCE2 = MAX_EDICT_BITS_SOURCE2 + ENTITY_HANDLE_SERIAL_NUMBER_BITS
INVALID_ENTITY_HANDLE_SOURCE2 = (1 << ENTITY_HANDLE_BITS_SOURCE2) - 1