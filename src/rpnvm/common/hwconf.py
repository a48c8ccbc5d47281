# Word layout
WORD_SIZE = 4               # bytes per word
WORD_FORMAT = '>I'          # code words, big-endian unsigned
VALUE_FORMAT = '>i'         # stack values, big-endian signed
WORD_MASK = 0xFFFFFFFF

TAG_SHIFT = 30
PAYLOAD_MASK = (1 << TAG_SHIFT) - 1
LITERAL_LIMIT = 1 << TAG_SHIFT  # literals are 0 <= v < LITERAL_LIMIT

# Memory map (in words)
MEMORY_SIZE = 4096
ORIGIN = 100                # first code word; the stack lives below it
