# Gradients run from the darkest computed brightness (index 0) to the brightest.

# Dark pixels become blank: reads well on dark terminal backgrounds
DEFAULT = " .:-=+*#%@"

# Dark pixels become dense ink: reads well on light backgrounds
DEFAULT_REVERSED = DEFAULT[::-1]

DETAILED = " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"

# Block elements: light, medium and dark shade, full block
BLOCKS = " ░▒▓█"

BINARY = " #"

PRESETS = {
    "default": DEFAULT,
    "reversed": DEFAULT_REVERSED,
    "detailed": DETAILED,
    "blocks": BLOCKS,
    "binary": BINARY,
}
