"""
primeval - Shared Constants
===========================

Word layout and logging settings used by the value model, the operator
evaluator and the primevalkit CLI. Values here describe the 64-bit
container every primitive value lives in; they are not tunables.
"""

# =============================================================================
#  VALUE CONTAINER
# =============================================================================
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1

# IEEE-754 layout
F32_MASK = 0xFFFF_FFFF
F32_SIGN_BIT = 0x8000_0000
F64_SIGN_BIT = 0x8000_0000_0000_0000


# =============================================================================
#  LOGGING
# =============================================================================
LOGGER_NAME = "primeval"

CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Default console level when neither -v nor -q is given
LOG_LEVEL_ENV = "PRIMEVAL_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
