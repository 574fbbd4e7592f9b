"""Exit codes shared by CLI commands."""

ASSERTION_EXIT_CODE = 1
DATA_EXIT_CODE = 2
LOOKUP_EXIT_CODE = 3
VALIDATION_EXIT_CODE = 4
