"""Constants for mdtest."""

# Config file looked up next to the document
CONFIG_FILENAME = "mdtest.toml"

# Shell used for `sh` steps; must understand `set -o pipefail`
DEFAULT_SHELL = "bash"
SHELL_PRELUDE = "set -euo pipefail"

EXIT_FAILURE = 1
