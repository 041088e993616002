"""
Centralized constants and defaults for libforge
"""

# Workspace description file at the workspace root
WORKSPACE_FILE = "workspace.json"

# Root of the build output tree, relative to the workspace root
DEFAULT_DIST_ROOT = "dist"

# Builder identifier handled by the package builder
PACKAGE_BUILDER = "libforge:package"

# Target name scheduled for dependency builds
BUILD_TARGET = "build"

# Package descriptor file name (source tree and build output)
PACKAGE_JSON = "package.json"

# Name of the rewritten compiler config written next to the project sources
TMP_CONFIG_NAME = "tsconfig.lib.tmp"

# Default compiler config, relative to the project root
DEFAULT_TS_CONFIG = "tsconfig.lib.json"

# Default compiler command, relative to the workspace root
DEFAULT_COMPILER = ("node", "node_modules/typescript/bin/tsc")

# Seconds to wait after SIGTERM before force-killing a compiler process
TERMINATE_TIMEOUT = 5.0

# Source file extensions scanned for import-derived dependencies
SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")
