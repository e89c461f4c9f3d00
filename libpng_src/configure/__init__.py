# SPDX-License-Identifier: MIT
"""Host detection and per-target CMake configuration."""
