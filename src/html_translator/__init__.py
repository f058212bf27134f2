# SPDX-License-Identifier: Apache-2.0
"""Translation proxy that preserves HTML block structure."""

__version__ = "0.1.0"
