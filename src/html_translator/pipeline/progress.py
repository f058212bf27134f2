# SPDX-License-Identifier: Apache-2.0
"""Progress callback protocol for the HTML translation pipeline."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressCallback(Protocol):
    """Progress callback protocol.

    Stages are reported in order: "split" (block count), "translate" (once
    per finished block, in completion order), "reassemble".
    """

    def __call__(
        self,
        stage: str,
        current: int,
        total: int,
        message: str = "",
    ) -> None: ...
